"""Tests for path segment classification."""

import pytest

from shelfwise.domain.calendar import CalendarDay
from shelfwise.domain.segments import PathRangeSegment, SegmentKind, parse_path_segment

UUID_V7 = "0190a5b2-7c1e-7d3a-9f00-0123456789ab"


class TestClassification:
    def test_date(self) -> None:
        segment = parse_path_segment("2024-09-21").unwrap()
        assert segment.kind is SegmentKind.DATE
        assert segment.value == CalendarDay(2024, 9, 21)

    def test_numeric(self) -> None:
        segment = parse_path_segment("12").unwrap()
        assert segment.kind is SegmentKind.NUMERIC
        assert segment.value == 12

    def test_item_id_beats_alias(self) -> None:
        segment = parse_path_segment(UUID_V7.upper()).unwrap()
        assert segment.kind is SegmentKind.ITEM_ID
        assert segment.raw == UUID_V7.upper()
        assert str(segment) == UUID_V7

    def test_alias(self) -> None:
        segment = parse_path_segment("Book").unwrap()
        assert segment.kind is SegmentKind.ITEM_ALIAS
        assert segment.raw == "Book"
        assert segment.to_json() == "book"

    def test_impossible_date_is_not_an_alias(self) -> None:
        result = parse_path_segment("2024-02-30")
        assert result.error is not None
        assert result.error.kind == "PathSegment"
        assert result.error.code == "invalid_date"
        assert result.error.issues[0].path == ("raw", "iso")

    def test_bare_zero_rejected(self) -> None:
        result = parse_path_segment("0")
        assert result.error is not None
        assert result.error.issues[0].path[0] == "raw"


class TestInvalidInput:
    @pytest.mark.parametrize(
        "raw,code",
        [(5, "type"), ("", "empty"), ("   ", "empty"), ("a/b", "format")],
    )
    def test_rejected(self, raw: object, code: str) -> None:
        result = parse_path_segment(raw)
        assert result.error is not None
        assert result.error.code == code
        assert result.error.issues[0].path == ("raw",)

    def test_bad_alias_blames_raw(self) -> None:
        result = parse_path_segment("has space")
        assert result.error is not None
        assert result.error.code == "format"
        assert result.error.issues[0].path == ("raw", "value")


class TestPathRangeSegment:
    def test_text(self) -> None:
        start = parse_path_segment("1").unwrap()
        end = parse_path_segment("5").unwrap()
        segment = PathRangeSegment("1..5", start, end)
        assert str(segment) == "1..5"
        assert segment.kind == "range"
