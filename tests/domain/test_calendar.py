"""Tests for CalendarDay, CalendarMonth, and CalendarYear."""

import pytest

from shelfwise.domain.calendar import (
    CalendarDay,
    CalendarMonth,
    calendar_day_from_components,
    parse_calendar_day,
    parse_calendar_month,
    parse_calendar_year,
)


class TestParseCalendarDay:
    def test_leap_day(self) -> None:
        assert parse_calendar_day("2024-02-29").unwrap() == CalendarDay(2024, 2, 29)

    @pytest.mark.parametrize("raw", ["2023-02-29", "2024-13-01", "2024-04-31", "2024-00-10"])
    def test_impossible_dates(self, raw: str) -> None:
        result = parse_calendar_day(raw)
        assert result.error is not None
        assert result.error.code == "invalid_date"
        assert result.error.issues[0].path == ("iso",)

    @pytest.mark.parametrize("raw", ["24-1-1", "2024/01/01", "2024-01-01T00:00"])
    def test_bad_shape(self, raw: str) -> None:
        result = parse_calendar_day(raw)
        assert result.error is not None
        assert result.error.code == "format"

    def test_not_string(self) -> None:
        result = parse_calendar_day(20240101)
        assert result.error is not None
        assert result.error.code == "not_string"

    def test_components(self) -> None:
        assert calendar_day_from_components(2024, 9, 21).ok
        assert not calendar_day_from_components(2024, 9, 31).ok


class TestCalendarDay:
    def test_canonical_text(self) -> None:
        assert str(CalendarDay(987, 1, 2)) == "0987-01-02"
        assert CalendarDay(2024, 9, 21).to_json() == "2024-09-21"

    def test_ordering_matches_text(self) -> None:
        days = [CalendarDay(2024, 10, 1), CalendarDay(2024, 9, 30), CalendarDay(2023, 12, 31)]
        assert [str(d) for d in sorted(days)] == sorted(str(d) for d in days)

    def test_add_days_crosses_year(self) -> None:
        assert CalendarDay(2024, 12, 31).add_days(1) == CalendarDay(2025, 1, 1)
        assert CalendarDay(2024, 3, 1).add_days(-1) == CalendarDay(2024, 2, 29)

    def test_add_months_clamps(self) -> None:
        assert CalendarDay(2024, 1, 31).add_months(1) == CalendarDay(2024, 2, 29)
        assert CalendarDay(2023, 1, 31).add_months(1) == CalendarDay(2023, 2, 28)
        assert CalendarDay(2024, 3, 31).add_months(-1) == CalendarDay(2024, 2, 29)
        assert CalendarDay(2024, 11, 15).add_months(3) == CalendarDay(2025, 2, 15)

    def test_add_years_from_leap_day(self) -> None:
        assert CalendarDay(2024, 2, 29).add_years(1) == CalendarDay(2025, 2, 28)

    def test_weekday(self) -> None:
        assert CalendarDay(2024, 9, 21).weekday() == 5  # Saturday
        assert CalendarDay(2024, 9, 16).weekday() == 0

    def test_month_of(self) -> None:
        assert CalendarDay(2024, 2, 10).month_of() == CalendarMonth(2024, 2)


class TestCalendarMonth:
    def test_parse(self) -> None:
        month = parse_calendar_month("2024-02").unwrap()
        assert str(month) == "2024-02"
        assert month.first_day() == CalendarDay(2024, 2, 1)
        assert month.last_day() == CalendarDay(2024, 2, 29)

    def test_out_of_range(self) -> None:
        result = parse_calendar_month("2024-13")
        assert result.error is not None
        assert result.error.code == "range"

    def test_bad_shape(self) -> None:
        result = parse_calendar_month("2024-2")
        assert result.error is not None
        assert result.error.code == "format"


class TestCalendarYear:
    def test_string_and_int(self) -> None:
        assert str(parse_calendar_year("2024").unwrap()) == "2024"
        assert parse_calendar_year(2024).unwrap().value == 2024

    @pytest.mark.parametrize("raw", [1969, "10000", 10000])
    def test_bounds(self, raw: object) -> None:
        result = parse_calendar_year(raw)
        assert not result.ok

    def test_bool_rejected(self) -> None:
        result = parse_calendar_year(True)
        assert result.error is not None
        assert result.error.code == "format"
