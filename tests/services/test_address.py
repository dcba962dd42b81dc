"""Tests for AddressService: paths, locators, directories, dates, instants."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from shelfwise.config.settings import ShelfSettings
from shelfwise.services.address import AddressService

UUID_V7 = "0190a5b2-7c1e-7d3a-9f00-0123456789ab"


class TestParsePath:
    def test_relative_tokens_resolve(self, settings: ShelfSettings) -> None:
        result = AddressService(settings).parse_path("/today/groceries/2")
        assert result.ok
        assert result.data["path"] == "/2024-09-21/groceries/2"
        assert [s["kind"] for s in result.data["segments"]] == ["Date", "ItemAlias", "Numeric"]
        assert result.data["is_range"] is False
        assert result.meta == {"timezone": "UTC", "reference": "2024-09-21T00:00:00+00:00"}

    def test_relative_to_cwd(self, settings: ShelfSettings) -> None:
        result = AddressService(settings).parse_path("../3", cwd="2024-09-21/1")
        assert result.data["path"] == "/2024-09-21/3"

    def test_range_segment(self, settings: ShelfSettings) -> None:
        result = AddressService(settings).parse_path("/book/1..3")
        assert result.data["is_range"] is True
        last = result.data["segments"][-1]
        assert last["start"]["value"] == "1"
        assert last["end"]["value"] == "3"

    def test_relative_without_cwd(self, settings: ShelfSettings) -> None:
        result = AddressService(settings).parse_path("groceries")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "RELATIVE_WITHOUT_CWD"

    def test_bad_cwd_is_blamed(self, settings: ShelfSettings) -> None:
        result = AddressService(settings).parse_path("2", cwd="/book/two words")
        assert result.error is not None
        assert result.error.detail["issues"][0]["path"][0] == "cwd"

    def test_uses_settings_timezone(self, tmp_path: Path) -> None:
        tokyo = ShelfSettings.from_cli(
            workspace_root=tmp_path,
            now=datetime(2024, 9, 21, 18, 0, tzinfo=UTC),
            timezone="Asia/Tokyo",
        )
        assert AddressService(tokyo).parse_path("/today").data["path"] == "/2024-09-22"


class TestLocate:
    def test_single_directory(self, settings: ShelfSettings) -> None:
        result = AddressService(settings).locate("/2024-09-21/1")
        assert result.ok
        assert result.data["range"] is None
        assert result.data["directory_range"] == {"kind": "single", "at": "2024-09-21/1"}
        assert result.warnings == []

    def test_item_id_head(self, settings: ShelfSettings) -> None:
        result = AddressService(settings).locate(f"{UUID_V7}/1..4")
        assert result.data["directory_range"] == {
            "kind": "numericRange",
            "parent": UUID_V7,
            "from": 1,
            "to": 4,
        }

    def test_date_range(self, settings: ShelfSettings) -> None:
        result = AddressService(settings).locate("yesterday..tomorrow")
        assert result.data["range"] == {"kind": "date", "start": "2024-09-20", "end": "2024-09-22"}
        assert result.data["directory_range"]["kind"] == "dateRange"

    def test_alias_head_warns(self, settings: ShelfSettings) -> None:
        result = AddressService(settings).locate("book/1..5")
        assert result.ok
        assert result.data["locator"] == "/book/1..5"
        assert result.data["raw"] == "book/1..5"
        assert result.data["range"] == {"kind": "numeric", "start": "1", "end": "5"}
        assert result.data["directory_range"] is None
        assert len(result.warnings) == 1
        assert "book" in result.warnings[0]

    def test_nested_date_rejected(self, settings: ShelfSettings) -> None:
        result = AddressService(settings).locate("/book/2024-09-21")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "DATE_NOT_HEAD"
        assert result.error.detail["kind"] == "Locator"
        assert result.error.detail["issues"][0]["path"] == [1]

    def test_root(self, settings: ShelfSettings) -> None:
        result = AddressService(settings).locate("/")
        assert result.ok
        assert result.data["directory_range"] is None


class TestDirectory:
    def test_parts(self, settings: ShelfSettings) -> None:
        result = AddressService(settings).directory("2024-09-21/1/3")
        assert result.data == {
            "directory": "2024-09-21/1/3",
            "head": {"kind": "date", "value": "2024-09-21"},
            "section": [1, 3],
            "parent": "2024-09-21/1",
        }

    def test_head_only(self, settings: ShelfSettings) -> None:
        assert AddressService(settings).directory("permanent").data["parent"] is None

    def test_leading_slash(self, settings: ShelfSettings) -> None:
        result = AddressService(settings).directory("/2024-09-21")
        assert result.error is not None
        assert result.error.code == "FORMAT"


class TestDates:
    def test_today_by_default(self, settings: ShelfSettings) -> None:
        result = AddressService(settings).dates()
        assert result.data == {"days": ["2024-09-21"], "count": 1}

    def test_period_keyword(self, settings: ShelfSettings) -> None:
        result = AddressService(settings).dates("this-week")
        assert result.data["count"] == 7
        assert result.data["days"][0] == "2024-09-16"
        assert result.data["days"][-1] == "2024-09-22"

    def test_explicit_range(self, settings: ShelfSettings) -> None:
        result = AddressService(settings).dates("2024-09-30..2024-10-02")
        assert result.data["days"] == ["2024-09-30", "2024-10-01", "2024-10-02"]

    def test_descending_range(self, settings: ShelfSettings) -> None:
        result = AddressService(settings).dates("2024-09-03..2024-09-01")
        assert result.error is not None
        assert result.error.code == "RANGE_DESCENDING"


class TestInstant:
    def test_time_of_day_in_workspace_zone(self, tmp_path: Path) -> None:
        settings = ShelfSettings.from_cli(
            workspace_root=tmp_path,
            now=datetime(2025, 2, 10, 12, 0, tzinfo=UTC),
            workspace={"timezone": "America/Los_Angeles"},
        )
        result = AddressService(settings).instant("09:00")
        assert result.data == {"iso": "2025-02-10T17:00:00.000Z", "epoch_ms": 1_739_206_800_000}
        assert result.meta is not None
        assert result.meta["timezone"] == "America/Los_Angeles"

    def test_duration(self, settings: ShelfSettings) -> None:
        assert AddressService(settings).instant("1h30m").data["iso"] == "2024-09-21T01:30:00.000Z"

    def test_date_expression(self, settings: ShelfSettings) -> None:
        result = AddressService(settings).instant("tomorrow")
        assert result.data["iso"] == "2024-09-22T00:00:00.000Z"

    def test_future_rolls_forward(self, tmp_path: Path) -> None:
        settings = ShelfSettings.from_cli(
            workspace_root=tmp_path, now=datetime(2024, 9, 21, 20, 0, tzinfo=UTC)
        )
        result = AddressService(settings).instant("18:00", future=True)
        assert result.data["iso"] == "2024-09-22T18:00:00.000Z"

    def test_future_rejects_past(self, settings: ShelfSettings) -> None:
        result = AddressService(settings).instant("2020-01-01T00:00Z", future=True)
        assert result.error is not None
        assert result.error.code == "NOT_FUTURE"

    def test_garbage(self, settings: ShelfSettings) -> None:
        assert not AddressService(settings).instant("not a time").ok
