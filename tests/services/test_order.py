"""Tests for OrderService rank operations."""

from __future__ import annotations

from pathlib import Path

from shelfwise.config.settings import ShelfSettings
from shelfwise.services.order import OrderService


class TestPlacement:
    def test_head_and_tail_of_empty(self, settings: ShelfSettings) -> None:
        service = OrderService(settings)
        assert service.head([]).data == {"rank": "i"}
        assert service.tail([]).data == {"rank": "i"}

    def test_head(self, settings: ShelfSettings) -> None:
        assert OrderService(settings).head(["a", "b"]).data["rank"] == "9zzzzs"

    def test_tail(self, settings: ShelfSettings) -> None:
        assert OrderService(settings).tail(["a", "b"]).data["rank"] == "b00008"

    def test_before_and_after(self, settings: ShelfSettings) -> None:
        service = OrderService(settings)
        before = service.before("b", ["a", "b", "c"])
        assert before.op == "before_rank"
        assert before.data == {"rank": "ai", "target": "b"}
        assert service.after("b", ["a", "b", "c"]).data["rank"] == "bi"

    def test_missing_target_hints_reload(self, settings: ShelfSettings) -> None:
        result = OrderService(settings).before("x", ["a", "b"])
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "TARGET_NOT_FOUND"
        assert result.error.detail["kind"] == "RankBoundary"
        assert result.warnings == ["Sibling list may be stale; reload it and retry."]

    def test_duplicate_siblings(self, settings: ShelfSettings) -> None:
        result = OrderService(settings).after("b", ["a", "b", "b"])
        assert result.error is not None
        assert result.error.code == "DUPLICATE_RANKS"
        assert result.warnings == ["Siblings share a rank; respace them before inserting."]

    def test_invalid_sibling_is_located(self, settings: ShelfSettings) -> None:
        result = OrderService(settings).head(["a", "B!"])
        assert result.error is not None
        assert result.error.code == "FORMAT"
        assert result.error.detail["issues"][0]["path"] == ["existing", 1, "value"]

    def test_invalid_target(self, settings: ShelfSettings) -> None:
        result = OrderService(settings).after("", ["a"])
        assert result.error is not None
        assert result.error.detail["issues"][0]["path"][0] == "target"

    def test_trailing_zero_sibling(self, settings: ShelfSettings) -> None:
        result = OrderService(settings).tail(["a0"])
        assert result.error is not None
        assert result.error.code == "INVALID_RANK"


class TestBetweenAndCompare:
    def test_between(self, settings: ShelfSettings) -> None:
        result = OrderService(settings).between("a", "b")
        assert result.data == {"rank": "ai", "lower": "a", "upper": "b"}

    def test_between_reversed(self, settings: ShelfSettings) -> None:
        result = OrderService(settings).between("b", "a")
        assert result.error is not None
        assert result.error.code == "NO_HEADROOM"

    def test_between_non_canonical(self, settings: ShelfSettings) -> None:
        result = OrderService(settings).between("a0", "b")
        assert result.error is not None
        assert result.error.code == "INVALID_RANK"

    def test_compare(self, settings: ShelfSettings) -> None:
        service = OrderService(settings)
        assert service.compare("a", "ab").data["order"] == -1
        assert service.compare("b", "ab").data["order"] == 1
        assert service.compare("b", "b").data["order"] == 0


class TestSpaced:
    def test_three(self, settings: ShelfSettings) -> None:
        result = OrderService(settings).spaced(3)
        assert result.data == {"ranks": ["000001", "000009", "00000h"], "count": 3}

    def test_zero(self, settings: ShelfSettings) -> None:
        assert OrderService(settings).spaced(0).data["ranks"] == []

    def test_out_of_bounds(self, settings: ShelfSettings) -> None:
        for count in (-1, 10_001):
            result = OrderService(settings).spaced(count)
            assert result.error is not None
            assert result.error.code == "INVALID_COUNT"

    def test_rank_config(self, tmp_path: Path) -> None:
        settings = ShelfSettings.from_cli(workspace_root=tmp_path, rank={"width": 2, "step": 1})
        assert OrderService(settings).spaced(2).data["ranks"] == ["01", "02"]
