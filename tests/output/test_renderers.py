"""Tests for operation-specific Rich renderers."""

from shelfwise.output.renderers import render_quiet, render_result
from shelfwise.services.result import ServiceError, ServiceResult

# ── Helpers ───────────────────────────────────────────────────────────


def _ok(op: str, **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str, code: str, message: str, **detail: object) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=dict(detail)),
    )


SEGMENTS = [
    {"kind": "Date", "raw": "today", "value": "2024-09-21"},
    {
        "kind": "range",
        "raw": "1..3",
        "start": {"kind": "Numeric", "raw": "1", "value": "1"},
        "end": {"kind": "Numeric", "raw": "3", "value": "3"},
    },
]


# ── Error rendering ──────────────────────────────────────────────────


class TestErrorRenderer:
    def test_basic_error(self) -> None:
        output = render_result(_err("locate", "DATE_NOT_HEAD", "dates are roots"))
        assert "ERROR" in output
        assert "locate" in output
        assert "dates are roots" in output

    def test_candidates_listed(self) -> None:
        result = _err("resolve_alias", "AMBIGUOUS", "2 matches", candidates=["ga", "gb"])
        output = render_result(result)
        assert "    ga" in output
        assert "    gb" in output

    def test_verbose_shows_issues(self) -> None:
        issues = [{"message": "too short", "code": "min_length", "path": [1, "raw", "value"]}]
        result = _err("parse_path", "MIN_LENGTH", "too short", kind="Path", issues=issues)
        output = render_result(result, verbose=True)
        assert "detail" in output
        assert "kind: Path" in output
        assert "[min_length] 1.raw.value: too short" in output

    def test_no_error_object(self) -> None:
        assert "Unknown error" in render_result(ServiceResult(ok=False, op="test"))


# ── Address renderers ────────────────────────────────────────────────


class TestPathRenderer:
    def test_segment_table(self) -> None:
        output = render_result(_ok("parse_path", path="/2024-09-21/1..3", segments=SEGMENTS))
        assert output.splitlines()[0] == "/2024-09-21/1..3"
        assert "today" in output
        assert "1..3" in output
        assert "Kind" in output

    def test_locate_fields(self) -> None:
        result = _ok(
            "locate",
            locator="/2024-09-21/1..3",
            segments=SEGMENTS,
            range={"kind": "numeric", "start": "1", "end": "3"},
            directory_range={"kind": "numericRange", "parent": "2024-09-21", "from": 1, "to": 3},
        )
        output = render_result(result)
        assert "range: numeric 1..3" in output
        assert '"kind":"numericRange"' in output

    def test_verbose_root(self) -> None:
        output = render_result(_ok("parse_path", path="/", segments=[]), verbose=True)
        assert "(root)" in output


class TestDirectoryRenderer:
    def test_fields(self) -> None:
        result = _ok(
            "directory",
            directory="2024-09-21/1/3",
            head={"kind": "date", "value": "2024-09-21"},
            section=[1, 3],
            parent="2024-09-21/1",
        )
        output = render_result(result)
        assert "head: date 2024-09-21" in output
        assert "section: 1/3" in output
        assert "parent: 2024-09-21/1" in output


class TestDatesRenderer:
    def test_days(self) -> None:
        output = render_result(_ok("dates", days=["2024-09-21", "2024-09-22"], count=2))
        assert output.splitlines() == ["2024-09-21", "2024-09-22", "2 days"]


# ── Rank renderers ───────────────────────────────────────────────────


class TestRankRenderers:
    def test_rank(self) -> None:
        output = render_result(_ok("before_rank", rank="ai", target="b"))
        assert "before_rank" in output
        assert "rank: ai" in output
        assert "target: b" in output

    def test_field_line_has_single_space_after_colon(self) -> None:
        output = render_result(_ok("head_rank", rank="i"))
        assert "  rank: i" in output.splitlines()
        assert "rank:  i" not in output

    def test_spaced(self) -> None:
        output = render_result(_ok("spaced", ranks=["000001", "000009"], count=2))
        assert "000009" in output
        assert "2 ranks" in output

    def test_verbose_telemetry_tree(self) -> None:
        result = ServiceResult(
            ok=True,
            op="head_rank",
            data={"rank": "i"},
            meta={
                "telemetry": {
                    "name": "OrderService.head",
                    "duration_ms": 0.5,
                    "annotations": {"rank": "i"},
                }
            },
        )
        output = render_result(result, verbose=True)
        assert "OrderService.head" in output
        assert "(rank=i)" in output


# ── Alias renderers ──────────────────────────────────────────────────


class TestAliasRenderers:
    def test_prefixes_table(self) -> None:
        output = render_result(_ok("alias_prefixes", prefixes={"garden": "ga"}))
        assert "Alias" in output
        assert "garden" in output

    def test_generic(self) -> None:
        output = render_result(_ok("canonical_key", input="Ångström", key="angstrom"))
        assert "key: angstrom" in output


# ── Quiet mode ───────────────────────────────────────────────────────


class TestQuietRenderer:
    def test_error(self) -> None:
        assert render_quiet(_err("locate", "X", "nope")) == "ERROR: locate — nope"

    def test_lists(self) -> None:
        assert render_quiet(_ok("dates", days=["2024-09-21", "2024-09-22"])) == (
            "2024-09-21\n2024-09-22"
        )

    def test_prefixes(self) -> None:
        assert render_quiet(_ok("alias_prefixes", prefixes={"garden": "ga"})) == "garden\tga"

    def test_primary_key(self) -> None:
        assert render_quiet(_ok("compare", first="a", second="b", order=-1)) == "-1"
        assert render_quiet(_ok("locate", locator="/book")) == "/book"

    def test_fallback(self) -> None:
        assert render_quiet(_ok("noop")) == "OK: noop"
