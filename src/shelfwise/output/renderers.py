"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from shelfwise.output.console import create_console, get_output, style_for_segment

if TYPE_CHECKING:
    from rich.console import Console

    from shelfwise.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Prints only the primary value of the operation so the output can be
    piped into other commands.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    d = result.data
    for key in _QUIET_LISTS:
        if isinstance(d.get(key), list):
            return "\n".join(str(v) for v in d[key])
    if isinstance(d.get("prefixes"), dict):
        return "\n".join(f"{alias}\t{prefix}" for alias, prefix in d["prefixes"].items())
    for key in _QUIET_KEYS:
        if key in d:
            return str(d[key])
    return f"OK: {result.op}"


_QUIET_LISTS = ("days", "ranks")
_QUIET_KEYS = ("path", "locator", "directory", "rank", "order", "alias", "key", "iso")


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="shelf.ok")
    op = Text(f"  {result.op}", style="shelf.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}:", style="shelf.key")
    if key in ("path", "locator", "directory"):
        v = Text(str(value), style="shelf.path")
    elif key == "rank":
        v = Text(str(value), style="shelf.rank")
    elif isinstance(value, (dict, list)):
        v = Text(json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{ak}={av}" for ak, av in annotations.items()) + ")"

    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _segment_table(segments: list[dict[str, Any]]) -> Table:
    """Build a Rich Table listing path segments in order."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Kind")
    table.add_column("Raw")
    table.add_column("Value")

    for index, segment in enumerate(segments):
        kind = str(segment.get("kind", ""))
        style = style_for_segment(kind)
        if kind == "range":
            value = f"{segment['start']['value']}..{segment['end']['value']}"
        else:
            value = str(segment.get("value", ""))
        table.add_row(str(index), Text(kind, style=style), segment.get("raw", ""), value)

    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="shelf.error")
    op = Text(f"  {result.op}", style="shelf.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg))

    if not err:
        return
    if err.detail.get("candidates"):
        for candidate in err.detail["candidates"]:
            console.print(Text(f"    {candidate}"))
    if verbose and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            if k == "issues":
                for issue in v:
                    where = ".".join(str(p) for p in issue.get("path", ())) or "-"
                    line = f"    [{issue.get('code')}] {where}: {issue.get('message')}"
                    console.print(Text(line))
            else:
                console.print(Text(f"    {k}: {v}"))


# ── Address renderers ─────────────────────────────────────────────────


def _render_path(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a resolved path with its segment breakdown."""
    d = result.data
    key = "locator" if result.op == "locate" else "path"
    console.print(Text(str(d.get(key, "/")), style="shelf.path"))

    segments = d.get("segments", [])
    if segments:
        console.print(_segment_table(segments))
    elif verbose:
        console.print("(root)")

    if d.get("range"):
        rng = d["range"]
        _field(console, "range", f"{rng['kind']} {rng['start']}..{rng['end']}")
    if d.get("directory_range"):
        _field(console, "directory_range", d["directory_range"])
    if verbose:
        _render_meta(console, result)


def _render_directory(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "directory", d["directory"])
    _field(console, "head", f"{d['head']['kind']} {d['head']['value']}")
    if d.get("section"):
        _field(console, "section", "/".join(str(entry) for entry in d["section"]))
    if d.get("parent"):
        _field(console, "parent", d["parent"])


def _render_dates(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render expanded calendar days, one per line."""
    days = result.data.get("days", [])
    for day in days:
        console.print(day)
    console.print(Text(f"{result.data.get('count', len(days))} days", style="dim"))
    if verbose:
        _render_meta(console, result)


# ── Rank renderers ────────────────────────────────────────────────────


def _render_rank(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


def _render_spaced(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    ranks = result.data.get("ranks", [])
    for index, rank in enumerate(ranks):
        console.print(f"[dim]{index:>4}[/dim]  [shelf.rank]{rank}[/shelf.rank]")
    console.print(Text(f"{len(ranks)} ranks", style="dim"))


# ── Alias renderers ───────────────────────────────────────────────────


def _render_prefixes(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render alias handles as a two-column table."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Alias", style="shelf.segment.alias")
    table.add_column("Handle", style="bold")
    for alias, prefix in result.data.get("prefixes", {}).items():
        table.add_row(alias, prefix)
    console.print(table)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Address
    "parse_path": _render_path,
    "locate": _render_path,
    "directory": _render_directory,
    "dates": _render_dates,
    "instant": _render_generic,
    # Rank
    "head_rank": _render_rank,
    "tail_rank": _render_rank,
    "before_rank": _render_rank,
    "after_rank": _render_rank,
    "between": _render_rank,
    "compare": _render_rank,
    "spaced": _render_spaced,
    # Alias
    "resolve_alias": _render_generic,
    "canonical_key": _render_generic,
    "alias_prefixes": _render_prefixes,
}
