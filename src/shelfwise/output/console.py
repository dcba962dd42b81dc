"""Rich Console factory and theme for shelfwise output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SHELF_THEME = Theme(
    {
        "shelf.ok": "bold green",
        "shelf.error": "bold red",
        "shelf.warning": "bold yellow",
        "shelf.op": "bold cyan",
        "shelf.key": "dim",
        "shelf.path": "bold",
        "shelf.rank": "magenta",
        "shelf.segment.date": "green",
        "shelf.segment.numeric": "yellow",
        "shelf.segment.item": "blue",
        "shelf.segment.alias": "cyan",
        "shelf.segment.range": "bold magenta",
    }
)

_SEGMENT_STYLES: dict[str, str] = {
    "Date": "shelf.segment.date",
    "Numeric": "shelf.segment.numeric",
    "ItemId": "shelf.segment.item",
    "ItemAlias": "shelf.segment.alias",
    "range": "shelf.segment.range",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=SHELF_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_segment(kind: str) -> str:
    """Return the Rich style name for a path segment kind."""
    return _SEGMENT_STYLES.get(kind, "")
