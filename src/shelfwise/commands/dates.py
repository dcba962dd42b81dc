"""Commands: expand date arguments and parse instants."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from shelfwise.commands._base import ShelfCommand

if TYPE_CHECKING:
    from shelfwise.commands._context import AppContext


@click.command(
    cls=ShelfCommand,
    examples="""\
  shelfwise date
  shelfwise date +3d
  shelfwise date this-week
  shelfwise date 2024-03-01..2024-03-05
  shelfwise --timezone Asia/Tokyo date tomorrow
  shelfwise -q date last-month""",
)
@click.argument("expression", required=False, default=None)
@click.pass_obj
def date(app: AppContext, expression: str | None) -> None:
    """Expand a date expression into calendar days (defaults to today)."""
    app.emit(app.addresses.dates(expression))


@click.command(
    cls=ShelfCommand,
    examples="""\
  shelfwise when 2024-03-01T09:30
  shelfwise when 1h30m
  shelfwise when 18:00 --future
  shelfwise --json when next-monday""",
)
@click.argument("text")
@click.option(
    "--future", is_flag=True, help="Require an instant after now (times roll to tomorrow)."
)
@click.pass_obj
def when(app: AppContext, text: str, future: bool) -> None:
    """Parse a point in time in the workspace timezone."""
    app.emit(app.addresses.instant(text, future=future))
