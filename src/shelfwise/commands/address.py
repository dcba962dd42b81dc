"""Commands: resolve paths, locators, and directory keys."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from shelfwise.commands._base import ShelfCommand

if TYPE_CHECKING:
    from shelfwise.commands._context import AppContext


@click.command(
    cls=ShelfCommand,
    relative=True,
    examples="""\
  shelfwise path /2024-03-01/3
  shelfwise path /today/groceries
  shelfwise path ../2 --cwd /2024-03-01/groceries
  shelfwise path /2024-03-01/1..4
  shelfwise --json path /yesterday..tomorrow""",
)
@click.argument("expression")
@click.pass_obj
def path(app: AppContext, expression: str, cwd: str | None) -> None:
    """Resolve a location expression to its canonical path."""
    app.emit(app.addresses.parse_path(expression, cwd=cwd))


@click.command(
    cls=ShelfCommand,
    relative=True,
    examples="""\
  shelfwise locate /2024-03-01/2
  shelfwise locate 2024-03-01..2024-03-07
  shelfwise locate 1..5 --cwd /permanent
  shelfwise --json locate /today/3..5""",
)
@click.argument("expression")
@click.pass_obj
def locate(app: AppContext, expression: str, cwd: str | None) -> None:
    """Validate a locator and show the directory range it addresses."""
    app.emit(app.addresses.locate(expression, cwd=cwd))


@click.command(
    "dir",
    cls=ShelfCommand,
    examples="""\
  shelfwise dir 2024-03-01
  shelfwise dir permanent/2
  shelfwise --json dir 0190a5b2-7c1e-7d3a-9f00-0123456789ab/1""",
)
@click.argument("text")
@click.pass_obj
def directory(app: AppContext, text: str) -> None:
    """Parse a stored directory key into head and section."""
    app.emit(app.addresses.directory(text))
