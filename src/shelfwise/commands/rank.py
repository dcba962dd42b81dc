"""Command group: sibling rank generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from shelfwise.commands._base import ShelfGroup

if TYPE_CHECKING:
    from shelfwise.commands._context import AppContext

_RANK_EXAMPLES = """\
  shelfwise rank head a b c
  shelfwise rank tail a b c
  shelfwise rank before b a b c
  shelfwise rank after b a b c
  shelfwise rank between a b
  shelfwise rank compare a a0i
  shelfwise rank spaced 5"""


@click.group(cls=ShelfGroup, examples=_RANK_EXAMPLES)
@click.pass_obj
def rank(app: AppContext) -> None:
    """Compute ranks for placing items among their siblings."""


@rank.command(
    examples="""\
  shelfwise rank head
  shelfwise rank head i k
  shelfwise -q rank head 000001"""
)
@click.argument("existing", nargs=-1)
@click.pass_obj
def head(app: AppContext, existing: tuple[str, ...]) -> None:
    """Rank that sorts before every sibling."""
    app.emit(app.order.head(existing))


@rank.command(
    examples="""\
  shelfwise rank tail
  shelfwise rank tail i k
  shelfwise --json rank tail zzzzzz"""
)
@click.argument("existing", nargs=-1)
@click.pass_obj
def tail(app: AppContext, existing: tuple[str, ...]) -> None:
    """Rank that sorts after every sibling."""
    app.emit(app.order.tail(existing))


@rank.command(
    examples="""\
  shelfwise rank before k i k
  shelfwise --json rank before i i"""
)
@click.argument("target")
@click.argument("existing", nargs=-1)
@click.pass_obj
def before(app: AppContext, target: str, existing: tuple[str, ...]) -> None:
    """Rank immediately before TARGET among EXISTING siblings."""
    app.emit(app.order.before(target, existing))


@rank.command(
    examples="""\
  shelfwise rank after i i k
  shelfwise --json rank after k i k"""
)
@click.argument("target")
@click.argument("existing", nargs=-1)
@click.pass_obj
def after(app: AppContext, target: str, existing: tuple[str, ...]) -> None:
    """Rank immediately after TARGET among EXISTING siblings."""
    app.emit(app.order.after(target, existing))


@rank.command(
    examples="""\
  shelfwise rank between a b
  shelfwise rank between a a1"""
)
@click.argument("lower")
@click.argument("upper")
@click.pass_obj
def between(app: AppContext, lower: str, upper: str) -> None:
    """Rank strictly between LOWER and UPPER."""
    app.emit(app.order.between(lower, upper))


@rank.command(
    examples="""\
  shelfwise rank compare a b
  shelfwise -q rank compare b a"""
)
@click.argument("first")
@click.argument("second")
@click.pass_obj
def compare(app: AppContext, first: str, second: str) -> None:
    """Compare two ranks (-1, 0 or 1)."""
    app.emit(app.order.compare(first, second))


@rank.command(
    examples="""\
  shelfwise rank spaced 3
  shelfwise -q rank spaced 10"""
)
@click.argument("count", type=int)
@click.pass_obj
def spaced(app: AppContext, count: int) -> None:
    """Initial ranks for COUNT new siblings."""
    app.emit(app.order.spaced(count))
