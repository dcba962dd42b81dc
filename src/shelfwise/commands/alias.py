"""Command group: canonical keys and alias handles."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from shelfwise.commands._base import ShelfGroup

if TYPE_CHECKING:
    from shelfwise.commands._context import AppContext

_ALIAS_EXAMPLES = """\
  shelfwise alias resolve gro -a groceries -a grocery-list -a garden
  shelfwise alias key "Ångström Notes"
  shelfwise alias prefixes groceries garden grocery-list"""


@click.group(cls=ShelfGroup, examples=_ALIAS_EXAMPLES)
@click.pass_obj
def alias(app: AppContext) -> None:
    """Resolve typed alias prefixes and compute canonical keys."""


@alias.command(
    examples="""\
  shelfwise alias resolve gar -a garden -a groceries
  shelfwise alias resolve gro -a groceries -a grocery-list -p grocery-list
  shelfwise --json alias resolve ang -a angstrom-notes"""
)
@click.argument("prefix")
@click.option("-a", "--alias", "aliases", multiple=True, help="Candidate alias (repeatable).")
@click.option(
    "-p", "--priority", multiple=True, help="Alias tried before the rest (repeatable)."
)
@click.pass_obj
def resolve(
    app: AppContext,
    prefix: str,
    aliases: tuple[str, ...],
    priority: tuple[str, ...],
) -> None:
    """Resolve PREFIX to exactly one alias."""
    app.emit(app.aliases.resolve(prefix, aliases, priority=priority))


@alias.command(
    examples="""\
  shelfwise alias key "Crème Brûlée"
  shelfwise -q alias key Ångström"""
)
@click.argument("text")
@click.pass_obj
def key(app: AppContext, text: str) -> None:
    """Canonical comparison key for TEXT."""
    app.emit(app.aliases.key(text))


@alias.command(
    examples="""\
  shelfwise alias prefixes groceries garden grocery-list
  shelfwise --json alias prefixes books bookmarks"""
)
@click.argument("aliases", nargs=-1, required=True)
@click.pass_obj
def prefixes(app: AppContext, aliases: tuple[str, ...]) -> None:
    """Shortest unique handle for each alias."""
    app.emit(app.aliases.prefixes(aliases))
