"""Subcommand modules for shelfwise.

Provides register_commands() which uses deferred imports to keep
``shelfwise --help`` fast as the codebase grows.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group.

    Uses deferred imports so modules are only loaded when actually invoked.
    2 groups (have subcommands) + 5 standalone commands.
    """
    # --- Groups ---
    from shelfwise.commands.alias import alias
    from shelfwise.commands.rank import rank

    cli.add_command(rank)
    cli.add_command(alias)

    # --- Standalone commands ---
    from shelfwise.commands.address import directory, locate, path
    from shelfwise.commands.dates import date, when

    cli.add_command(path)
    cli.add_command(locate)
    cli.add_command(directory)
    cli.add_command(date)
    cli.add_command(when)
