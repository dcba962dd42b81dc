"""Click base classes shared by every shelfwise command.

``ShelfCommand`` and ``ShelfGroup`` take two extra keyword arguments:

* ``examples``: text printed by an eager ``--examples`` flag, keeping
  ``--help`` short.
* ``relative`` (commands only): adds the shared ``--cwd PATH`` option for
  commands whose argument may be a relative location such as ``../2``.
  The callback receives it as ``cwd``.
"""

from __future__ import annotations

from typing import Any

import click

CWD_HELP = "Current path that relative input (../2, groceries) resolves against."


def _show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    examples = getattr(ctx.command, "examples", None) or ""
    click.echo(f"Examples for '{ctx.command_path}':\n")
    click.echo(examples)
    ctx.exit(0)


def _examples_option() -> click.Option:
    return click.Option(
        ["--examples"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=_show_examples,
        help="Show usage examples.",
    )


def _cwd_option() -> click.Option:
    return click.Option(["--cwd"], default=None, metavar="PATH", help=CWD_HELP)


class ShelfCommand(click.Command):
    """Command with optional ``--examples`` and ``--cwd`` options."""

    def __init__(
        self,
        *args: Any,
        examples: str | None = None,
        relative: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        self.relative = relative
        if relative:
            self.params.append(_cwd_option())
        if examples:
            self.params.append(_examples_option())


class ShelfGroup(click.Group):
    """Group with an optional ``--examples`` flag.

    Subcommands declared through ``@group.command(...)`` are built as
    :class:`ShelfCommand`, so they accept ``examples=`` and ``relative=``.
    """

    command_class = ShelfCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(_examples_option())
