"""Root CLI group for shelfwise with global flags and command registration."""

from __future__ import annotations

import click
import pydantic

from shelfwise import __version__
from shelfwise.commands import register_commands
from shelfwise.commands._context import AppContext
from shelfwise.config.settings import ShelfSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="shelfwise")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--timezone", default=None, help="IANA timezone overriding [workspace] timezone.")
@click.option("--now", default=None, help="Reference instant (ISO-8601) instead of the clock.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    timezone: str | None,
    now: str | None,
) -> None:
    """shelfwise — resolve item addresses, dates, and sibling ranks."""
    ctx.ensure_object(dict)
    try:
        settings = ShelfSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
            timezone=timezone,
            now=now,
        )
    except pydantic.ValidationError as exc:
        raise click.UsageError(f"Invalid settings: {exc}") from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
