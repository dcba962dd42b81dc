"""AppContext: the object every shelfwise command receives.

Built once by the root group from the resolved :class:`ShelfSettings`
and handed down with ``@click.pass_obj``. It owns the three services
(constructed on first use, so ``--help`` and ``--examples`` never touch
them) and turns their results into output and exit codes.
"""

from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING

import click

from shelfwise.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from shelfwise.config.settings import ShelfSettings
    from shelfwise.services.address import AddressService
    from shelfwise.services.aliases import AliasService
    from shelfwise.services.order import OrderService
    from shelfwise.services.result import ServiceResult


class AppContext:
    """Settings, services, and result emission for one CLI invocation."""

    def __init__(self, settings: ShelfSettings) -> None:
        from shelfwise.config.logging import configure_logging

        self.settings = settings
        self.output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )
        context = {"timezone": settings.effective_timezone}
        if settings.now is not None:
            context["reference"] = settings.now.isoformat()
        configure_logging(verbose=settings.verbose, log_json=settings.log_json, context=context)

        if settings.verbose:
            from shelfwise.services.telemetry import enable_telemetry

            enable_telemetry()

    @cached_property
    def addresses(self) -> AddressService:
        from shelfwise.services.address import AddressService

        return AddressService(self.settings)

    @cached_property
    def order(self) -> OrderService:
        from shelfwise.services.order import OrderService

        return OrderService(self.settings)

    @cached_property
    def aliases(self) -> AliasService:
        from shelfwise.services.aliases import AliasService

        return AliasService(self.settings)

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; a failure goes to stderr and exits with code 1.

        Outside ``--json`` mode, warnings of a successful result are
        written to stderr so piped stdout carries only the value.
        """
        rendered = format_result(result, settings=self.output)
        if not result.ok:
            click.echo(rendered, err=True)
            raise SystemExit(1)
        click.echo(rendered)
        if not self.output.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
