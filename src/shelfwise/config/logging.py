"""structlog setup for the shelfwise CLI.

Every record goes to stderr so stdout stays a clean channel for results.
Records from the ``shelfwise`` logger tree pass at DEBUG under ``-v``;
everything else (zoneinfo, pydantic) is held at WARNING. Both structlog
and plain :mod:`logging` records share one processor chain, so
``logging.getLogger(__name__)`` in the domain layer produces the same
fields as ``structlog.get_logger()``.

Invocation context (effective timezone, reference instant) is bound
through :mod:`structlog.contextvars` and appears on every line.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping

import structlog

PACKAGE_LOGGER = "shelfwise"


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def _stderr_handler(formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    return handler


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    context: Mapping[str, str] | None = None,
) -> None:
    """Install the stderr handler and bind invocation context.

    Safe to call repeatedly: the root handler is replaced, not stacked,
    and previously bound context is cleared.

    Args:
        verbose: Let ``shelfwise.*`` DEBUG records through.
        log_json: One JSON object per line instead of the console renderer.
        context: Key-value pairs attached to every record.
    """
    shared = _shared_processors()
    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(log_json),
        ],
    )

    root = logging.getLogger()
    root.handlers = [_stderr_handler(formatter)]
    root.setLevel(logging.WARNING)
    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)

    structlog.contextvars.clear_contextvars()
    if context:
        structlog.contextvars.bind_contextvars(**context)
