"""BaseService — abstract foundation for all shelfwise services.

Every service receives the frozen :class:`ShelfSettings` at construction
time. Settings supply the workspace timezone, the reference instant used
for relative dates, and rank generator tuning. Services never raise for
bad user input; domain failures become ``ServiceResult(ok=False)``.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from shelfwise.domain.validation import ValidationError
from shelfwise.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from shelfwise.config.settings import ShelfSettings

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes.

    Subclasses wrap pure domain operations (path parsing, ranking, alias
    resolution) and translate their ``Result`` values into ServiceResult.

    Usage::

        class AddressService(BaseService):
            def parse_path(self, text: str) -> ServiceResult:
                parsed = parse_path(text, today=self._reference, ...)
                if not parsed.ok:
                    return self._failure("parse_path", parsed.error)
                ...
    """

    def __init__(self, settings: ShelfSettings) -> None:
        self._settings = settings

    @property
    def _timezone(self) -> str:
        return self._settings.effective_timezone

    @property
    def _reference(self) -> datetime:
        return self._settings.reference_instant()

    def _meta(self) -> dict[str, str]:
        return {"timezone": self._timezone, "reference": self._reference.isoformat()}

    def _failure(
        self,
        op: str,
        error: ValidationError | None,
        *,
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        """Wrap a domain validation failure.

        The first issue's code becomes the service error code; the full
        issue list is preserved in ``detail``.
        """
        if error is None:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(code="UNKNOWN", message=f"{op} failed"),
            )
        logger.debug("%s rejected input: %s", op, error)
        return ServiceResult.rejected(op, error, warnings=warnings)
