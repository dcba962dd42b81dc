"""ServiceResult and ServiceError: what every service method returns.

INVARIANT: All service-layer methods return ServiceResult and never
raise for bad input. A domain ``ValidationError`` becomes a
:class:`ServiceError` through :meth:`ServiceError.from_validation`: the
first issue supplies ``code`` (upper-cased) and ``message``, and the
whole issue list, blame paths included, is kept in ``detail["issues"]``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from shelfwise.domain.validation import ValidationError


class ServiceError(BaseModel):
    """Error payload of a failed ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_validation(cls, error: ValidationError) -> ServiceError:
        first = error.issues[0] if error.issues else None
        return cls(
            code=error.code.upper(),
            message=first.message if first else error.message,
            detail=error.to_detail(),
        )

    @property
    def issue_paths(self) -> list[str]:
        """Dotted blame path of each issue (``"0.raw.value"``), ``""`` for none."""
        return [
            ".".join(str(part) for part in issue.get("path", ()))
            for issue in self.detail.get("issues", [])
        ]


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name (``"parse_path"``, ``"before_rank"``, ...).
        data: Payload on success.
        warnings: Non-fatal notes, such as stale-sibling hints.
        error: Set when ``ok`` is False.
        meta: Timezone and reference instant, plus the span tree under ``-v``.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def rejected(
        cls,
        op: str,
        error: ValidationError,
        *,
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        """Failed result for input the domain layer refused."""
        return cls(
            ok=False,
            op=op,
            warnings=warnings or [],
            error=ServiceError.from_validation(error),
        )
