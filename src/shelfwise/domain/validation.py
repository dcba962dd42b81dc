"""Validation issues, errors, and the Result type returned by domain parsers.

INVARIANT: Parsers never raise for bad input. They return a failed
:class:`Result` whose :class:`ValidationError` carries one or more
issues. When one parser wraps another, the inner issue path is
prefixed, never replaced, so a single error shows the full blame chain.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

PathPart = str | int


class ValidationIssue(BaseModel):
    """One problem found while parsing or validating a value."""

    model_config = {"frozen": True}

    message: str
    code: str = "invalid"
    path: tuple[PathPart, ...] = ()

    def prefixed(self, *prefix: PathPart) -> ValidationIssue:
        return self.model_copy(update={"path": (*prefix, *self.path)})

    def __str__(self) -> str:
        location = ".".join(str(part) for part in self.path)
        location = f"{location}: " if location else ""
        return f"{location}[{self.code}] {self.message}"


class ValidationError(BaseModel):
    """A failed parse of a *kind* of value (``"Path"``, ``"Locator"`` ...)."""

    model_config = {"frozen": True}

    kind: str
    message: str = ""
    issues: tuple[ValidationIssue, ...] = Field(default_factory=tuple)

    @property
    def code(self) -> str:
        """Code of the first issue (the one surfaced to users)."""
        return self.issues[0].code if self.issues else "invalid"

    def prefixed(self, *prefix: PathPart) -> ValidationError:
        return self.model_copy(
            update={"issues": tuple(issue.prefixed(*prefix) for issue in self.issues)}
        )

    def rekind(self, kind: str) -> ValidationError:
        """Re-wrap these issues under an outer *kind* without touching paths."""
        return ValidationError(kind=kind, message=f"{kind} is invalid", issues=self.issues)

    def to_detail(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "issues": [issue.model_dump(mode="json") for issue in self.issues],
        }

    def __str__(self) -> str:
        rendered = ", ".join(str(issue) for issue in self.issues)
        return f"{self.kind}: {rendered or self.message}"


def validation_error(
    kind: str,
    message: str,
    *,
    code: str = "invalid",
    path: tuple[PathPart, ...] = (),
) -> ValidationError:
    """Build a single-issue :class:`ValidationError`."""
    return ValidationError(
        kind=kind,
        message=f"{kind} is invalid",
        issues=(ValidationIssue(message=message, code=code, path=path),),
    )


@dataclass(frozen=True)
class Result(Generic[T]):
    """Tagged success/failure returned by every domain parser."""

    ok: bool
    value: T | None = None
    error: ValidationError | None = None

    @classmethod
    def success(cls, value: T) -> Result[T]:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: ValidationError) -> Result[T]:
        return cls(ok=False, error=error)

    def unwrap(self) -> T:
        """Return the value, raising ``ValueError`` on a failed result.

        Only for call sites where failure would be a programming error.
        """
        if not self.ok:
            raise ValueError(str(self.error))
        return self.value  # type: ignore[return-value]
