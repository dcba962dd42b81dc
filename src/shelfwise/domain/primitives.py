"""Generic validated string primitive.

Small identifier-like values (aliases, item ids, ranks, timezone ids,
canonical keys) share one wrapper type, :class:`Primitive`, whose
behaviour comes from a :class:`PrimitiveRules` instance: how raw text is
normalized, which checks it must pass, and how two values order.

Usage::

    ALIAS_SLUG = PrimitiveRules(kind="AliasSlug", normalize=..., checks=(...))
    result = ALIAS_SLUG.parse("Book")   # Result[Primitive]
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from functools import total_ordering

from shelfwise.domain.validation import Result, ValidationIssue, validation_error

Check = Callable[[str], ValidationIssue | None]


def _strip(value: str) -> str:
    return value.strip()


def _lexical(first: str, second: str) -> int:
    if first == second:
        return 0
    return -1 if first < second else 1


@dataclass(frozen=True)
class PrimitiveRules:
    """Validator, formatter, and comparator for one kind of primitive."""

    kind: str
    normalize: Callable[[str], str] = _strip
    checks: tuple[Check, ...] = ()
    compare: Callable[[str, str], int] = field(default=_lexical)

    def parse(self, raw: object) -> Result[Primitive]:
        """Validate *raw* text, passing through already-parsed values of this kind."""
        if isinstance(raw, Primitive) and raw.kind == self.kind:
            return Result.success(raw)
        if not isinstance(raw, str):
            return Result.failure(
                validation_error(
                    self.kind,
                    f"{self.kind} must be a string",
                    code="not_string",
                    path=("value",),
                )
            )
        candidate = self.normalize(raw)
        for check in self.checks:
            issue = check(candidate)
            if issue is not None:
                return Result.failure(validation_error(
                    self.kind, issue.message, code=issue.code, path=issue.path or ("value",)
                ))
        return Result.success(Primitive(self, candidate))

    def create(self, raw: str) -> Primitive:
        """Build a primitive from trusted text; raises ``ValueError`` if invalid."""
        return self.parse(raw).unwrap()


@total_ordering
class Primitive:
    """Immutable validated string with value equality and rule-based ordering."""

    __slots__ = ("_rules", "_value")

    def __init__(self, rules: PrimitiveRules, value: str) -> None:
        object.__setattr__(self, "_rules", rules)
        object.__setattr__(self, "_value", value)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def kind(self) -> str:
        return self._rules.kind

    @property
    def value(self) -> str:
        return self._value

    def compare(self, other: Primitive) -> int:
        if other.kind != self.kind:
            raise TypeError(f"cannot compare {self.kind} with {other.kind}")
        return self._rules.compare(self._value, other._value)

    def to_json(self) -> str:
        return self._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Primitive):
            return NotImplemented
        return self.kind == other.kind and self._value == other._value

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Primitive):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash((self.kind, self._value))

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"{self.kind}({self._value!r})"


# --- Reusable checks ---


def min_length(limit: int, message: str) -> Check:
    def check(value: str) -> ValidationIssue | None:
        if len(value) < limit:
            return ValidationIssue(message=message, code="min_length")
        return None

    return check


def max_length(limit: int, message: str) -> Check:
    def check(value: str) -> ValidationIssue | None:
        if len(value) > limit:
            return ValidationIssue(message=message, code="max_length")
        return None

    return check


def matches(pattern: Callable[[str], object], message: str, code: str = "format") -> Check:
    """Check that ``pattern(value)`` is truthy (e.g. a compiled regex's ``fullmatch``)."""

    def check(value: str) -> ValidationIssue | None:
        if not pattern(value):
            return ValidationIssue(message=message, code=code)
        return None

    return check
