"""Locators: paths with placement semantics.

A Locator wraps a :class:`Path` and enforces the rules that make it an
address rather than arbitrary text:

- a Date segment may only be the head (dates are roots, never nested);
- a terminal range has endpoints of one kind, is non-descending, and
  targets either numeric sections or date heads;
- a date range must be the only segment.

Without a current path, input lacking a leading ``/`` is read as absolute.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from shelfwise.domain.paths import DEFAULT_TIMEZONE, Path, Segment, parse_path
from shelfwise.domain.primitives import Primitive
from shelfwise.domain.segments import PathRangeSegment, PathSegment, SegmentKind
from shelfwise.domain.validation import Result, ValidationError, ValidationIssue, validation_error

_KIND = "Locator"


class RangeKind(StrEnum):
    NUMERIC = "numeric"
    DATE = "date"


@dataclass(frozen=True)
class LocatorRange:
    kind: RangeKind
    segment: PathRangeSegment
    start: PathSegment
    end: PathSegment


@dataclass(frozen=True)
class Locator:
    """A validated path plus its optional terminal range."""

    path: Path
    raw: str
    range: LocatorRange | None = None

    def __str__(self) -> str:
        return str(self.path)

    def to_json(self) -> str:
        return str(self)

    @property
    def segments(self) -> tuple[Segment, ...]:
        return self.path.segments

    def is_range(self) -> bool:
        return self.path.is_range()

    def head(self) -> PathSegment | None:
        """First segment, or None when the locator is empty or starts with a range."""
        if not self.path.segments:
            return None
        first = self.path.segments[0]
        return first if isinstance(first, PathSegment) else None


def _range_error(message: str, code: str) -> Result[LocatorRange | None]:
    return Result.failure(validation_error(_KIND, message, code=code, path=("range",)))


def _date_issues(path: Path) -> list[ValidationIssue]:
    return [
        ValidationIssue(
            message="date segments may only appear at the head of a locator",
            code="date_not_head",
            path=(index,),
        )
        for index, segment in enumerate(path.segments)
        if isinstance(segment, PathSegment) and segment.kind is SegmentKind.DATE and index > 0
    ]


def _determine_range(path: Path) -> Result[LocatorRange | None]:
    if not path.is_range():
        return Result.success(None)
    last = path.segments[-1]
    assert isinstance(last, PathRangeSegment)
    start, end = last.start, last.end

    if start.kind != end.kind:
        return _range_error("range endpoints must share the same kind", "range_mismatched_kind")

    if start.kind is SegmentKind.NUMERIC:
        if start.value > end.value:  # type: ignore[operator]
            return _range_error("numeric ranges must be increasing", "range_descending")
        return Result.success(LocatorRange(RangeKind.NUMERIC, last, start, end))

    if start.kind is SegmentKind.DATE:
        if len(path.segments) > 1:
            return _range_error(
                "date ranges may only appear at the head of a locator", "range_date_not_head"
            )
        if start.value > end.value:  # type: ignore[operator]
            return _range_error("date ranges must be increasing", "range_descending")
        return Result.success(LocatorRange(RangeKind.DATE, last, start, end))

    return _range_error(
        "ranges must target numeric sections or date heads", "range_invalid_kind"
    )


def parse_locator(
    text: object,
    *,
    cwd: Path | None = None,
    today: datetime | None = None,
    timezone: Primitive | str = DEFAULT_TIMEZONE,
) -> Result[Locator]:
    """Parse and validate *text* as a :class:`Locator`."""
    if isinstance(text, Locator):
        return Result.success(text)

    raw = text.strip() if isinstance(text, str) else ""
    candidate: object = text
    if raw and cwd is None and not raw.startswith("/"):
        candidate = f"/{raw}"

    parsed = parse_path(candidate, cwd=cwd, today=today, timezone=timezone)
    if not parsed.ok:
        return Result.failure(parsed.error.rekind(_KIND))  # type: ignore[union-attr]
    path = parsed.unwrap()

    issues = _date_issues(path)
    if issues:
        return Result.failure(
            ValidationError(kind=_KIND, message=f"{_KIND} is invalid", issues=tuple(issues))
        )

    located = _determine_range(path)
    if not located.ok:
        return Result.failure(located.error)  # type: ignore[arg-type]
    return Result.success(Locator(path=path, raw=raw or str(path), range=located.value))
