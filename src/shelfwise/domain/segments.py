"""Path segments: the typed pieces of a location expression.

A segment is classified by strict priority because alias text overlaps
the other shapes syntactically:

1. ``YYYY-MM-DD``             -> Date
2. digits without a leading 0 -> Numeric (bare ``0`` is rejected)
3. UUID v7                    -> ItemId
4. alias-slug grammar         -> ItemAlias
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from shelfwise.domain.calendar import CalendarDay, parse_calendar_day
from shelfwise.domain.identifiers import parse_alias_slug, parse_item_id
from shelfwise.domain.primitives import Primitive
from shelfwise.domain.validation import Result, ValidationError, validation_error

DATE_SEGMENT_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")
NUMERIC_SEGMENT_PATTERN = re.compile(r"[1-9]\d*")

_KIND = "PathSegment"


class SegmentKind(StrEnum):
    DATE = "Date"
    NUMERIC = "Numeric"
    ITEM_ID = "ItemId"
    ITEM_ALIAS = "ItemAlias"


@dataclass(frozen=True)
class PathSegment:
    """One resolved segment; ``value`` type follows ``kind``."""

    kind: SegmentKind
    raw: str
    value: CalendarDay | int | Primitive

    def __str__(self) -> str:
        return str(self.value)

    def to_json(self) -> str:
        return str(self)


@dataclass(frozen=True)
class PathRangeSegment:
    """Terminal ``start..end`` segment; both endpoints share a kind."""

    raw: str
    start: PathSegment
    end: PathSegment

    kind = "range"

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"

    def to_json(self) -> str:
        return str(self)


def _wrap(inner: ValidationError) -> ValidationError:
    return inner.rekind(_KIND).prefixed("raw")


def _segment_error(message: str, code: str) -> Result[PathSegment]:
    return Result.failure(validation_error(_KIND, message, code=code, path=("raw",)))


def parse_path_segment(raw: object) -> Result[PathSegment]:
    """Classify and parse a single segment token."""
    if isinstance(raw, PathSegment):
        return Result.success(raw)
    if not isinstance(raw, str):
        return _segment_error("path segment must be a string", "type")

    candidate = raw.strip()
    if not candidate:
        return _segment_error("path segment cannot be empty", "empty")
    if "/" in candidate:
        return _segment_error("path segment cannot contain '/'", "format")

    if DATE_SEGMENT_PATTERN.fullmatch(candidate):
        day = parse_calendar_day(candidate)
        if not day.ok:
            return Result.failure(_wrap(day.error))  # type: ignore[arg-type]
        return Result.success(PathSegment(SegmentKind.DATE, candidate, day.unwrap()))

    if NUMERIC_SEGMENT_PATTERN.fullmatch(candidate):
        return Result.success(PathSegment(SegmentKind.NUMERIC, candidate, int(candidate)))

    item_id = parse_item_id(candidate)
    if item_id.ok:
        return Result.success(PathSegment(SegmentKind.ITEM_ID, candidate, item_id.unwrap()))

    alias = parse_alias_slug(candidate)
    if not alias.ok:
        return Result.failure(_wrap(alias.error))  # type: ignore[arg-type]
    return Result.success(PathSegment(SegmentKind.ITEM_ALIAS, candidate, alias.unwrap()))
