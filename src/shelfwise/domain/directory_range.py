"""Directory ranges: query descriptors handed to storage.

Three shapes:
- single:        one directory (``ls 2025-11-15``)
- date range:    a span of date shelves (``ls 2025-11-15..2025-11-30``)
- numeric range: sibling sections under one parent (``ls book/1/1..5``)

``date_range`` does not check ``start <= end``; ``parse_locator`` rejects
descending date ranges before a descriptor is built.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from shelfwise.domain.calendar import CalendarDay
from shelfwise.domain.directory import (
    PERMANENT,
    DateHead,
    Directory,
    DirectoryHead,
    ItemHead,
    PermanentHead,
    create_directory,
)
from shelfwise.domain.locator import Locator, RangeKind
from shelfwise.domain.primitives import Primitive
from shelfwise.domain.segments import PathRangeSegment, PathSegment, SegmentKind
from shelfwise.domain.validation import Result, validation_error

_KIND = "DirectoryRange"

ItemResolver = Callable[[PathSegment], Result[Primitive]]


class DirectoryRangeKind(StrEnum):
    SINGLE = "single"
    DATE_RANGE = "dateRange"
    NUMERIC_RANGE = "numericRange"


@dataclass(frozen=True)
class DirectoryRange:
    kind: DirectoryRangeKind
    at: Directory | None = None
    parent: Directory | None = None
    start: CalendarDay | int | None = None
    end: CalendarDay | int | None = None

    @classmethod
    def single(cls, at: Directory) -> DirectoryRange:
        return cls(DirectoryRangeKind.SINGLE, at=at)

    @classmethod
    def date_range(cls, start: CalendarDay, end: CalendarDay) -> DirectoryRange:
        return cls(DirectoryRangeKind.DATE_RANGE, start=start, end=end)

    @classmethod
    def numeric_range(cls, parent: Directory, start: int, end: int) -> DirectoryRange:
        """Sections ``start..end`` under *parent*; raises ``ValueError`` on invalid bounds."""
        for name, bound in (("from", start), ("to", end)):
            if isinstance(bound, bool) or not isinstance(bound, int) or bound < 1:
                raise ValueError(f"{name} must be a positive integer, got {bound!r}")
        if start > end:
            raise ValueError(f"from ({start}) must be <= to ({end})")
        return cls(DirectoryRangeKind.NUMERIC_RANGE, parent=parent, start=start, end=end)

    def is_single(self) -> bool:
        return self.kind is DirectoryRangeKind.SINGLE

    def is_date_range(self) -> bool:
        return self.kind is DirectoryRangeKind.DATE_RANGE

    def is_numeric_range(self) -> bool:
        return self.kind is DirectoryRangeKind.NUMERIC_RANGE

    def to_dict(self) -> dict[str, Any]:
        if self.kind is DirectoryRangeKind.SINGLE:
            return {"kind": str(self.kind), "at": str(self.at)}
        if self.kind is DirectoryRangeKind.DATE_RANGE:
            return {"kind": str(self.kind), "from": str(self.start), "to": str(self.end)}
        return {
            "kind": str(self.kind),
            "parent": str(self.parent),
            "from": self.start,
            "to": self.end,
        }


def _error(message: str, code: str, path: tuple[str | int, ...] = ()) -> Result[DirectoryRange]:
    return Result.failure(validation_error(_KIND, message, code=code, path=path))


def resolve_directory_range(locator: Locator, resolve_item: ItemResolver) -> Result[DirectoryRange]:
    """Turn a validated :class:`Locator` into a :class:`DirectoryRange`.

    Item-id and alias segments are mapped to item ids by *resolve_item*,
    which is where storage lookups live. The last item segment becomes the
    directory head and the numerics after it form the section. The alias
    ``permanent`` in head position names the permanent shelf.
    """
    if locator.range is not None and locator.range.kind is RangeKind.DATE:
        return Result.success(
            DirectoryRange.date_range(locator.range.start.value, locator.range.end.value)  # type: ignore[arg-type]
        )

    segments = [segment for segment in locator.segments if isinstance(segment, PathSegment)]
    if not segments:
        if locator.range is not None:
            return _error("numeric range requires a head", "missing_head", ("range",))
        return _error("locator has no head to resolve", "empty")

    head: DirectoryHead | None = None
    section: list[int] = []
    for index, segment in enumerate(segments):
        if segment.kind is SegmentKind.NUMERIC:
            if head is None:
                return _error("numeric section requires a head", "missing_head", (index,))
            section.append(segment.value)  # type: ignore[arg-type]
        elif segment.kind is SegmentKind.DATE:
            head, section = DateHead(segment.value), []  # type: ignore[arg-type]
        elif (
            index == 0
            and segment.kind is SegmentKind.ITEM_ALIAS
            and str(segment.value) == PERMANENT
        ):
            head, section = PermanentHead(), []
        else:
            resolved = resolve_item(segment)
            if not resolved.ok:
                return Result.failure(
                    resolved.error.rekind(_KIND).prefixed(index)  # type: ignore[union-attr]
                )
            head, section = ItemHead(resolved.unwrap()), []

    assert head is not None
    directory = create_directory(head, section)
    if locator.range is None:
        return Result.success(DirectoryRange.single(directory))

    last = locator.segments[-1]
    assert isinstance(last, PathRangeSegment)
    return Result.success(
        DirectoryRange.numeric_range(directory, last.start.value, last.end.value)  # type: ignore[arg-type]
    )
