"""Directories: canonical absolute placement addresses.

A Directory is the storage key an item is filed under: a head (a date
shelf, a parent item, or the permanent shelf) plus a chain of numeric
sections.

Format: ``<head>[/<section>]*`` with no leading slash, e.g.
``2025-11-15``, ``2025-11-15/1/3``, ``<uuid-v7>/1``, ``permanent/2``.
``serialize_directory`` and ``parse_directory`` are exact inverses.

A Directory only knows its direct parent. ``parent()`` pops one section
entry and returns None at the head; walking further up needs the parent
item's own Directory.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal

from shelfwise.domain.calendar import CalendarDay, parse_calendar_day
from shelfwise.domain.identifiers import parse_item_id
from shelfwise.domain.primitives import Primitive
from shelfwise.domain.segments import DATE_SEGMENT_PATTERN
from shelfwise.domain.validation import Result, validation_error

_KIND = "Directory"
PERMANENT = "permanent"


@dataclass(frozen=True)
class DateHead:
    date: CalendarDay
    kind: Literal["date"] = "date"

    def __str__(self) -> str:
        return str(self.date)


@dataclass(frozen=True)
class ItemHead:
    id: Primitive
    kind: Literal["item"] = "item"

    def __str__(self) -> str:
        return str(self.id)


@dataclass(frozen=True)
class PermanentHead:
    kind: Literal["permanent"] = "permanent"

    def __str__(self) -> str:
        return PERMANENT


DirectoryHead = DateHead | ItemHead | PermanentHead


@dataclass(frozen=True)
class Directory:
    head: DirectoryHead
    section: tuple[int, ...] = ()

    def __str__(self) -> str:
        return serialize_directory(self)

    def to_json(self) -> str:
        return str(self)

    def parent(self) -> Directory | None:
        if not self.section:
            return None
        return Directory(self.head, self.section[:-1])


def serialize_directory(directory: Directory) -> str:
    return "/".join([str(directory.head), *(str(index) for index in directory.section)])


def _error(message: str, code: str, path: tuple[str | int, ...] = ("value",)) -> Result[Directory]:
    return Result.failure(validation_error(_KIND, message, code=code, path=path))


def _parse_head(token: str) -> Result[DirectoryHead]:
    if token == PERMANENT:
        return Result.success(PermanentHead())
    if DATE_SEGMENT_PATTERN.fullmatch(token):
        day = parse_calendar_day(token)
        if not day.ok:
            return Result.failure(day.error.rekind(_KIND).prefixed("head"))  # type: ignore[union-attr]
        return Result.success(DateHead(day.unwrap()))
    item_id = parse_item_id(token)
    if not item_id.ok:
        return Result.failure(item_id.error.rekind(_KIND).prefixed("head"))  # type: ignore[union-attr]
    return Result.success(ItemHead(item_id.unwrap()))


def parse_directory(raw: object) -> Result[Directory]:
    """Parse a ``<head>[/<section>]*`` string into a :class:`Directory`."""
    if isinstance(raw, Directory):
        return Result.success(raw)
    if not isinstance(raw, str):
        return _error("directory must be a string", "type")

    trimmed = raw.strip()
    if not trimmed:
        return _error("directory cannot be empty", "empty")
    if trimmed.startswith("/"):
        return _error("directory should not start with '/'", "format")

    head_token, *section_tokens = [token for token in trimmed.split("/") if token]
    head = _parse_head(head_token)
    if not head.ok:
        return Result.failure(head.error)  # type: ignore[arg-type]

    section: list[int] = []
    for index, token in enumerate(section_tokens):
        if not (token.isascii() and token.isdigit()) or int(token) < 1:
            return _error(
                f"section segment must be a positive integer, got '{token}'",
                "format",
                ("section", index),
            )
        section.append(int(token))
    return Result.success(Directory(head.unwrap(), tuple(section)))


def create_directory(head: DirectoryHead, section: Iterable[int] = ()) -> Directory:
    """Build a Directory from trusted components; raises ``ValueError`` on a bad section."""
    entries = tuple(section)
    for index, entry in enumerate(entries):
        if isinstance(entry, bool) or not isinstance(entry, int) or entry < 1:
            raise ValueError(f"section[{index}] must be a positive integer, got {entry!r}")
    return Directory(head, entries)


def date_directory(day: CalendarDay, section: Iterable[int] = ()) -> Directory:
    return create_directory(DateHead(day), section)


def item_directory(item_id: Primitive, section: Iterable[int] = ()) -> Directory:
    return create_directory(ItemHead(item_id), section)


def permanent_directory(section: Iterable[int] = ()) -> Directory:
    return create_directory(PermanentHead(), section)
