"""Absolute instants and durations.

DateTime wraps an epoch-millisecond value; its canonical text is the
UTC ISO form with millisecond precision (``2025-02-10T17:00:00.000Z``).
Duration is a whole number of minutes (at least one) with the text
grammar ``1h30m`` / ``8h`` / ``45m``.

Wall-clock input (ISO without offset, or bare ``HH:MM[:SS]``) is turned
into an instant through the zone's own transition table. A wall time
inside a spring-forward gap takes the offset in force before the gap,
so ``02:30`` on a skipped hour lands at ``03:30`` local. An ambiguous
fall-back wall time resolves to its first occurrence.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta, tzinfo

from shelfwise.domain.primitives import Primitive
from shelfwise.domain.timezones import checked_timezone, timezone_for
from shelfwise.domain.validation import Result, validation_error

ISO_WITH_OFFSET_PATTERN = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(?::\d{2}(?:\.\d{1,6})?)?(?:Z|[+-]\d{2}:?\d{2})"
)
ISO_LOCAL_PATTERN = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2})(?::(\d{2})(?:\.(\d{1,6}))?)?"
)
TIME_ONLY_PATTERN = re.compile(r"(\d{1,2}):(\d{2})(?::(\d{2}))?")
DURATION_PATTERN = re.compile(r"(?:(\d+)h)?(?:(\d+)m)?")

MINUTES_PER_HOUR = 60
MIN_DURATION_MINUTES = 1


@dataclass(frozen=True, order=True)
class Duration:
    """A positive span of whole minutes."""

    minutes: int

    def to_hours(self) -> float:
        return self.minutes / MINUTES_PER_HOUR

    def to_timedelta(self) -> timedelta:
        return timedelta(minutes=self.minutes)

    def __str__(self) -> str:
        hours, minutes = divmod(self.minutes, MINUTES_PER_HOUR)
        if hours and minutes:
            return f"{hours}h{minutes}m"
        if hours:
            return f"{hours}h"
        return f"{minutes}m"

    def to_json(self) -> str:
        return str(self)


@dataclass(frozen=True, order=True)
class DateTime:
    """An absolute instant, ordered by its epoch value."""

    epoch_ms: int

    @classmethod
    def from_datetime(cls, value: datetime) -> DateTime:
        """Wrap a :class:`datetime`; naive values are read as system local time."""
        if value.tzinfo is None:
            value = value.astimezone()
        delta = value - datetime(1970, 1, 1, tzinfo=UTC)
        return cls(delta // timedelta(milliseconds=1))

    def to_datetime(self) -> datetime:
        return datetime(1970, 1, 1, tzinfo=UTC) + timedelta(milliseconds=self.epoch_ms)

    @property
    def iso(self) -> str:
        moment = self.to_datetime()
        return f"{moment:%Y-%m-%dT%H:%M:%S}.{moment.microsecond // 1000:03d}Z"

    def is_before(self, other: DateTime) -> bool:
        return self.epoch_ms < other.epoch_ms

    def is_after(self, other: DateTime) -> bool:
        return self.epoch_ms > other.epoch_ms

    def __add__(self, duration: Duration) -> DateTime:
        return DateTime(self.epoch_ms + duration.minutes * 60_000)

    def __sub__(self, duration: Duration) -> DateTime:
        return DateTime(self.epoch_ms - duration.minutes * 60_000)

    def __str__(self) -> str:
        return self.iso

    def to_json(self) -> str:
        return self.iso


def _error(message: str, code: str) -> Result[DateTime]:
    return Result.failure(validation_error("DateTime", message, code=code, path=("iso",)))


def wall_time_to_instant(wall: datetime, zone: tzinfo) -> datetime:
    """Resolve naive *wall* time in *zone* to an aware UTC instant."""
    return wall.replace(tzinfo=zone, fold=0).astimezone(UTC)


def _resolve_wall_time(wall: datetime, timezone: Primitive | str | None) -> datetime:
    if timezone is None:
        return wall.astimezone()
    return wall_time_to_instant(wall, timezone_for(timezone))


def parse_date_time(
    raw: object,
    *,
    reference: datetime | None = None,
    timezone: Primitive | str | None = None,
) -> Result[DateTime]:
    """Parse an instant from ISO-8601 or bare ``HH:MM[:SS]`` text.

    Args:
        raw: ISO with offset/``Z``, ISO without offset (wall time), or a
            bare time of day.
        reference: Instant whose calendar day anchors a bare time
            (defaults to now).
        timezone: Zone for wall-clock input; system local time when None.
    """
    if isinstance(raw, DateTime):
        return Result.success(raw)
    if not isinstance(raw, str):
        return _error("datetime must be a string", "not_string")
    if timezone is not None:
        zone_check = checked_timezone(timezone)
        if not zone_check.ok:
            return Result.failure(zone_check.error.rekind("DateTime"))  # type: ignore[union-attr]
        timezone = zone_check.unwrap()

    candidate = raw.strip()
    if ISO_WITH_OFFSET_PATTERN.fullmatch(candidate):
        try:
            parsed = datetime.fromisoformat(candidate)
        except ValueError:
            return _error("invalid datetime value", "invalid_datetime")
        return Result.success(DateTime.from_datetime(parsed))

    local = ISO_LOCAL_PATTERN.fullmatch(candidate)
    if local:
        try:
            wall = datetime.fromisoformat(candidate)
        except ValueError:
            return _error("invalid datetime value", "invalid_datetime")
        return Result.success(DateTime.from_datetime(_resolve_wall_time(wall, timezone)))

    time_only = TIME_ONLY_PATTERN.fullmatch(candidate)
    if time_only:
        hour, minute = int(time_only.group(1)), int(time_only.group(2))
        second = int(time_only.group(3) or 0)
        if hour > 23 or minute > 59 or second > 59:
            return _error("time of day is out of range", "invalid_time")
        zone = timezone_for(timezone) if timezone is not None else None
        anchor = (reference or datetime.now(UTC)).astimezone(zone)
        wall = datetime(anchor.year, anchor.month, anchor.day, hour, minute, second)
        return Result.success(DateTime.from_datetime(_resolve_wall_time(wall, timezone)))

    return _error("expected ISO-8601 datetime or HH:MM time", "format")


def parse_duration(raw: object) -> Result[Duration]:
    """Parse ``1h30m`` / ``8h`` / ``45m`` into a :class:`Duration`."""
    if isinstance(raw, Duration):
        return Result.success(raw)
    if not isinstance(raw, str):
        return Result.failure(
            validation_error(
                "Duration", "value must be a string", code="not_string", path=("value",)
            )
        )
    match = DURATION_PATTERN.fullmatch(raw.strip())
    if match is None or not any(match.groups()):
        return Result.failure(
            validation_error("Duration", "invalid duration format", code="format", path=("value",))
        )
    hours, minutes = (int(part or 0) for part in match.groups())
    return duration_from_minutes(hours * MINUTES_PER_HOUR + minutes)


def duration_from_minutes(minutes: float) -> Result[Duration]:
    normalized = round(minutes)
    if normalized < MIN_DURATION_MINUTES:
        return Result.failure(
            validation_error(
                "Duration", "duration must be at least 1 minute", code="min", path=("minutes",)
            )
        )
    return Result.success(Duration(normalized))


def duration_from_hours(hours: float) -> Result[Duration]:
    return duration_from_minutes(hours * MINUTES_PER_HOUR)
