"""IANA timezone identifiers and the process-scoped validity registry.

Validation goes through the system tz database (:mod:`zoneinfo`). Common
zones hit a fixed allow-list; every other identifier that validates is
remembered in an append-only cache that lives for the whole process.
The cache is never evicted: its domain (valid IANA ids) is finite.
"""

from __future__ import annotations

import logging
import threading
from datetime import UTC, datetime, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from shelfwise.domain.calendar import CalendarDay
from shelfwise.domain.primitives import Primitive, PrimitiveRules
from shelfwise.domain.validation import Result, ValidationIssue

logger = logging.getLogger(__name__)

COMMON_TIMEZONES: frozenset[str] = frozenset(
    {
        "UTC",
        "Etc/UTC",
        "GMT",
        "Europe/London",
        "Europe/Paris",
        "Europe/Berlin",
        "America/New_York",
        "America/Chicago",
        "America/Denver",
        "America/Los_Angeles",
        "America/Sao_Paulo",
        "Asia/Tokyo",
        "Asia/Shanghai",
        "Asia/Kolkata",
        "Asia/Seoul",
        "Australia/Sydney",
    }
)

UTC_EQUIVALENT_TIMEZONES: frozenset[str] = frozenset(
    {"UTC", "GMT", "Etc/UTC", "Etc/GMT", "Etc/GMT+0", "Etc/GMT-0", "Etc/Universal", "Universal"}
)


class TimezoneRegistry:
    """Append-only memo of validated timezone identifiers.

    One instance is created lazily per process by :func:`process_registry`
    and never torn down. Reads are lock-free; inserts take a lock so
    concurrent writers never lose entries.
    """

    def __init__(self, allow_list: frozenset[str] = COMMON_TIMEZONES) -> None:
        self._allow_list = allow_list
        self._validated: dict[str, ZoneInfo] = {}
        self._lock = threading.Lock()

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._validated

    def __len__(self) -> int:
        return len(self._validated)

    def zone(self, identifier: str) -> ZoneInfo | None:
        """Return the zone for *identifier*, or None if it is not a valid IANA id."""
        cached = self._validated.get(identifier)
        if cached is not None:
            return cached
        try:
            zone = ZoneInfo(identifier)
        except (ZoneInfoNotFoundError, ValueError):
            logger.debug("Rejected timezone identifier %r", identifier)
            return None
        if identifier not in self._allow_list:
            with self._lock:
                self._validated.setdefault(identifier, zone)
        return zone

    def is_valid(self, identifier: str) -> bool:
        if identifier in self._allow_list or identifier in self._validated:
            return True
        return self.zone(identifier) is not None


_registry: TimezoneRegistry | None = None
_registry_lock = threading.Lock()


def process_registry() -> TimezoneRegistry:
    """Return the process-lifetime registry, creating it on first use."""
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = TimezoneRegistry()
    return _registry


def _check_known(value: str) -> ValidationIssue | None:
    if not value:
        return ValidationIssue(message="timezone is required", code="required")
    if not process_registry().is_valid(value):
        return ValidationIssue(
            message="timezone must be a valid IANA identifier", code="timezone"
        )
    return None


TIMEZONE_IDENTIFIER = PrimitiveRules(kind="TimezoneIdentifier", checks=(_check_known,))


def parse_timezone_identifier(raw: object) -> Result[Primitive]:
    return TIMEZONE_IDENTIFIER.parse(raw)


def checked_timezone(timezone: Primitive | str) -> Result[Primitive]:
    """Validate a zone handed to a parser; issues are blamed on ``timezone``.

    Parsed identifiers pass straight through.
    """
    parsed = parse_timezone_identifier(timezone)
    if not parsed.ok:
        return Result.failure(parsed.error.prefixed("timezone"))  # type: ignore[union-attr]
    return parsed


def timezone_for(identifier: Primitive | str) -> tzinfo:
    """Resolve a (validated) identifier to a :class:`tzinfo`."""
    name = str(identifier)
    if name in UTC_EQUIVALENT_TIMEZONES:
        return UTC
    zone = process_registry().zone(name)
    if zone is None:
        raise ValueError(f"unknown timezone: {name}")
    return zone


def local_day(instant: datetime, timezone: Primitive | str) -> CalendarDay:
    """The calendar day *instant* falls on in *timezone*'s local calendar."""
    if instant.tzinfo is None:
        instant = instant.astimezone()
    return CalendarDay.from_date(instant.astimezone(timezone_for(timezone)).date())


def utc_timezone() -> Primitive:
    return TIMEZONE_IDENTIFIER.create("UTC")
