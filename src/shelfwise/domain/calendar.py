"""Calendar primitives: days, months, and years.

All three are validated against the real Gregorian calendar, not just
their regex shape: ``2023-02-29`` and ``2024-13-01`` are rejected.
Canonical text is zero-padded ISO (``YYYY-MM-DD``, ``YYYY-MM``, ``YYYY``),
so ordering by fields matches ordering by canonical string.
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date, timedelta

from shelfwise.domain.validation import Result, validation_error

CALENDAR_DAY_PATTERN = re.compile(r"(\d{4})-(\d{2})-(\d{2})")
CALENDAR_MONTH_PATTERN = re.compile(r"(\d{4})-(\d{2})")
CALENDAR_YEAR_PATTERN = re.compile(r"\d{4}")

MIN_YEAR = 1970
MAX_YEAR = 9999


@dataclass(frozen=True, order=True)
class CalendarDay:
    """A validated calendar date."""

    year: int
    month: int
    day: int

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def to_json(self) -> str:
        return str(self)

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    @classmethod
    def from_date(cls, value: date) -> CalendarDay:
        return cls(value.year, value.month, value.day)

    def add_days(self, days: int) -> CalendarDay:
        return CalendarDay.from_date(self.to_date() + timedelta(days=days))

    def add_months(self, months: int) -> CalendarDay:
        """Shift by whole months, clamping the day to the target month's length."""
        index = self.year * 12 + (self.month - 1) + months
        year, month = divmod(index, 12)
        month += 1
        day = min(self.day, calendar.monthrange(year, month)[1])
        return CalendarDay(year, month, day)

    def add_years(self, years: int) -> CalendarDay:
        return self.add_months(years * 12)

    def weekday(self) -> int:
        """ISO-style weekday index: Monday is 0, Sunday is 6."""
        return self.to_date().weekday()

    def month_of(self) -> CalendarMonth:
        return CalendarMonth(self.year, self.month)


@dataclass(frozen=True, order=True)
class CalendarMonth:
    """A validated ``YYYY-MM`` month."""

    year: int
    month: int

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    def to_json(self) -> str:
        return str(self)

    def first_day(self) -> CalendarDay:
        return CalendarDay(self.year, self.month, 1)

    def last_day(self) -> CalendarDay:
        return CalendarDay(self.year, self.month, calendar.monthrange(self.year, self.month)[1])


@dataclass(frozen=True, order=True)
class CalendarYear:
    """A validated four-digit year between 1970 and 9999."""

    value: int

    def __str__(self) -> str:
        return f"{self.value:04d}"

    def to_json(self) -> str:
        return str(self)


def _is_valid_date(year: int, month: int, day: int) -> bool:
    if year < 1 or not 1 <= month <= 12:
        return False
    return 1 <= day <= calendar.monthrange(year, month)[1]


def calendar_day_from_components(year: int, month: int, day: int) -> Result[CalendarDay]:
    if not _is_valid_date(year, month, day):
        return Result.failure(
            validation_error(
                "CalendarDay",
                f"{year:04d}-{month:02d}-{day:02d} is not a real calendar date",
                code="invalid_date",
                path=("iso",),
            )
        )
    return Result.success(CalendarDay(year, month, day))


def parse_calendar_day(raw: object) -> Result[CalendarDay]:
    """Parse ``YYYY-MM-DD`` into a :class:`CalendarDay`."""
    if isinstance(raw, CalendarDay):
        return Result.success(raw)
    if not isinstance(raw, str):
        return Result.failure(
            validation_error(
                "CalendarDay", "date must be a string", code="not_string", path=("iso",)
            )
        )
    match = CALENDAR_DAY_PATTERN.fullmatch(raw.strip())
    if match is None:
        return Result.failure(
            validation_error(
                "CalendarDay", "expected format YYYY-MM-DD", code="format", path=("iso",)
            )
        )
    year, month, day = (int(part) for part in match.groups())
    return calendar_day_from_components(year, month, day)


def parse_calendar_month(raw: object) -> Result[CalendarMonth]:
    """Parse ``YYYY-MM`` into a :class:`CalendarMonth`."""
    if isinstance(raw, CalendarMonth):
        return Result.success(raw)
    match = CALENDAR_MONTH_PATTERN.fullmatch(raw.strip()) if isinstance(raw, str) else None
    if match is None:
        return Result.failure(
            validation_error(
                "CalendarMonth", "expected format YYYY-MM", code="format", path=("iso",)
            )
        )
    year, month = (int(part) for part in match.groups())
    if not 1 <= month <= 12 or year < 1:
        return Result.failure(
            validation_error(
                "CalendarMonth", "month must be between 01 and 12", code="range", path=("iso",)
            )
        )
    return Result.success(CalendarMonth(year, month))


def parse_calendar_year(raw: object) -> Result[CalendarYear]:
    """Parse a four-digit year (string or int) into a :class:`CalendarYear`."""
    if isinstance(raw, CalendarYear):
        return Result.success(raw)
    if isinstance(raw, int) and not isinstance(raw, bool):
        year = raw
    elif isinstance(raw, str) and CALENDAR_YEAR_PATTERN.fullmatch(raw.strip()):
        year = int(raw.strip())
    else:
        return Result.failure(
            validation_error("CalendarYear", "expected format YYYY", code="format", path=("value",))
        )
    if not MIN_YEAR <= year <= MAX_YEAR:
        return Result.failure(
            validation_error(
                "CalendarYear",
                f"year must be between {MIN_YEAR} and {MAX_YEAR}",
                code="range",
                path=("value",),
            )
        )
    return Result.success(CalendarYear(year))
