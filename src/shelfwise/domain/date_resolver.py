"""Relative date resolution.

Turns short user tokens into concrete calendar days. The reference day
is always taken from the target timezone's local calendar, so ``today``
at 2025-02-10T04:00Z is 2025-02-09 in Los Angeles.

Supported tokens:
- Keywords: today/td, tomorrow/tm, yesterday/yd
- Signed periods: ``+2w``, ``~3d``, ``+1m``, ``~2y``
- Signed weekdays: ``+wed`` (next Wednesday strictly after today),
  ``~wed`` (most recent Wednesday strictly before today)
- Long weekdays: ``next-monday``, ``last-friday``
- Period keywords: this-week/tw, next-week/nw, last-week/lw,
  this-month, next-month, last-month
- Literal ``YYYY-MM-DD``
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, datetime

from shelfwise.domain.calendar import CalendarDay, parse_calendar_day
from shelfwise.domain.instants import DateTime, parse_date_time, parse_duration
from shelfwise.domain.primitives import Primitive
from shelfwise.domain.timezones import checked_timezone, local_day
from shelfwise.domain.validation import Result, ValidationError, validation_error

RELATIVE_DAY_KEYWORDS: dict[str, int] = {
    "today": 0,
    "td": 0,
    "tomorrow": 1,
    "tm": 1,
    "yesterday": -1,
    "yd": -1,
}

WEEK_KEYWORDS: dict[str, int] = {
    "this-week": 0,
    "tw": 0,
    "next-week": 1,
    "nw": 1,
    "last-week": -1,
    "lw": -1,
}

MONTH_KEYWORDS: dict[str, int] = {
    "this-month": 0,
    "next-month": 1,
    "last-month": -1,
}

PERIOD_KEYWORDS: frozenset[str] = frozenset(WEEK_KEYWORDS) | frozenset(MONTH_KEYWORDS)

WEEKDAYS: tuple[str, ...] = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")
LONG_WEEKDAYS: tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

RELATIVE_PERIOD_PATTERN = re.compile(r"([~+])(\d+)([dwmy])")
RELATIVE_WEEKDAY_PATTERN = re.compile(r"([~+])(mon|tue|wed|thu|fri|sat|sun)")
LONG_WEEKDAY_PATTERN = re.compile(
    r"(next|last)-(monday|tuesday|wednesday|thursday|friday|saturday|sunday)"
)
DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")
TIME_ONLY_PATTERN = re.compile(r"\d{1,2}:\d{2}(?::\d{2})?")

# Upper bound on days a single date argument expands to (about ten years).
MAX_RANGE_DAYS = 3660

_KIND = "DateResolver"


@dataclass(frozen=True)
class PeriodRange:
    """Inclusive span of days a period keyword covers."""

    start: CalendarDay
    end: CalendarDay

    def length(self) -> int:
        """Number of days covered, both ends included."""
        return (self.end.to_date() - self.start.to_date()).days + 1

    def days(self) -> list[CalendarDay]:
        return [self.start.add_days(offset) for offset in range(self.length())]


# --- Shared arithmetic ---


def shift(base: CalendarDay, amount: int, unit: str) -> CalendarDay:
    """Move *base* by *amount* days (``d``), weeks (``w``), months (``m``) or years (``y``)."""
    if unit == "d":
        return base.add_days(amount)
    if unit == "w":
        return base.add_days(amount * 7)
    if unit == "m":
        return base.add_months(amount)
    if unit == "y":
        return base.add_years(amount)
    raise ValueError(f"unknown period unit: {unit}")


def bounded_shift(base: CalendarDay, amount: int, unit: str) -> CalendarDay | None:
    """:func:`shift`, or None when the result leaves years 0001-9999."""
    try:
        moved = shift(base, amount, unit)
    except (OverflowError, ValueError):
        return None
    if not MINYEAR <= moved.year <= MAXYEAR:
        return None
    return moved


def weekday_step(base: CalendarDay, target: int, forward: bool) -> CalendarDay:
    """Nearest *target* weekday strictly after (or before) *base*.

    A same-day match moves a full week.
    """
    if forward:
        delta = (target - base.weekday()) % 7 or 7
        return base.add_days(delta)
    delta = (base.weekday() - target) % 7 or 7
    return base.add_days(-delta)


def _requires_reference(token: str) -> ValidationError:
    return validation_error(
        _KIND,
        f"relative token '{token}' requires a reference date",
        code="relative_requires_today",
        path=("value",),
    )


def _zone_error(timezone: Primitive | str) -> ValidationError | None:
    checked = checked_timezone(timezone)
    if checked.ok:
        return None
    return checked.error.rekind(_KIND)  # type: ignore[union-attr]


def resolve_relative_token(
    token: str,
    timezone: Primitive | str,
    reference: datetime | None,
) -> Result[CalendarDay] | None:
    """Resolve keyword, signed-period, and signed-weekday tokens.

    Returns None when *token* is not one of these forms, so callers can
    treat it as ordinary text. A relative token without *reference* fails
    with ``relative_requires_today``.
    """
    normalized = token.strip().lower()
    offset = RELATIVE_DAY_KEYWORDS.get(normalized)
    period = RELATIVE_PERIOD_PATTERN.fullmatch(normalized)
    weekday = RELATIVE_WEEKDAY_PATTERN.fullmatch(normalized)
    if offset is None and period is None and weekday is None:
        return None
    if reference is None:
        return Result.failure(_requires_reference(token))
    zone_error = _zone_error(timezone)
    if zone_error is not None:
        return Result.failure(zone_error)

    today = local_day(reference, timezone)
    if offset is not None:
        return Result.success(today.add_days(offset))
    if period is not None:
        operator, magnitude, unit = period.groups()
        if int(magnitude) <= 0:
            return Result.failure(
                validation_error(
                    _KIND,
                    "relative period must use a positive integer",
                    code="relative_invalid_magnitude",
                    path=("value",),
                )
            )
        direction = 1 if operator == "+" else -1
        moved = bounded_shift(today, direction * int(magnitude), unit)
        if moved is None:
            return Result.failure(
                validation_error(
                    _KIND,
                    f"relative date '{token}' falls outside years {MINYEAR:04d}-{MAXYEAR}",
                    code="relative_out_of_range",
                    path=("value",),
                )
            )
        return Result.success(moved)
    assert weekday is not None
    operator, name = weekday.groups()
    return Result.success(weekday_step(today, WEEKDAYS.index(name), operator == "+"))


def resolve_period_range(
    expr: str,
    timezone: Primitive | str,
    reference: datetime,
) -> Result[PeriodRange]:
    """Resolve a period keyword to its Monday-Sunday week or whole month."""
    zone_error = _zone_error(timezone)
    if zone_error is not None:
        return Result.failure(zone_error)
    normalized = expr.strip().lower()
    today = local_day(reference, timezone)
    if normalized in WEEK_KEYWORDS:
        monday = today.add_days(-today.weekday() + 7 * WEEK_KEYWORDS[normalized])
        return Result.success(PeriodRange(monday, monday.add_days(6)))
    if normalized in MONTH_KEYWORDS:
        first = today.month_of().first_day().add_months(MONTH_KEYWORDS[normalized])
        return Result.success(PeriodRange(first, first.month_of().last_day()))
    return Result.failure(
        validation_error(
            _KIND,
            f"'{expr}' is not a period keyword",
            code="not_period_keyword",
            path=("value",),
        )
    )


def resolve_relative_date(
    expr: str,
    timezone: Primitive | str,
    reference: datetime,
) -> Result[CalendarDay]:
    """Resolve any supported date expression to a single :class:`CalendarDay`.

    Period keywords resolve to the first day of their span.
    """
    zone_error = _zone_error(timezone)
    if zone_error is not None:
        return Result.failure(zone_error)
    relative = resolve_relative_token(expr, timezone, reference)
    if relative is not None:
        return _rekind(relative)

    normalized = expr.strip().lower()
    if normalized in PERIOD_KEYWORDS:
        period = resolve_period_range(normalized, timezone, reference)
        if not period.ok:
            return Result.failure(period.error)  # type: ignore[arg-type]
        return Result.success(period.unwrap().start)

    long_weekday = LONG_WEEKDAY_PATTERN.fullmatch(normalized)
    if long_weekday:
        direction, name = long_weekday.groups()
        today = local_day(reference, timezone)
        return Result.success(weekday_step(today, LONG_WEEKDAYS.index(name), direction == "next"))

    return _rekind(parse_calendar_day(expr))


def _rekind(result: Result[CalendarDay]) -> Result[CalendarDay]:
    if result.ok or result.error is None:
        return result
    return Result.failure(result.error.rekind(_KIND))


def is_date_expression(token: str) -> bool:
    """True if *token* is any date expression this module understands."""
    normalized = token.strip().lower()
    return (
        normalized in RELATIVE_DAY_KEYWORDS
        or normalized in PERIOD_KEYWORDS
        or RELATIVE_PERIOD_PATTERN.fullmatch(normalized) is not None
        or RELATIVE_WEEKDAY_PATTERN.fullmatch(normalized) is not None
        or LONG_WEEKDAY_PATTERN.fullmatch(normalized) is not None
        or DATE_PATTERN.fullmatch(normalized) is not None
    )


def is_period_keyword(token: str) -> bool:
    return token.strip().lower() in PERIOD_KEYWORDS


def parse_date_argument(
    text: str | None,
    timezone: Primitive | str,
    reference: datetime,
) -> Result[list[CalendarDay]]:
    """Expand a date argument into the list of days it covers.

    - None or blank: today in *timezone*.
    - ``a..b``: every day from *a* to *b* inclusive; descending is rejected.
    - Period keyword: every day of the week or month.
    - Anything else: the single day :func:`resolve_relative_date` yields.

    Ranges longer than :data:`MAX_RANGE_DAYS` days fail with ``range_too_large``.
    """
    zone_error = _zone_error(timezone)
    if zone_error is not None:
        return Result.failure(zone_error)
    if text is None or not text.strip():
        return Result.success([local_day(reference, timezone)])

    candidate = text.strip()
    if ".." in candidate:
        start_token, _, end_token = candidate.partition("..")
        if not start_token or not end_token:
            return Result.failure(
                validation_error(
                    _KIND,
                    "date range must be in format start..end",
                    code="format",
                    path=("range",),
                )
            )
        start = resolve_relative_date(start_token, timezone, reference)
        if not start.ok:
            return Result.failure(start.error.prefixed("range", "start"))  # type: ignore[union-attr]
        end = resolve_relative_date(end_token, timezone, reference)
        if not end.ok:
            return Result.failure(end.error.prefixed("range", "end"))  # type: ignore[union-attr]
        if start.unwrap() > end.unwrap():
            return Result.failure(
                validation_error(
                    _KIND,
                    "date range start cannot be after end",
                    code="range_descending",
                    path=("range",),
                )
            )
        span = PeriodRange(start.unwrap(), end.unwrap())
        if span.length() > MAX_RANGE_DAYS:
            return Result.failure(
                validation_error(
                    _KIND,
                    f"date range covers more than {MAX_RANGE_DAYS} days",
                    code="range_too_large",
                    path=("range",),
                )
            )
        return Result.success(span.days())

    if is_period_keyword(candidate):
        period = resolve_period_range(candidate, timezone, reference)
        if not period.ok:
            return Result.failure(period.error)  # type: ignore[arg-type]
        return Result.success(period.unwrap().days())

    single = resolve_relative_date(candidate, timezone, reference)
    if not single.ok:
        return Result.failure(single.error)  # type: ignore[arg-type]
    return Result.success([single.unwrap()])


# --- Future instants ---


def parse_future_date_time(
    text: str,
    timezone: Primitive | str,
    reference: datetime,
) -> Result[DateTime]:
    """Parse an instant that must lie strictly after *reference*.

    Accepts, in order: a duration from now (``1h30m``), an ISO datetime,
    a bare ``HH:MM`` (rolled to tomorrow when already past), a literal
    date, or a relative date. Dates resolve to local midnight in *timezone*.
    """
    zone_check = checked_timezone(timezone)
    if not zone_check.ok:
        return Result.failure(zone_check.error.rekind("FutureDateTime"))  # type: ignore[union-attr]
    now = DateTime.from_datetime(reference)
    candidate = text.strip()

    duration = parse_duration(candidate)
    if duration.ok:
        return _ensure_future(now + duration.unwrap(), now)

    parsed = parse_date_time(candidate, reference=reference, timezone=timezone)
    if parsed.ok:
        moment = parsed.unwrap()
        if TIME_ONLY_PATTERN.fullmatch(candidate) and not moment.is_after(now):
            moment = moment + parse_duration("24h").unwrap()
        return _ensure_future(moment, now)

    day = resolve_relative_date(candidate, timezone, reference)
    if day.ok:
        midnight = parse_date_time(f"{day.unwrap()}T00:00", timezone=timezone)
        if midnight.ok:
            return _ensure_future(midnight.unwrap(), now)

    return Result.failure(
        validation_error(
            "FutureDateTime",
            "invalid datetime format. Use: duration (8h, 1h30m), "
            "datetime (2025-12-01T14:00), date (2025-12-01), "
            "time (14:00), or relative date (tomorrow, today)",
            code="format",
            path=("value",),
        )
    )


def _ensure_future(moment: DateTime, now: DateTime) -> Result[DateTime]:
    if not moment.is_after(now):
        return Result.failure(
            validation_error(
                "FutureDateTime",
                "datetime must be in the future",
                code="not_future",
                path=("value",),
            )
        )
    return Result.success(moment)
