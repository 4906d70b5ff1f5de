# File: utils/dt_utils.py
"""Date utilities for the ritual schedule engine.

Pure Python date functions with no clock access and no I/O.
Uses standard library: datetime, re, plus dateutil.

Weekdays follow the RRULE host convention: 0=Sunday .. 6=Saturday.
This differs from ``date.weekday()`` (0=Monday); always go through
``weekday_of`` when comparing against a WeekdaySpec.

Functions:
    - as_date: Reduce a date or datetime to its calendar date
    - weekday_of: Sunday-based weekday of a date
    - day_to_code: Weekday number to two-letter iCalendar code
    - code_to_day: Two-letter iCalendar code to weekday number (lenient)
    - week_of_month: 1-based week-of-month bucket of a date
    - week_start_ordinal: Ordinal of the Sunday starting the week of a date
    - months_between: Whole calendar months from one date to another
    - last_day_of_month: Last calendar day of a month
    - last_occurrence_of_weekday_in_month: Date of the last given weekday
    - parse_ical_date: Parse YYYYMMDD / YYYYMMDDTHHMMSSZ strings
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
import logging
import re

# Third-party date utilities
from dateutil.relativedelta import relativedelta

from .. import const

# Module-level logger
_LOGGER = logging.getLogger(__name__)

_ICAL_DATE_RE = re.compile(const.ICAL_DATE_PATTERN, re.ASCII)

_CODE_TO_DAY: dict[str, int] = {
    code: day for day, code in enumerate(const.WEEKDAY_CODES)
}


# ==============================================================================
# Normalization
# ==============================================================================


def as_date(value: date | datetime) -> date:
    """Return the calendar date of a date or datetime.

    ``datetime`` is a subclass of ``date`` but the two do not compare, so
    every public entry point normalizes through here first.
    """
    if isinstance(value, datetime):
        return value.date()
    return value


# ==============================================================================
# Weekday Codec
# ==============================================================================


def weekday_of(day: date) -> int:
    """Return the weekday of ``day`` with 0=Sunday .. 6=Saturday."""
    return day.isoweekday() % const.DAYS_PER_WEEK


def day_to_code(day: int) -> str:
    """Convert a weekday number (0=Sunday) to its two-letter code.

    Values outside 0-6 fall back to ``"SU"``.
    """
    if 0 <= day < len(const.WEEKDAY_CODES):
        return const.WEEKDAY_CODES[day]
    return const.WEEKDAY_CODES[const.WEEKDAY_FALLBACK]


def code_to_day(code: str) -> int:
    """Convert a two-letter code (any case) to a weekday number.

    Unrecognized codes resolve to Sunday rather than failing. Stored rules
    rely on this, so it must stay lenient.
    """
    day = _CODE_TO_DAY.get(code.upper())
    if day is None:
        _LOGGER.debug("Unknown weekday code %r, using Sunday", code)
        return const.WEEKDAY_FALLBACK
    return day


# ==============================================================================
# Month / Week Arithmetic
# ==============================================================================


def week_of_month(day: date) -> int:
    """Return which 7-day bucket of its month ``day`` falls in (1-5).

    Day 1-7 is bucket 1, day 8-14 is bucket 2 and so on, which makes the
    bucket equal to the ordinal of that weekday within the month.
    """
    return (day.day - 1) // const.DAYS_PER_WEEK + 1


def week_start_ordinal(day: date) -> int:
    """Return the proleptic ordinal of the Sunday on or before ``day``.

    Stays an int so the Sunday before 0001-01-01 (ordinal 0) is representable.
    """
    return day.toordinal() - weekday_of(day)


def months_between(start: date, end: date) -> int:
    """Return the number of calendar months from ``start`` to ``end``.

    Only year and month are considered (Jan 31 -> Feb 1 is one month).
    """
    return (end.year - start.year) * 12 + (end.month - start.month)


def last_day_of_month(year: int, month: int) -> date:
    """Return the last calendar day of ``year``/``month``.

    relativedelta(day=31) clamps to the month length, covering 28-31 day
    months and leap February.
    """
    return date(year, month, 1) + relativedelta(day=31)


def last_occurrence_of_weekday_in_month(year: int, month: int, weekday: int) -> date:
    """Return the date of the last ``weekday`` (0=Sunday) in a month.

    Walks back from the last day of the month. The step is in 0-6, so the
    result never leaves the month: when the last day already is the target
    weekday the step is 0.

    Example:
        >>> last_occurrence_of_weekday_in_month(2024, 3, const.WEEKDAY_FRIDAY)
        datetime.date(2024, 3, 29)
    """
    last_day = last_day_of_month(year, month)
    step_back = (weekday_of(last_day) - weekday) % const.DAYS_PER_WEEK
    return last_day - timedelta(days=step_back)


# ==============================================================================
# iCalendar Date Parsing
# ==============================================================================


def parse_ical_date(value: str | None) -> date | None:
    """Safely parse an iCalendar date string into a ``datetime.date``.

    Accepts formats:
    - "20240315" (date only)
    - "20240315T235959Z" (date + UTC time; time is validated then dropped)

    Args:
        value: iCalendar date string, or None

    Returns:
        datetime.date or None if the shape is wrong or a field is out of range.
    """
    if not value or not isinstance(value, str):
        return None

    # strptime alone accepts short fields like "2024031", so check shape first
    match = _ICAL_DATE_RE.fullmatch(value)
    if not match:
        _LOGGER.debug("Unrecognized iCalendar date shape: %s", value)
        return None

    fmt = const.ICAL_DATETIME_FORMAT if match.group(1) else const.ICAL_DATE_FORMAT
    try:
        return datetime.strptime(value, fmt).date()
    except ValueError:
        _LOGGER.debug("iCalendar date out of range: %s", value)
        return None
