# File: const.py
"""Constants for the ritual schedule recurrence engine.

This file centralizes RRULE keys, separators, frequency names, weekday codes
and engine defaults for consistency across the parser, generator and matcher.
"""

import logging

# ------------------------------------------------------------------------------------------------
# General
# ------------------------------------------------------------------------------------------------

# Logger
LOGGER = logging.getLogger(__package__)

# ------------------------------------------------------------------------------------------------
# RRULE Wire Format
# ------------------------------------------------------------------------------------------------

# Every stored rule must start with this literal prefix
RRULE_PREFIX = "FREQ="

RRULE_PART_SEPARATOR = ";"
RRULE_KEY_VALUE_SEPARATOR = "="
RRULE_LIST_SEPARATOR = ","

# Recognized keys (emission order for the generator)
RRULE_KEY_FREQ = "FREQ"
RRULE_KEY_INTERVAL = "INTERVAL"
RRULE_KEY_BYDAY = "BYDAY"
RRULE_KEY_BYMONTHDAY = "BYMONTHDAY"
RRULE_KEY_UNTIL = "UNTIL"
RRULE_KEY_COUNT = "COUNT"

# BYDAY token: optional signed ordinal followed by a two-letter weekday code
RRULE_BYDAY_PATTERN = r"(-?\d+)?([A-Z]{2})"
RRULE_INT_PATTERN = r"\s*([+-]?\d+)"

# ------------------------------------------------------------------------------------------------
# Frequencies
# ------------------------------------------------------------------------------------------------

FREQUENCY_DAILY = "DAILY"
FREQUENCY_WEEKLY = "WEEKLY"
FREQUENCY_MONTHLY = "MONTHLY"
FREQUENCY_YEARLY = "YEARLY"

FREQUENCIES: frozenset[str] = frozenset(
    {
        FREQUENCY_DAILY,
        FREQUENCY_WEEKLY,
        FREQUENCY_MONTHLY,
        FREQUENCY_YEARLY,
    }
)

# ------------------------------------------------------------------------------------------------
# Weekdays (0=Sunday .. 6=Saturday)
# ------------------------------------------------------------------------------------------------

WEEKDAY_SUNDAY = 0
WEEKDAY_MONDAY = 1
WEEKDAY_TUESDAY = 2
WEEKDAY_WEDNESDAY = 3
WEEKDAY_THURSDAY = 4
WEEKDAY_FRIDAY = 5
WEEKDAY_SATURDAY = 6

WEEKDAY_CODES: tuple[str, ...] = ("SU", "MO", "TU", "WE", "TH", "FR", "SA")

# Unrecognized codes resolve to Sunday
WEEKDAY_FALLBACK = WEEKDAY_SUNDAY

DAYS_PER_WEEK = 7

# ------------------------------------------------------------------------------------------------
# iCalendar Date Formats
# ------------------------------------------------------------------------------------------------

ICAL_DATE_FORMAT = "%Y%m%d"
ICAL_DATETIME_FORMAT = "%Y%m%dT%H%M%SZ"
ICAL_DATE_PATTERN = r"\d{8}(T\d{6}Z)?"

# ------------------------------------------------------------------------------------------------
# Defaults
# ------------------------------------------------------------------------------------------------

DEFAULT_FREQUENCY = FREQUENCY_DAILY
DEFAULT_INTERVAL = 1

# Occurrence preview safety limits
DEFAULT_OCCURRENCE_LIMIT = 100
MAX_OCCURRENCE_SCAN_DAYS = 3660
