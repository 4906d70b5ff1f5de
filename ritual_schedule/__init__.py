"""Ritual schedule: iCalendar-style recurrence rules for personal rituals.

Parses, generates and evaluates RRULE strings such as
"FREQ=WEEKLY;BYDAY=MO,WE,FR" or "FREQ=MONTHLY;BYDAY=-1FR".
"""

from .engines import (
    Rule,
    RRuleParseError,
    WeekdaySpec,
    generate_rrule,
    get_occurrences,
    is_match,
    matches_rrule,
    parse_rrule,
    parse_weekday_spec,
)
from .utils.dt_utils import (
    code_to_day,
    day_to_code,
    last_occurrence_of_weekday_in_month,
    parse_ical_date,
)

__all__ = [
    "RRuleParseError",
    "Rule",
    "WeekdaySpec",
    "code_to_day",
    "day_to_code",
    "generate_rrule",
    "get_occurrences",
    "is_match",
    "last_occurrence_of_weekday_in_month",
    "matches_rrule",
    "parse_ical_date",
    "parse_rrule",
    "parse_weekday_spec",
]
