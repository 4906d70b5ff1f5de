"""Type definitions for ritual schedule data structures.

TypedDict is used for the generator input because its keys are fixed and it
mirrors the shape hosts already persist next to a ritual record. The parsed
form (Rule / WeekdaySpec) lives in engines/rrule_engine.py as frozen
dataclasses.

IMPORTANT: This file must NOT import from engines/ to avoid circular
dependencies. Only import from typing (type machinery).

NOTE: TypedDict is STATIC ANALYSIS ONLY. The generator still uses .get()
defaults for every field.
"""

from typing import Literal, NotRequired, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

RRuleString = str  # "FREQ=WEEKLY;BYDAY=MO,WE,FR"
ICalDate = str  # "20240315" or "20240315T235959Z"
ByDayToken = str  # "MO", "2FR", "-1SU"

FrequencyType = Literal["DAILY", "WEEKLY", "MONTHLY", "YEARLY"]


# =============================================================================
# Generator Input
# =============================================================================


class RuleParams(TypedDict):
    """Inputs for generate_rrule() in engines/rrule_engine.py.

    Only ``freq`` is expected. Optional fields at their default (interval 1,
    empty lists, empty until, zero count) are omitted from the output.
    """

    freq: FrequencyType
    interval: NotRequired[int]  # Every N periods (default: 1)
    byday: NotRequired[list[ByDayToken]]  # Ordered BYDAY tokens
    bymonthday: NotRequired[list[int]]  # Signed day-of-month values
    until: NotRequired[ICalDate]  # Inclusive end boundary
    count: NotRequired[int]  # Occurrence cap (carried, never enforced)
