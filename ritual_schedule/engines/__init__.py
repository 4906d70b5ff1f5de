"""Engine modules for the ritual schedule package.

Contains the pure computation engines:
- rrule_engine: RRULE parsing, generation and the Rule value types
- schedule_engine: Date matching and occurrence preview
"""

# Use relative imports within package to avoid mypy module resolution issues
from .rrule_engine import (
    Rule,
    RRuleParseError,
    WeekdaySpec,
    generate_rrule,
    parse_rrule,
    parse_weekday_spec,
)
from .schedule_engine import get_occurrences, is_match, matches_rrule

__all__ = [
    "RRuleParseError",
    "Rule",
    "WeekdaySpec",
    "generate_rrule",
    "get_occurrences",
    "is_match",
    "matches_rrule",
    "parse_rrule",
    "parse_weekday_spec",
]
