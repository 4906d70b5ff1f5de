"""RRULE Engine - Parse and generate ritual recurrence rule strings.

Handles the stored wire format:
    FREQ=<DAILY|WEEKLY|MONTHLY|YEARLY>[;INTERVAL=n][;BYDAY=..][;BYMONTHDAY=..]
    [;UNTIL=YYYYMMDD[THHMMSSZ]][;COUNT=n]

Only a missing ``FREQ=`` prefix is a hard failure (RRuleParseError).
Everything else degrades softly: unknown keys are ignored, bad numbers fall
back to defaults and malformed list tokens are dropped. Hosts already store
partially malformed strings, so this asymmetry must not be tightened.

ARCHITECTURE: Pure logic with no clock access. Rules are frozen dataclasses
holding tuples and can be shared freely between threads.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import TYPE_CHECKING

from .. import const
from ..utils.dt_utils import code_to_day, day_to_code

if TYPE_CHECKING:
    from ..type_defs import RRuleString, RuleParams

_BYDAY_RE = re.compile(const.RRULE_BYDAY_PATTERN, re.ASCII)
_INT_RE = re.compile(const.RRULE_INT_PATTERN, re.ASCII)


class RRuleParseError(ValueError):
    """Raised when a string is not a recurrence rule at all.

    Attributes:
        rrule: The rejected input
    """

    def __init__(self, rrule: object) -> None:
        """Initialize RRuleParseError.

        Args:
            rrule: The rejected input
        """
        self.rrule = rrule
        super().__init__(
            f"Not a recurrence rule (must start with {const.RRULE_PREFIX!r}): {rrule!r}"
        )


# =============================================================================
# PARSED RULE DATA STRUCTURES
# =============================================================================


@dataclass(frozen=True, slots=True)
class WeekdaySpec:
    """One BYDAY entry: a weekday, optionally qualified by an ordinal.

    Attributes:
        day: Weekday number (0=Sunday .. 6=Saturday)
        ordinal: Nth occurrence in the month (positive from the start,
                 negative from the end), or None for every occurrence
    """

    day: int
    ordinal: int | None = None

    def to_token(self) -> str:
        """Render as a BYDAY token ("2FR", "-1MO", "WE")."""
        code = day_to_code(self.day)
        if self.ordinal:
            return f"{self.ordinal}{code}"
        return code


@dataclass(frozen=True, slots=True)
class Rule:
    """Parsed recurrence rule.

    ``count`` is carried for round-tripping only; the matcher never reads it.
    ``until`` stays as the raw token and is parsed when evaluated.
    """

    frequency: str = const.DEFAULT_FREQUENCY
    interval: int = const.DEFAULT_INTERVAL
    by_day: tuple[WeekdaySpec, ...] = ()
    by_month_day: tuple[int, ...] = ()
    until: str | None = None
    count: int | None = None

    def to_params(self) -> RuleParams:
        """Return generator parameters describing this rule."""
        params: RuleParams = {"freq": self.frequency}  # type: ignore[typeddict-item]
        if self.interval != const.DEFAULT_INTERVAL:
            params["interval"] = self.interval
        if self.by_day:
            params["byday"] = [spec.to_token() for spec in self.by_day]
        if self.by_month_day:
            params["bymonthday"] = list(self.by_month_day)
        if self.until:
            params["until"] = self.until
        if self.count:
            params["count"] = self.count
        return params

    def to_rrule_string(self) -> RRuleString:
        """Generate the canonical RRULE string for storage."""
        return generate_rrule(self.to_params())


# =============================================================================
# PARSER
# =============================================================================


def _parse_int(value: str) -> int | None:
    """Parse the leading base-10 integer of ``value``.

    Trailing text is ignored ("15th" -> 15, "1_0" -> 1). Only ASCII digits
    count, so a value without a leading digit run is None.
    """
    match = _INT_RE.match(value)
    if not match:
        return None
    return int(match.group(1))


def parse_weekday_spec(token: str) -> WeekdaySpec | None:
    """Parse a single BYDAY token.

    The token must be an optional ``-?digits`` ordinal followed by exactly two
    uppercase ASCII letters. An ordinal of 0 means "no ordinal". Unknown
    two-letter codes resolve to Sunday (see code_to_day).

    Returns:
        WeekdaySpec, or None when the token does not have that shape.
    """
    match = _BYDAY_RE.fullmatch(token)
    if not match:
        return None

    ordinal_str, code = match.groups()
    ordinal = int(ordinal_str) if ordinal_str else None
    return WeekdaySpec(day=code_to_day(code), ordinal=ordinal or None)


def _parse_by_day(value: str) -> tuple[WeekdaySpec, ...]:
    specs: list[WeekdaySpec] = []
    for token in value.split(const.RRULE_LIST_SEPARATOR):
        spec = parse_weekday_spec(token)
        if spec is None:
            const.LOGGER.debug("RRULE: Dropping malformed BYDAY token: %r", token)
            continue
        specs.append(spec)
    return tuple(specs)


def _parse_by_month_day(value: str) -> tuple[int, ...]:
    days: list[int] = []
    for token in value.split(const.RRULE_LIST_SEPARATOR):
        day = _parse_int(token)
        if day is None:
            const.LOGGER.debug("RRULE: Dropping malformed BYMONTHDAY token: %r", token)
            continue
        days.append(day)
    return tuple(days)


def parse_rrule(rrule: str) -> Rule:
    """Parse a stored RRULE string into a Rule.

    Args:
        rrule: Semicolon-delimited KEY=VALUE string starting with "FREQ=".

    Returns:
        Parsed Rule. Omitted fields take their defaults.

    Raises:
        RRuleParseError: If the input does not start with "FREQ=".

    Example:
        >>> parse_rrule("FREQ=MONTHLY;BYDAY=2FR").by_day
        (WeekdaySpec(day=5, ordinal=2),)
    """
    if not rrule or not isinstance(rrule, str) or not rrule.startswith(
        const.RRULE_PREFIX
    ):
        raise RRuleParseError(rrule)

    frequency = const.DEFAULT_FREQUENCY
    interval = const.DEFAULT_INTERVAL
    by_day: tuple[WeekdaySpec, ...] = ()
    by_month_day: tuple[int, ...] = ()
    until: str | None = None
    count: int | None = None

    for part in rrule.split(const.RRULE_PART_SEPARATOR):
        key, _, value = part.partition(const.RRULE_KEY_VALUE_SEPARATOR)

        if key == const.RRULE_KEY_FREQ:
            if value in const.FREQUENCIES:
                frequency = value
            else:
                const.LOGGER.debug("RRULE: Ignoring unknown FREQ value: %r", value)

        elif key == const.RRULE_KEY_INTERVAL:
            parsed = _parse_int(value)
            if parsed is None or parsed < 1:
                const.LOGGER.debug(
                    "RRULE: Invalid INTERVAL %r, using %d", value, const.DEFAULT_INTERVAL
                )
                parsed = const.DEFAULT_INTERVAL
            interval = parsed

        elif key == const.RRULE_KEY_BYDAY:
            by_day = _parse_by_day(value)

        elif key == const.RRULE_KEY_BYMONTHDAY:
            by_month_day = _parse_by_month_day(value)

        elif key == const.RRULE_KEY_UNTIL:
            until = value or None

        elif key == const.RRULE_KEY_COUNT:
            parsed = _parse_int(value)
            if parsed is None or parsed < 1:
                const.LOGGER.debug("RRULE: Ignoring invalid COUNT: %r", value)
                parsed = None
            count = parsed

        # Unknown keys are ignored

    return Rule(
        frequency=frequency,
        interval=interval,
        by_day=by_day,
        by_month_day=by_month_day,
        until=until,
        count=count,
    )


# =============================================================================
# GENERATOR
# =============================================================================


def generate_rrule(params: RuleParams) -> RRuleString:
    """Generate an RRULE string from its components.

    Emission order is fixed (FREQ, INTERVAL, BYDAY, BYMONTHDAY, UNTIL, COUNT).
    Defaulted fields are omitted, so FREQ=DAILY with interval 1 is just
    "FREQ=DAILY".

    Args:
        params: RuleParams TypedDict.

    Returns:
        RRULE string (e.g., "FREQ=WEEKLY;BYDAY=MO,WE,FR").
    """
    freq = params.get("freq") or const.DEFAULT_FREQUENCY
    parts = [f"{const.RRULE_KEY_FREQ}={freq}"]

    interval = params.get("interval")
    if interval and interval > const.DEFAULT_INTERVAL:
        parts.append(f"{const.RRULE_KEY_INTERVAL}={interval}")

    byday = params.get("byday")
    if byday:
        parts.append(f"{const.RRULE_KEY_BYDAY}={const.RRULE_LIST_SEPARATOR.join(byday)}")

    bymonthday = params.get("bymonthday")
    if bymonthday:
        days = const.RRULE_LIST_SEPARATOR.join(str(day) for day in bymonthday)
        parts.append(f"{const.RRULE_KEY_BYMONTHDAY}={days}")

    until = params.get("until")
    if until:
        parts.append(f"{const.RRULE_KEY_UNTIL}={until}")

    count = params.get("count")
    if count:
        parts.append(f"{const.RRULE_KEY_COUNT}={count}")

    return const.RRULE_PART_SEPARATOR.join(parts)
