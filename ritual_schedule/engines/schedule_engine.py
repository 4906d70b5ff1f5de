"""Schedule Engine - Decide whether a calendar date satisfies a recurrence rule.

Evaluation order for is_match() (short-circuits on False):
1. Idempotence guard: already satisfied on the candidate date -> False
2. UNTIL bound: candidate after the parsed UNTIL date -> False
3. Anchor bound: candidate before the optional anchor date -> False
4. Frequency dispatch (DAILY / WEEKLY / MONTHLY; YEARLY never matches)

Interval handling:
- "Every N periods" needs a start date. Callers that have one pass it as
  ``anchor`` and the interval is enforced for all frequencies.
- Without an anchor: DAILY with interval > 1 never matches, WEEKLY and
  MONTHLY ignore the interval.

The engine never reads the clock. The host resolves "today" in its own
timezone and passes plain dates; datetimes are reduced to their date.

IMPORTANT: This module must NOT perform I/O or hold state between calls.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING

from .. import const
from ..utils.dt_utils import (
    as_date,
    last_occurrence_of_weekday_in_month,
    months_between,
    parse_ical_date,
    week_of_month,
    week_start_ordinal,
    weekday_of,
)
from .rrule_engine import RRuleParseError, Rule, WeekdaySpec, parse_rrule

if TYPE_CHECKING:
    from ..type_defs import RRuleString


# =============================================================================
# PUBLIC API
# =============================================================================


def is_match(
    rule: Rule,
    candidate: date | datetime,
    last_satisfied: date | datetime | None = None,
    *,
    anchor: date | datetime | None = None,
) -> bool:
    """Check whether ``candidate`` satisfies ``rule`` right now.

    Args:
        rule: Parsed recurrence rule.
        candidate: Date under test (the host's "today").
        last_satisfied: Date the rule was last satisfied, if any.
        anchor: Optional start date of the rule. Enables interval
                enforcement and excludes dates before it.

    Returns:
        True if the rule is due on ``candidate``.

    Examples:
        FREQ=MONTHLY;BYDAY=2FR, 2024-03-08 -> True (2nd Friday)
        FREQ=MONTHLY;BYDAY=2FR, 2024-03-15 -> False (3rd Friday)
        FREQ=DAILY, 2024-03-08, last_satisfied=2024-03-08 -> False (done today)

    Note:
        MONTHLY with a BYDAY entry that has no ordinal (FREQ=MONTHLY;BYDAY=MO)
        matches that weekday every week of the month, like WEEKLY. Earlier
        releases never matched such rules; hosts with stored rules of this
        shape will now see them match.
    """
    day = as_date(candidate)
    start = as_date(anchor) if anchor is not None else None

    # Already satisfied today never re-matches
    if last_satisfied is not None and as_date(last_satisfied) == day:
        return False

    # UNTIL is inclusive: only dates strictly after it are excluded
    if rule.until:
        until = parse_ical_date(rule.until)
        if until is not None and day > until:
            return False

    if start is not None and day < start:
        return False

    freq = rule.frequency
    if freq == const.FREQUENCY_DAILY:
        return _match_daily(rule, day, start)
    if freq == const.FREQUENCY_WEEKLY:
        return _match_weekly(rule, day, start)
    if freq == const.FREQUENCY_MONTHLY:
        return _match_monthly(rule, day, start)

    const.LOGGER.debug("ScheduleEngine: No evaluator for frequency %s", freq)
    return False


def matches_rrule(
    rrule: RRuleString,
    candidate: date | datetime,
    last_satisfied: date | datetime | None = None,
    *,
    anchor: date | datetime | None = None,
) -> bool:
    """Parse ``rrule`` and evaluate it against ``candidate``.

    A string that is not a rule is treated as an inactive schedule.
    """
    try:
        rule = parse_rrule(rrule)
    except RRuleParseError:
        const.LOGGER.debug("ScheduleEngine: Treating non-rule as inactive: %r", rrule)
        return False
    return is_match(rule, candidate, last_satisfied, anchor=anchor)


def get_occurrences(
    rule: Rule,
    start: date | datetime,
    end: date | datetime,
    *,
    anchor: date | datetime | None = None,
    limit: int = const.DEFAULT_OCCURRENCE_LIMIT,
) -> list[date]:
    """Generate matching dates within an inclusive date range.

    The idempotence guard does not apply (no last_satisfied date).

    Args:
        rule: Parsed recurrence rule.
        start: Range start (inclusive).
        end: Range end (inclusive).
        anchor: Optional rule start date, as for is_match().
        limit: Maximum occurrences to return (safety limit).

    Returns:
        Matching dates in ascending order.
    """
    current = as_date(start)
    last = as_date(end)

    occurrences: list[date] = []
    iteration = 0
    scanned_all = False
    while (
        current <= last
        and len(occurrences) < limit
        and iteration < const.MAX_OCCURRENCE_SCAN_DAYS
    ):
        if is_match(rule, current, anchor=anchor):
            occurrences.append(current)
        iteration += 1
        # date.max has no successor
        if current == last:
            scanned_all = True
            break
        current += timedelta(days=1)

    if iteration >= const.MAX_OCCURRENCE_SCAN_DAYS and not scanned_all:
        const.LOGGER.debug(
            "ScheduleEngine: Stopped scanning at %s (max %d days)",
            current,
            const.MAX_OCCURRENCE_SCAN_DAYS,
        )

    return occurrences


# =============================================================================
# Private: frequency evaluators
# =============================================================================


def _match_daily(rule: Rule, day: date, anchor: date | None) -> bool:
    """DAILY: every day, or every Nth day counted from the anchor."""
    if rule.interval <= 1:
        return True
    if anchor is None:
        const.LOGGER.debug(
            "ScheduleEngine: DAILY interval %d needs an anchor date, not matching",
            rule.interval,
        )
        return False
    return (day - anchor).days % rule.interval == 0


def _match_weekly(rule: Rule, day: date, anchor: date | None) -> bool:
    """WEEKLY: BYDAY restriction, plus week interval when anchored."""
    if anchor is not None and rule.interval > 1:
        weeks = (
            week_start_ordinal(day) - week_start_ordinal(anchor)
        ) // const.DAYS_PER_WEEK
        if weeks % rule.interval != 0:
            return False

    if not rule.by_day:
        return True
    return _match_any_weekday_spec(rule.by_day, day)


def _match_monthly(rule: Rule, day: date, anchor: date | None) -> bool:
    """MONTHLY: BYMONTHDAY wins over BYDAY; neither means any day."""
    if anchor is not None and rule.interval > 1:
        if months_between(anchor, day) % rule.interval != 0:
            return False

    if rule.by_month_day:
        return day.day in rule.by_month_day
    if rule.by_day:
        return _match_any_weekday_spec(rule.by_day, day)
    return True


# =============================================================================
# Private: weekday spec evaluation
# =============================================================================


def _match_any_weekday_spec(specs: tuple[WeekdaySpec, ...], day: date) -> bool:
    return any(_match_weekday_spec(spec, day) for spec in specs)


def _match_weekday_spec(spec: WeekdaySpec, day: date) -> bool:
    """Check one BYDAY spec.

    Positive ordinal n: the weekday's n-th 7-day bucket of the month.
    Negative ordinal -n: n-th occurrence counted back from month end.
    """
    if weekday_of(day) != spec.day:
        return False

    ordinal = spec.ordinal
    if not ordinal:
        return True
    if ordinal > 0:
        return week_of_month(day) == ordinal

    # Large negative ordinals land before day 1
    last = last_occurrence_of_weekday_in_month(day.year, day.month, spec.day)
    target_day = last.day + const.DAYS_PER_WEEK * (ordinal + 1)
    if target_day < 1:
        return False
    return day.day == target_day
