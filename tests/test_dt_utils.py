"""Unit tests for utils/dt_utils.py.

Covers:
- Weekday codec (Sunday=0) and its lenient fallback
- Week-of-month buckets
- Month-end arithmetic, checked against dateutil for every month length
- iCalendar date parsing (YYYYMMDD / YYYYMMDDTHHMMSSZ)
"""

from datetime import date, datetime

from dateutil.relativedelta import FR, MO, SA, SU, TH, TU, WE, relativedelta
import pytest

from ritual_schedule import const
from ritual_schedule.utils import dt_utils

# dateutil weekday objects indexed by the Sunday=0 convention
DATEUTIL_WEEKDAYS = [SU, MO, TU, WE, TH, FR, SA]


# =============================================================================
# Weekday Codec
# =============================================================================


class TestWeekdayCodec:
    """Test conversion between weekday numbers and two-letter codes."""

    @pytest.mark.parametrize(
        ("day", "code"),
        [(0, "SU"), (1, "MO"), (2, "TU"), (3, "WE"), (4, "TH"), (5, "FR"), (6, "SA")],
    )
    def test_day_to_code_and_back(self, day: int, code: str) -> None:
        """Every weekday has exactly one code and maps back to itself."""
        assert dt_utils.day_to_code(day) == code
        assert dt_utils.code_to_day(code) == day

    def test_code_to_day_is_case_insensitive(self) -> None:
        """Lowercase and mixed-case codes resolve like uppercase ones."""
        assert dt_utils.code_to_day("fr") == const.WEEKDAY_FRIDAY
        assert dt_utils.code_to_day("We") == const.WEEKDAY_WEDNESDAY

    @pytest.mark.parametrize("code", ["XX", "", "MON", "1"])
    def test_unknown_code_falls_back_to_sunday(self, code: str) -> None:
        """Unrecognized codes resolve to Sunday instead of failing."""
        assert dt_utils.code_to_day(code) == const.WEEKDAY_SUNDAY

    @pytest.mark.parametrize("day", [-1, 7, 42])
    def test_out_of_range_day_falls_back_to_sunday_code(self, day: int) -> None:
        """Weekday numbers outside 0-6 render as SU."""
        assert dt_utils.day_to_code(day) == "SU"

    def test_weekday_of_uses_sunday_zero(self) -> None:
        """weekday_of differs from date.weekday(): Sunday is 0."""
        assert dt_utils.weekday_of(date(2024, 3, 3)) == const.WEEKDAY_SUNDAY
        assert dt_utils.weekday_of(date(2024, 3, 4)) == const.WEEKDAY_MONDAY
        assert dt_utils.weekday_of(date(2024, 3, 9)) == const.WEEKDAY_SATURDAY


# =============================================================================
# Week / Month Arithmetic
# =============================================================================


class TestWeekOfMonth:
    """Test 7-day bucket calculation."""

    @pytest.mark.parametrize(
        ("day", "expected"),
        [(1, 1), (7, 1), (8, 2), (14, 2), (15, 3), (22, 4), (28, 4), (29, 5), (31, 5)],
    )
    def test_buckets(self, day: int, expected: int) -> None:
        """Days 1-7 are week 1, 8-14 week 2, and so on."""
        assert dt_utils.week_of_month(date(2024, 3, day)) == expected

    def test_week_start_ordinal_is_sunday(self) -> None:
        """week_start_ordinal gives the ordinal of the Sunday on or before the date."""
        assert dt_utils.week_start_ordinal(date(2024, 3, 6)) == date(2024, 3, 3).toordinal()
        assert dt_utils.week_start_ordinal(date(2024, 3, 3)) == date(2024, 3, 3).toordinal()
        # Crosses a month boundary
        assert dt_utils.week_start_ordinal(date(2024, 3, 1)) == date(2024, 2, 25).toordinal()
        # The Sunday before 0001-01-01 is not a representable date
        assert dt_utils.week_start_ordinal(date(1, 1, 1)) == 0

    def test_months_between_ignores_day(self) -> None:
        """Only year and month count."""
        assert dt_utils.months_between(date(2024, 1, 31), date(2024, 2, 1)) == 1
        assert dt_utils.months_between(date(2023, 11, 15), date(2024, 2, 15)) == 3
        assert dt_utils.months_between(date(2024, 3, 1), date(2024, 3, 31)) == 0


class TestLastDayOfMonth:
    """Test month length handling."""

    @pytest.mark.parametrize(
        ("year", "month", "expected_day"),
        [
            (2024, 1, 31),
            (2024, 2, 29),  # Leap year
            (2023, 2, 28),
            (1900, 2, 28),  # Century, not leap
            (2000, 2, 29),  # 400-year leap
            (2024, 4, 30),
            (2024, 12, 31),
        ],
    )
    def test_last_day(self, year: int, month: int, expected_day: int) -> None:
        """Last day covers 28/29/30/31 day months."""
        assert dt_utils.last_day_of_month(year, month) == date(year, month, expected_day)


class TestLastOccurrenceOfWeekday:
    """Test last-weekday-in-month resolution."""

    def test_last_friday_march_2024(self) -> None:
        """Last Friday of March 2024 is the 29th."""
        result = dt_utils.last_occurrence_of_weekday_in_month(
            2024, 3, const.WEEKDAY_FRIDAY
        )
        assert result == date(2024, 3, 29)

    def test_month_ending_on_target_weekday(self) -> None:
        """When the last day is the target weekday, it is the answer itself."""
        # 2024-09-30 is a Monday
        result = dt_utils.last_occurrence_of_weekday_in_month(
            2024, 9, const.WEEKDAY_MONDAY
        )
        assert result == date(2024, 9, 30)

    def test_leap_february_last_day(self) -> None:
        """2024-02-29 is a Thursday and is the last Thursday."""
        result = dt_utils.last_occurrence_of_weekday_in_month(
            2024, 2, const.WEEKDAY_THURSDAY
        )
        assert result == date(2024, 2, 29)

    @pytest.mark.parametrize("year", [2023, 2024])
    @pytest.mark.parametrize("month", range(1, 13))
    def test_matches_dateutil_for_every_weekday(self, year: int, month: int) -> None:
        """Agree with relativedelta(day=31, weekday=XX(-1)) for all weekdays."""
        first = date(year, month, 1)
        for weekday, dateutil_weekday in enumerate(DATEUTIL_WEEKDAYS):
            expected = first + relativedelta(day=31, weekday=dateutil_weekday(-1))
            result = dt_utils.last_occurrence_of_weekday_in_month(year, month, weekday)

            assert result == expected
            assert result.month == month
            assert dt_utils.weekday_of(result) == weekday
            # Nothing later in the month has the same weekday
            assert (dt_utils.last_day_of_month(year, month) - result).days < 7


# =============================================================================
# iCalendar Date Parsing
# =============================================================================


class TestParseIcalDate:
    """Test UNTIL value parsing."""

    def test_date_only(self) -> None:
        """YYYYMMDD parses to a date."""
        assert dt_utils.parse_ical_date("20240315") == date(2024, 3, 15)

    def test_date_time_utc(self) -> None:
        """YYYYMMDDTHHMMSSZ parses to its UTC calendar date."""
        assert dt_utils.parse_ical_date("20240315T235959Z") == date(2024, 3, 15)

    @pytest.mark.parametrize(
        "value",
        [
            None,
            "",
            "2024-03-15",
            "2024031",  # Too short
            "202403150",  # Too long
            "20240315T2359Z",  # Short time
            "20240315T235959",  # Missing Z
            "20240315t235959z",
            "2024O315",
        ],
    )
    def test_wrong_shape_returns_none(self, value: str | None) -> None:
        """Anything other than the two accepted shapes is None."""
        assert dt_utils.parse_ical_date(value) is None

    @pytest.mark.parametrize(
        "value",
        ["20241301", "20230229", "20240230", "20240315T250000Z", "20240315T236000Z"],
    )
    def test_out_of_range_returns_none(self, value: str) -> None:
        """Invalid month, day or time fields are None rather than raising."""
        assert dt_utils.parse_ical_date(value) is None

    def test_leap_day_accepted(self) -> None:
        """Feb 29 is valid in a leap year."""
        assert dt_utils.parse_ical_date("20240229") == date(2024, 2, 29)


class TestAsDate:
    """Test date normalization."""

    def test_datetime_reduced_to_date(self) -> None:
        """A datetime becomes its calendar date."""
        assert dt_utils.as_date(datetime(2024, 3, 8, 23, 30)) == date(2024, 3, 8)

    def test_date_passthrough(self) -> None:
        """A date is returned unchanged."""
        day = date(2024, 3, 8)
        assert dt_utils.as_date(day) is day
