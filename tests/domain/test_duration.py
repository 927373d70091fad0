"""Tests for duration derivation from stage timestamps."""
import pytest

from construction_stages.core.exceptions import InvalidDateFormat, NoDurationDerivable
from construction_stages.domain.duration import Duration, calculate_duration, effective_unit
from construction_stages.domain.enums import DurationUnit

pytestmark = pytest.mark.unit

START = "2024-01-01T00:00:00Z"


class TestUnits:
    def test_days_counts_whole_days(self):
        result = calculate_duration(START, "2024-01-11T00:00:00Z", "DAYS")
        assert result == Duration(10, DurationUnit.DAYS)

    def test_days_ignores_leftover_hours(self):
        """10 days 23 hours is still 10 whole days."""
        result = calculate_duration(START, "2024-01-11T23:00:00Z", "DAYS")
        assert result.value == 10

    def test_hours_adds_leftover_hours(self):
        """2 days 5 hours 59 minutes -> 2*24 + 5."""
        result = calculate_duration(START, "2024-01-03T05:59:00Z", "HOURS")
        assert result == Duration(53, DurationUnit.HOURS)

    def test_hours_under_one_day(self):
        result = calculate_duration("2024-01-01T08:00:00Z", "2024-01-01T17:30:00Z", "HOURS")
        assert result.value == 9

    def test_weeks_exact(self):
        result = calculate_duration(START, "2024-01-08T00:00:00Z", "WEEKS")
        assert result.value == 1
        assert result.unit is DurationUnit.WEEKS

    def test_weeks_fractional_not_rounded(self):
        result = calculate_duration(START, "2024-01-11T00:00:00Z", "WEEKS")
        assert result.value == pytest.approx(10 / 7)

    def test_weeks_use_whole_days_only(self):
        """Leftover hours do not leak into the week count."""
        result = calculate_duration(START, "2024-01-04T12:00:00Z", "WEEKS")
        assert result.value == pytest.approx(3 / 7)

    def test_leap_year_february(self):
        result = calculate_duration("2024-02-01T00:00:00Z", "2024-03-01T00:00:00Z", "DAYS")
        assert result.value == 29


class TestUnitFallback:
    @pytest.mark.parametrize("unit", ["MONTHS", "days", "", None])
    def test_unrecognized_unit_behaves_like_days(self, unit):
        """Unknown units silently become DAYS and the result says so."""
        result = calculate_duration(START, "2024-01-11T06:00:00Z", unit)
        assert result == calculate_duration(START, "2024-01-11T06:00:00Z", "DAYS")
        assert result.unit is DurationUnit.DAYS

    def test_effective_unit_keeps_valid_units(self):
        assert effective_unit("HOURS") is DurationUnit.HOURS
        assert effective_unit("WEEKS") is DurationUnit.WEEKS


class TestNoDuration:
    def test_missing_end_date(self):
        with pytest.raises(NoDurationDerivable):
            calculate_duration(START, None, "DAYS")

    def test_end_equal_to_start(self):
        with pytest.raises(NoDurationDerivable):
            calculate_duration(START, START, "HOURS")

    def test_end_before_start(self):
        with pytest.raises(NoDurationDerivable):
            calculate_duration("2024-01-08T00:00:00Z", START, "WEEKS")


class TestInvalidDates:
    def test_invalid_start_date(self):
        with pytest.raises(InvalidDateFormat, match="startDate"):
            calculate_duration("2024-01-01", "2024-01-08T00:00:00Z", "DAYS")

    def test_invalid_end_date(self):
        with pytest.raises(InvalidDateFormat, match="endDate"):
            calculate_duration(START, "2024-01-08T00:00:00+02:00", "DAYS")

    def test_invalid_end_date_checked_before_unit_fallback(self):
        """A malformed date fails even when the unit would have fallen back."""
        with pytest.raises(InvalidDateFormat):
            calculate_duration(START, "next week", "MONTHS")

    def test_missing_start_date(self):
        with pytest.raises(InvalidDateFormat):
            calculate_duration(None, "2024-01-08T00:00:00Z", "DAYS")

    @pytest.mark.parametrize("value", ["２０２４-01-01T00:00:00Z", "2024-01-01T00:00:00Z\n"])
    def test_non_ascii_or_trailing_newline_start_rejected(self, value):
        with pytest.raises(InvalidDateFormat, match="startDate"):
            calculate_duration(value, "2024-01-08T00:00:00Z", "DAYS")
