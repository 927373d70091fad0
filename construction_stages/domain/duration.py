"""Duration derivation from stage start/end timestamps.

Pure function -- no side effects, no DB access. Used only at creation time;
durations supplied by callers on create are never trusted.
"""
from dataclasses import dataclass

from construction_stages.core.exceptions import InvalidDateFormat, NoDurationDerivable
from construction_stages.domain.dates import is_valid_iso8601, parse_iso8601
from construction_stages.domain.enums import DEFAULT_DURATION_UNIT, DURATION_UNIT_VALUES, DurationUnit

HOURS_PER_DAY = 24
DAYS_PER_WEEK = 7
SECONDS_PER_HOUR = 3600


@dataclass(frozen=True)
class Duration:
    """A derived duration and the unit it was actually computed in."""

    value: int | float
    unit: DurationUnit


def effective_unit(duration_unit: str | None) -> DurationUnit:
    """Requested unit, or DAYS when it is missing or unrecognized."""
    if isinstance(duration_unit, str) and duration_unit in DURATION_UNIT_VALUES:
        return DurationUnit(duration_unit)
    return DEFAULT_DURATION_UNIT


def calculate_duration(
    start_date: str,
    end_date: str | None,
    duration_unit: str | None,
) -> Duration:
    """Derive a duration between two strict ISO-8601 timestamps.

    The interval is split into whole days plus leftover whole hours:
        - HOURS: days * 24 + leftover hours
        - WEEKS: days / 7 (fractional, not rounded)
        - DAYS: days

    Args:
        start_date: Start timestamp (YYYY-MM-DDTHH:MM:SSZ)
        end_date: End timestamp, or None when the stage is open-ended
        duration_unit: Requested unit; anything other than HOURS/DAYS/WEEKS means DAYS

    Returns:
        Duration with the effective unit

    Raises:
        InvalidDateFormat: start_date, or a supplied end_date, fails the pattern
        NoDurationDerivable: end_date is missing or not strictly after start_date
    """
    if not is_valid_iso8601(start_date):
        raise InvalidDateFormat("Invalid startDate format.")

    if end_date is not None and not is_valid_iso8601(end_date):
        raise InvalidDateFormat("Invalid endDate format.")

    unit = effective_unit(duration_unit)

    if end_date is None:
        raise NoDurationDerivable("Cannot derive a duration without an endDate.")

    start = parse_iso8601(start_date)
    end = parse_iso8601(end_date)
    if end <= start:
        raise NoDurationDerivable("Cannot derive a duration: endDate must be later than startDate.")

    delta = end - start
    days = delta.days
    leftover_hours = delta.seconds // SECONDS_PER_HOUR

    if unit is DurationUnit.HOURS:
        return Duration(days * HOURS_PER_DAY + leftover_hours, unit)
    if unit is DurationUnit.WEEKS:
        return Duration(days / DAYS_PER_WEEK, unit)
    return Duration(days, unit)
