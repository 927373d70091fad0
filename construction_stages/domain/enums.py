"""Stage enums shared by validation, duration derivation and persistence."""
from enum import Enum


class DurationUnit(str, Enum):
    """Granularity a stage duration is expressed in."""

    HOURS = "HOURS"
    DAYS = "DAYS"
    WEEKS = "WEEKS"


class StageStatus(str, Enum):
    """Stage lifecycle status. DELETED is the soft-delete marker."""

    NEW = "NEW"
    PLANNED = "PLANNED"
    DELETED = "DELETED"


DURATION_UNIT_VALUES = frozenset(u.value for u in DurationUnit)
STAGE_STATUS_VALUES = frozenset(s.value for s in StageStatus)

DEFAULT_DURATION_UNIT = DurationUnit.DAYS
