"""Field-level validation for construction stage payloads.

Pure domain logic with no external dependencies. Every check is independent:
an absent (or null) field skips its check, and all violations are collected
in one pass before anything is raised.
"""
import re
from collections.abc import Iterable, Mapping
from typing import Any

from construction_stages.core.exceptions import ValidationError
from construction_stages.domain.dates import is_valid_iso8601, parse_iso8601
from construction_stages.domain.enums import DURATION_UNIT_VALUES, STAGE_STATUS_VALUES

MAX_TEXT_LENGTH = 255
# Used with fullmatch: "$" alone would accept a trailing newline
COLOR_PATTERN = re.compile(r"#([a-fA-F0-9]{6}|[a-fA-F0-9]{3})")

NAME_TOO_LONG = "Name must be a maximum of 255 characters."
INVALID_START_DATE = "Invalid startDate format. It should be in ISO8601 format (e.g., 2022-12-31T14:59:00Z)."
INVALID_END_DATE = "Invalid endDate format. It should be in ISO8601 format (e.g., 2022-12-31T14:59:00Z) or null."
END_BEFORE_START = "End date must be later than start date."
INVALID_DURATION_UNIT = "Invalid durationUnit. It should be one of HOURS, DAYS, WEEKS."
INVALID_COLOR = "Invalid color format. It should be a valid HEX color (e.g., #FF0000)."
EXTERNAL_ID_TOO_LONG = "External ID must be a maximum of 255 characters."
INVALID_STATUS = "Invalid status value. It should be one of NEW, PLANNED, DELETED."


def _present(data: Mapping[str, Any], field: str) -> bool:
    return data.get(field) is not None


def _too_long(value: Any) -> bool:
    return not isinstance(value, str) or len(value) > MAX_TEXT_LENGTH


def _one_of(value: Any, allowed: frozenset[str]) -> bool:
    return isinstance(value, str) and value in allowed


def end_not_after_start(start_date: str, end_date: str) -> bool:
    """True if end_date <= start_date. Both must already be valid timestamps."""
    return parse_iso8601(end_date) <= parse_iso8601(start_date)


def collect_field_errors(
    data: Mapping[str, Any],
    required: Iterable[str] = (),
) -> dict[str, str]:
    """Return a field -> message mapping of every rule the payload violates.

    Args:
        data: Stage fields keyed by API name (startDate, durationUnit, ...)
        required: Fields that must be present and non-null

    Returns:
        Empty dict when the payload is valid
    """
    errors: dict[str, str] = {}

    if _present(data, "name") and _too_long(data["name"]):
        errors["name"] = NAME_TOO_LONG

    start_ok = False
    if _present(data, "startDate"):
        start_ok = is_valid_iso8601(data["startDate"])
        if not start_ok:
            errors["startDate"] = INVALID_START_DATE

    if _present(data, "endDate"):
        if not is_valid_iso8601(data["endDate"]):
            errors["endDate"] = INVALID_END_DATE
        elif start_ok and end_not_after_start(data["startDate"], data["endDate"]):
            errors["endDate"] = END_BEFORE_START

    if _present(data, "durationUnit") and not _one_of(data["durationUnit"], DURATION_UNIT_VALUES):
        errors["durationUnit"] = INVALID_DURATION_UNIT

    if _present(data, "color"):
        color = data["color"]
        if not isinstance(color, str) or not COLOR_PATTERN.fullmatch(color):
            errors["color"] = INVALID_COLOR

    if _present(data, "externalId") and _too_long(data["externalId"]):
        errors["externalId"] = EXTERNAL_ID_TOO_LONG

    if _present(data, "status") and not _one_of(data["status"], STAGE_STATUS_VALUES):
        errors["status"] = INVALID_STATUS

    for field in required:
        if field not in errors and not _present(data, field):
            errors[field] = f"{field} is required."

    return errors


def validate_stage_data(data: Mapping[str, Any], required: Iterable[str] = ()) -> bool:
    """Validate a (possibly partial) stage payload.

    Returns:
        True when every check passes

    Raises:
        ValidationError: with the complete field -> message mapping
    """
    errors = collect_field_errors(data, required)
    if errors:
        raise ValidationError(errors)
    return True
