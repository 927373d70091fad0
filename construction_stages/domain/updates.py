"""Partial-update merge policy for construction stages.

Pure domain logic. Turns the fields a client actually sent into the exact set
of column values to write, or raises before anything reaches storage.

Durations supplied on update are written as given: unlike creation, nothing is
re-derived from the dates, even when the dates change in the same request.
"""
from collections.abc import Mapping
from typing import Any

from construction_stages.core.exceptions import InvalidStatusTransition, ValidationError
from construction_stages.domain.dates import parse_iso8601
from construction_stages.domain.enums import STAGE_STATUS_VALUES, StageStatus
from construction_stages.domain.validation import END_BEFORE_START, collect_field_errors, end_not_after_start

# API field name -> column attribute. Anything else in a payload is never written.
UPDATABLE_COLUMNS: dict[str, str] = {
    "name": "name",
    "startDate": "start_date",
    "endDate": "end_date",
    "duration": "duration",
    "durationUnit": "duration_unit",
    "color": "color",
    "externalId": "external_id",
    "status": "status",
}

DATE_FIELDS = ("startDate", "endDate")
NON_NULLABLE_FIELDS = ("startDate", "status")


def check_status_change(
    current_status: str | None,
    requested_status: str,
    deleted_is_terminal: bool = False,
) -> None:
    """Guard a status change on update.

    Args:
        current_status: Status currently stored
        requested_status: Status the client sent
        deleted_is_terminal: Reject moving a DELETED stage to any other status

    Raises:
        InvalidStatusTransition: status outside NEW/PLANNED/DELETED, or leaving DELETED when terminal
    """
    if requested_status not in STAGE_STATUS_VALUES:
        raise InvalidStatusTransition("Invalid status value. Status should be NEW, PLANNED, or DELETED.")

    if (
        deleted_is_terminal
        and current_status == StageStatus.DELETED.value
        and requested_status != StageStatus.DELETED.value
    ):
        raise InvalidStatusTransition("A DELETED construction stage cannot change status.")


def check_merged_dates(current: Mapping[str, Any], changes: Mapping[str, Any]) -> None:
    """Ensure the stored dates overlaid with the supplied ones keep endDate > startDate.

    Raises:
        ValidationError: merged endDate not after merged startDate
    """
    start_date = changes.get("startDate", current.get("startDate"))
    end_date = changes["endDate"] if "endDate" in changes else current.get("endDate")

    if start_date is not None and end_date is not None and end_not_after_start(start_date, end_date):
        raise ValidationError({"endDate": END_BEFORE_START})


def plan_update(
    current: Mapping[str, Any],
    changes: Mapping[str, Any],
    deleted_is_terminal: bool = False,
) -> dict[str, Any]:
    """Merge a partial payload into a stored stage.

    Args:
        current: Stored stage keyed by API field name (dates as strict ISO strings)
        changes: Only the fields the client sent, keyed by API field name
        deleted_is_terminal: Forwarded to check_status_change

    Returns:
        Column name -> value for exactly the supplied updatable fields; dates
        are converted to aware datetimes

    Raises:
        ValidationError: any field rule fails, a required column is nulled, or the merged dates are inverted
        InvalidStatusTransition: status change not allowed
    """
    changes = {field: value for field, value in changes.items() if field in UPDATABLE_COLUMNS}

    errors = collect_field_errors(changes)
    for field in NON_NULLABLE_FIELDS:
        if field in changes and changes[field] is None:
            errors[field] = f"{field} cannot be null."
    if errors:
        raise ValidationError(errors)

    if "status" in changes and changes["status"] is not None:
        check_status_change(current.get("status"), changes["status"], deleted_is_terminal)

    if any(field in changes for field in DATE_FIELDS):
        check_merged_dates(current, changes)

    values: dict[str, Any] = {}
    for field, value in changes.items():
        if field in DATE_FIELDS and value is not None:
            value = parse_iso8601(value)
        values[UPDATABLE_COLUMNS[field]] = value
    return values
