"""Strict ISO-8601 timestamp helpers.

Stage timestamps travel as ``YYYY-MM-DDTHH:MM:SSZ``: UTC, second precision,
no fractional seconds and no offset other than ``Z``.
"""
import re
from datetime import UTC, datetime

# ASCII digits only: strptime also accepts other Unicode digits
ISO8601_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}Z")
ISO8601_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def is_valid_iso8601(value: object) -> bool:
    """True if value is a string matching the pattern and naming a real instant.

    "2024-02-30T00:00:00Z" matches the pattern but is rejected.
    """
    if not isinstance(value, str) or not ISO8601_PATTERN.fullmatch(value):
        return False
    try:
        datetime.strptime(value, ISO8601_FORMAT)
    except ValueError:
        return False
    return True


def parse_iso8601(value: str) -> datetime:
    """Parse a validated timestamp into an aware UTC datetime.

    Raises:
        ValueError: value does not match the strict format
    """
    if not is_valid_iso8601(value):
        raise ValueError(f"not a strict ISO-8601 UTC timestamp: {value!r}")
    return datetime.strptime(value, ISO8601_FORMAT).replace(tzinfo=UTC)


def format_iso8601(value: datetime | None) -> str | None:
    """Render a datetime as ``YYYY-MM-DDTHH:MM:SSZ``; naive values are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).strftime(ISO8601_FORMAT)
