"""Pydantic schemas for construction stage payloads and responses.

Field names are snake_case in Python and camelCase on the wire. Request
models keep enum-like fields as plain strings so the domain validator can
report every bad value at once instead of failing on the first.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class StageCreate(_CamelModel):
    """Create payload. Any duration sent here is ignored; it is derived from the dates."""

    name: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    duration: float | None = None
    duration_unit: str | None = None
    color: str | None = None
    external_id: str | None = None
    status: str | None = None

    def to_payload(self) -> dict:
        """Fields keyed by API name, the shape the domain validator reads."""
        return self.model_dump(by_alias=True)


class StageUpdate(_CamelModel):
    """Partial update payload. Only fields the client actually sent are applied."""

    name: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    duration: float | None = None
    duration_unit: str | None = None
    color: str | None = None
    external_id: str | None = None
    status: str | None = None

    def to_changes(self) -> dict:
        """Only the explicitly sent fields (explicit nulls included), keyed by API name."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class StageRead(_CamelModel):
    """A stored stage as returned by every read and write operation."""

    id: int
    name: str | None = None
    start_date: str
    end_date: str | None = None
    duration: float | None = None
    duration_unit: str | None = None
    color: str | None = None
    external_id: str | None = None
    status: str

    def to_current(self) -> dict:
        return self.model_dump(by_alias=True)


class StageDeleteResponse(BaseModel):
    message: str = Field(default="Construction stage deleted successfully.")
