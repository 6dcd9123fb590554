"""
Shared pydantic bases for operation inputs and records.

Wire payloads use camelCase keys (``userId``, ``usefulLink``); Python code uses
snake_case attributes. Inputs reject unknown keys so every operation accepts
exactly the fields it enumerates.
"""
from datetime import datetime, timezone
from typing import Annotated, Any, ClassVar, FrozenSet

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StrictInt,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

# Numeric ids are opaque; strings, floats and booleans are rejected.
RecordId = Annotated[StrictInt, Field(description="Server-assigned numeric id")]


def _require_iso_string(value: Any) -> Any:
    if isinstance(value, datetime):
        return value
    # pydantic would read bare numbers, quoted or not, as epoch seconds
    if isinstance(value, str) and not value.strip().lstrip("-").replace(".", "", 1).isdigit():
        return value
    raise ValueError("must be an ISO 8601 date-time string")


def as_utc(value: datetime) -> datetime:
    """Treat naive values as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# Wire date-times: ISO strings only (no epoch numbers), stored as UTC
IsoDateTime = Annotated[datetime, BeforeValidator(_require_iso_string), AfterValidator(as_utc)]


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InputModel(WireModel):
    model_config = ConfigDict(extra="forbid", use_enum_values=True, validate_default=True)


class UpdateModel(InputModel):
    """Partial update payload: absent keys are left unchanged.

    Keys listed in ``NON_NULLABLE`` may be omitted but not sent as ``null``;
    every other optional key accepts ``null`` to clear the stored value.
    """
    NON_NULLABLE: ClassVar[FrozenSet[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_null_for_required_columns(self):
        for name in self.model_fields_set:
            if name in self.NON_NULLABLE and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self

    def changes(self) -> dict:
        """Return the explicitly provided fields, excluding the target id."""
        return self.model_dump(exclude_unset=True, exclude={"id"})


class IdInput(InputModel):
    id: RecordId


class RecordModel(WireModel):
    model_config = ConfigDict(from_attributes=True)

    @field_validator("*", mode="after")
    @classmethod
    def _datetimes_in_utc(cls, value):
        # SQLite returns stored UTC values without an offset
        if isinstance(value, datetime):
            return as_utc(value)
        return value
