import re
from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

# Calendar date and wall time, e.g. 2024-05-01T10:00:00Z; bare epoch numbers are not accepted
TIMESTAMP_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}(:\d{2}(\.\d+)?)?([Zz]|[+-]\d{2}:?\d{2})?$")

class ShipmentCreate(BaseModel):
    """Request body for create and update.

    Keys are camelCase on the wire; unknown keys are rejected. ``id`` and
    ``createdAt`` may be sent back as returned by a read, but the store
    always assigns them, so they are left out of ``model_dump()``.
    """
    model_config = ConfigDict(alias_generator=to_camel, extra="forbid")

    id: Optional[StrictInt] = Field(default=None, exclude=True)
    nama: str
    pengirim: str
    nama_penerima: str
    alamat_penerima: str
    nama_item: str
    berat_item: StrictInt = 0
    timestamp: Optional[datetime] = Field(default=None, alias="datetime")
    created_at: Optional[datetime] = Field(default=None, exclude=True)

    @field_validator("nama", "pengirim", "nama_penerima", "alamat_penerima", "nama_item", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("berat_item", mode="before")
    @classmethod
    def null_as_zero(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("timestamp", "created_at", mode="before")
    @classmethod
    def timestamp_string(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None or isinstance(value, datetime):
            return value
        if not isinstance(value, str) or not TIMESTAMP_PATTERN.match(value):
            alias = cls.model_fields[info.field_name].alias
            raise ValueError(f"invalid json: {alias} must be an RFC 3339 timestamp string")
        return value

    @field_validator("nama", "pengirim", "nama_penerima", "alamat_penerima", "nama_item")
    @classmethod
    def not_blank(cls, value: str, info: ValidationInfo) -> str:
        if not value.strip():
            raise ValueError(f"{cls.model_fields[info.field_name].alias} is required")
        return value

    @field_validator("berat_item")
    @classmethod
    def not_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("beratItem cannot be negative")
        return value

class ShipmentRead(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    nama: str
    pengirim: str
    nama_penerima: str
    alamat_penerima: str
    nama_item: str
    berat_item: int
    timestamp: datetime = Field(alias="datetime")
    created_at: datetime

class ShipmentDeleted(BaseModel):
    deleted_id: int
