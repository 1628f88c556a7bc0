from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Numeric fields are stored as unsigned 32-bit values in the data file.
UINT_MAX = 2**32 - 1
MAX_NAME_LENGTH = 256
DEFAULT_LIST_NAME = "NewList"


class RecordField(str, Enum):
    NAME = "name"
    PRICE = "price"
    QUANTITY = "quantity"


class SortField(str, Enum):
    NAME = "name"
    PRICE = "price"


class SortDirection(str, Enum):
    ASCENDING = "a"
    DESCENDING = "d"

    @classmethod
    def _missing_(cls, value: object) -> "SortDirection | None":
        aliases = {
            "asc": cls.ASCENDING,
            "ascending": cls.ASCENDING,
            "desc": cls.DESCENDING,
            "descending": cls.DESCENDING,
        }
        if isinstance(value, str):
            return aliases.get(value.lower())
        return None


def validate_token(value: str, what: str, max_length: int = MAX_NAME_LENGTH) -> str:
    """Check a name that must fit in one whitespace-separated field."""
    if not isinstance(value, str):
        raise ValueError(f"{what} must be text")
    if not value:
        raise ValueError(f"{what} must not be empty")
    if len(value) > max_length:
        raise ValueError(f"{what} longer than {max_length} characters")
    if any(ch.isspace() for ch in value):
        raise ValueError(f"{what} must not contain whitespace")
    return value


class Record(BaseModel):
    """One book in the catalog.

    Records are immutable; updates build a replacement so that snapshots
    handed to callers never change underneath them.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    serial: int = Field(..., ge=0, le=UINT_MAX, description="Serial number, the catalog key")
    name: str = Field(..., description="Book name, no whitespace")
    price: int = Field(..., ge=0, le=UINT_MAX, description="Price in minor currency units")
    quantity: int = Field(..., ge=0, le=UINT_MAX, description="Copies in stock")

    @field_validator("name")
    @classmethod
    def name_is_token(cls, v: str) -> str:
        return validate_token(v, "name")

    def to_line(self) -> str:
        return f"{self.serial} {self.name} {self.price} {self.quantity}"
