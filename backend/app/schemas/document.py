"""
RideRelay Backend: Document Request/Response Schemas
======================================================

What:  Pydantic models for Service and Booking bodies, read representations
       and mutation acknowledgements.
How:   Document models name the fields the gateway relies on (`price`
       for sorting, `email` for ownership) and allow any extra field. Only
       `email` is type-checked; every other value is stored exactly as sent.
       Acknowledgements use the camelCase names clients already consume
       (`insertedId`, ...) as aliases.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def normalize_email(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if "@" not in v or v.startswith("@") or v.endswith("@"):
        raise ValueError("email must look like an address (name@host)")
    return v


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ServiceCreate(BaseModel):
    """Body of POST /add-new-service. Every field is optional; extras pass through."""

    model_config = ConfigDict(extra="allow")

    name: Optional[Any] = Field(default=None, description="Display name of the ride service")
    price: Optional[Any] = Field(
        default=None,
        description="Price, used by ?sortBy=price; non-numeric values sort last",
    )


class ServiceUpdate(ServiceCreate):
    """Body of PUT /update-service/{id}; only the fields sent are merged."""


class BookingCreate(BaseModel):
    """Body of POST /book-a-service. `email` names the booking's owner."""

    model_config = ConfigDict(extra="allow")

    email: str = Field(description="Owner's email; must match the token to list bookings")
    service_id: Optional[Any] = Field(
        default=None,
        alias="serviceId",
        description="Opaque reference to a service; never validated",
    )

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        return normalize_email(v)


class BookingUpdate(BaseModel):
    """Body of PUT /update-booking/{id}."""

    model_config = ConfigDict(extra="allow")

    email: Optional[str] = Field(default=None, description="May be changed, never cleared")
    service_id: Optional[Any] = Field(default=None, alias="serviceId")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> str:
        # Runs only when the client sent the field
        if v is None:
            raise ValueError("email cannot be null")
        return normalize_email(v)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ServiceDocument(BaseModel):
    """A stored service: its body plus `_id`."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(alias="_id", description="Store-assigned identifier (UUID)")
    name: Optional[Any] = None
    price: Optional[Any] = None


class BookingDocument(BaseModel):
    """A stored booking: its body plus `_id`."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(alias="_id", description="Store-assigned identifier (UUID)")
    email: Optional[Any] = None
    service_id: Optional[Any] = Field(default=None, alias="serviceId")


class InsertAck(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool = True
    inserted_id: str = Field(alias="insertedId")


class UpdateAck(BaseModel):
    """Result of a merge update. matchedCount=0 means no such document."""

    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool = True
    matched_count: int = Field(alias="matchedCount")
    modified_count: int = Field(alias="modifiedCount")


class DeleteAck(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool = True
    deleted_count: int = Field(alias="deletedCount")
