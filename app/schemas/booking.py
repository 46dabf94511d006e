from datetime import datetime
from typing import Any, Literal, Optional
from pydantic import BaseModel, Field, field_validator

from app.models.booking import Booking
from app.schemas.user import user_brief

BookingType = Literal["flight", "hotel", "car", "restaurant"]
BookingStatus = Literal["pending", "confirmed", "cancelled", "completed"]


class BookingCreate(BaseModel):
    type: BookingType
    totalAmount: float = Field(ge=0)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    bookingDetails: dict[str, Any]
    bookingReference: Optional[str] = Field(default=None, min_length=3, max_length=40)

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, v: str) -> str:
        if not v.isalpha():
            raise ValueError("Currency must be a 3-letter code")
        return v.upper()

    @field_validator("bookingDetails")
    @classmethod
    def details_present(cls, v: dict) -> dict:
        if not v:
            raise ValueError("Booking details are required")
        return v

    @field_validator("bookingReference")
    @classmethod
    def upper_reference(cls, v: str | None) -> str | None:
        return v.strip().upper() if v else v


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def booking_out(b: Booking, with_user: bool = True) -> dict:
    out = {
        "id": b.id,
        "type": b.type,
        "bookingReference": b.booking_reference,
        "status": b.status,
        "totalAmount": b.total_amount,
        "currency": b.currency,
        "bookingDetails": b.booking_details or {},
        "createdAt": _iso(b.created_at),
        "updatedAt": _iso(b.updated_at),
    }
    if with_user and b.user is not None:
        out["user"] = user_brief(b.user)
    return out


def booking_summary(b: Booking) -> dict:
    return {
        "id": b.id,
        "type": b.type,
        "bookingReference": b.booking_reference,
        "status": b.status,
        "totalAmount": b.total_amount,
        "currency": b.currency,
        "createdAt": _iso(b.created_at),
    }
