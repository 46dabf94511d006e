from datetime import date, datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator

from app.models.user import User

Currency = Literal["USD", "EUR", "GBP", "JPY", "CAD", "AUD"]
Language = Literal["en", "es", "fr", "de", "it", "pt", "zh", "ja"]


class UserProfileUpdate(BaseModel):
    firstName: Optional[str] = Field(default=None, min_length=1, max_length=50)
    lastName: Optional[str] = Field(default=None, min_length=1, max_length=50)
    phone: Optional[str] = None
    dateOfBirth: Optional[date] = None

    @field_validator("firstName", "lastName", "phone", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class PreferencesUpdate(BaseModel):
    currency: Optional[Currency] = None
    language: Optional[Language] = None
    notifications: Optional[bool] = None


class PassportUpdate(BaseModel):
    number: str = Field(min_length=1, max_length=40)
    expiryDate: date
    countryOfIssue: str = Field(min_length=1, max_length=80)

    @field_validator("number", "countryOfIssue", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class AccountDeleteRequest(BaseModel):
    password: str = Field(min_length=1)


def _iso(value: date | datetime | None) -> str | None:
    return value.isoformat() if value else None


def preferences_out(u: User) -> dict:
    return {
        "currency": u.pref_currency,
        "language": u.pref_language,
        "notifications": u.pref_notifications,
    }


def passport_out(u: User) -> dict | None:
    if not u.has_passport:
        return None
    return {
        "number": u.passport_number,
        "expiryDate": _iso(u.passport_expiry),
        "countryOfIssue": u.passport_country,
    }


def user_out(u: User) -> dict:
    """Outward view of an account. The password hash is never part of it."""
    return {
        "id": u.id,
        "firstName": u.first_name,
        "lastName": u.last_name,
        "email": u.email,
        "phone": u.phone,
        "dateOfBirth": _iso(u.date_of_birth),
        "passport": passport_out(u),
        "preferences": preferences_out(u),
        "isEmailVerified": u.is_email_verified,
        "role": u.role,
        "createdAt": _iso(u.created_at),
        "updatedAt": _iso(u.updated_at),
    }


def user_brief(u: User) -> dict:
    return {"id": u.id, "firstName": u.first_name, "lastName": u.last_name, "email": u.email}
