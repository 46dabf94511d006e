import re
from datetime import date
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from app.schemas.user import PreferencesUpdate

_PASSWORD_RULE = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")


def check_password_strength(v: str) -> str:
    problems = []
    if len(v) < 6:
        problems.append("Password must be at least 6 characters long")
    if not _PASSWORD_RULE.match(v):
        problems.append("Password must contain at least one uppercase letter, one lowercase letter, and one number")
    if problems:
        raise ValueError(", ".join(problems))
    return v


class RegisterRequest(BaseModel):
    firstName: str = Field(min_length=1, max_length=50)
    lastName: str = Field(min_length=1, max_length=50)
    email: EmailStr
    password: str
    phone: Optional[str] = None
    dateOfBirth: Optional[date] = None

    @field_validator("firstName", "lastName", mode="before")
    @classmethod
    def strip_names(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("password")
    @classmethod
    def strong_password(cls, v: str) -> str:
        return check_password_strength(v)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class AuthProfileUpdate(BaseModel):
    firstName: Optional[str] = Field(default=None, min_length=1, max_length=50)
    lastName: Optional[str] = Field(default=None, min_length=1, max_length=50)
    phone: Optional[str] = None
    dateOfBirth: Optional[date] = None
    preferences: Optional[PreferencesUpdate] = None

    @field_validator("firstName", "lastName", "phone", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class ChangePasswordRequest(BaseModel):
    oldPassword: str = Field(min_length=1)
    newPassword: str

    @field_validator("newPassword")
    @classmethod
    def strong_password(cls, v: str) -> str:
        return check_password_strength(v)
