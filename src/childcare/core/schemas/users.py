"""
User Schemas

Pydantic models for account request/response validation.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from childcare.core.enums import UserRole
from childcare.core.validation import (
    require_text,
    validate_email,
    validate_phone_number,
    validate_username,
)

from .common import CamelModel


class UserBase(CamelModel):
    """Base user schema with common fields."""

    username: str
    email: str
    full_name: str = Field(..., min_length=1, max_length=200)
    role: UserRole
    phone_number: str


class UserCreate(UserBase):
    """Schema for creating a new account (ADMIN only)."""

    password: str = Field(..., min_length=6, max_length=128)

    @field_validator("username")
    @classmethod
    def check_username(cls, v: str) -> str:
        return validate_username(v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return validate_email(v)

    @field_validator("phone_number")
    @classmethod
    def check_phone(cls, v: str) -> str:
        return validate_phone_number(v)

    @field_validator("full_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return require_text(v, "Full name")


class UserUpdate(CamelModel):
    """Schema for updating an account. Only provided fields change."""

    username: str | None = None
    email: str | None = None
    full_name: str | None = Field(None, min_length=1, max_length=200)
    role: UserRole | None = None
    phone_number: str | None = None
    is_active: bool | None = None

    @field_validator("username")
    @classmethod
    def check_username(cls, v: str | None) -> str | None:
        return None if v is None else validate_username(v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str | None) -> str | None:
        return None if v is None else validate_email(v)

    @field_validator("phone_number")
    @classmethod
    def check_phone(cls, v: str | None) -> str | None:
        return None if v is None else validate_phone_number(v)

    @field_validator("full_name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        return None if v is None else require_text(v, "Full name")


class UserStatusUpdate(CamelModel):
    is_active: bool


class UserSchema(UserBase):
    """Full user schema for responses. The password hash is never included."""

    id: UUID
    is_active: bool
    created_at: datetime
    updated_at: datetime


# Authentication
class LoginRequest(CamelModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(CamelModel):
    token: str
    user: UserSchema


class PasswordChange(CamelModel):
    old_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=128)
