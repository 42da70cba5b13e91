"""
Child Schemas

Pydantic models for child registration and updates.
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import Field, ValidationInfo, field_validator

from childcare.core.enums import ChildStatus, Gender
from childcare.core.validation import require_text, validate_phone_number

from .common import CamelModel

TEXT_LABELS = {
    "first_name": "First name",
    "last_name": "Last name",
    "registration_number": "Registration number",
}


class EmergencyContact(CamelModel):
    """Name, relationship and phone are required together."""

    name: str = Field(..., min_length=1, max_length=200)
    relationship: str = Field(..., min_length=1, max_length=100)
    phone_number: str = Field(..., min_length=1)

    @field_validator("name", "relationship")
    @classmethod
    def strip_text(cls, v: str, info: ValidationInfo) -> str:
        return require_text(v, f"Emergency contact {info.field_name}")

    @field_validator("phone_number")
    @classmethod
    def check_phone(cls, v: str) -> str:
        return validate_phone_number(v)


class MedicalInfo(CamelModel):
    allergies: list[str] = Field(default_factory=list)
    medications: list[str] = Field(default_factory=list)
    special_needs: str | None = None


class ChildBase(CamelModel):
    """Base child schema with common fields."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    date_of_birth: date
    gender: Gender
    registration_number: str = Field(..., min_length=1, max_length=50)
    parent_id: UUID
    guardian_id: UUID | None = None
    emergency_contact: EmergencyContact
    medical_info: MedicalInfo | None = None


class ChildCreate(ChildBase):
    """Schema for registering a child (MANAGER only)."""

    @field_validator("first_name", "last_name", "registration_number")
    @classmethod
    def strip_text(cls, v: str, info: ValidationInfo) -> str:
        return require_text(v, TEXT_LABELS[info.field_name])


class ChildUpdate(CamelModel):
    """Schema for updating a child. Only provided fields change."""

    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    date_of_birth: date | None = None
    gender: Gender | None = None
    guardian_id: UUID | None = None
    emergency_contact: EmergencyContact | None = None
    medical_info: MedicalInfo | None = None
    status: ChildStatus | None = None

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_text(cls, v: str | None, info: ValidationInfo) -> str | None:
        return None if v is None else require_text(v, TEXT_LABELS[info.field_name])


class ChildSchema(ChildBase):
    """Full child schema for responses."""

    id: UUID
    status: ChildStatus
    enrollment_date: date
    created_at: datetime
    updated_at: datetime
