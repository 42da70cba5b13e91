"""
Notification Schemas
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from childcare.core.validation import require_text

from .common import CamelModel


class NotificationCreate(CamelModel):
    receiver_id: UUID
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        return require_text(v, "Title")

    @field_validator("message")
    @classmethod
    def strip_message(cls, v: str) -> str:
        return require_text(v, "Message")


class NotificationSchema(CamelModel):
    id: UUID
    sender_id: UUID
    receiver_id: UUID
    title: str
    message: str
    is_read: bool
    created_at: datetime
    updated_at: datetime
