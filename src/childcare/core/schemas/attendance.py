"""
Attendance Schemas
"""

import datetime as dt
from uuid import UUID

from pydantic import Field, field_validator

from childcare.core.enums import AttendanceStatus
from childcare.core.validation import to_calendar_day

from .common import CamelModel


class AttendanceCreate(CamelModel):
    """Mark a child's attendance for one calendar day."""

    child_id: UUID
    date: dt.date
    check_in_time: dt.datetime
    status: AttendanceStatus = AttendanceStatus.PRESENT
    notes: str | None = Field(None, max_length=1000)

    @field_validator("date", mode="before")
    @classmethod
    def normalize_day(cls, v: object) -> dt.date:
        return to_calendar_day(v)


class AttendanceUpdate(CamelModel):
    """Check-out, status correction and notes. Date, child and check-in are fixed."""

    check_out_time: dt.datetime | None = None
    status: AttendanceStatus | None = None
    notes: str | None = Field(None, max_length=1000)


class AttendanceSchema(CamelModel):
    id: UUID
    child_id: UUID
    date: dt.date
    check_in_time: dt.datetime
    check_out_time: dt.datetime | None
    status: AttendanceStatus
    notes: str | None
    recorded_by: UUID
    created_at: dt.datetime
    updated_at: dt.datetime
