"""
Attendance Model

One row per child per calendar day.
"""

from __future__ import annotations

import datetime as dt
from uuid import UUID

from sqlalchemy import Date, DateTime, ForeignKey, Index, String, UniqueConstraint, event
from sqlalchemy.orm import Mapped, mapped_column

from childcare.core.enums import AttendanceStatus

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin, enum_column


class Attendance(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Daily attendance record.

    ``date`` is a calendar day, never a timestamp, so the unique constraint
    on (child_id, date) cannot be sidestepped by a different time of day.
    """

    __tablename__ = "attendance"
    __table_args__ = (
        UniqueConstraint("child_id", "date", name="uq_attendance_child_date"),
        Index("idx_attendance_date", "date"),
    )

    child_id: Mapped[UUID] = mapped_column(ForeignKey("children.id"), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    check_in_time: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    check_out_time: Mapped[dt.datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    status: Mapped[AttendanceStatus] = mapped_column(
        enum_column(AttendanceStatus), default=AttendanceStatus.PRESENT, nullable=False
    )
    notes: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    recorded_by: Mapped[UUID] = mapped_column(ForeignKey("users.id"), nullable=False)


@event.listens_for(Attendance, "init", propagate=True)
def receive_init_attendance(target, _args, kwargs):  # type: ignore[no-untyped-def]
    """Ensure status defaults to PRESENT for in-memory objects."""
    if "status" not in kwargs:
        target.status = AttendanceStatus.PRESENT
