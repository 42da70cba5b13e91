"""
Child Model

Enrolled children. Ownership is by reference: ``parent_id`` points at the
FAMILY account, ``guardian_id`` at the assigned staff member.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Any
from uuid import UUID

from sqlalchemy import JSON, Date, ForeignKey, Index, String, event
from sqlalchemy.orm import Mapped, mapped_column

from childcare.core.enums import ChildStatus, Gender

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin, enum_column


class Child(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A registered child.

    "Deleting" a child flips ``status`` to INACTIVE; rows are never removed.
    """

    __tablename__ = "children"
    __table_args__ = (
        Index("idx_children_parent", "parent_id"),
        Index("idx_children_guardian", "guardian_id"),
        Index("idx_children_status", "status"),
    )

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    gender: Mapped[Gender] = mapped_column(enum_column(Gender), nullable=False)
    registration_number: Mapped[str] = mapped_column(
        String(50), unique=True, nullable=False, comment="Alternate lookup key"
    )

    parent_id: Mapped[UUID] = mapped_column(ForeignKey("users.id"), nullable=False)
    guardian_id: Mapped[UUID | None] = mapped_column(ForeignKey("users.id"), nullable=True)

    emergency_contact: Mapped[dict[str, Any]] = mapped_column(
        JSON, nullable=False, comment="{name, relationship, phone_number}"
    )
    medical_info: Mapped[dict[str, Any] | None] = mapped_column(
        JSON, nullable=True, comment="{allergies, medications, special_needs}"
    )

    status: Mapped[ChildStatus] = mapped_column(
        enum_column(ChildStatus), default=ChildStatus.ACTIVE, nullable=False
    )
    enrollment_date: Mapped[date] = mapped_column(
        Date, default=lambda: datetime.now(UTC).date(), nullable=False
    )


@event.listens_for(Child, "init", propagate=True)
def receive_init_child(target, _args, kwargs):  # type: ignore[no-untyped-def]
    """Apply status and enrollment defaults to in-memory objects."""
    if "status" not in kwargs:
        target.status = ChildStatus.ACTIVE
    if "enrollment_date" not in kwargs:
        target.enrollment_date = datetime.now(UTC).date()
