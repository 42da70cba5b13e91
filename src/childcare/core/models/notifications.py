"""
Notification Model

Pull-based messages between two accounts.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import ForeignKey, Index, String, Text, event
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Notification(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A message from one user to another. Content is immutable once sent."""

    __tablename__ = "notifications"
    __table_args__ = (
        Index("idx_notifications_receiver_read", "receiver_id", "is_read"),
        Index("idx_notifications_sender", "sender_id"),
    )

    sender_id: Mapped[UUID] = mapped_column(ForeignKey("users.id"), nullable=False)
    receiver_id: Mapped[UUID] = mapped_column(ForeignKey("users.id"), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    is_read: Mapped[bool] = mapped_column(default=False)


@event.listens_for(Notification, "init", propagate=True)
def receive_init_notification(target, _args, kwargs):  # type: ignore[no-untyped-def]
    """Ensure is_read defaults to False for in-memory objects."""
    if "is_read" not in kwargs:
        target.is_read = False
