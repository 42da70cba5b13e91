"""
User Model

Staff and family accounts. Every other entity references users by id.
"""

from __future__ import annotations

from sqlalchemy import Index, String, event
from sqlalchemy.orm import Mapped, mapped_column

from childcare.core.enums import UserRole

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin, enum_column


class User(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """An account holder with exactly one role.

    Accounts are normally deactivated (``is_active = False``) rather than
    removed; ADMIN can still hard-delete an unreferenced account.
    """

    __tablename__ = "users"
    __table_args__ = (Index("idx_users_role", "role"),)

    username: Mapped[str] = mapped_column(String(30), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(
        String(255), nullable=False, comment="bcrypt hash, never serialized"
    )
    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    role: Mapped[UserRole] = mapped_column(enum_column(UserRole), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(20), nullable=False)

    is_active: Mapped[bool] = mapped_column(default=True)


@event.listens_for(User, "init", propagate=True)
def receive_init_user(target, _args, kwargs):  # type: ignore[no-untyped-def]
    """Ensure is_active defaults to True for in-memory objects."""
    if "is_active" not in kwargs:
        target.is_active = True
