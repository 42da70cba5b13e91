"""
Evaluation Model

Developmental observations recorded by staff.
"""

from __future__ import annotations

import datetime as dt
from uuid import UUID

from sqlalchemy import JSON, Date, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from childcare.core.enums import EvaluationCategory

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin, enum_column


class Evaluation(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A single observation about a child.

    Only the original evaluator or an ADMIN may change or remove it.
    """

    __tablename__ = "evaluations"
    __table_args__ = (
        Index("idx_evaluations_child_date", "child_id", "date"),
        Index("idx_evaluations_evaluator", "evaluator_id"),
    )

    child_id: Mapped[UUID] = mapped_column(ForeignKey("children.id"), nullable=False)
    evaluator_id: Mapped[UUID] = mapped_column(ForeignKey("users.id"), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    category: Mapped[EvaluationCategory] = mapped_column(
        enum_column(EvaluationCategory), nullable=False
    )
    observation: Mapped[str] = mapped_column(Text, nullable=False)
    recommendation: Mapped[str | None] = mapped_column(Text, nullable=True)
    attachments: Mapped[list[str]] = mapped_column(
        JSON, default=list, nullable=False, comment="Opaque attachment references"
    )
