"""
Report Model

Persisted point-in-time report snapshots.
"""

from __future__ import annotations

from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy import JSON, Date, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column

from childcare.core.enums import ReportType

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin, enum_column


class Report(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Immutable aggregation of attendance and evaluations for a period.

    ``child_id`` is empty for aggregate reports.
    """

    __tablename__ = "reports"
    __table_args__ = (
        Index("idx_reports_child", "child_id"),
        Index("idx_reports_type", "type"),
    )

    type: Mapped[ReportType] = mapped_column(enum_column(ReportType), nullable=False)
    child_id: Mapped[UUID | None] = mapped_column(ForeignKey("children.id"), nullable=True)
    generated_by: Mapped[UUID] = mapped_column(ForeignKey("users.id"), nullable=False)
    period_start: Mapped[date] = mapped_column(Date, nullable=False)
    period_end: Mapped[date] = mapped_column(Date, nullable=False)
    data: Mapped[dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        comment="{attendance, evaluations, activities, health_incidents}",
    )

    @property
    def period(self) -> dict[str, date]:
        return {"start_date": self.period_start, "end_date": self.period_end}
