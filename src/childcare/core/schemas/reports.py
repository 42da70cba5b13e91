"""
Report Schemas

Snapshot shape for persisted reports plus the inline monthly summary.
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import Field, field_validator, model_validator

from childcare.core.enums import ReportType
from childcare.core.validation import to_calendar_day, validate_period

from .attendance import AttendanceSchema
from .children import ChildSchema
from .common import CamelModel
from .evaluations import EvaluationSchema


class ReportPeriodRequest(CamelModel):
    start_date: date
    end_date: date

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def normalize_day(cls, v: object) -> date:
        return to_calendar_day(v)

    @model_validator(mode="after")
    def check_order(self) -> "ReportPeriodRequest":
        validate_period(self.start_date, self.end_date)
        return self


class WeeklyReportRequest(ReportPeriodRequest):
    child_id: UUID


class MonthlyReportRequest(ReportPeriodRequest):
    pass


class ReportPeriod(CamelModel):
    start_date: date
    end_date: date


class AttendanceSummary(CamelModel):
    total_days: int = 0
    present_days: int = 0
    absent_days: int = 0
    late_arrivals: int = 0


class ReportData(CamelModel):
    attendance: AttendanceSummary
    evaluations: list[str] = Field(default_factory=list, description="Evaluation ids")
    activities: list[str] = Field(default_factory=list)
    health_incidents: list[str] = Field(default_factory=list)


class ReportSchema(CamelModel):
    id: UUID
    type: ReportType
    child_id: UUID | None
    generated_by: UUID
    period: ReportPeriod
    data: ReportData
    created_at: datetime


class WeeklyReportResult(CamelModel):
    report: ReportSchema
    child: ChildSchema
    attendance: list[AttendanceSchema]
    evaluations: list[EvaluationSchema]


class AttendanceByStatus(CamelModel):
    present: int = 0
    absent: int = 0
    late: int = 0


class EvaluationsByCategory(CamelModel):
    physical: int = 0
    cognitive: int = 0
    social: int = 0
    emotional: int = 0
    language: int = 0
    other: int = 0


class MonthlyStatistics(CamelModel):
    total_children: int
    total_attendance_records: int
    total_evaluations: int
    attendance_by_status: AttendanceByStatus
    evaluations_by_category: EvaluationsByCategory


class MonthlyReportResult(CamelModel):
    """Inline aggregate; never persisted."""

    type: ReportType = ReportType.MONTHLY
    period: ReportPeriod
    statistics: MonthlyStatistics
    children: list[ChildSchema]
    attendance: list[AttendanceSchema]
    evaluations: list[EvaluationSchema]


class DashboardStatistics(CamelModel):
    total_children: int
    total_users: int
    total_attendance_today: int
    unread_notifications: int
