"""Pydantic schemas for API validation."""

from .attendance import AttendanceCreate, AttendanceSchema, AttendanceUpdate
from .children import ChildCreate, ChildSchema, ChildUpdate, EmergencyContact, MedicalInfo
from .common import CamelModel, Envelope, respond, respond_list
from .evaluations import EvaluationCreate, EvaluationSchema, EvaluationUpdate
from .notifications import NotificationCreate, NotificationSchema
from .reports import (
    AttendanceSummary,
    DashboardStatistics,
    MonthlyReportRequest,
    MonthlyReportResult,
    ReportData,
    ReportSchema,
    WeeklyReportRequest,
    WeeklyReportResult,
)
from .users import (
    LoginRequest,
    LoginResponse,
    PasswordChange,
    UserCreate,
    UserSchema,
    UserStatusUpdate,
    UserUpdate,
)

__all__ = [
    # Envelope
    "CamelModel",
    "Envelope",
    "respond",
    "respond_list",
    # Users
    "LoginRequest",
    "LoginResponse",
    "PasswordChange",
    "UserCreate",
    "UserUpdate",
    "UserStatusUpdate",
    "UserSchema",
    # Children
    "EmergencyContact",
    "MedicalInfo",
    "ChildCreate",
    "ChildUpdate",
    "ChildSchema",
    # Attendance
    "AttendanceCreate",
    "AttendanceUpdate",
    "AttendanceSchema",
    # Evaluations
    "EvaluationCreate",
    "EvaluationUpdate",
    "EvaluationSchema",
    # Notifications
    "NotificationCreate",
    "NotificationSchema",
    # Reports
    "AttendanceSummary",
    "ReportData",
    "ReportSchema",
    "WeeklyReportRequest",
    "WeeklyReportResult",
    "MonthlyReportRequest",
    "MonthlyReportResult",
    "DashboardStatistics",
]
