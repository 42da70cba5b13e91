"""
Report API Endpoints

Weekly reports are persisted as snapshots; monthly reports are computed and
returned inline without being stored.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

import logging
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from childcare.core.auth import require
from childcare.core.database import get_db
from childcare.core.enums import ChildStatus, ReportType
from childcare.core.models import Attendance, Child, Notification, Report, User
from childcare.core.policy import Action
from childcare.core.schemas import (
    DashboardStatistics,
    Envelope,
    MonthlyReportRequest,
    MonthlyReportResult,
    ReportSchema,
    WeeklyReportRequest,
    WeeklyReportResult,
    respond,
    respond_list,
)
from childcare.core.security import Identity
from childcare.core.visibility import fetch_visible, visible
from childcare.reporting import count_rows, generate_monthly_summary, generate_weekly_report

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/statistics", response_model=Envelope[DashboardStatistics])
async def get_statistics(
    identity: Identity = Depends(require(Action.REPORT_STATISTICS)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Dashboard counters, scoped to what the caller can see.

    ``unreadNotifications`` counts unread messages the caller received plus
    those they sent that the receiver has not read yet.
    """
    today = datetime.now(UTC).date()

    total_children = await count_rows(
        db,
        select(Child.id).where(Child.status == ChildStatus.ACTIVE, visible(Child, identity)),
    )
    total_users = await count_rows(db, select(User.id).where(User.is_active.is_(True)))
    total_attendance_today = await count_rows(
        db,
        select(Attendance.id).where(Attendance.date == today, visible(Attendance, identity)),
    )
    unread_notifications = await count_rows(
        db,
        select(Notification.id).where(
            Notification.is_read.is_(False),
            or_(
                Notification.receiver_id == identity.user_id,
                Notification.sender_id == identity.user_id,
            ),
        ),
    )

    return respond(
        data={
            "total_children": total_children,
            "total_users": total_users,
            "total_attendance_today": total_attendance_today,
            "unread_notifications": unread_notifications,
        }
    )


@router.post(
    "/weekly", response_model=Envelope[WeeklyReportResult], status_code=status.HTTP_201_CREATED
)
async def create_weekly_report(
    payload: WeeklyReportRequest,
    identity: Identity = Depends(require(Action.REPORT_GENERATE_WEEKLY)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Aggregate one child's period and store it as a WEEKLY report."""
    child = await fetch_visible(db, Child, payload.child_id, identity, not_found="Child not found")

    report, records = await generate_weekly_report(
        db, child, payload.start_date, payload.end_date, generated_by=identity.user_id
    )

    return respond(
        data={
            "report": report,
            "child": child,
            "attendance": records.attendance,
            "evaluations": records.evaluations,
        },
        message="Weekly report generated successfully",
    )


@router.post("/monthly", response_model=Envelope[MonthlyReportResult])
async def create_monthly_report(
    payload: MonthlyReportRequest,
    identity: Identity = Depends(require(Action.REPORT_GENERATE_MONTHLY)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Aggregate every child over the period. The result is not stored."""
    summary = await generate_monthly_summary(db, payload.start_date, payload.end_date)

    logger.info(
        f"{identity.username} generated monthly summary "
        f"{payload.start_date.isoformat()}..{payload.end_date.isoformat()}"
    )
    return respond(data=summary, message="Monthly report generated successfully")


@router.get("/child/{child_id}", response_model=Envelope[list[ReportSchema]])
async def list_reports_by_child(
    child_id: UUID,
    identity: Identity = Depends(require(Action.REPORT_LIST_BY_CHILD)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    await fetch_visible(db, Child, child_id, identity, not_found="Child not found")

    result = await db.execute(
        select(Report)
        .where(Report.child_id == child_id, visible(Report, identity))
        .order_by(Report.created_at.desc())
    )
    return respond_list(result.scalars().all())


@router.get("", response_model=Envelope[list[ReportSchema]])
async def list_reports(
    report_type: ReportType | None = Query(None, alias="type"),
    _: Identity = Depends(require(Action.REPORT_LIST_ALL)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    stmt = select(Report)
    if report_type is not None:
        stmt = stmt.where(Report.type == report_type)

    result = await db.execute(stmt.order_by(Report.created_at.desc()))
    return respond_list(result.scalars().all())
