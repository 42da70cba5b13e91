"""
Report Aggregation

Filter-and-count over attendance and evaluations for a period. Everything is
recomputed on each call; nothing is cached or incremental.

Attendance and evaluation dates are calendar days, so an inclusive
``start <= date <= end`` comparison already covers the whole of the end day.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from childcare.core.enums import AttendanceStatus, ChildStatus, EvaluationCategory, ReportType
from childcare.core.models import Attendance, Child, Evaluation, Report

logger = logging.getLogger(__name__)


@dataclass
class PeriodRecords:
    """Rows that fall inside a report period."""

    attendance: Sequence[Attendance]
    evaluations: Sequence[Evaluation]


def summarize_attendance(records: Iterable[Attendance]) -> dict[str, int]:
    """Count attendance rows by status.

    Returns:
        ``{total_days, present_days, absent_days, late_arrivals}``
    """
    counts: Counter[AttendanceStatus] = Counter()
    total = 0
    for record in records:
        counts[AttendanceStatus(record.status)] += 1
        total += 1

    return {
        "total_days": total,
        "present_days": counts[AttendanceStatus.PRESENT],
        "absent_days": counts[AttendanceStatus.ABSENT],
        "late_arrivals": counts[AttendanceStatus.LATE],
    }


def count_by_status(records: Iterable[Attendance]) -> dict[str, int]:
    summary = summarize_attendance(records)
    return {
        "present": summary["present_days"],
        "absent": summary["absent_days"],
        "late": summary["late_arrivals"],
    }


def count_by_category(evaluations: Iterable[Evaluation]) -> dict[str, int]:
    """Count evaluations per category; every category is present, zero or not."""
    counts = Counter(EvaluationCategory(e.category) for e in evaluations)
    return {category.value.lower(): counts[category] for category in EvaluationCategory}


async def collect_period(
    db: AsyncSession, start: date, end: date, child_id: UUID | None = None
) -> PeriodRecords:
    """Fetch attendance and evaluations dated within ``[start, end]``."""
    attendance_stmt = select(Attendance).where(Attendance.date >= start, Attendance.date <= end)
    evaluation_stmt = select(Evaluation).where(Evaluation.date >= start, Evaluation.date <= end)

    if child_id is not None:
        attendance_stmt = attendance_stmt.where(Attendance.child_id == child_id)
        evaluation_stmt = evaluation_stmt.where(Evaluation.child_id == child_id)

    attendance = (await db.execute(attendance_stmt.order_by(Attendance.date))).scalars().all()
    evaluations = (
        (await db.execute(evaluation_stmt.order_by(Evaluation.date.desc()))).scalars().all()
    )
    return PeriodRecords(attendance=attendance, evaluations=evaluations)


async def generate_weekly_report(
    db: AsyncSession, child: Child, start: date, end: date, generated_by: UUID
) -> tuple[Report, PeriodRecords]:
    """Aggregate one child's period and persist it as a WEEKLY snapshot.

    Activities and health incidents are part of the snapshot shape but no
    part of the system records them, so they are always empty.
    """
    records = await collect_period(db, start, end, child_id=child.id)

    report = Report(
        type=ReportType.WEEKLY,
        child_id=child.id,
        generated_by=generated_by,
        period_start=start,
        period_end=end,
        data={
            "attendance": summarize_attendance(records.attendance),
            "evaluations": [str(e.id) for e in records.evaluations],
            "activities": [],
            "health_incidents": [],
        },
    )
    db.add(report)
    await db.commit()
    await db.refresh(report)

    logger.info(
        f"Weekly report {report.id} for child {child.id} "
        f"({start.isoformat()}..{end.isoformat()}): {report.data['attendance']}"
    )
    return report, records


async def generate_monthly_summary(db: AsyncSession, start: date, end: date) -> dict[str, Any]:
    """Aggregate all children over a period. Returned inline, never persisted."""
    children = (
        (
            await db.execute(
                select(Child)
                .where(Child.status == ChildStatus.ACTIVE)
                .order_by(Child.last_name, Child.first_name)
            )
        )
        .scalars()
        .all()
    )
    records = await collect_period(db, start, end)

    return {
        "type": ReportType.MONTHLY,
        "period": {"start_date": start, "end_date": end},
        "statistics": {
            "total_children": len(children),
            "total_attendance_records": len(records.attendance),
            "total_evaluations": len(records.evaluations),
            "attendance_by_status": count_by_status(records.attendance),
            "evaluations_by_category": count_by_category(records.evaluations),
        },
        "children": children,
        "attendance": records.attendance,
        "evaluations": records.evaluations,
    }


async def count_rows(db: AsyncSession, stmt: Any) -> int:
    """``SELECT count(*)`` over an arbitrary select."""
    result = await db.execute(select(func.count()).select_from(stmt.subquery()))
    return int(result.scalar_one())
