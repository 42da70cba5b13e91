"""
Attendance API Endpoints

Daily check-in/check-out records. At most one record exists per child per
calendar day: the create path checks first, and the storage unique
constraint catches the concurrent case.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from childcare.api.params import parse_day_param
from childcare.core.auth import require
from childcare.core.database import get_db
from childcare.core.models import Attendance, Child
from childcare.core.policy import Action
from childcare.core.schemas import (
    AttendanceCreate,
    AttendanceSchema,
    AttendanceUpdate,
    Envelope,
    respond,
    respond_list,
)
from childcare.core.security import Identity
from childcare.core.visibility import fetch_visible, visible

logger = logging.getLogger(__name__)

router = APIRouter()

ALREADY_MARKED = "Attendance already marked for this date"
ALL_ATTENDANCE_LIMIT = 100


@router.post("/mark", response_model=Envelope[AttendanceSchema], status_code=status.HTTP_201_CREATED)
async def mark_attendance(
    attendance_data: AttendanceCreate,
    identity: Identity = Depends(require(Action.ATTENDANCE_MARK)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Record a child's attendance for a day.

    ``date`` has already been reduced to a calendar day by the schema, so the
    duplicate check and the stored key agree regardless of time of day.
    """
    await fetch_visible(
        db, Child, attendance_data.child_id, identity, not_found="Child not found"
    )

    result = await db.execute(
        select(Attendance.id).where(
            Attendance.child_id == attendance_data.child_id,
            Attendance.date == attendance_data.date,
        )
    )
    if result.scalar_one_or_none() is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=ALREADY_MARKED)

    attendance = Attendance(
        child_id=attendance_data.child_id,
        date=attendance_data.date,
        check_in_time=attendance_data.check_in_time,
        status=attendance_data.status,
        notes=attendance_data.notes,
        recorded_by=identity.user_id,
    )
    db.add(attendance)
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race with a concurrent mark for the same child and day
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=ALREADY_MARKED) from None
    await db.refresh(attendance)

    logger.info(
        f"{identity.username} marked {attendance.status.value} for child "
        f"{attendance.child_id} on {attendance.date.isoformat()}"
    )
    return respond(data=attendance, message="Attendance marked successfully")


@router.put("/{attendance_id}", response_model=Envelope[AttendanceSchema])
async def update_attendance(
    attendance_id: UUID,
    attendance_update: AttendanceUpdate,
    identity: Identity = Depends(require(Action.ATTENDANCE_UPDATE)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Set check-out time, correct status or add notes. Everything else is fixed."""
    attendance = await fetch_visible(
        db, Attendance, attendance_id, identity, not_found="Attendance record not found"
    )

    update_data = attendance_update.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        setattr(attendance, field, value)

    await db.commit()
    await db.refresh(attendance)

    return respond(data=attendance, message="Attendance updated successfully")


@router.get("/daily", response_model=Envelope[list[AttendanceSchema]])
async def get_daily_attendance(
    day: str | None = Query(None, alias="date"),
    _: Identity = Depends(require(Action.ATTENDANCE_LIST_DAILY)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """All records for one day, in check-in order."""
    target = parse_day_param(day, "date")
    if target is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Please provide date")

    result = await db.execute(
        select(Attendance).where(Attendance.date == target).order_by(Attendance.check_in_time)
    )
    return respond_list(result.scalars().all())


@router.get("/child/{child_id}", response_model=Envelope[list[AttendanceSchema]])
async def get_attendance_by_child(
    child_id: UUID,
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
    identity: Identity = Depends(require(Action.ATTENDANCE_LIST_BY_CHILD)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """A child's attendance history, newest first, optionally within a date range."""
    await fetch_visible(db, Child, child_id, identity, not_found="Child not found")

    stmt = select(Attendance).where(
        Attendance.child_id == child_id, visible(Attendance, identity)
    )
    start = parse_day_param(start_date, "startDate")
    end = parse_day_param(end_date, "endDate")
    if start is not None:
        stmt = stmt.where(Attendance.date >= start)
    if end is not None:
        stmt = stmt.where(Attendance.date <= end)

    result = await db.execute(stmt.order_by(Attendance.date.desc()))
    return respond_list(result.scalars().all())


@router.get("", response_model=Envelope[list[AttendanceSchema]])
async def list_attendance(
    _: Identity = Depends(require(Action.ATTENDANCE_LIST_ALL)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Most recent records across all children."""
    result = await db.execute(
        select(Attendance)
        .order_by(Attendance.date.desc(), Attendance.check_in_time.desc())
        .limit(ALL_ATTENDANCE_LIMIT)
    )
    return respond_list(result.scalars().all())
