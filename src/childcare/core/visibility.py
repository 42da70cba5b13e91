"""
Record Visibility

One predicate builder per resource type. Each returns a SQLAlchemy boolean
clause narrowing a query to the rows an identity may see:

- FAMILY sees its own children and, transitively, their attendance,
  evaluations and reports.
- GUARDIAN sees children assigned to it, plus attendance, evaluations and
  reports for those children or authored by it.
- MANAGER and ADMIN see everything the route guard lets them reach.
- Notifications are always limited to the sender and the receiver.

List handlers add ``visible(Model, identity)`` to their WHERE clause; lookups
by primary key go through ``fetch_visible`` which distinguishes "does not
exist" (404) from "exists but not yours" (403).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import ColumnElement, Select, and_, false, or_, select, true
from sqlalchemy.ext.asyncio import AsyncSession

from childcare.core.enums import UserRole
from childcare.core.models import Attendance, Base, Child, Evaluation, Notification, Report
from childcare.core.security import Identity

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

Predicate = Callable[[Identity], ColumnElement[bool]]


def _owned_child_ids(identity: Identity) -> Select[Any]:
    """Ids of children whose parent is the FAMILY identity."""
    return select(Child.id).where(Child.parent_id == identity.user_id)


def _assigned_child_ids(identity: Identity) -> Select[Any]:
    """Ids of children assigned to the GUARDIAN identity."""
    return select(Child.id).where(Child.guardian_id == identity.user_id)


def child_predicate(identity: Identity) -> ColumnElement[bool]:
    if identity.role == UserRole.FAMILY:
        return Child.parent_id == identity.user_id
    if identity.role == UserRole.GUARDIAN:
        return Child.guardian_id == identity.user_id
    return true()


def attendance_predicate(identity: Identity) -> ColumnElement[bool]:
    if identity.role == UserRole.FAMILY:
        return Attendance.child_id.in_(_owned_child_ids(identity))
    if identity.role == UserRole.GUARDIAN:
        return or_(
            Attendance.child_id.in_(_assigned_child_ids(identity)),
            Attendance.recorded_by == identity.user_id,
        )
    return true()


def evaluation_predicate(identity: Identity) -> ColumnElement[bool]:
    if identity.role == UserRole.FAMILY:
        return Evaluation.child_id.in_(_owned_child_ids(identity))
    if identity.role == UserRole.GUARDIAN:
        return or_(
            Evaluation.child_id.in_(_assigned_child_ids(identity)),
            Evaluation.evaluator_id == identity.user_id,
        )
    return true()


def notification_predicate(identity: Identity) -> ColumnElement[bool]:
    return or_(
        Notification.sender_id == identity.user_id,
        Notification.receiver_id == identity.user_id,
    )


def report_predicate(identity: Identity) -> ColumnElement[bool]:
    if identity.role == UserRole.FAMILY:
        return and_(
            Report.child_id.is_not(None),
            Report.child_id.in_(_owned_child_ids(identity)),
        )
    if identity.role == UserRole.GUARDIAN:
        return or_(
            Report.child_id.in_(_assigned_child_ids(identity)),
            Report.generated_by == identity.user_id,
        )
    return true()


PREDICATES: dict[type[Base], Predicate] = {
    Child: child_predicate,
    Attendance: attendance_predicate,
    Evaluation: evaluation_predicate,
    Notification: notification_predicate,
    Report: report_predicate,
}


def visible(model: type[Base], identity: Identity) -> ColumnElement[bool]:
    """Visibility clause for ``model``; unknown resource types see nothing."""
    predicate = PREDICATES.get(model)
    if predicate is None:
        return false()
    return predicate(identity)


async def is_visible(
    db: AsyncSession, model: type[Base], row_id: UUID, identity: Identity
) -> bool:
    """Whether the row with ``row_id`` passes the identity's visibility clause."""
    pk = model.__mapper__.primary_key[0]
    result = await db.execute(select(pk).where(pk == row_id, visible(model, identity)))
    return result.scalar_one_or_none() is not None


async def fetch_visible(
    db: AsyncSession,
    model: type[ModelT],
    row_id: UUID,
    identity: Identity,
    not_found: str,
) -> ModelT:
    """Load a row by primary key, enforcing visibility.

    Raises:
        HTTPException: 404 when the row does not exist, 403 when it exists
            outside the caller's visibility
    """
    row = await db.get(model, row_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=not_found)

    if not await is_visible(db, model, row_id, identity):
        logger.info(f"Hidden {model.__name__} {row_id} requested by {identity.username}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")

    return row


async def ensure_visible(db: AsyncSession, model: type[Base], row: Any, identity: Identity) -> None:
    """403 unless an already-loaded row is visible to the identity."""
    if not await is_visible(db, model, row.id, identity):
        logger.info(f"Hidden {model.__name__} {row.id} requested by {identity.username}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
