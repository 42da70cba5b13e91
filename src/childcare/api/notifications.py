"""
Notification API Endpoints

Pull-based messages. Any signed-in user may send to any other user; a
notification is only ever visible to its sender and its receiver.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from childcare.core.auth import require
from childcare.core.database import get_db
from childcare.core.models import Notification, User
from childcare.core.policy import Action
from childcare.core.schemas import (
    Envelope,
    NotificationCreate,
    NotificationSchema,
    respond,
    respond_list,
)
from childcare.core.security import Identity
from childcare.core.visibility import fetch_visible

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/send", response_model=Envelope[NotificationSchema], status_code=status.HTTP_201_CREATED
)
async def send_notification(
    payload: NotificationCreate,
    identity: Identity = Depends(require(Action.NOTIFICATION_SEND)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    receiver = await db.get(User, payload.receiver_id)
    if receiver is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Receiver not found")

    notification = Notification(
        sender_id=identity.user_id,
        receiver_id=payload.receiver_id,
        title=payload.title,
        message=payload.message,
        is_read=False,
    )
    db.add(notification)
    await db.commit()
    await db.refresh(notification)

    logger.info(f"{identity.username} sent notification {notification.id} to {receiver.username}")
    return respond(data=notification, message="Notification sent successfully")


@router.get("/my", response_model=Envelope[list[NotificationSchema]])
async def list_received(
    is_read: bool | None = Query(None, alias="isRead"),
    identity: Identity = Depends(require(Action.NOTIFICATION_LIST_RECEIVED)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Notifications addressed to the caller, newest first."""
    stmt = select(Notification).where(Notification.receiver_id == identity.user_id)
    if is_read is not None:
        stmt = stmt.where(Notification.is_read == is_read)

    result = await db.execute(stmt.order_by(Notification.created_at.desc()))
    return respond_list(result.scalars().all())


@router.get("/sent", response_model=Envelope[list[NotificationSchema]])
async def list_sent(
    identity: Identity = Depends(require(Action.NOTIFICATION_LIST_SENT)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Notifications sent by the caller, newest first."""
    result = await db.execute(
        select(Notification)
        .where(Notification.sender_id == identity.user_id)
        .order_by(Notification.created_at.desc())
    )
    return respond_list(result.scalars().all())


@router.put("/{notification_id}/read", response_model=Envelope[NotificationSchema])
async def mark_as_read(
    notification_id: UUID,
    identity: Identity = Depends(require(Action.NOTIFICATION_MARK_READ)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Only the receiver can mark a notification as read."""
    notification = await fetch_visible(
        db, Notification, notification_id, identity, not_found="Notification not found"
    )
    if notification.receiver_id != identity.user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")

    notification.is_read = True
    await db.commit()
    await db.refresh(notification)

    return respond(data=notification, message="Notification marked as read")


@router.get("/unread/count", response_model=Envelope[None])
async def count_unread(
    identity: Identity = Depends(require(Action.NOTIFICATION_COUNT_UNREAD)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    result = await db.execute(
        select(func.count())
        .select_from(Notification)
        .where(Notification.receiver_id == identity.user_id, Notification.is_read.is_(False))
    )
    return respond(count=int(result.scalar_one()))


@router.delete("/{notification_id}", response_model=Envelope[None])
async def delete_notification(
    notification_id: UUID,
    identity: Identity = Depends(require(Action.NOTIFICATION_DELETE)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Either party may delete a notification."""
    notification = await fetch_visible(
        db, Notification, notification_id, identity, not_found="Notification not found"
    )

    await db.delete(notification)
    await db.commit()

    return respond(message="Notification deleted successfully")
