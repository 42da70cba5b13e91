"""
User API Endpoints

Account administration. ADMIN only, except single-account reads which
MANAGER may also perform.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from childcare.core.auth import require
from childcare.core.database import get_db
from childcare.core.enums import UserRole
from childcare.core.models import User
from childcare.core.policy import Action
from childcare.core.schemas import (
    Envelope,
    UserCreate,
    UserSchema,
    UserStatusUpdate,
    UserUpdate,
    respond,
    respond_list,
)
from childcare.core.security import Identity, hash_password

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_user_or_404(db: AsyncSession, user_id: UUID) -> User:
    user = await db.get(User, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


async def _ensure_unique(
    db: AsyncSession,
    username: str | None,
    email: str | None,
    exclude_id: UUID | None = None,
) -> None:
    """409 when another account already uses the username or email."""
    conditions = []
    if username is not None:
        conditions.append(User.username == username)
    if email is not None:
        conditions.append(User.email == email)
    if not conditions:
        return

    stmt = select(User).where(or_(*conditions))
    if exclude_id is not None:
        stmt = stmt.where(User.id != exclude_id)

    for existing in (await db.execute(stmt)).scalars():
        field = "username" if username is not None and existing.username == username else "email"
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f"{field} already exists")


@router.post("/create", response_model=Envelope[UserSchema], status_code=status.HTTP_201_CREATED)
async def create_account(
    user_data: UserCreate,
    identity: Identity = Depends(require(Action.USER_CREATE)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Create an account of any role."""
    await _ensure_unique(db, user_data.username, user_data.email)

    user = User(
        username=user_data.username,
        email=user_data.email,
        password_hash=hash_password(user_data.password),
        full_name=user_data.full_name,
        role=user_data.role,
        phone_number=user_data.phone_number,
        is_active=True,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="username or email already exists"
        ) from None
    await db.refresh(user)

    logger.info(f"{identity.username} created {user.role.value} account {user.username}")
    return respond(data=user, message="Account created successfully")


@router.get("", response_model=Envelope[list[UserSchema]])
async def list_users(
    _: Identity = Depends(require(Action.USER_LIST)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    result = await db.execute(select(User).order_by(User.created_at.desc()))
    return respond_list(result.scalars().all())


@router.get("/employees", response_model=Envelope[list[UserSchema]])
async def list_employees(
    _: Identity = Depends(require(Action.USER_LIST_EMPLOYEES)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Managers and guardians."""
    result = await db.execute(
        select(User)
        .where(User.role.in_([UserRole.MANAGER, UserRole.GUARDIAN]))
        .order_by(User.full_name)
    )
    return respond_list(result.scalars().all())


@router.get("/{user_id}", response_model=Envelope[UserSchema])
async def get_user(
    user_id: UUID,
    _: Identity = Depends(require(Action.USER_READ)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    return respond(data=await _get_user_or_404(db, user_id))


@router.put("/{user_id}", response_model=Envelope[UserSchema])
async def update_user(
    user_id: UUID,
    user_update: UserUpdate,
    identity: Identity = Depends(require(Action.USER_UPDATE)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Update account details. Only updates fields that are explicitly provided."""
    user = await _get_user_or_404(db, user_id)

    update_data = user_update.model_dump(exclude_unset=True, exclude_none=True)
    await _ensure_unique(
        db, update_data.get("username"), update_data.get("email"), exclude_id=user.id
    )

    for field, value in update_data.items():
        setattr(user, field, value)

    await db.commit()
    await db.refresh(user)

    logger.info(f"{identity.username} updated account {user.username}: {sorted(update_data)}")
    return respond(data=user, message="User updated successfully")


@router.delete("/{user_id}", response_model=Envelope[None])
async def delete_user(
    user_id: UUID,
    identity: Identity = Depends(require(Action.USER_DELETE)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Hard-delete an account. Accounts still referenced must be deactivated instead."""
    user = await _get_user_or_404(db, user_id)

    if user.id == identity.user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot delete your own account"
        )

    await db.delete(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User is referenced by other records; deactivate the account instead",
        ) from None

    logger.info(f"{identity.username} deleted account {user_id}")
    return respond(message="User deleted successfully")


@router.put("/{user_id}/status", response_model=Envelope[UserSchema])
async def set_user_status(
    user_id: UUID,
    payload: UserStatusUpdate,
    identity: Identity = Depends(require(Action.USER_SET_STATUS)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Activate or deactivate an account."""
    user = await _get_user_or_404(db, user_id)

    user.is_active = payload.is_active
    await db.commit()
    await db.refresh(user)

    state = "activated" if payload.is_active else "deactivated"
    logger.info(f"{identity.username} {state} account {user.username}")
    return respond(data=user, message=f"User {state} successfully")
