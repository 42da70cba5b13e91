"""
Authentication API Endpoints

Login, profile and password change for staff accounts.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from childcare.core.auth import require
from childcare.core.database import get_db
from childcare.core.enums import UserRole
from childcare.core.models import User
from childcare.core.policy import Action
from childcare.core.schemas import (
    Envelope,
    LoginRequest,
    LoginResponse,
    PasswordChange,
    UserSchema,
    respond,
)
from childcare.core.security import (
    Identity,
    create_access_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)

router = APIRouter()

FAMILY_LOGIN_DENIED = (
    "Family members are not allowed to login to the web dashboard. "
    "Please contact the childcare center for information about your child."
)


@router.post("/login", response_model=Envelope[LoginResponse])
async def login(credentials: LoginRequest, db: AsyncSession = Depends(get_db)) -> dict[str, Any]:
    """Exchange username and password for an access token.

    FAMILY accounts are always refused, whatever their credentials.
    """
    result = await db.execute(select(User).where(User.username == credentials.username.strip()))
    user = result.scalar_one_or_none()

    if user is None or not verify_password(credentials.password, user.password_hash):
        logger.info(f"Failed login for {credentials.username!r}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials"
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account is inactive. Please contact administrator.",
        )

    if user.role == UserRole.FAMILY:
        logger.info(f"Refused dashboard login for family account {user.username}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=FAMILY_LOGIN_DENIED)

    token = create_access_token(
        Identity(user_id=user.id, username=user.username, role=user.role)
    )
    logger.info(f"User {user.username} logged in")

    return respond(data={"token": token, "user": user}, message="Login successful")


@router.get("/profile", response_model=Envelope[UserSchema])
async def get_profile(
    identity: Identity = Depends(require(Action.PROFILE_READ)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Return the signed-in user's account."""
    user = await db.get(User, identity.user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    return respond(data=user)


@router.put("/change-password", response_model=Envelope[None])
async def change_password(
    payload: PasswordChange,
    identity: Identity = Depends(require(Action.PASSWORD_CHANGE)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Replace the password after verifying the current one."""
    user = await db.get(User, identity.user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    if not verify_password(payload.old_password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect old password"
        )

    user.password_hash = hash_password(payload.new_password)
    await db.commit()

    logger.info(f"User {user.username} changed password")
    return respond(message="Password changed successfully")
