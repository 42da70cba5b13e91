"""
Authentication and Route Guard Dependencies

``get_current_identity`` turns a bearer token into an ``Identity``;
``require(action)`` adds the role check from the access policy. Both run as
FastAPI dependencies, so a rejected request never reaches the handler body.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from childcare.core.database import get_db
from childcare.core.models import User
from childcare.core.policy import Action, is_permitted
from childcare.core.security import Identity, InvalidTokenError, decode_access_token

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> Identity:
    """Verify the bearer token and the account's current active state."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access denied. No token provided.",
        )

    try:
        identity = decode_access_token(credentials.credentials)
    except InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token.",
        ) from None

    user = await db.get(User, identity.user_id)
    if user is None or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User no longer exists or is inactive.",
        )

    # Role changes take effect immediately, not at token expiry
    if user.role != identity.role:
        identity = Identity(user_id=user.id, username=user.username, role=user.role)

    return identity


def require(action: Action) -> Callable[..., Awaitable[Identity]]:
    """Build a dependency that admits only roles allowed to perform ``action``."""

    async def guard(identity: Identity = Depends(get_current_identity)) -> Identity:
        if not is_permitted(identity.role, action):
            logger.info(
                f"Denied {action.value} for {identity.username} ({identity.role.value})"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Access denied. Insufficient permissions.",
            )
        return identity

    return guard
