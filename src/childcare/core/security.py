"""
Password Hashing and Access Tokens

bcrypt hashing through passlib and HS256 JWTs through python-jose.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

from jose import JWTError, jwt
from passlib.context import CryptContext

from childcare.config import settings
from childcare.core.enums import UserRole

pwd_context = CryptContext(
    schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS
)


class InvalidTokenError(Exception):
    """Raised when a token is malformed, expired or carries a bad payload."""

    pass


@dataclass(frozen=True)
class Identity:
    """Decoded identity claim attached to every authenticated request."""

    user_id: UUID
    username: str
    role: UserRole


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def create_access_token(identity: Identity, expires_delta: timedelta | None = None) -> str:
    """Sign an identity claim ``{userId, username, role}`` with an expiry."""
    expire = datetime.now(UTC) + (expires_delta or timedelta(hours=settings.JWT_EXPIRE_HOURS))
    payload: dict[str, Any] = {
        "userId": str(identity.user_id),
        "username": identity.username,
        "role": identity.role.value,
        "exp": expire,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Identity:
    """Verify signature and expiry and rebuild the identity claim.

    Raises:
        InvalidTokenError: On any signature, expiry or payload problem
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
        return Identity(
            user_id=UUID(payload["userId"]),
            username=payload["username"],
            role=UserRole(payload["role"]),
        )
    except (JWTError, KeyError, ValueError, TypeError) as e:
        raise InvalidTokenError(str(e)) from e
