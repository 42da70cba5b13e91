"""
Pytest Configuration and Fixtures

Shared test fixtures for unit and API tests. Every test gets a fresh
in-memory SQLite database; nothing touches PostgreSQL.
"""

import os

# Settings are read at import time, so the environment must be in place first
os.environ["DATABASE_URL"] = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "local")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from collections.abc import Awaitable, Callable  # noqa: E402
from datetime import date  # noqa: E402
from typing import Any  # noqa: E402
from uuid import uuid4  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402
from sqlalchemy.orm import configure_mappers  # noqa: E402

from childcare.config import settings  # noqa: E402
from childcare.core.database import build_engine, get_db  # noqa: E402
from childcare.core.enums import ChildStatus, Gender, UserRole  # noqa: E402
from childcare.core.models import Base, Child, User  # noqa: E402
from childcare.core.security import Identity, create_access_token, hash_password  # noqa: E402
from childcare.main import app  # noqa: E402

# Ensure all mappers are configured
configure_mappers()

DEFAULT_PASSWORD = "password123"  # nosec B105 - test fixture credential


@pytest.fixture
async def async_engine():
    """Create async engine backed by a fresh in-memory database."""
    engine = build_engine(settings.DATABASE_URL)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(async_engine) -> AsyncSession:
    """Create database session for testing."""
    session_factory = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncClient:
    """Create test client with database dependency override."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# ============================================================================
# Users
# ============================================================================


@pytest.fixture
def make_user(db_session: AsyncSession) -> Callable[..., Awaitable[User]]:
    """Factory for persisted users; usernames are unique per call."""
    counter = {"n": 0}

    async def _make(
        role: UserRole,
        username: str | None = None,
        password: str = DEFAULT_PASSWORD,
        is_active: bool = True,
    ) -> User:
        counter["n"] += 1
        n = counter["n"]
        username = username or f"{role.value.lower()}{n}"
        user = User(
            username=username,
            email=f"{username}@example.com",
            password_hash=hash_password(password),
            full_name=f"{role.value.title()} {n}",
            role=role,
            phone_number=f"+25191100{n:04d}",
            is_active=is_active,
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _make


@pytest.fixture
async def admin_user(make_user) -> User:
    return await make_user(UserRole.ADMIN, username="admin")


@pytest.fixture
async def manager_user(make_user) -> User:
    return await make_user(UserRole.MANAGER, username="manager")


@pytest.fixture
async def guardian_user(make_user) -> User:
    return await make_user(UserRole.GUARDIAN, username="guardian")


@pytest.fixture
async def family_user(make_user) -> User:
    return await make_user(UserRole.FAMILY, username="family")


@pytest.fixture
async def other_family_user(make_user) -> User:
    return await make_user(UserRole.FAMILY, username="otherfamily")


@pytest.fixture
def auth_headers() -> Callable[[User], dict[str, str]]:
    """Build an Authorization header for a user without going through login."""

    def _headers(user: User) -> dict[str, str]:
        token = create_access_token(
            Identity(user_id=user.id, username=user.username, role=user.role)
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers


# ============================================================================
# Children
# ============================================================================


@pytest.fixture
def make_child(db_session: AsyncSession) -> Callable[..., Awaitable[Child]]:
    """Factory for persisted children."""

    async def _make(parent: User, guardian: User | None = None, **overrides: Any) -> Child:
        fields: dict[str, Any] = {
            "first_name": "Abebe",
            "last_name": "Kebede",
            "date_of_birth": date(2021, 3, 14),
            "gender": Gender.MALE,
            "registration_number": f"REG-{uuid4().hex[:8].upper()}",
            "parent_id": parent.id,
            "guardian_id": guardian.id if guardian else None,
            "emergency_contact": {
                "name": "Almaz Kebede",
                "relationship": "Aunt",
                "phone_number": "+251922000000",
            },
            "status": ChildStatus.ACTIVE,
        }
        fields.update(overrides)
        child = Child(**fields)
        db_session.add(child)
        await db_session.commit()
        await db_session.refresh(child)
        return child

    return _make


def child_payload(parent: User, guardian: User | None = None, **overrides: Any) -> dict[str, Any]:
    """Registration body in wire (camelCase) form."""
    payload: dict[str, Any] = {
        "firstName": "Liya",
        "lastName": "Tesfaye",
        "dateOfBirth": "2021-06-01",
        "gender": "FEMALE",
        "registrationNumber": "REG001",
        "parentId": str(parent.id),
        "emergencyContact": {
            "name": "Hana Tesfaye",
            "relationship": "Mother",
            "phoneNumber": "0912345678",
        },
    }
    if guardian is not None:
        payload["guardianId"] = str(guardian.id)
    payload.update(overrides)
    return payload


@pytest.fixture
def registration_payload() -> Callable[..., dict[str, Any]]:
    return child_payload
