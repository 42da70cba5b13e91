#!/usr/bin/env python3
"""
Seed Admin: create the first ADMIN account

Accounts can only be created by an ADMIN through the API, so a fresh
database needs one bootstrapped here. Running it again is a no-op when the
username already exists.

Usage:
    python scripts/seed_admin.py                       # Use SEED_ADMIN_* settings
    python scripts/seed_admin.py --create-tables       # Also create tables (dev only)
    python scripts/seed_admin.py --username=root --password=s3cret
"""

import argparse
import asyncio
import sys
from pathlib import Path

from sqlalchemy import or_, select

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from childcare.config import settings
from childcare.core.database import AsyncSessionLocal, close_db, init_db
from childcare.core.enums import UserRole
from childcare.core.models import User
from childcare.core.security import hash_password
from childcare.core.validation import (
    ValidationError,
    validate_email,
    validate_phone_number,
    validate_username,
)


async def seed_admin(
    username: str, email: str, password: str, full_name: str, phone_number: str
) -> bool:
    """Insert the ADMIN account unless the username or email is taken.

    Returns:
        True when a new account was created
    """
    async with AsyncSessionLocal() as session:
        result = await session.execute(
            select(User).where(or_(User.username == username, User.email == email))
        )
        existing = result.scalars().first()
        if existing is not None:
            print(f"⏭️  User '{existing.username}' already exists ({existing.role.value}), skipping")
            return False

        session.add(
            User(
                username=username,
                email=email,
                password_hash=hash_password(password),
                full_name=full_name,
                role=UserRole.ADMIN,
                phone_number=phone_number,
                is_active=True,
            )
        )
        await session.commit()

    print(f"✅ Created ADMIN '{username}'")
    return True


async def main() -> int:
    parser = argparse.ArgumentParser(description="Create the initial ADMIN account")
    parser.add_argument("--username", default=settings.SEED_ADMIN_USERNAME)
    parser.add_argument("--email", default=settings.SEED_ADMIN_EMAIL)
    parser.add_argument("--password", default=settings.SEED_ADMIN_PASSWORD)
    parser.add_argument("--full-name", default=settings.SEED_ADMIN_FULL_NAME)
    parser.add_argument("--phone", default=settings.SEED_ADMIN_PHONE)
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create tables with metadata.create_all first (use Alembic in production)",
    )
    args = parser.parse_args()

    try:
        username = validate_username(args.username)
        email = validate_email(args.email)
        phone_number = validate_phone_number(args.phone)
    except ValidationError as e:
        print(f"❌ {e}")
        return 1

    if len(args.password) < 6:
        print("❌ Password must be at least 6 characters")
        return 1

    try:
        if args.create_tables:
            await init_db()
            print("✅ Database tables created/verified")

        await seed_admin(username, email, args.password, args.full_name, phone_number)
    finally:
        await close_db()

    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
