"""
Child API Endpoints

Registration and maintenance of enrolled children. Every read is narrowed by
the caller's visibility: families see their own children, guardians the
children assigned to them.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from childcare.core.auth import require
from childcare.core.database import get_db
from childcare.core.enums import ChildStatus, UserRole
from childcare.core.models import Child, User
from childcare.core.policy import Action
from childcare.core.schemas import (
    ChildCreate,
    ChildSchema,
    ChildUpdate,
    Envelope,
    respond,
    respond_list,
)
from childcare.core.security import Identity
from childcare.core.visibility import ensure_visible, fetch_visible, visible

logger = logging.getLogger(__name__)

router = APIRouter()

GUARDIAN_ROLES = (UserRole.GUARDIAN, UserRole.MANAGER)

# Fields a FAMILY member may not change on their own child
STAFF_ONLY_FIELDS = frozenset({"guardian_id", "status"})


async def _validate_parent(db: AsyncSession, parent_id: UUID) -> None:
    parent = await db.get(User, parent_id)
    if parent is None or parent.role != UserRole.FAMILY:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid parent ID")


async def _validate_guardian(db: AsyncSession, guardian_id: UUID) -> None:
    guardian = await db.get(User, guardian_id)
    if guardian is None or guardian.role not in GUARDIAN_ROLES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid guardian ID")


@router.post(
    "/register", response_model=Envelope[ChildSchema], status_code=status.HTTP_201_CREATED
)
async def register_child(
    child_data: ChildCreate,
    identity: Identity = Depends(require(Action.CHILD_REGISTER)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Register a child under a FAMILY account.

    Registration numbers are unique; a duplicate is rejected and the
    existing child is left untouched.
    """
    await _validate_parent(db, child_data.parent_id)
    if child_data.guardian_id is not None:
        await _validate_guardian(db, child_data.guardian_id)

    result = await db.execute(
        select(Child.id).where(Child.registration_number == child_data.registration_number)
    )
    if result.scalar_one_or_none() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="Registration number already exists"
        )

    child = Child(
        first_name=child_data.first_name,
        last_name=child_data.last_name,
        date_of_birth=child_data.date_of_birth,
        gender=child_data.gender,
        registration_number=child_data.registration_number,
        parent_id=child_data.parent_id,
        guardian_id=child_data.guardian_id,
        emergency_contact=child_data.emergency_contact.model_dump(),
        medical_info=child_data.medical_info.model_dump() if child_data.medical_info else None,
        status=ChildStatus.ACTIVE,
    )
    db.add(child)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="Registration number already exists"
        ) from None
    await db.refresh(child)

    logger.info(f"{identity.username} registered child {child.registration_number}")
    return respond(data=child, message="Child registered successfully")


@router.get("/all", response_model=Envelope[list[ChildSchema]])
async def list_all_children(
    status_filter: ChildStatus | None = Query(None, alias="status"),
    identity: Identity = Depends(require(Action.CHILD_LIST_ALL)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """List children visible to the caller, newest first."""
    stmt = select(Child).where(visible(Child, identity))
    if status_filter is not None:
        stmt = stmt.where(Child.status == status_filter)

    result = await db.execute(stmt.order_by(Child.created_at.desc()))
    return respond_list(result.scalars().all())


@router.get("/my-children", response_model=Envelope[list[ChildSchema]])
async def list_my_children(
    identity: Identity = Depends(require(Action.CHILD_LIST_MINE)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Children the caller is related to (everything for MANAGER/ADMIN)."""
    result = await db.execute(
        select(Child).where(visible(Child, identity)).order_by(Child.created_at.desc())
    )
    return respond_list(result.scalars().all())


@router.get("/registration/{registration_number}", response_model=Envelope[ChildSchema])
async def get_child_by_registration_number(
    registration_number: str,
    identity: Identity = Depends(require(Action.CHILD_READ)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    result = await db.execute(
        select(Child).where(Child.registration_number == registration_number.strip())
    )
    child = result.scalar_one_or_none()
    if child is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Child not found")

    await ensure_visible(db, Child, child, identity)
    return respond(data=child)


@router.get("/{child_id}", response_model=Envelope[ChildSchema])
async def get_child(
    child_id: UUID,
    identity: Identity = Depends(require(Action.CHILD_READ)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    child = await fetch_visible(db, Child, child_id, identity, not_found="Child not found")
    return respond(data=child)


@router.put("/{child_id}", response_model=Envelope[ChildSchema])
async def update_child(
    child_id: UUID,
    child_update: ChildUpdate,
    identity: Identity = Depends(require(Action.CHILD_UPDATE)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Update child details. Only updates fields that are explicitly provided.

    A FAMILY member may edit only their own child and cannot reassign the
    guardian or change enrollment status.
    """
    child = await fetch_visible(db, Child, child_id, identity, not_found="Child not found")

    update_data = child_update.model_dump(exclude_unset=True, exclude_none=True)

    if identity.role == UserRole.FAMILY and STAFF_ONLY_FIELDS & update_data.keys():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")

    if "guardian_id" in update_data:
        await _validate_guardian(db, update_data["guardian_id"])

    for field, value in update_data.items():
        setattr(child, field, value)

    await db.commit()
    await db.refresh(child)

    logger.info(f"{identity.username} updated child {child.registration_number}")
    return respond(data=child, message="Child updated successfully")


@router.put("/{child_id}/delete", response_model=Envelope[ChildSchema])
async def deactivate_child(
    child_id: UUID,
    identity: Identity = Depends(require(Action.CHILD_DEACTIVATE)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Soft delete: the child becomes INACTIVE but stays retrievable by id."""
    child = await fetch_visible(db, Child, child_id, identity, not_found="Child not found")

    child.status = ChildStatus.INACTIVE
    await db.commit()
    await db.refresh(child)

    logger.info(f"{identity.username} deactivated child {child.registration_number}")
    return respond(data=child, message="Child deactivated successfully")
