"""
Evaluation API Endpoints

Developmental observations. Staff create them; only the original evaluator
or an ADMIN may change or delete one.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

import logging
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from childcare.api.params import parse_day_param
from childcare.core.auth import require
from childcare.core.database import get_db
from childcare.core.enums import EvaluationCategory, UserRole
from childcare.core.models import Child, Evaluation
from childcare.core.policy import Action
from childcare.core.schemas import (
    Envelope,
    EvaluationCreate,
    EvaluationSchema,
    EvaluationUpdate,
    respond,
    respond_list,
)
from childcare.core.security import Identity
from childcare.core.visibility import fetch_visible, visible

logger = logging.getLogger(__name__)

router = APIRouter()


def _ensure_author_or_admin(evaluation: Evaluation, identity: Identity) -> None:
    if evaluation.evaluator_id != identity.user_id and identity.role != UserRole.ADMIN:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")


@router.post(
    "/create", response_model=Envelope[EvaluationSchema], status_code=status.HTTP_201_CREATED
)
async def create_evaluation(
    evaluation_data: EvaluationCreate,
    identity: Identity = Depends(require(Action.EVALUATION_CREATE)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Record an observation; the caller becomes the evaluator."""
    await fetch_visible(
        db, Child, evaluation_data.child_id, identity, not_found="Child not found"
    )

    evaluation = Evaluation(
        child_id=evaluation_data.child_id,
        evaluator_id=identity.user_id,
        date=evaluation_data.date or datetime.now(UTC).date(),
        category=evaluation_data.category,
        observation=evaluation_data.observation,
        recommendation=evaluation_data.recommendation,
        attachments=evaluation_data.attachments,
    )
    db.add(evaluation)
    await db.commit()
    await db.refresh(evaluation)

    logger.info(
        f"{identity.username} recorded {evaluation.category.value} evaluation "
        f"for child {evaluation.child_id}"
    )
    return respond(data=evaluation, message="Evaluation created successfully")


@router.get("/all", response_model=Envelope[list[EvaluationSchema]])
async def list_evaluations(
    category: EvaluationCategory | None = Query(None),
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
    _: Identity = Depends(require(Action.EVALUATION_LIST_ALL)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    stmt = select(Evaluation)
    if category is not None:
        stmt = stmt.where(Evaluation.category == category)

    start = parse_day_param(start_date, "startDate")
    end = parse_day_param(end_date, "endDate")
    if start is not None:
        stmt = stmt.where(Evaluation.date >= start)
    if end is not None:
        stmt = stmt.where(Evaluation.date <= end)

    result = await db.execute(stmt.order_by(Evaluation.date.desc(), Evaluation.created_at.desc()))
    return respond_list(result.scalars().all())


@router.get("/child/{child_id}", response_model=Envelope[list[EvaluationSchema]])
async def list_evaluations_by_child(
    child_id: UUID,
    category: EvaluationCategory | None = Query(None),
    identity: Identity = Depends(require(Action.EVALUATION_LIST_BY_CHILD)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    await fetch_visible(db, Child, child_id, identity, not_found="Child not found")

    stmt = select(Evaluation).where(
        Evaluation.child_id == child_id, visible(Evaluation, identity)
    )
    if category is not None:
        stmt = stmt.where(Evaluation.category == category)

    result = await db.execute(stmt.order_by(Evaluation.date.desc(), Evaluation.created_at.desc()))
    return respond_list(result.scalars().all())


@router.get("/{evaluation_id}", response_model=Envelope[EvaluationSchema])
async def get_evaluation(
    evaluation_id: UUID,
    identity: Identity = Depends(require(Action.EVALUATION_READ)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    evaluation = await fetch_visible(
        db, Evaluation, evaluation_id, identity, not_found="Evaluation not found"
    )
    return respond(data=evaluation)


@router.put("/{evaluation_id}", response_model=Envelope[EvaluationSchema])
async def update_evaluation(
    evaluation_id: UUID,
    evaluation_update: EvaluationUpdate,
    identity: Identity = Depends(require(Action.EVALUATION_UPDATE)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Only updates fields that are explicitly provided."""
    evaluation = await fetch_visible(
        db, Evaluation, evaluation_id, identity, not_found="Evaluation not found"
    )
    _ensure_author_or_admin(evaluation, identity)

    update_data = evaluation_update.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        setattr(evaluation, field, value)

    await db.commit()
    await db.refresh(evaluation)

    return respond(data=evaluation, message="Evaluation updated successfully")


@router.delete("/{evaluation_id}", response_model=Envelope[None])
async def delete_evaluation(
    evaluation_id: UUID,
    identity: Identity = Depends(require(Action.EVALUATION_DELETE)),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    evaluation = await fetch_visible(
        db, Evaluation, evaluation_id, identity, not_found="Evaluation not found"
    )
    _ensure_author_or_admin(evaluation, identity)

    await db.delete(evaluation)
    await db.commit()

    logger.info(f"{identity.username} deleted evaluation {evaluation_id}")
    return respond(message="Evaluation deleted successfully")
