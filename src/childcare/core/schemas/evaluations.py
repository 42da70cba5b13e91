"""
Evaluation Schemas
"""

import datetime as dt
from uuid import UUID

from pydantic import Field, field_validator

from childcare.core.enums import EvaluationCategory
from childcare.core.validation import require_text, to_calendar_day

from .common import CamelModel


class EvaluationCreate(CamelModel):
    child_id: UUID
    category: EvaluationCategory
    observation: str = Field(..., min_length=1)
    recommendation: str | None = None
    attachments: list[str] = Field(default_factory=list)
    date: dt.date | None = Field(None, description="Defaults to today")

    @field_validator("date", mode="before")
    @classmethod
    def normalize_day(cls, v: object) -> dt.date | None:
        return None if v is None else to_calendar_day(v)

    @field_validator("observation")
    @classmethod
    def strip_observation(cls, v: str) -> str:
        return require_text(v, "Observation")


class EvaluationUpdate(CamelModel):
    category: EvaluationCategory | None = None
    observation: str | None = Field(None, min_length=1)
    recommendation: str | None = None
    attachments: list[str] | None = None

    @field_validator("observation")
    @classmethod
    def strip_observation(cls, v: str | None) -> str | None:
        return None if v is None else require_text(v, "Observation")


class EvaluationSchema(CamelModel):
    id: UUID
    child_id: UUID
    evaluator_id: UUID
    date: dt.date
    category: EvaluationCategory
    observation: str
    recommendation: str | None
    attachments: list[str]
    created_at: dt.datetime
    updated_at: dt.datetime
