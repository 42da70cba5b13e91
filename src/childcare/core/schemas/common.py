"""
Shared Schema Pieces

The response envelope every endpoint returns, and the camelCase base model.
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case accepted on input."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class Envelope(BaseModel, Generic[T]):
    """``{success, message?, data?, count?}``"""

    success: bool = True
    message: str | None = None
    data: T | None = None
    count: int | None = None


def respond(
    data: Any = None, message: str | None = None, count: int | None = None
) -> dict[str, Any]:
    """Build a success envelope; FastAPI validates it against ``response_model``."""
    return {"success": True, "message": message, "data": data, "count": count}


def respond_list(items: Any, message: str | None = None) -> dict[str, Any]:
    items = list(items)
    return respond(data=items, message=message, count=len(items))
