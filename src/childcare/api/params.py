"""
Query Parameter Helpers
"""

from datetime import date

from fastapi import HTTPException, status

from childcare.core.validation import ValidationError, to_calendar_day


def parse_day_param(value: str | None, name: str) -> date | None:
    """Parse an optional date query parameter, 400 on garbage."""
    if value is None:
        return None
    try:
        return to_calendar_day(value)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid {name}: {e}"
        ) from None
