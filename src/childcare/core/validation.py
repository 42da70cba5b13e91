"""
Input validation functions for the childcare API.

All validation functions follow the pattern:
1. Accept raw user input (string, date, etc.)
2. Normalize/clean the input
3. Validate against business rules
4. Return cleaned value or raise ValidationError

They are used from Pydantic field validators, so ValidationError subclasses
ValueError and surfaces as a 400 response.
"""

import re
from datetime import date, datetime


class ValidationError(ValueError):
    """Raised when user input fails validation."""

    pass


# ============================================================================
# Phone Number Validation
# ============================================================================

PHONE_PATTERN = re.compile(r"^(\+251|0)[79]\d{8}$")


def validate_phone_number(phone: str | None) -> str:
    """
    Validate and normalize Ethiopian mobile numbers.

    Accepts:
    - +2519XXXXXXXX / +2517XXXXXXXX (international format)
    - 09XXXXXXXX / 07XXXXXXXX (local format)

    Normalizes to: +251XXXXXXXXX

    Raises:
        ValidationError: If phone number is invalid
    """
    if phone is None or phone.strip() == "":
        raise ValidationError("Phone number cannot be empty")

    cleaned = re.sub(r"[\s\-\(\)]", "", phone)

    if not PHONE_PATTERN.match(cleaned):
        raise ValidationError("Invalid phone number. Use format: +251912345678 or 0912345678")

    if cleaned.startswith("0"):
        cleaned = "+251" + cleaned[1:]

    return cleaned


# ============================================================================
# Email / Username Validation
# ============================================================================

EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.\-]+$")


def validate_email(email: str | None) -> str:
    """Trim, lowercase and sanity-check an email address."""
    if email is None or email.strip() == "":
        raise ValidationError("Email cannot be empty")

    cleaned = email.strip().lower()
    if not EMAIL_PATTERN.match(cleaned):
        raise ValidationError("Please provide a valid email")
    return cleaned


def validate_username(username: str | None) -> str:
    """Usernames are 3-30 characters of letters, digits, '.', '_' or '-'."""
    if username is None:
        raise ValidationError("Username cannot be empty")

    cleaned = username.strip()
    if not 3 <= len(cleaned) <= 30:
        raise ValidationError("Username must be between 3 and 30 characters")
    if not USERNAME_PATTERN.match(cleaned):
        raise ValidationError("Username may only contain letters, digits, '.', '_' and '-'")
    return cleaned


# ============================================================================
# Free Text
# ============================================================================


def require_text(value: str, field: str) -> str:
    """Strip surrounding whitespace; blank after stripping counts as missing."""
    cleaned = value.strip()
    if not cleaned:
        raise ValidationError(f"{field} is required")
    return cleaned


# ============================================================================
# Calendar Day Normalization
# ============================================================================


def to_calendar_day(value: object) -> date:
    """
    Reduce a date, datetime or ISO string to its calendar day.

    Attendance uniqueness and report periods compare days, so any
    time-of-day component is dropped here, before lookups and before storage.

    Examples:
        "2026-10-19"                -> date(2026, 10, 19)
        "2026-10-19T15:42:00Z"      -> date(2026, 10, 19)
        datetime(2026, 10, 19, 8)   -> date(2026, 10, 19)
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValidationError("Date cannot be empty")
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            raise ValidationError(f"Invalid date: {value}") from None
    raise ValidationError(f"Invalid date: {value!r}")


def validate_period(start: date, end: date) -> tuple[date, date]:
    """Ensure a [start, end] period is ordered."""
    if start > end:
        raise ValidationError("Start date must be on or before end date")
    return start, end
