from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_choice(value, choices, field_name: str):
    """Coerce ``value`` into one of the enum ``choices``."""
    try:
        return choices(value)
    except ValueError:
        raise ValidationError(f"Invalid {field_name}: {value!r}") from None


def optional_float(value, field_name: str) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None


def require_range(value: Optional[float], field_name: str, low: float, high: float) -> Optional[float]:
    if value is not None and not (low <= value <= high):
        raise ValidationError(f"{field_name} must be between {low:g} and {high:g}")
    return value


def require_date_order(start: date, end: date) -> None:
    if end < start:
        raise ValidationError("End date cannot be before start date")
