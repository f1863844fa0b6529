from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def optional_text(value: Optional[str]) -> Optional[str]:
    return (value or "").strip() or None


def require_positive_amount(value, field_name: str) -> float:
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if amount <= 0:
        raise ValidationError(f"{field_name} must be greater than 0")
    return amount


def require_month(year: int, month: int) -> tuple[int, int]:
    try:
        year, month = int(year), int(month)
    except (TypeError, ValueError):
        raise ValidationError("Year and month must be integers")
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month {month}")
    return year, month
