from __future__ import annotations

import math
from typing import Any, Optional

from ..core.exceptions import ValidationError
from .datetime_utils import is_month


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_amount(value: Any, field_name: str, *, default: Optional[float] = None) -> float:
    """Parse a money amount; blank falls back to ``default`` when given."""
    if value is None or (isinstance(value, str) and not value.strip()):
        if default is None:
            raise ValidationError(f"{field_name} is required")
        return default
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not math.isfinite(amount):
        raise ValidationError(f"{field_name} must be a finite number")
    if amount < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return amount


def require_month(value: str, field_name: str = "month") -> str:
    if not is_month(value or ""):
        raise ValidationError(f"{field_name} must be formatted YYYY-MM")
    return value
