from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def parse_rate(value: Any, field_name: str = "Payment rate") -> float:
    """Parse a form/JSON rate value into a number, rejecting garbage."""
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        rate = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    return int(rate) if rate.is_integer() else rate


def rate_error(rate: Optional[float]) -> Optional[str]:
    """Message for a non-positive payment rate, ``None`` when the rate is fine."""
    if rate is None or rate <= 0:
        return "Payment rate must be greater than 0"
    return None
