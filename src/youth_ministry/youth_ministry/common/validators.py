from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_int_range(value, field_name: str, *, minimum: int, maximum: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number")
    if number < minimum or number > maximum:
        raise ValidationError(f"{field_name} must be between {minimum} and {maximum}")
    return number


def require_grade(value) -> int:
    return require_int_range(value, "Grade", minimum=1, maximum=12)


def optional_str(value) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None
