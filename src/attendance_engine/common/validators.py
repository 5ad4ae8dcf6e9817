from __future__ import annotations

from ..core.exceptions import ConfigurationError, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} must not be empty")
    return str(value).strip()


def require_non_negative(value: int, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{field_name} must be an integer, got {value!r}") from e
    if number < 0:
        raise ConfigurationError(f"{field_name} must be >= 0, got {number}")
    return number
