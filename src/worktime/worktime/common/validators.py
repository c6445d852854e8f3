from __future__ import annotations

from ..core.constants import MAX_WORK_MINUTES_PER_DAY
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_work_minutes(value: int) -> int:
    if value > MAX_WORK_MINUTES_PER_DAY:
        raise ValidationError(
            f"work hours cannot exceed {MAX_WORK_MINUTES_PER_DAY} minutes (24 hours)"
        )
    return value


_TRUE_STRINGS = {"true", "1", "yes", "on"}
_FALSE_STRINGS = {"false", "0", "no", "off", ""}


def parse_bool(value: object, field_name: str, *, default: bool = False) -> bool:
    """JSON booleans, 0/1, or the usual string spellings ("false" is False)."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise ValidationError(f"{field_name} must be a boolean")
