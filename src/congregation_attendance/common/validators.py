from __future__ import annotations

from typing import Any, Optional

from ..core.constants import PLACEHOLDER_VALUES
from ..core.exceptions import ValidationError


def _require_text(value: Any, field_name: str) -> None:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")


def require_non_empty(value: Any, field_name: str) -> str:
    _require_text(value, field_name)
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def to_null(value: Any, field_name: str = "Value") -> Optional[str]:
    """Trim a free-text field, mapping blank / "-" / "n/a" to None."""

    _require_text(value, field_name)
    if value is None:
        return None
    v = value.strip()
    if v.lower() in PLACEHOLDER_VALUES:
        return None
    return v


def require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be true or false")
    return value


def clamp_limit(value: Optional[int], *, default: int, maximum: int) -> int:
    if value is None:
        return default
    return max(1, min(maximum, int(value)))
