from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_int(value: Optional[str], field_name: str) -> int:
    text = require_non_empty(value, field_name)
    try:
        return int(text)
    except ValueError:
        raise ValidationError(f"{field_name} must be a whole number") from None
