from __future__ import annotations

from ..core.enums import PunchType
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_punch_type(value: object) -> PunchType:
    if isinstance(value, PunchType):
        return value
    try:
        return PunchType(str(value or "").strip().upper())
    except ValueError:
        raise ValidationError(f"Unknown punch type: {value!r}")


def optional_text(value: object) -> str | None:
    text = str(value).strip() if value is not None else ""
    return text or None
