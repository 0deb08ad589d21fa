from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Iterable, Mapping

from ..common.validators import optional_text, require_non_empty, require_punch_type
from ..core.exceptions import ValidationError
from .model import PunchEvent


def parse_timestamp(value: Any) -> datetime:
    """Accept a datetime or an ISO-8601 string (a trailing 'Z' is allowed).

    An offset, when present, is kept so the value stays an absolute instant.
    """
    if isinstance(value, datetime):
        return value
    text = str(value or "").strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Invalid timestamp: {value!r}")


def punch_to_dict(punch: PunchEvent) -> dict:
    return {
        "id": punch.punch_id,
        "timestamp": punch.timestamp.isoformat(),
        "type": punch.punch_type.value,
        "attachment": punch.attachment,
        "observation": punch.observation,
    }


def punch_from_dict(data: Mapping[str, Any]) -> PunchEvent:
    return PunchEvent(
        punch_id=require_non_empty(str(data.get("id") or ""), "id"),
        timestamp=parse_timestamp(data.get("timestamp")),
        punch_type=require_punch_type(data.get("type")),
        attachment=optional_text(data.get("attachment")),
        observation=optional_text(data.get("observation")),
    )


def dumps_punches(punches: Iterable[PunchEvent]) -> str:
    return json.dumps([punch_to_dict(p) for p in punches])


def loads_punches(raw: Any) -> tuple[PunchEvent, ...]:
    if raw is None:
        return ()
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    items = json.loads(raw) if isinstance(raw, str) else raw
    return tuple(punch_from_dict(item) for item in items or [])
