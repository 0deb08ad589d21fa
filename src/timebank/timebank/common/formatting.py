from __future__ import annotations

from datetime import datetime
from typing import Optional

from .datetime_utils import as_local
from ..core.constants import MISSING_TIME, TIME_FORMAT


def format_seconds(seconds: int) -> str:
    """Render seconds as [-]HH:MM:SS.

    The sign is shown only for negative values and the hours field is not
    wrapped at 24.
    """
    seconds = int(seconds)
    sign = "-" if seconds < 0 else ""
    total = abs(seconds)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{sign}{hours:02d}:{minutes:02d}:{secs:02d}"


def format_clock(value: Optional[datetime]) -> str:
    return as_local(value).strftime(TIME_FORMAT) if value else MISSING_TIME
