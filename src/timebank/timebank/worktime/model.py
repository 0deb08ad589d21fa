from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..punches.model import PunchEvent


@dataclass(frozen=True)
class ShiftPunches:
    """The punches located for one shift; any of them may be missing."""

    entry: Optional[PunchEvent] = None
    break_start: Optional[PunchEvent] = None
    break_end: Optional[PunchEvent] = None
    exit: Optional[PunchEvent] = None
