from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Union

from ..core.enums import PunchType


@dataclass(frozen=True)
class PunchEvent:
    """Domain entity: a single timestamped punch.

    `timestamp` may carry an offset; a naive value is local wall-clock time.
    `attachment` and `observation` are carried along for the caller and never
    interpreted by the worked-time computation.
    """

    punch_id: str
    timestamp: datetime
    punch_type: PunchType
    attachment: Optional[str] = None
    observation: Optional[str] = None


@dataclass(frozen=True)
class DayRecord:
    """Punches of one shift, keyed by (user_id, date of the ENTRY punch).

    A derived view and the unit of persistence; computations always work on
    the flattened timeline of every record of the user.
    """

    user_id: int
    work_date: date
    punches: tuple[PunchEvent, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RegisterPunch:
    """Record a new punch; without a timestamp the current local time is used."""

    punch_type: PunchType
    timestamp: Optional[datetime] = None
    attachment: Optional[str] = None
    observation: Optional[str] = None


@dataclass(frozen=True)
class AmendPunch:
    """Move an existing punch (by id) to a new instant."""

    punch_id: str
    timestamp: datetime
    attachment: Optional[str] = None
    observation: Optional[str] = None


PunchCommand = Union[RegisterPunch, AmendPunch]
