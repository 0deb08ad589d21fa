from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import as_instant, local_date
from ..core.enums import PunchType
from .model import DayRecord, PunchEvent


def flatten(events: Iterable[PunchEvent]) -> list[PunchEvent]:
    """Order punches chronologically, keeping input order on equal timestamps."""
    return sorted(events, key=lambda p: as_instant(p.timestamp))


def flatten_records(records: Iterable[DayRecord]) -> list[PunchEvent]:
    return flatten(p for r in records for p in r.punches)


def entry_indexes(timeline: Sequence[PunchEvent]) -> dict[date, int]:
    """Index of the first ENTRY on each local calendar date."""
    indexes: dict[date, int] = {}
    for idx, punch in enumerate(timeline):
        if punch.punch_type == PunchType.ENTRY:
            indexes.setdefault(local_date(punch.timestamp), idx)
    return indexes


def find_entry_index(timeline: Sequence[PunchEvent], day: date) -> Optional[int]:
    """Index of the first ENTRY whose calendar date is `day`."""
    for idx, punch in enumerate(timeline):
        if punch.punch_type == PunchType.ENTRY and local_date(punch.timestamp) == day:
            return idx
    return None


def shift_date_for(timeline: Sequence[PunchEvent], punch_type: PunchType, timestamp: datetime) -> date:
    """Date of the shift a new punch belongs to.

    An ENTRY opens its own shift. Any other punch joins the latest ENTRY at or
    before it, which may be on the previous calendar day. With no earlier
    ENTRY the punch keeps its own date.
    """
    if punch_type == PunchType.ENTRY:
        return local_date(timestamp)

    at = as_instant(timestamp)
    owner: Optional[PunchEvent] = None
    for punch in timeline:
        if as_instant(punch.timestamp) > at:
            break
        if punch.punch_type == PunchType.ENTRY:
            owner = punch
    return local_date(owner.timestamp if owner else timestamp)


def open_shift_date(timeline: Sequence[PunchEvent], at: datetime) -> date:
    """Date of the shift still running at `at`, else the calendar date of `at`.

    A shift stops running once its EXIT is punched.
    """
    instant = as_instant(at)
    owner: Optional[PunchEvent] = None
    for punch in timeline:
        if as_instant(punch.timestamp) > instant:
            break
        if punch.punch_type == PunchType.ENTRY:
            owner = punch
        elif punch.punch_type == PunchType.EXIT:
            owner = None
    return local_date(owner.timestamp if owner else at)
