from __future__ import annotations

from datetime import date, datetime
from typing import Sequence

from ...common.datetime_utils import as_instant
from ...core.enums import PunchType
from ...punches.model import PunchEvent
from ...punches.timeline import entry_indexes, find_entry_index
from ..model import ShiftPunches
from .base import WorkedTimeCalculator


def _seconds_between(start: datetime, end: datetime) -> int:
    return int((as_instant(end) - as_instant(start)).total_seconds())


def _shift_from(timeline: Sequence[PunchEvent], idx: int) -> ShiftPunches:
    break_start = break_end = exit_ = None
    for punch in timeline[idx + 1:]:
        if punch.punch_type == PunchType.ENTRY:
            break
        if break_start is None and punch.punch_type == PunchType.BREAK_START:
            break_start = punch
        if break_end is None and punch.punch_type == PunchType.BREAK_END:
            break_end = punch
        if punch.punch_type == PunchType.EXIT:
            exit_ = punch
            break

    return ShiftPunches(entry=timeline[idx], break_start=break_start, break_end=break_end, exit=exit_)


def locate_shift(timeline: Sequence[PunchEvent], day: date) -> ShiftPunches:
    """Find the ENTRY of `day` and the first break/exit punches after it.

    The scan stops at the next ENTRY (a new shift or an operator error) and
    right after the EXIT. Later duplicates of a type are ignored.
    """
    idx = find_entry_index(timeline, day)
    if idx is None:
        return ShiftPunches()
    return _shift_from(timeline, idx)


class TimelineWorkedTimeCalculator(WorkedTimeCalculator):
    """Worked time derived from the global timeline.

    Rule: (break_start - entry) + (exit - break_end); without a break,
    (exit - entry). Unmatched segments count 0 and the result is never
    negative.
    """

    def worked_seconds(self, timeline: Sequence[PunchEvent], day: date) -> int:
        return self.shift_seconds(locate_shift(timeline, day))

    def worked_by_day(self, timeline: Sequence[PunchEvent]) -> dict[date, int]:
        # Each scan ends at the next ENTRY, so the whole pass is linear.
        return {day: self.shift_seconds(_shift_from(timeline, idx)) for day, idx in entry_indexes(timeline).items()}

    def shift_seconds(self, shift: ShiftPunches) -> int:
        if shift.entry is None:
            return 0

        total = 0
        if shift.break_start is not None:
            total += _seconds_between(shift.entry.timestamp, shift.break_start.timestamp)
        elif shift.exit is not None:
            return max(_seconds_between(shift.entry.timestamp, shift.exit.timestamp), 0)

        if shift.break_end is not None and shift.exit is not None:
            total += _seconds_between(shift.break_end.timestamp, shift.exit.timestamp)

        return max(total, 0)
