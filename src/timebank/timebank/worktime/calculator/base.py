from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Sequence

from ...punches.model import PunchEvent
from ...punches.timeline import entry_indexes


class WorkedTimeCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked time)."""

    @abstractmethod
    def worked_seconds(self, timeline: Sequence[PunchEvent], day: date) -> int:
        """Seconds worked in the shift whose ENTRY falls on `day`.

        `timeline` is the user's full, chronologically ordered punch list.
        Implementations never raise for incomplete or contradictory punches.
        """

        raise NotImplementedError

    def worked_by_day(self, timeline: Sequence[PunchEvent]) -> dict[date, int]:
        """Worked seconds for every date that has an ENTRY."""
        return {day: self.worked_seconds(timeline, day) for day in entry_indexes(timeline)}
