from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence, Union

from ..common.datetime_utils import iter_dates, local_date, parse_iso_date, to_date
from ..core.constants import DAILY_GOAL_SECONDS
from ..punches.model import PunchEvent
from ..punches.repository import DayRecordRepository
from ..punches.timeline import flatten_records
from ..worktime.calculator.base import WorkedTimeCalculator
from ..worktime.calculator.timeline_calculator import TimelineWorkedTimeCalculator
from .model import BalanceSummary, DateRange, DayBalance

logger = logging.getLogger(__name__)

DateLike = Union[date, str]


def _as_date(value: DateLike) -> date:
    if isinstance(value, date):
        return to_date(value)
    return parse_iso_date(str(value).strip())


def parse_range(start: DateLike, end: DateLike) -> Optional[DateRange]:
    """Build an inclusive range, or None when it cannot be parsed or is reversed.

    Datetimes are cut down to their date.
    """
    try:
        start_d = _as_date(start)
        end_d = _as_date(end)
        if start_d > end_d:
            return None
    except (TypeError, ValueError):
        return None
    return DateRange(start=start_d, end=end_d)


def aggregate_timeline(
    timeline: Sequence[PunchEvent],
    date_range: DateRange,
    *,
    calculator: WorkedTimeCalculator,
    daily_goal_seconds: int = DAILY_GOAL_SECONDS,
) -> BalanceSummary:
    """Sum worked time per date; only days with an ENTRY count toward the target."""
    worked_by_day = calculator.worked_by_day(timeline)
    days: list[DayBalance] = []
    for day in iter_dates(date_range.start, date_range.end):
        worked = worked_by_day.get(day, 0)
        target = int(daily_goal_seconds) if day in worked_by_day else 0
        days.append(DayBalance(work_date=day, worked_seconds=worked, target_seconds=target))

    total = sum(d.worked_seconds for d in days)
    target_total = sum(d.target_seconds for d in days)
    return BalanceSummary(total_worked_seconds=total, balance_seconds=total - target_total, days=tuple(days))


def aggregate_all(
    timeline: Sequence[PunchEvent],
    *,
    calculator: WorkedTimeCalculator,
    daily_goal_seconds: int = DAILY_GOAL_SECONDS,
) -> BalanceSummary:
    """Balance over every date spanned by the timeline."""
    if not timeline:
        return BalanceSummary()
    date_range = DateRange(start=local_date(timeline[0].timestamp), end=local_date(timeline[-1].timestamp))
    return aggregate_timeline(timeline, date_range, calculator=calculator, daily_goal_seconds=daily_goal_seconds)


class BalanceAggregator:
    def __init__(
        self,
        records: DayRecordRepository,
        *,
        calculator: WorkedTimeCalculator | None = None,
        daily_goal_seconds: int = DAILY_GOAL_SECONDS,
    ):
        self._records = records
        self._calculator = calculator or TimelineWorkedTimeCalculator()
        self._daily_goal_seconds = int(daily_goal_seconds)

    @property
    def daily_goal_seconds(self) -> int:
        return self._daily_goal_seconds

    def aggregate(self, user_id: int, date_range: DateRange | tuple[DateLike, DateLike]) -> BalanceSummary:
        try:
            if isinstance(date_range, DateRange):
                start, end = date_range.start, date_range.end
            else:
                start, end = date_range
        except (TypeError, ValueError):
            start = end = None
        parsed = parse_range(start, end)
        if parsed is None:
            logger.warning("Unusable date range %r for user_id=%s", date_range, user_id)
            return BalanceSummary()

        timeline = flatten_records(self._records.list_for_user(int(user_id)))
        return aggregate_timeline(
            timeline,
            parsed,
            calculator=self._calculator,
            daily_goal_seconds=self._daily_goal_seconds,
        )

    def overall(self, user_id: int) -> BalanceSummary:
        """Balance over every day the user has punches for."""
        timeline = flatten_records(self._records.list_for_user(int(user_id)))
        return aggregate_all(
            timeline,
            calculator=self._calculator,
            daily_goal_seconds=self._daily_goal_seconds,
        )
