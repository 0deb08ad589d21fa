from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..balance.model import BalanceSummary
from ..balance.service import DateLike, aggregate_all, aggregate_timeline
from ..common.datetime_utils import now_local
from ..common.formatting import format_clock, format_seconds
from ..core.constants import DAILY_GOAL_SECONDS, DATE_FORMAT
from ..core.enums import PunchType, ReportPeriod
from ..punches.repository import DayRecordRepository
from ..punches.timeline import flatten_records, open_shift_date
from ..users.repository import UserDirectory
from ..worktime.calculator.base import WorkedTimeCalculator
from ..worktime.calculator.timeline_calculator import TimelineWorkedTimeCalculator, locate_shift
from .periods import resolve_period


@dataclass(frozen=True)
class ReportData:
    start: Optional[date]
    end: Optional[date]
    rows: list[dict]
    summary: dict


class ReportService:
    def __init__(
        self,
        records: DayRecordRepository,
        users: UserDirectory | None = None,
        *,
        calculator: WorkedTimeCalculator | None = None,
        daily_goal_seconds: int = DAILY_GOAL_SECONDS,
    ):
        self._records = records
        self._users = users
        self._calculator = calculator or TimelineWorkedTimeCalculator()
        self._daily_goal_seconds = int(daily_goal_seconds)

    def _summary(self, user_id: int, result: BalanceSummary) -> dict:
        user = self._users.get_by_id(int(user_id)) if self._users else None
        return {
            "user_id": int(user_id),
            "full_name": user.full_name if user else "-",
            "daily_goal": format_seconds(self._daily_goal_seconds),
            "total_worked": format_seconds(result.total_worked_seconds),
            "balance": format_seconds(result.balance_seconds),
            "total_worked_seconds": result.total_worked_seconds,
            "balance_seconds": result.balance_seconds,
            "active_days": result.active_days,
        }

    def build_report(
        self,
        user_id: int,
        *,
        period: ReportPeriod | str = ReportPeriod.DAY,
        anchor: date | None = None,
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
    ) -> ReportData:
        """Per-day punch table plus totals; an unusable range yields an empty report."""
        anchor = anchor or now_local().date()
        date_range = resolve_period(period, anchor, start=start, end=end)
        if date_range is None:
            return ReportData(start=None, end=None, rows=[], summary=self._summary(user_id, BalanceSummary()))

        timeline = flatten_records(self._records.list_for_user(int(user_id)))
        result = aggregate_timeline(
            timeline,
            date_range,
            calculator=self._calculator,
            daily_goal_seconds=self._daily_goal_seconds,
        )

        rows: list[dict] = []
        for day in result.days:
            shift = locate_shift(timeline, day.work_date)
            located = [p for p in (shift.entry, shift.break_start, shift.break_end, shift.exit) if p]
            rows.append(
                {
                    "work_date": day.work_date.strftime(DATE_FORMAT),
                    "entry": format_clock(shift.entry.timestamp if shift.entry else None),
                    "break_start": format_clock(shift.break_start.timestamp if shift.break_start else None),
                    "break_end": format_clock(shift.break_end.timestamp if shift.break_end else None),
                    "exit": format_clock(shift.exit.timestamp if shift.exit else None),
                    "worked_seconds": day.worked_seconds,
                    "worked_hours": format_seconds(day.worked_seconds),
                    "balance": format_seconds(day.balance_seconds),
                    "observations": "; ".join(p.observation for p in located if p.observation),
                    "has_attachment": any(p.attachment for p in located),
                }
            )

        return ReportData(start=date_range.start, end=date_range.end, rows=rows, summary=self._summary(user_id, result))

    def dashboard(self, user_id: int, *, now: datetime | None = None) -> dict:
        """Today's progress, the overall hour bank and the punches already done."""
        now = now or now_local()
        timeline = flatten_records(self._records.list_for_user(int(user_id)))
        shift_day = open_shift_date(timeline, now)
        shift = locate_shift(timeline, shift_day)
        worked = self._calculator.worked_seconds(timeline, shift_day)

        overall = aggregate_all(timeline, calculator=self._calculator, daily_goal_seconds=self._daily_goal_seconds)

        progress = 0
        if self._daily_goal_seconds > 0:
            progress = min(100, int(worked * 100 / self._daily_goal_seconds))

        done = {
            PunchType.ENTRY: shift.entry,
            PunchType.BREAK_START: shift.break_start,
            PunchType.BREAK_END: shift.break_end,
            PunchType.EXIT: shift.exit,
        }
        return {
            "shift_date": shift_day.strftime(DATE_FORMAT),
            "worked_seconds": worked,
            "worked": format_seconds(worked),
            "progress_percent": progress,
            "balance_seconds": overall.balance_seconds,
            "balance": format_seconds(overall.balance_seconds),
            "punches": {
                t.value: {"done": p is not None, "time": format_clock(p.timestamp if p else None), "id": p.punch_id if p else None}
                for t, p in done.items()
            },
        }
