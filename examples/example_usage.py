"""Example: worked time and balance straight from the service layer (no Flask, no MySQL)."""

from datetime import date, datetime

from src.timebank.timebank.balance.model import DateRange
from src.timebank.timebank.balance.service import aggregate_timeline
from src.timebank.timebank.common.formatting import format_seconds
from src.timebank.timebank.core.enums import PunchType
from src.timebank.timebank.punches.model import PunchEvent
from src.timebank.timebank.punches.timeline import flatten
from src.timebank.timebank.worktime.calculator.timeline_calculator import TimelineWorkedTimeCalculator


def main():
    punches = [
        PunchEvent("a1", datetime(2026, 3, 2, 9, 0), PunchType.ENTRY),
        PunchEvent("a2", datetime(2026, 3, 2, 12, 0), PunchType.BREAK_START),
        PunchEvent("a3", datetime(2026, 3, 2, 13, 0), PunchType.BREAK_END),
        PunchEvent("a4", datetime(2026, 3, 2, 18, 30), PunchType.EXIT),
        PunchEvent("b1", datetime(2026, 3, 3, 23, 30), PunchType.ENTRY),
        PunchEvent("b2", datetime(2026, 3, 4, 0, 30), PunchType.EXIT),
    ]

    calculator = TimelineWorkedTimeCalculator()
    summary = aggregate_timeline(
        flatten(punches),
        DateRange(start=date(2026, 3, 2), end=date(2026, 3, 8)),
        calculator=calculator,
    )
    for day in summary.days:
        print(day.work_date, format_seconds(day.worked_seconds))
    print("total", format_seconds(summary.total_worked_seconds), "balance", format_seconds(summary.balance_seconds))


if __name__ == "__main__":
    main()
