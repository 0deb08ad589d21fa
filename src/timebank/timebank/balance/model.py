from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from ..common.formatting import format_seconds
from ..core.constants import DATE_FORMAT


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date


@dataclass(frozen=True)
class DayBalance:
    work_date: date
    worked_seconds: int
    target_seconds: int

    @property
    def active(self) -> bool:
        return self.target_seconds > 0

    @property
    def balance_seconds(self) -> int:
        return self.worked_seconds - self.target_seconds


@dataclass(frozen=True)
class BalanceSummary:
    """Aggregate over a date range; overtime is positive, shortfall negative."""

    total_worked_seconds: int = 0
    balance_seconds: int = 0
    days: tuple[DayBalance, ...] = field(default_factory=tuple)

    @property
    def active_days(self) -> int:
        return sum(1 for d in self.days if d.active)

    def as_dict(self) -> dict:
        return {
            "total_worked_seconds": self.total_worked_seconds,
            "balance_seconds": self.balance_seconds,
            "total_worked": format_seconds(self.total_worked_seconds),
            "balance": format_seconds(self.balance_seconds),
            "active_days": self.active_days,
            "days": [
                {
                    "date": d.work_date.strftime(DATE_FORMAT),
                    "worked_seconds": d.worked_seconds,
                    "target_seconds": d.target_seconds,
                    "balance_seconds": d.balance_seconds,
                }
                for d in self.days
            ],
        }
