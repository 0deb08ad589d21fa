from __future__ import annotations

from datetime import date, datetime
from typing import Optional

import pytest

from src.timebank.timebank.punches.model import DayRecord


class InMemoryDayRecords:
    def __init__(self):
        self._by_user_date: dict[tuple[int, date], DayRecord] = {}
        self.upserts: list[DayRecord] = []

    def seed(self, *records: DayRecord) -> None:
        for r in records:
            self._by_user_date[(r.user_id, r.work_date)] = r

    def list_for_user(self, user_id: int):
        items = [r for r in self._by_user_date.values() if r.user_id == user_id]
        items.sort(key=lambda r: r.work_date)
        return items

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[DayRecord]:
        return self._by_user_date.get((user_id, work_date))

    def upsert(self, record: DayRecord) -> None:
        self._by_user_date[(record.user_id, record.work_date)] = record
        self.upserts.append(record)


@pytest.fixture
def fixed_now() -> datetime:
    # Monday
    return datetime(2026, 2, 2, 8, 0, 0)


@pytest.fixture
def records_repo() -> InMemoryDayRecords:
    return InMemoryDayRecords()
