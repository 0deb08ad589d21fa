from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import DayRecord


class DayRecordRepository(Protocol):
    """Durable store of a user's punches, one row per (user_id, work_date).

    The service layer depends on this interface only; the store owns
    concurrency control of upserts.
    """

    def list_for_user(self, user_id: int) -> Sequence[DayRecord]:
        raise NotImplementedError

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[DayRecord]:
        raise NotImplementedError

    def upsert(self, record: DayRecord) -> None:
        """Idempotent create-or-replace keyed by (user_id, work_date)."""

        raise NotImplementedError
