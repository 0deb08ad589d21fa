from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .codec import dumps_punches, loads_punches
from .model import DayRecord
from .repository import DayRecordRepository

logger = logging.getLogger(__name__)


class MySQLDayRecordRepository(DayRecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_record(r: dict) -> DayRecord:
        return DayRecord(
            user_id=int(r["user_id"]),
            work_date=r["work_date"],
            punches=loads_punches(r.get("punches")),
        )

    def list_for_user(self, user_id: int) -> Sequence[DayRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, work_date, punches
                FROM day_records
                WHERE user_id=%s
                ORDER BY work_date ASC
                """,
                (int(user_id),),
            )
            return [self._to_record(r) for r in fetchall(cur)]

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[DayRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, work_date, punches
                FROM day_records
                WHERE user_id=%s AND work_date=%s
                """,
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            if not r:
                return None
            return self._to_record(r)

    def upsert(self, record: DayRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO day_records(user_id, work_date, punches)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE punches=VALUES(punches)
                """,
                (int(record.user_id), record.work_date, dumps_punches(record.punches)),
            )
        logger.debug("Upserted day record user_id=%s work_date=%s punches=%d", record.user_id, record.work_date, len(record.punches))
