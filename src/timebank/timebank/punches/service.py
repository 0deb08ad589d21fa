from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Optional

from ..common.datetime_utils import as_instant, now_local
from ..common.validators import require_non_empty, require_punch_type
from ..core.enums import PunchType
from ..core.exceptions import NotFoundError, ValidationError
from ..users.repository import UserDirectory
from ..worktime.calculator.base import WorkedTimeCalculator
from ..worktime.calculator.timeline_calculator import TimelineWorkedTimeCalculator
from .model import AmendPunch, DayRecord, PunchCommand, PunchEvent, RegisterPunch
from .repository import DayRecordRepository
from .timeline import flatten_records, shift_date_for

logger = logging.getLogger(__name__)


def _new_punch_id() -> str:
    return uuid.uuid4().hex


class PunchService:
    """Registers and amends punches, one DayRecord upsert per command."""

    def __init__(
        self,
        records: DayRecordRepository,
        users: UserDirectory | None = None,
        *,
        calculator: WorkedTimeCalculator | None = None,
        id_factory: Callable[[], str] | None = None,
    ):
        self._records = records
        self._users = users
        self._calculator = calculator or TimelineWorkedTimeCalculator()
        self._new_id = id_factory or _new_punch_id

    def _require_user(self, user_id: int) -> None:
        if self._users is None:
            return
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError(f"User {user_id} does not exist")
        if not user.is_active:
            raise ValidationError(f"User {user_id} is inactive")

    def timeline(self, user_id: int) -> list[PunchEvent]:
        return flatten_records(self._records.list_for_user(int(user_id)))

    def worked_seconds(self, user_id: int, day: date) -> int:
        return self._calculator.worked_seconds(self.timeline(user_id), day)

    def apply(self, user_id: int, command: PunchCommand) -> PunchEvent:
        if isinstance(command, RegisterPunch):
            return self.register(
                user_id,
                command.punch_type,
                now=command.timestamp,
                attachment=command.attachment,
                observation=command.observation,
            )
        if isinstance(command, AmendPunch):
            return self.amend(
                user_id,
                command.punch_id,
                timestamp=command.timestamp,
                attachment=command.attachment,
                observation=command.observation,
            )
        raise ValidationError(f"Unsupported punch command: {type(command).__name__}")

    def register(
        self,
        user_id: int,
        punch_type: PunchType | str,
        *,
        now: datetime | None = None,
        attachment: Optional[str] = None,
        observation: Optional[str] = None,
    ) -> PunchEvent:
        """Record a punch for the shift it belongs to.

        If that shift already holds a punch of the same type, the most recent
        one is overwritten in place (same id) so each type stays unique.
        `attachment`/`observation` left as None keep the stored values, as in
        `amend`.
        """
        punch_type = require_punch_type(punch_type)
        timestamp = now or now_local()
        self._require_user(user_id)

        work_date = shift_date_for(self.timeline(user_id), punch_type, timestamp)
        record = self._records.get_for_user_and_date(int(user_id), work_date)
        punches = list(record.punches) if record else []

        same_type = [i for i, p in enumerate(punches) if p.punch_type == punch_type]
        if same_type:
            idx = max(same_type, key=lambda i: as_instant(punches[i].timestamp))
            existing = punches[idx]
            punch = replace(
                existing,
                timestamp=timestamp,
                attachment=attachment if attachment is not None else existing.attachment,
                observation=observation if observation is not None else existing.observation,
            )
            punches[idx] = punch
            logger.info("Replaced %s punch %s for user_id=%s shift=%s", punch_type.value, punch.punch_id, user_id, work_date)
        else:
            punch = PunchEvent(
                punch_id=self._new_id(),
                timestamp=timestamp,
                punch_type=punch_type,
                attachment=attachment,
                observation=observation,
            )
            punches.append(punch)
            logger.info("Registered %s punch %s for user_id=%s shift=%s", punch_type.value, punch.punch_id, user_id, work_date)

        self._records.upsert(DayRecord(user_id=int(user_id), work_date=work_date, punches=tuple(punches)))
        return punch

    def amend(
        self,
        user_id: int,
        punch_id: str,
        *,
        timestamp: datetime,
        attachment: Optional[str] = None,
        observation: Optional[str] = None,
    ) -> PunchEvent:
        """Move an existing punch to a new instant; its id and type never change.

        `attachment`/`observation` left as None keep the stored values.
        """
        punch_id = require_non_empty(punch_id, "punch_id")

        for record in self._records.list_for_user(int(user_id)):
            for idx, existing in enumerate(record.punches):
                if existing.punch_id != punch_id:
                    continue

                punch = replace(
                    existing,
                    timestamp=timestamp,
                    attachment=attachment if attachment is not None else existing.attachment,
                    observation=observation if observation is not None else existing.observation,
                )
                punches = list(record.punches)
                punches[idx] = punch
                self._records.upsert(replace(record, punches=tuple(punches)))
                logger.info("Amended punch %s for user_id=%s shift=%s", punch_id, user_id, record.work_date)
                return punch

        raise NotFoundError(f"Punch {punch_id} not found for user {user_id}")
