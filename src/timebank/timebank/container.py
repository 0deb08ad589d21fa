from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .balance.service import BalanceAggregator
from .core.constants import DAILY_GOAL_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .punches.mysql_day_record_repository import MySQLDayRecordRepository
from .punches.repository import DayRecordRepository
from .punches.service import PunchService
from .reports.service import ReportService
from .users.mysql_user_repository import MySQLUserDirectory
from .users.repository import UserDirectory
from .worktime.calculator.timeline_calculator import TimelineWorkedTimeCalculator


@dataclass(frozen=True)
class Container:
    records_repo: DayRecordRepository
    users_repo: Optional[UserDirectory]

    punch_service: PunchService
    balance_aggregator: BalanceAggregator
    report_service: ReportService

    conn: Optional[DatabaseConnection] = None


def wire_services(
    records_repo: DayRecordRepository,
    users_repo: Optional[UserDirectory] = None,
    *,
    daily_goal_seconds: int = DAILY_GOAL_SECONDS,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    calculator = TimelineWorkedTimeCalculator()
    return Container(
        records_repo=records_repo,
        users_repo=users_repo,
        punch_service=PunchService(records_repo, users_repo, calculator=calculator),
        balance_aggregator=BalanceAggregator(records_repo, calculator=calculator, daily_goal_seconds=daily_goal_seconds),
        report_service=ReportService(records_repo, users_repo, calculator=calculator, daily_goal_seconds=daily_goal_seconds),
        conn=conn,
    )


def build_container(*, db_config: dict, daily_goal_seconds: int = DAILY_GOAL_SECONDS) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
    return wire_services(
        MySQLDayRecordRepository(conn),
        MySQLUserDirectory(conn),
        daily_goal_seconds=daily_goal_seconds,
        conn=conn,
    )
