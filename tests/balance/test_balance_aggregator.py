from __future__ import annotations

from datetime import date, datetime

import pytest

from src.timebank.timebank.balance.model import DateRange
from src.timebank.timebank.balance.service import BalanceAggregator, parse_range
from src.timebank.timebank.core.enums import PunchType
from src.timebank.timebank.punches.model import DayRecord, PunchEvent

MON, TUE, WED, THU = (date(2026, 2, d) for d in (2, 3, 4, 5))


def _record(day: date, *items: tuple[str, PunchType]) -> DayRecord:
    punches = tuple(
        PunchEvent(
            punch_id=f"{day.isoformat()}-{i}",
            timestamp=datetime.fromisoformat(f"{day.isoformat()}T{hhmm}"),
            punch_type=t,
        )
        for i, (hhmm, t) in enumerate(items)
    )
    return DayRecord(user_id=1, work_date=day, punches=punches)


MONDAY_GOAL = _record(
    MON,
    ("09:00", PunchType.ENTRY),
    ("12:00", PunchType.BREAK_START),
    ("13:00", PunchType.BREAK_END),
    ("17:00", PunchType.EXIT),
)
TUESDAY_LONG = _record(TUE, ("09:00", PunchType.ENTRY), ("17:00", PunchType.EXIT))
THURSDAY_SHORT = _record(THU, ("09:00", PunchType.ENTRY), ("12:00", PunchType.BREAK_START))


@pytest.fixture
def seeded(records_repo):
    records_repo.seed(MONDAY_GOAL, TUESDAY_LONG, THURSDAY_SHORT)
    return records_repo


def test_week_totals_and_balance(seeded):
    agg = BalanceAggregator(seeded)

    result = agg.aggregate(1, DateRange(start=MON, end=date(2026, 2, 8)))

    assert result.total_worked_seconds == 25200 + 28800 + 10800
    assert result.active_days == 3
    assert result.balance_seconds == 64800 - 3 * 25200
    assert len(result.days) == 7


def test_balance_monotonicity(seeded):
    agg = BalanceAggregator(seeded)

    only_monday = agg.aggregate(1, DateRange(start=MON, end=MON)).balance_seconds
    with_overtime = agg.aggregate(1, DateRange(start=MON, end=TUE)).balance_seconds
    with_empty_day = agg.aggregate(1, DateRange(start=MON, end=WED)).balance_seconds
    with_shortfall = agg.aggregate(1, DateRange(start=MON, end=THU)).balance_seconds

    assert only_monday == 0
    assert with_overtime > only_monday
    assert with_empty_day == with_overtime
    assert with_shortfall < with_empty_day


def test_empty_day_is_not_penalized(seeded):
    agg = BalanceAggregator(seeded)

    result = agg.aggregate(1, DateRange(start=WED, end=WED))

    assert result.total_worked_seconds == 0
    assert result.balance_seconds == 0
    assert result.active_days == 0


def test_string_range_is_parsed(seeded):
    agg = BalanceAggregator(seeded)

    result = agg.aggregate(1, ("2026-02-02", "2026-02-03"))

    assert result.total_worked_seconds == 54000


@pytest.mark.parametrize(
    "bad_range",
    [
        ("not-a-date", "2026-02-03"),
        ("2026-02-05", "2026-02-02"),
        ("2026-02-02",),
        None,
        DateRange(start=THU, end=MON),
    ],
)
def test_invalid_range_gives_empty_result(seeded, bad_range):
    agg = BalanceAggregator(seeded)

    result = agg.aggregate(1, bad_range)

    assert result.days == ()
    assert result.total_worked_seconds == 0
    assert result.balance_seconds == 0


def test_daily_goal_is_a_parameter(seeded):
    agg = BalanceAggregator(seeded, daily_goal_seconds=8 * 3600)

    result = agg.aggregate(1, DateRange(start=MON, end=TUE))

    assert result.balance_seconds == 54000 - 2 * 8 * 3600


def test_overall_spans_all_recorded_days(seeded):
    agg = BalanceAggregator(seeded)

    result = agg.overall(1)

    assert result.days[0].work_date == MON
    assert result.days[-1].work_date == THU
    assert result.balance_seconds == -10800
    assert agg.overall(42).days == ()


def test_parse_range():
    assert parse_range(MON, TUE) == DateRange(start=MON, end=TUE)
    assert parse_range("2026-02-03", "2026-02-02") is None
    assert parse_range("", "2026-02-02") is None


def test_datetime_range_is_cut_to_dates(seeded):
    agg = BalanceAggregator(seeded)

    result = agg.aggregate(1, (datetime(2026, 2, 2, 18, 0), datetime(2026, 2, 3)))

    assert result.total_worked_seconds == 54000
    assert result.active_days == 2
    assert agg.aggregate(1, DateRange(start=datetime(2026, 2, 2), end=datetime(2026, 2, 2))).total_worked_seconds == 25200


def test_mixed_datetime_and_date_range(seeded):
    agg = BalanceAggregator(seeded)

    assert agg.aggregate(1, (datetime(2026, 2, 2), TUE)).total_worked_seconds == 54000
    assert agg.aggregate(1, (datetime(2026, 2, 5), MON)).days == ()
    assert parse_range(datetime(2026, 2, 3, 8, 0), MON) is None


def test_night_shift_counts_once_on_entry_day(records_repo):
    records_repo.seed(
        DayRecord(
            user_id=1,
            work_date=MON,
            punches=(
                PunchEvent("e", datetime(2026, 2, 2, 22, 0), PunchType.ENTRY),
                PunchEvent("x", datetime(2026, 2, 3, 6, 0), PunchType.EXIT),
            ),
        )
    )
    agg = BalanceAggregator(records_repo)

    result = agg.aggregate(1, DateRange(start=MON, end=TUE))

    assert result.total_worked_seconds == 28800
    assert result.active_days == 1
    assert [(d.work_date, d.worked_seconds, d.active) for d in result.days] == [
        (MON, 28800, True),
        (TUE, 0, False),
    ]
    assert result.balance_seconds == 28800 - 25200
