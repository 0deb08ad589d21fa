from datetime import date, datetime, timedelta, timezone

import pytest

from src.timebank.timebank.common.datetime_utils import local_date
from src.timebank.timebank.core.enums import PunchType
from src.timebank.timebank.punches.model import PunchEvent
from src.timebank.timebank.punches.timeline import flatten
from src.timebank.timebank.worktime.calculator.timeline_calculator import (
    TimelineWorkedTimeCalculator,
    locate_shift,
)

MONDAY = date(2026, 2, 2)


def _timeline(*items: tuple[str, PunchType]):
    return flatten(
        PunchEvent(punch_id=f"p{i}", timestamp=datetime.fromisoformat(ts), punch_type=t)
        for i, (ts, t) in enumerate(items)
    )


@pytest.fixture
def calc():
    return TimelineWorkedTimeCalculator()


def test_day_without_entry_is_zero(calc):
    timeline = _timeline(
        ("2026-02-02T12:00", PunchType.BREAK_START),
        ("2026-02-02T13:00", PunchType.BREAK_END),
        ("2026-02-02T17:00", PunchType.EXIT),
    )

    assert calc.worked_seconds(timeline, MONDAY) == 0
    assert calc.worked_seconds([], MONDAY) == 0


def test_full_day_with_break_matches_daily_goal(calc):
    timeline = _timeline(
        ("2026-02-02T09:00", PunchType.ENTRY),
        ("2026-02-02T12:00", PunchType.BREAK_START),
        ("2026-02-02T13:00", PunchType.BREAK_END),
        ("2026-02-02T17:00", PunchType.EXIT),
    )

    assert calc.worked_seconds(timeline, MONDAY) == 7 * 3600


def test_break_is_subtracted_from_long_day(calc):
    timeline = _timeline(
        ("2026-02-02T09:00", PunchType.ENTRY),
        ("2026-02-02T12:00", PunchType.BREAK_START),
        ("2026-02-02T13:00", PunchType.BREAK_END),
        ("2026-02-02T18:00", PunchType.EXIT),
    )

    assert calc.worked_seconds(timeline, MONDAY) == 8 * 3600


def test_continuous_shift_without_break(calc):
    timeline = _timeline(
        ("2026-02-02T09:00", PunchType.ENTRY),
        ("2026-02-02T17:00", PunchType.EXIT),
    )

    assert calc.worked_seconds(timeline, MONDAY) == 28800


def test_open_break_counts_only_first_segment(calc):
    timeline = _timeline(
        ("2026-02-02T09:00", PunchType.ENTRY),
        ("2026-02-02T12:00", PunchType.BREAK_START),
    )

    assert calc.worked_seconds(timeline, MONDAY) == 10800


def test_exit_without_break_end_ignores_afternoon(calc):
    timeline = _timeline(
        ("2026-02-02T09:00", PunchType.ENTRY),
        ("2026-02-02T12:00", PunchType.BREAK_START),
        ("2026-02-02T17:00", PunchType.EXIT),
    )

    assert calc.worked_seconds(timeline, MONDAY) == 10800


def test_entry_only_is_zero(calc):
    timeline = _timeline(("2026-02-02T09:00", PunchType.ENTRY))

    assert calc.worked_seconds(timeline, MONDAY) == 0


def test_cross_midnight_shift_belongs_to_entry_day(calc):
    timeline = _timeline(
        ("2026-02-02T23:30", PunchType.ENTRY),
        ("2026-02-03T00:30", PunchType.EXIT),
    )

    assert calc.worked_seconds(timeline, MONDAY) == 3600
    assert calc.worked_seconds(timeline, date(2026, 2, 3)) == 0


def test_scan_stops_at_next_entry(calc):
    timeline = _timeline(
        ("2026-02-02T09:00", PunchType.ENTRY),
        ("2026-02-02T12:00", PunchType.BREAK_START),
        ("2026-02-03T09:00", PunchType.ENTRY),
        ("2026-02-03T10:00", PunchType.BREAK_END),
        ("2026-02-03T17:00", PunchType.EXIT),
    )

    assert calc.worked_seconds(timeline, MONDAY) == 3 * 3600
    # Tuesday: no BREAK_START, so the continuous rule applies.
    assert calc.worked_seconds(timeline, date(2026, 2, 3)) == 8 * 3600


def test_first_duplicate_after_entry_wins(calc):
    timeline = _timeline(
        ("2026-02-02T09:00", PunchType.ENTRY),
        ("2026-02-02T12:00", PunchType.BREAK_START),
        ("2026-02-02T12:30", PunchType.BREAK_START),
        ("2026-02-02T13:00", PunchType.BREAK_END),
        ("2026-02-02T17:00", PunchType.EXIT),
        ("2026-02-02T19:00", PunchType.EXIT),
    )

    assert calc.worked_seconds(timeline, MONDAY) == 3 * 3600 + 4 * 3600


def test_only_first_entry_of_the_day_counts(calc):
    timeline = _timeline(
        ("2026-02-02T08:00", PunchType.ENTRY),
        ("2026-02-02T09:00", PunchType.ENTRY),
        ("2026-02-02T17:00", PunchType.EXIT),
    )

    # The second ENTRY ends the scan of the first one.
    assert calc.worked_seconds(timeline, MONDAY) == 0


def test_out_of_order_input_is_sorted_before_scan(calc):
    timeline = _timeline(
        ("2026-02-02T09:00", PunchType.ENTRY),
        ("2026-02-02T10:00", PunchType.BREAK_END),
        ("2026-02-02T09:30", PunchType.EXIT),
    )

    # Sorted: ENTRY 09:00, EXIT 09:30 -> scan stops at EXIT before BREAK_END.
    assert calc.worked_seconds(timeline, MONDAY) == 1800


def test_zero_length_afternoon_segment(calc):
    timeline = _timeline(
        ("2026-02-02T09:00", PunchType.ENTRY),
        ("2026-02-02T09:10", PunchType.BREAK_START),
        ("2026-02-02T09:20", PunchType.BREAK_END),
        ("2026-02-02T09:20", PunchType.EXIT),
    )

    assert calc.worked_seconds(timeline, MONDAY) == 600


def test_fractional_seconds_are_truncated(calc):
    timeline = flatten(
        [
            PunchEvent("e", datetime(2026, 2, 2, 9, 0, 0), PunchType.ENTRY),
            PunchEvent("x", datetime(2026, 2, 2, 9, 0, 1, 900000), PunchType.EXIT),
        ]
    )

    assert calc.worked_seconds(timeline, MONDAY) == 1


def test_repeated_calls_are_stable(calc):
    timeline = _timeline(
        ("2026-02-02T09:00", PunchType.ENTRY),
        ("2026-02-02T12:00", PunchType.BREAK_START),
        ("2026-02-02T13:00", PunchType.BREAK_END),
        ("2026-02-02T17:00", PunchType.EXIT),
    )

    assert calc.worked_seconds(timeline, MONDAY) == calc.worked_seconds(timeline, MONDAY)


def test_locate_shift_returns_found_punches():
    timeline = _timeline(
        ("2026-02-02T09:00", PunchType.ENTRY),
        ("2026-02-02T12:00", PunchType.BREAK_START),
    )

    shift = locate_shift(timeline, MONDAY)

    assert shift.entry.punch_id == "p0"
    assert shift.break_start.punch_id == "p1"
    assert shift.break_end is None
    assert shift.exit is None
    assert locate_shift(timeline, date(2026, 2, 3)).entry is None


def test_offsets_are_respected_across_dst_change(calc):
    # 22:00 EDT to 06:00 EST is nine real hours.
    entry = datetime(2026, 10, 31, 22, 0, tzinfo=timezone(timedelta(hours=-4)))
    exit_ = datetime(2026, 11, 1, 6, 0, tzinfo=timezone(timedelta(hours=-5)))
    timeline = flatten([PunchEvent("e", entry, PunchType.ENTRY), PunchEvent("x", exit_, PunchType.EXIT)])

    assert calc.worked_seconds(timeline, local_date(entry)) == 9 * 3600


def test_worked_by_day_matches_per_day_calls(calc):
    timeline = _timeline(
        ("2026-02-02T09:00", PunchType.ENTRY),
        ("2026-02-02T12:00", PunchType.BREAK_START),
        ("2026-02-02T13:00", PunchType.BREAK_END),
        ("2026-02-02T17:00", PunchType.EXIT),
        ("2026-02-03T23:00", PunchType.ENTRY),
        ("2026-02-04T07:00", PunchType.EXIT),
    )

    by_day = calc.worked_by_day(timeline)

    assert by_day == {MONDAY: 7 * 3600, date(2026, 2, 3): 8 * 3600}
    assert all(calc.worked_seconds(timeline, d) == s for d, s in by_day.items())
