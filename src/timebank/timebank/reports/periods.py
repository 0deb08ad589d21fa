from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Optional

from ..balance.model import DateRange
from ..balance.service import DateLike, parse_range
from ..core.enums import ReportPeriod

# Calendar-aligned month blocks: bimesters Jan-Feb, Mar-Apr, ...
_MONTH_SPANS = {
    ReportPeriod.MONTH: 1,
    ReportPeriod.BIMESTER: 2,
    ReportPeriod.TRIMESTER: 3,
    ReportPeriod.SEMESTER: 6,
    ReportPeriod.YEAR: 12,
}


def _month_block(anchor: date, span: int) -> DateRange:
    first_month = ((anchor.month - 1) // span) * span + 1
    last_month = first_month + span - 1
    last_day = calendar.monthrange(anchor.year, last_month)[1]
    return DateRange(start=date(anchor.year, first_month, 1), end=date(anchor.year, last_month, last_day))


def resolve_period(
    period: ReportPeriod | str,
    anchor: date,
    *,
    start: Optional[DateLike] = None,
    end: Optional[DateLike] = None,
) -> Optional[DateRange]:
    """Inclusive date range of `period` around `anchor`.

    CUSTOM uses `start`/`end` instead. Returns None for an unknown period or
    an unusable custom range.
    """
    try:
        period = ReportPeriod(str(period.value if isinstance(period, ReportPeriod) else period).upper())
    except ValueError:
        return None

    if period == ReportPeriod.CUSTOM:
        if start is None or end is None:
            return None
        return parse_range(start, end)

    if period == ReportPeriod.DAY:
        return DateRange(start=anchor, end=anchor)

    if period == ReportPeriod.WEEK:
        monday = anchor - timedelta(days=anchor.weekday())
        return DateRange(start=monday, end=monday + timedelta(days=6))

    if period == ReportPeriod.FORTNIGHT:
        if anchor.day <= 15:
            return DateRange(start=anchor.replace(day=1), end=anchor.replace(day=15))
        last_day = calendar.monthrange(anchor.year, anchor.month)[1]
        return DateRange(start=anchor.replace(day=16), end=anchor.replace(day=last_day))

    return _month_block(anchor, _MONTH_SPANS[period])
