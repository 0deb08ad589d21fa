from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterator

from ..core.constants import DATE_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def now_local() -> datetime:
    """Current instant, aware, in the local zone.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now().astimezone()


def as_instant(value: datetime) -> datetime:
    """Aware view of a timestamp; a naive value is read as local wall-clock time.

    Ordering and differences go through this so aware and naive punches
    compare as absolute instants.
    """
    if value.tzinfo is None:
        return value.astimezone()
    return value


def as_local(value: datetime) -> datetime:
    """Local wall-clock view of a timestamp, used for calendar dates and display."""
    if value.tzinfo is None:
        return value
    return value.astimezone()


def local_date(value: datetime) -> date:
    return as_local(value).date()


def to_date(value: date) -> date:
    """Drop the time part of a datetime; plain dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yield every date from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)
