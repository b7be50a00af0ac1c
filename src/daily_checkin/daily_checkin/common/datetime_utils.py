from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

from ..core.constants import DATE_FORMAT, TIME_MARK_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def format_iso_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def parse_time_mark(value: Optional[str]) -> time:
    """Parse an "HH:MM" time-of-day mark.

    Raises ValueError for empty or malformed values.
    """
    v = (value or "").strip()
    if not v:
        raise ValueError("time mark is not set")
    return datetime.strptime(v, TIME_MARK_FORMAT).time()


def same_minute(now: datetime, mark: time) -> bool:
    return now.hour == mark.hour and now.minute == mark.minute


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
