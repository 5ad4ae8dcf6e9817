from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterator

from ..core.constants import MINUTES_PER_DAY
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD") from e


def parse_hhmm(value: str | time) -> time:
    """Parse an ``HH:mm`` (or ``HH:mm:ss``) string into a minute-precision time."""
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    try:
        parts = str(value).strip().split(":")
        return time(hour=int(parts[0]), minute=int(parts[1]))
    except (ValueError, IndexError) as e:
        raise ValidationError(f"Invalid time {value!r}, expected HH:mm") from e


def day_of_week(day: date) -> int:
    """Weekday number with 0=Sunday .. 6=Saturday."""
    return (day.weekday() + 1) % 7


def minutes_of_day(value: time) -> int:
    return value.hour * 60 + value.minute


def span_minutes(start: time, end: time) -> int:
    """Minutes from start to end, wrapping past midnight when end <= start."""
    minutes = minutes_of_day(end) - minutes_of_day(start)
    if minutes <= 0:
        minutes += MINUTES_PER_DAY
    return minutes


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end, floor-truncated."""
    return int((end - start).total_seconds() // 60)


def iter_days(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
