from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator

from ..core.exceptions import InvalidRangeError
from .datetime_utils import iter_days


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar range; construction fails fast when end < start."""

    start: date
    end: date

    def __post_init__(self):
        if self.end < self.start:
            raise InvalidRangeError(f"Range end {self.end.isoformat()} is before start {self.start.isoformat()}")

    @classmethod
    def for_month(cls, year: int, month: int) -> "DateRange":
        last_day = calendar.monthrange(year, month)[1]
        return cls(date(year, month, 1), date(year, month, last_day))

    @classmethod
    def last_days(cls, end: date, days: int) -> "DateRange":
        return cls(end - timedelta(days=max(days, 1) - 1), end)

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end

    def __iter__(self) -> Iterator[date]:
        return iter_days(self.start, self.end)

    def __len__(self) -> int:
        return (self.end - self.start).days + 1
