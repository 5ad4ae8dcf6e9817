from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import DayType
from ..core.types import EntityId


@dataclass(frozen=True)
class ResolvedDaySchedule:
    """Effective expectation of one (shift, date) pair.

    ``expected_start``/``expected_end`` are anchored on ``work_date``; an end
    that falls on or before the start has already been moved to the next day.
    Both are ``None`` for off days and unscheduled days.
    """

    work_date: date
    day_type: DayType
    shift_id: Optional[EntityId] = None
    expected_start: Optional[datetime] = None
    expected_end: Optional[datetime] = None
    late_tolerance_minutes: int = 0
    early_departure_tolerance_minutes: int = 0

    @classmethod
    def unscheduled_on(cls, work_date: date) -> "ResolvedDaySchedule":
        return cls(work_date=work_date, day_type=DayType.UNSCHEDULED)

    @property
    def unscheduled(self) -> bool:
        return self.day_type == DayType.UNSCHEDULED

    @property
    def is_off_day(self) -> bool:
        return self.day_type == DayType.OFF_DAY

    @property
    def is_half_day(self) -> bool:
        return self.day_type == DayType.HALF_DAY

    @property
    def is_overnight(self) -> bool:
        return self.expected_end is not None and self.expected_end.date() > self.work_date
