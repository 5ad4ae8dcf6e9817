from __future__ import annotations

from datetime import date, datetime, timedelta
from functools import lru_cache
from typing import Optional

from ..common.datetime_utils import day_of_week, span_minutes
from ..core.constants import DEFAULT_RESOLVER_CACHE_SIZE
from ..core.enums import DayType
from ..shifts.model import Shift
from .model import ResolvedDaySchedule


def resolve_day(shift: Optional[Shift], work_date: date) -> ResolvedDaySchedule:
    """Resolve the expected hours and day type of ``shift`` on ``work_date``.

    No shift means the employee is unscheduled. A weekday without a schedule
    entry (including shifts with no entries at all) uses the shift defaults.
    """
    if shift is None:
        return ResolvedDaySchedule.unscheduled_on(work_date)

    tolerances = {
        "shift_id": shift.shift_id,
        "late_tolerance_minutes": shift.late_tolerance_minutes,
        "early_departure_tolerance_minutes": shift.early_departure_tolerance_minutes,
    }
    schedule = shift.schedule_for(day_of_week(work_date))

    if schedule is not None and schedule.is_off_day:
        return ResolvedDaySchedule(work_date=work_date, day_type=DayType.OFF_DAY, **tolerances)

    start_time = schedule.start_time if schedule is not None and schedule.start_time else shift.default_start
    expected_start = datetime.combine(work_date, start_time)

    if schedule is not None and schedule.is_half_day:
        # half of the default span, truncated toward the start
        half = span_minutes(shift.default_start, shift.default_end) // 2
        return ResolvedDaySchedule(
            work_date=work_date,
            day_type=DayType.HALF_DAY,
            expected_start=expected_start,
            expected_end=expected_start + timedelta(minutes=half),
            **tolerances,
        )

    end_time = schedule.end_time if schedule is not None and schedule.end_time else shift.default_end
    expected_end = datetime.combine(work_date, end_time)
    if expected_end <= expected_start:
        expected_end += timedelta(days=1)

    return ResolvedDaySchedule(
        work_date=work_date,
        day_type=DayType.WORKING,
        expected_start=expected_start,
        expected_end=expected_end,
        **tolerances,
    )


class ScheduleResolver:
    """Memoizing front of ``resolve_day``.

    The cache key is the (immutable) shift value plus the date, so one
    resolver can be shared across the workers of a batch.
    """

    def __init__(self, *, cache_size: int = DEFAULT_RESOLVER_CACHE_SIZE):
        self._resolve = lru_cache(maxsize=cache_size)(resolve_day)

    def resolve(self, shift: Optional[Shift], work_date: date) -> ResolvedDaySchedule:
        return self._resolve(shift, work_date)

    def cache_info(self):
        return self._resolve.cache_info()

    def clear(self) -> None:
        self._resolve.cache_clear()
