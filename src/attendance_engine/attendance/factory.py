from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..schedules.model import ResolvedDaySchedule
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.leave_strategy import LeaveStrategy
from .strategies.normal_strategy import NormalStrategy
from .strategies.off_day_strategy import OffDayStrategy, OvertimeStrategy
from .strategies.unscheduled_strategy import UnscheduledStrategy
from .timing import late_minutes


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: pick the strategy for a day; first matching rule wins."""

    def for_day(
        self,
        *,
        resolved: ResolvedDaySchedule,
        check_in_at: Optional[datetime],
        check_out_at: Optional[datetime],
        is_on_approved_leave: bool,
    ) -> AttendanceStrategy:
        if resolved.unscheduled:
            return UnscheduledStrategy()
        if is_on_approved_leave:
            return LeaveStrategy()
        if resolved.is_off_day:
            if check_in_at is None and check_out_at is None:
                return OffDayStrategy()
            return OvertimeStrategy()
        if check_in_at is None:
            return AbsentStrategy()
        if late_minutes(resolved, check_in_at) > 0:
            return LateStrategy()
        return NormalStrategy()
