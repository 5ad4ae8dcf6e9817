from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ...schedules.model import ResolvedDaySchedule
from ..timing import worked_span
from .base import AttendanceStrategy, StatusDecision


class OffDayStrategy(AttendanceStrategy):
    """Off day without punches: outside the working-day count."""

    def decide(
        self,
        *,
        resolved: ResolvedDaySchedule,
        check_in_at: Optional[datetime],
        check_out_at: Optional[datetime],
    ) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.OFF_DAY)


class OvertimeStrategy(AttendanceStrategy):
    """Punches on an off day: present, hours counted as overtime."""

    def decide(
        self,
        *,
        resolved: ResolvedDaySchedule,
        check_in_at: Optional[datetime],
        check_out_at: Optional[datetime],
    ) -> StatusDecision:
        span = worked_span(resolved, check_in_at, check_out_at)
        return StatusDecision(
            status=AttendanceStatus.PRESENT,
            worked_minutes=span.minutes,
            is_overtime=True,
            anomalies=span.anomalies,
        )
