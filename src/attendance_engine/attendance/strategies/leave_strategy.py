from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ...schedules.model import ResolvedDaySchedule
from .base import AttendanceStrategy, StatusDecision


class LeaveStrategy(AttendanceStrategy):
    """Approved leave wins over any punch of the day."""

    def decide(
        self,
        *,
        resolved: ResolvedDaySchedule,
        check_in_at: Optional[datetime],
        check_out_at: Optional[datetime],
    ) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ON_LEAVE)
