from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ...schedules.model import ResolvedDaySchedule
from ..timing import worked_span
from .base import AttendanceStrategy, StatusDecision


class UnscheduledStrategy(AttendanceStrategy):
    """No shift resolvable: non-countable, raw duration only."""

    def decide(
        self,
        *,
        resolved: ResolvedDaySchedule,
        check_in_at: Optional[datetime],
        check_out_at: Optional[datetime],
    ) -> StatusDecision:
        both = check_in_at is not None and check_out_at is not None
        span = worked_span(resolved, check_in_at, check_out_at) if both else None
        return StatusDecision(
            status=AttendanceStatus.UNSCHEDULED,
            worked_minutes=span.minutes if span else None,
            anomalies=span.anomalies if span else (),
        )
