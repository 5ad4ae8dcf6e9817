from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import Anomaly, AttendanceStatus
from ...schedules.model import ResolvedDaySchedule
from ..timing import early_departure_minutes, late_minutes, worked_span
from .base import AttendanceStrategy, StatusDecision


class NormalStrategy(AttendanceStrategy):
    """Check-in within tolerance of the expected start."""

    status = AttendanceStatus.PRESENT

    def decide(
        self,
        *,
        resolved: ResolvedDaySchedule,
        check_in_at: Optional[datetime],
        check_out_at: Optional[datetime],
    ) -> StatusDecision:
        span = worked_span(resolved, check_in_at, check_out_at)
        early = 0
        if Anomaly.INVERTED_PUNCH not in span.anomalies:
            early = early_departure_minutes(resolved, span.check_out_at)

        return StatusDecision(
            status=self.status,
            worked_minutes=span.minutes,
            late_minutes=late_minutes(resolved, check_in_at),
            early_departure_minutes=early,
            anomalies=span.anomalies,
        )
