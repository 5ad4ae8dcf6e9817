from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import Anomaly, AttendanceStatus
from ...schedules.model import ResolvedDaySchedule
from .base import AttendanceStrategy, StatusDecision


class AbsentStrategy(AttendanceStrategy):
    """No check-in on a scheduled day."""

    def decide(
        self,
        *,
        resolved: ResolvedDaySchedule,
        check_in_at: Optional[datetime],
        check_out_at: Optional[datetime],
    ) -> StatusDecision:
        anomalies = (Anomaly.CHECK_OUT_WITHOUT_CHECK_IN,) if check_out_at is not None else ()
        return StatusDecision(status=AttendanceStatus.ABSENT, anomalies=anomalies)
