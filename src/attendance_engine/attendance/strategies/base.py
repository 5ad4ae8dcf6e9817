from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...core.enums import Anomaly, AttendanceStatus
from ...schedules.model import ResolvedDaySchedule


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    worked_minutes: Optional[int] = None
    late_minutes: int = 0
    early_departure_minutes: int = 0
    is_overtime: bool = False
    anomalies: tuple[Anomaly, ...] = ()


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how one kind of day is classified."""

    @abstractmethod
    def decide(
        self,
        *,
        resolved: ResolvedDaySchedule,
        check_in_at: Optional[datetime],
        check_out_at: Optional[datetime],
    ) -> StatusDecision:
        raise NotImplementedError
