from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import Anomaly, AttendanceStatus
from ..core.types import EntityId


@dataclass(frozen=True)
class RawPunch:
    """Check-in/check-out pair supplied by the punch collaborator for one employee-day."""

    employee_id: EntityId
    work_date: date
    check_in_at: Optional[datetime] = None
    check_out_at: Optional[datetime] = None

    @property
    def has_punches(self) -> bool:
        return self.check_in_at is not None or self.check_out_at is not None


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: the classified attendance of one employee-day.

    Always rebuilt as a whole from the resolved schedule and the punches of
    the day; never patched field by field.
    """

    employee_id: Optional[EntityId]
    work_date: date
    status: AttendanceStatus
    check_in_at: Optional[datetime] = None
    check_out_at: Optional[datetime] = None
    worked_minutes: Optional[int] = None
    late_minutes: int = 0
    early_departure_minutes: int = 0
    is_overtime: bool = False
    anomalies: tuple[Anomaly, ...] = ()
    is_manual: bool = False
    note: Optional[str] = None

    @property
    def working_hours(self) -> Optional[float]:
        if self.worked_minutes is None:
            return None
        return round(self.worked_minutes / 60, 2)

    @property
    def has_punches(self) -> bool:
        return self.check_in_at is not None or self.check_out_at is not None

    @property
    def is_anomalous(self) -> bool:
        return bool(self.anomalies)


@dataclass(frozen=True)
class ManualAttendanceEntry:
    """Administrator-entered attendance for one employee-day.

    The status is taken as given; worked hours still come from the times.
    """

    employee_id: EntityId
    work_date: date
    status: AttendanceStatus
    check_in_at: Optional[datetime] = None
    check_out_at: Optional[datetime] = None
    note: Optional[str] = None
