from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..attendance.aggregator import CohortStatistics
from ..core.enums import AttendanceStatus
from ..core.types import EntityId


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for reporting views and the CSV export."""

    employee_id: EntityId
    employee_name: str
    employee_code: Optional[str]
    designation: Optional[str]
    work_date: date
    check_in_at: Optional[datetime]
    check_out_at: Optional[datetime]
    working_hours: Optional[float]
    status: AttendanceStatus
    is_manual: bool = False
    anomalies: tuple[str, ...] = ()


@dataclass(frozen=True)
class AttendanceReport:
    rows: list[AttendanceReportRow]
    statistics: CohortStatistics
