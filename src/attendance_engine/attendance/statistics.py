from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import ROUND_HALF_UP, Decimal


def attendance_rate(attended: int, working_days: int) -> int:
    """Whole percent, half rounded up; 0 when there is no working day."""
    if working_days <= 0:
        return 0
    rate = Decimal(attended * 100) / Decimal(working_days)
    return int(rate.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class AttendanceStatistics:
    """Counters over a date range for one employee or a whole cohort.

    ``working_days`` excludes off days without activity, leave days and
    unscheduled days. Off-day punches are counted in ``overtime_days``.
    """

    total_days: int = 0
    working_days: int = 0
    present: int = 0
    late: int = 0
    absent: int = 0
    on_leave: int = 0
    unscheduled: int = 0
    off_days: int = 0
    overtime_days: int = 0
    total_worked_minutes: int = 0
    total_late_minutes: int = 0
    total_early_departure_minutes: int = 0
    anomalous_records: int = 0

    @property
    def attended(self) -> int:
        return self.present + self.late

    @property
    def attendance_rate_percent(self) -> int:
        return attendance_rate(self.attended, self.working_days)

    @property
    def total_working_hours(self) -> float:
        return round(self.total_worked_minutes / 60, 2)

    def __add__(self, other: "AttendanceStatistics") -> "AttendanceStatistics":
        if not isinstance(other, AttendanceStatistics):
            return NotImplemented
        return AttendanceStatistics(
            **{f.name: getattr(self, f.name) + getattr(other, f.name) for f in fields(self)}
        )

    def as_dict(self) -> dict:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["attendance_rate_percent"] = self.attendance_rate_percent
        data["total_working_hours"] = self.total_working_hours
        return data
