from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterable, Mapping, Optional, Union

from ..common.date_range import DateRange
from ..common.logging_utils import get_logger
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..core.types import EntityId
from ..schedules.assignment import ConfigSnapshot
from ..schedules.model import ResolvedDaySchedule
from ..schedules.resolver import ScheduleResolver
from ..shifts.model import Shift
from .model import AttendanceRecord
from .statistics import AttendanceStatistics

logger = get_logger("attendance.aggregator")

ShiftByDate = Union[Callable[[date], Optional[Shift]], Mapping[date, Optional[Shift]], Shift, None]

_ATTENDED = (AttendanceStatus.PRESENT, AttendanceStatus.LATE)


def _shift_lookup(shift_by_date: ShiftByDate) -> Callable[[date], Optional[Shift]]:
    if shift_by_date is None or isinstance(shift_by_date, Shift):
        return lambda _day: shift_by_date
    if isinstance(shift_by_date, Mapping):
        return shift_by_date.get
    return shift_by_date


def _implicit_status(resolved: ResolvedDaySchedule) -> AttendanceStatus:
    """Status of a day that has no record at all."""
    if resolved.unscheduled:
        return AttendanceStatus.UNSCHEDULED
    if resolved.is_off_day:
        return AttendanceStatus.OFF_DAY
    return AttendanceStatus.ABSENT


@dataclass(frozen=True)
class CohortStatistics:
    total: AttendanceStatistics
    per_employee: Mapping[EntityId, AttendanceStatistics]


class AttendanceAggregator:
    """Reduce classified records over a date range into statistics.

    Records are indexed by date before counting, so the result does not
    depend on the order they are supplied in.
    """

    def __init__(self, *, resolver: ScheduleResolver | None = None, count_off_day_punches: bool = False):
        self._resolver = resolver or ScheduleResolver()
        self._count_off_day_punches = bool(count_off_day_punches)

    def aggregate(
        self,
        records: Iterable[AttendanceRecord],
        shift_by_date: ShiftByDate,
        date_range: DateRange,
    ) -> AttendanceStatistics:
        by_date: dict[date, AttendanceRecord] = {}
        employees: set = set()
        for record in records:
            if record.employee_id is not None:
                employees.add(record.employee_id)
                if len(employees) > 1:
                    raise ValidationError("Records of several employees; use aggregate_cohort")
            if record.work_date not in date_range:
                continue
            if record.work_date in by_date:
                raise ValidationError(f"Two records for {record.work_date.isoformat()}")
            by_date[record.work_date] = record

        lookup = _shift_lookup(shift_by_date)
        counts: Counter = Counter()

        for day in date_range:
            resolved = self._resolver.resolve(lookup(day), day)
            record = by_date.get(day)
            counts["total_days"] += 1

            if record is not None:
                if record.worked_minutes is not None:
                    counts["total_worked_minutes"] += record.worked_minutes
                counts["total_late_minutes"] += record.late_minutes
                counts["total_early_departure_minutes"] += record.early_departure_minutes
                if record.is_anomalous:
                    counts["anomalous_records"] += 1

            status = record.status if record is not None else _implicit_status(resolved)
            self._count_day(counts, status, resolved, record)

        return AttendanceStatistics(**counts)

    def _count_day(
        self,
        counts: Counter,
        status: AttendanceStatus,
        resolved: ResolvedDaySchedule,
        record: Optional[AttendanceRecord],
    ) -> None:
        # no shift means no expectation, whatever the record says
        if resolved.unscheduled or status == AttendanceStatus.UNSCHEDULED:
            counts["unscheduled"] += 1
            return
        if status == AttendanceStatus.ON_LEAVE:
            counts["on_leave"] += 1
            return
        if status == AttendanceStatus.OFF_DAY:
            counts["off_days"] += 1
            return

        worked_off_day = resolved.is_off_day or (record is not None and record.is_overtime)
        if worked_off_day:
            if status not in _ATTENDED:
                counts["off_days"] += 1
                return
            counts["overtime_days"] += 1
            if not self._count_off_day_punches:
                return

        counts["working_days"] += 1
        if status == AttendanceStatus.PRESENT:
            counts["present"] += 1
        elif status == AttendanceStatus.LATE:
            counts["late"] += 1
        else:
            counts["absent"] += 1

    def aggregate_cohort(
        self,
        records: Iterable[AttendanceRecord],
        snapshot: ConfigSnapshot,
        date_range: DateRange,
        *,
        employee_ids: Optional[Iterable[EntityId]] = None,
    ) -> CohortStatistics:
        """Per-employee statistics plus their sum.

        Every employee of the snapshot is included (an employee without
        records is absent on each working day) unless ``employee_ids`` narrows
        the cohort.
        """
        grouped: dict = defaultdict(list)
        for record in records:
            grouped[record.employee_id].append(record)

        if employee_ids is None:
            cohort = set(snapshot.employees) | {eid for eid in grouped if eid is not None}
        else:
            cohort = set(employee_ids)

        per_employee: dict = {}
        for employee_id in cohort:
            shift = snapshot.shift_for(employee_id)
            per_employee[employee_id] = self.aggregate(grouped.get(employee_id, ()), shift, date_range)

        total = sum(per_employee.values(), AttendanceStatistics())
        logger.info(
            "Aggregated %d employees over %s..%s: working_days=%d rate=%d%%",
            len(per_employee),
            date_range.start.isoformat(),
            date_range.end.isoformat(),
            total.working_days,
            total.attendance_rate_percent,
        )
        return CohortStatistics(total=total, per_employee=per_employee)
