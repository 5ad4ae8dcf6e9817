from __future__ import annotations

from typing import Iterable, Optional

from ..attendance.aggregator import AttendanceAggregator
from ..attendance.model import AttendanceRecord
from ..attendance.service import BatchResult
from ..common.date_range import DateRange
from ..core.enums import AttendanceStatus
from ..schedules.assignment import ConfigSnapshot
from .model import AttendanceReport, AttendanceReportRow


class AttendanceReportService:
    def __init__(self, *, aggregator: Optional[AttendanceAggregator] = None):
        self._aggregator = aggregator or AttendanceAggregator()

    def build_rows(
        self,
        records: Iterable[AttendanceRecord],
        snapshot: ConfigSnapshot,
        *,
        status: Optional[AttendanceStatus] = None,
        search: Optional[str] = None,
        include_off_days: bool = False,
    ) -> list[AttendanceReportRow]:
        """Rows sorted by date then employee name.

        ``search`` matches employee name or code, case-insensitively.
        """
        needle = search.strip().lower() if search and search.strip() else None
        rows: list[AttendanceReportRow] = []

        for r in records:
            if status is not None and r.status != status:
                continue
            if r.status == AttendanceStatus.OFF_DAY and not include_off_days and status is None:
                continue

            employee = snapshot.employees.get(r.employee_id)
            name = employee.full_name if employee else str(r.employee_id)
            code = employee.employee_code if employee else None
            if needle and needle not in name.lower() and needle not in (code or "").lower():
                continue

            rows.append(
                AttendanceReportRow(
                    employee_id=r.employee_id,
                    employee_name=name,
                    employee_code=code,
                    designation=employee.designation if employee else None,
                    work_date=r.work_date,
                    check_in_at=r.check_in_at,
                    check_out_at=r.check_out_at,
                    working_hours=r.working_hours,
                    status=r.status,
                    is_manual=r.is_manual,
                    anomalies=tuple(a.value for a in r.anomalies),
                )
            )

        rows.sort(key=lambda x: (x.work_date, x.employee_name.lower(), str(x.employee_id)))
        return rows

    def build_report(
        self,
        result: BatchResult,
        snapshot: ConfigSnapshot,
        date_range: DateRange,
        *,
        status: Optional[AttendanceStatus] = None,
        search: Optional[str] = None,
    ) -> AttendanceReport:
        rows = self.build_rows(result.records, snapshot, status=status, search=search)
        statistics = self._aggregator.aggregate_cohort(
            result.records,
            snapshot,
            date_range,
            employee_ids={r.employee_id for r in result.records},
        )
        return AttendanceReport(rows=rows, statistics=statistics)
