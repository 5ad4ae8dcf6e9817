from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..common.date_range import DateRange
from ..common.logging_utils import get_logger
from ..core.constants import DEFAULT_BATCH_WORKERS
from ..core.enums import Anomaly
from ..core.types import EntityId
from ..schedules.assignment import ConfigSnapshot
from ..schedules.resolver import ScheduleResolver
from .classifier import AttendanceClassifier
from .model import AttendanceRecord, ManualAttendanceEntry, RawPunch

logger = get_logger("attendance.service")


@dataclass(frozen=True)
class BatchAnomaly:
    employee_id: EntityId
    work_date: date
    anomaly: Anomaly
    detail: str = ""


@dataclass(frozen=True)
class BatchResult:
    records: tuple[AttendanceRecord, ...]
    anomalies: tuple[BatchAnomaly, ...]

    def records_for(self, employee_id: EntityId) -> list[AttendanceRecord]:
        return [r for r in self.records if r.employee_id == employee_id]


def _merge_punches(first: RawPunch, second: RawPunch) -> RawPunch:
    """Earliest check-in and latest check-out of two rows for the same day."""
    check_ins = [p.check_in_at for p in (first, second) if p.check_in_at is not None]
    check_outs = [p.check_out_at for p in (first, second) if p.check_out_at is not None]
    return RawPunch(
        employee_id=first.employee_id,
        work_date=first.work_date,
        check_in_at=min(check_ins) if check_ins else None,
        check_out_at=max(check_outs) if check_outs else None,
    )


def _has_offset(punch: RawPunch) -> bool:
    return any(t is not None and t.tzinfo is not None for t in (punch.check_in_at, punch.check_out_at))


class AttendanceService:
    """Use case: classify a cohort over a date range.

    Every (employee, date) unit is independent, so units are fanned out over
    a thread pool. The configuration snapshot is read-only for the whole run.
    """

    def __init__(
        self,
        *,
        resolver: ScheduleResolver | None = None,
        classifier: AttendanceClassifier | None = None,
        max_workers: int = DEFAULT_BATCH_WORKERS,
    ):
        self._resolver = resolver or ScheduleResolver()
        self._classifier = classifier or AttendanceClassifier()
        self._max_workers = max(1, int(max_workers))

    def classify_day(
        self,
        snapshot: ConfigSnapshot,
        employee_id: EntityId,
        work_date: date,
        *,
        punch: Optional[RawPunch] = None,
        on_leave: bool = False,
    ) -> AttendanceRecord:
        resolved = self._resolver.resolve(snapshot.shift_for(employee_id), work_date)
        return self._classifier.classify(
            resolved,
            punch.check_in_at if punch else None,
            punch.check_out_at if punch else None,
            on_leave,
            employee_id=employee_id,
        )

    def classify_range(
        self,
        snapshot: ConfigSnapshot,
        punches: Iterable[RawPunch],
        date_range: DateRange,
        *,
        leave_days: Iterable[tuple[EntityId, date]] = (),
        employee_ids: Optional[Iterable[EntityId]] = None,
    ) -> BatchResult:
        anomalies: list[BatchAnomaly] = []
        indexed = self._index_punches(snapshot, punches, date_range, anomalies)
        on_leave = {(eid, day) for eid, day in leave_days}

        cohort = list(employee_ids) if employee_ids is not None else list(snapshot.employees)
        units = [(eid, day) for eid in cohort for day in date_range]

        def run(unit: tuple[EntityId, date]) -> AttendanceRecord:
            eid, day = unit
            return self.classify_day(snapshot, eid, day, punch=indexed.get(unit), on_leave=unit in on_leave)

        if self._max_workers == 1 or len(units) < 2:
            records = [run(u) for u in units]
        else:
            with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
                records = list(pool.map(run, units))

        for record in records:
            for anomaly in record.anomalies:
                anomalies.append(BatchAnomaly(record.employee_id, record.work_date, anomaly))

        logger.info(
            "Classified %d employee-days (%d employees, %s..%s), %d anomalies",
            len(records),
            len(cohort),
            date_range.start.isoformat(),
            date_range.end.isoformat(),
            len(anomalies),
        )
        return BatchResult(records=tuple(records), anomalies=tuple(anomalies))

    def record_manual(self, snapshot: ConfigSnapshot, entry: ManualAttendanceEntry) -> AttendanceRecord:
        resolved = self._resolver.resolve(snapshot.shift_for(entry.employee_id), entry.work_date)
        record = self._classifier.from_manual(resolved, entry)
        logger.info(
            "Manual attendance: employee=%s date=%s status=%s",
            entry.employee_id,
            entry.work_date.isoformat(),
            entry.status.value,
        )
        return record

    def _index_punches(
        self,
        snapshot: ConfigSnapshot,
        punches: Iterable[RawPunch],
        date_range: DateRange,
        anomalies: list[BatchAnomaly],
    ) -> dict:
        indexed: dict = {}
        for punch in punches:
            if punch.work_date not in date_range:
                continue
            if punch.employee_id not in snapshot.employees:
                anomalies.append(
                    BatchAnomaly(punch.employee_id, punch.work_date, Anomaly.UNKNOWN_EMPLOYEE, "punch skipped")
                )
                logger.warning("Punch for unknown employee %s on %s skipped", punch.employee_id, punch.work_date)
                continue
            if _has_offset(punch):
                anomalies.append(
                    BatchAnomaly(punch.employee_id, punch.work_date, Anomaly.INVALID_PUNCH, "timestamp with UTC offset")
                )
                logger.warning("Punch for employee %s on %s has a UTC offset, skipped", punch.employee_id, punch.work_date)
                continue

            key = (punch.employee_id, punch.work_date)
            existing = indexed.get(key)
            if existing is not None:
                anomalies.append(
                    BatchAnomaly(punch.employee_id, punch.work_date, Anomaly.DUPLICATE_PUNCH, "rows merged")
                )
                logger.warning("Duplicate punch rows for employee %s on %s merged", punch.employee_id, punch.work_date)
                punch = _merge_punches(existing, punch)
            indexed[key] = punch
        return indexed
