from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.logging_utils import get_logger
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..core.types import EntityId
from ..schedules.model import ResolvedDaySchedule
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, ManualAttendanceEntry, RawPunch
from .timing import worked_span

logger = get_logger("attendance.classifier")

MANUAL_STATUSES = frozenset(
    {AttendanceStatus.PRESENT, AttendanceStatus.LATE, AttendanceStatus.ABSENT, AttendanceStatus.ON_LEAVE}
)


class AttendanceClassifier:
    """Pure classification of one employee-day.

    The classifier keeps no state between calls: identical inputs always give
    an equal record.
    """

    def __init__(self, *, strategy_factory: AttendanceStrategyFactory | None = None):
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def classify(
        self,
        resolved: ResolvedDaySchedule,
        check_in_at: Optional[datetime],
        check_out_at: Optional[datetime],
        is_on_approved_leave: bool = False,
        *,
        employee_id: Optional[EntityId] = None,
    ) -> AttendanceRecord:
        strategy = self._factory.for_day(
            resolved=resolved,
            check_in_at=check_in_at,
            check_out_at=check_out_at,
            is_on_approved_leave=bool(is_on_approved_leave),
        )
        decision = strategy.decide(resolved=resolved, check_in_at=check_in_at, check_out_at=check_out_at)

        if decision.anomalies:
            logger.warning(
                "Anomalous punch: employee=%s date=%s %s",
                employee_id,
                resolved.work_date.isoformat(),
                ",".join(a.value for a in decision.anomalies),
            )

        return AttendanceRecord(
            employee_id=employee_id,
            work_date=resolved.work_date,
            status=decision.status,
            check_in_at=check_in_at,
            check_out_at=check_out_at,
            worked_minutes=decision.worked_minutes,
            late_minutes=decision.late_minutes,
            early_departure_minutes=decision.early_departure_minutes,
            is_overtime=decision.is_overtime,
            anomalies=decision.anomalies,
        )

    def classify_punch(
        self,
        resolved: ResolvedDaySchedule,
        punch: RawPunch,
        is_on_approved_leave: bool = False,
    ) -> AttendanceRecord:
        if punch.work_date != resolved.work_date:
            raise ValidationError(
                f"Punch date {punch.work_date.isoformat()} does not match schedule date {resolved.work_date.isoformat()}"
            )
        return self.classify(
            resolved,
            punch.check_in_at,
            punch.check_out_at,
            is_on_approved_leave,
            employee_id=punch.employee_id,
        )

    def from_manual(self, resolved: ResolvedDaySchedule, entry: ManualAttendanceEntry) -> AttendanceRecord:
        """Build a record from an administrator entry; the status is not re-derived."""
        if entry.status not in MANUAL_STATUSES:
            raise ValidationError(f"Status {entry.status.value} cannot be entered manually")
        if entry.work_date != resolved.work_date:
            raise ValidationError("Manual entry date does not match schedule date")

        minutes = None
        anomalies: tuple = ()
        if entry.status in (AttendanceStatus.PRESENT, AttendanceStatus.LATE):
            if entry.check_in_at is None:
                raise ValidationError("Check-in time is required for a present or late entry")
            if entry.check_out_at is not None:
                span = worked_span(resolved, entry.check_in_at, entry.check_out_at)
                minutes, anomalies = span.minutes, span.anomalies

        return AttendanceRecord(
            employee_id=entry.employee_id,
            work_date=entry.work_date,
            status=entry.status,
            check_in_at=entry.check_in_at,
            check_out_at=entry.check_out_at,
            worked_minutes=minutes,
            is_overtime=resolved.is_off_day and entry.status in (AttendanceStatus.PRESENT, AttendanceStatus.LATE),
            anomalies=anomalies,
            is_manual=True,
            note=entry.note.strip() if entry.note else None,
        )
