"""Minute arithmetic shared by the classification strategies.

Every delta is a whole number of minutes, floor-truncated.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import minutes_between
from ..core.enums import Anomaly
from ..schedules.model import ResolvedDaySchedule


@dataclass(frozen=True)
class WorkedSpan:
    minutes: Optional[int]
    check_out_at: Optional[datetime]
    anomalies: tuple[Anomaly, ...] = ()


def late_minutes(resolved: ResolvedDaySchedule, check_in_at: Optional[datetime]) -> int:
    if check_in_at is None or resolved.expected_start is None:
        return 0
    if check_in_at <= resolved.expected_start:
        return 0
    return max(0, minutes_between(resolved.expected_start, check_in_at) - resolved.late_tolerance_minutes)


def worked_span(
    resolved: ResolvedDaySchedule,
    check_in_at: Optional[datetime],
    check_out_at: Optional[datetime],
) -> WorkedSpan:
    """Worked minutes between the punches.

    A check-out that reads earlier than the check-in is moved to the next day
    when the expected end was rolled past midnight; otherwise it is an
    inverted punch, clamped to zero.
    """
    if check_in_at is None:
        return WorkedSpan(minutes=None, check_out_at=check_out_at)
    if check_out_at is None:
        return WorkedSpan(minutes=None, check_out_at=None, anomalies=(Anomaly.OPEN_PUNCH,))

    effective_out = check_out_at
    if effective_out < check_in_at and resolved.is_overnight:
        wrapped = effective_out + timedelta(days=1)
        if wrapped >= check_in_at:
            effective_out = wrapped

    minutes = minutes_between(check_in_at, effective_out)
    if minutes < 0:
        return WorkedSpan(minutes=0, check_out_at=effective_out, anomalies=(Anomaly.INVERTED_PUNCH,))
    return WorkedSpan(minutes=minutes, check_out_at=effective_out)


def early_departure_minutes(resolved: ResolvedDaySchedule, check_out_at: Optional[datetime]) -> int:
    if check_out_at is None or resolved.expected_end is None:
        return 0
    if check_out_at >= resolved.expected_end:
        return 0
    return max(0, minutes_between(check_out_at, resolved.expected_end) - resolved.early_departure_tolerance_minutes)
