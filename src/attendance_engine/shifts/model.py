from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from ..core.constants import DEFAULT_EARLY_DEPARTURE_TOLERANCE_MINUTES, DEFAULT_LATE_TOLERANCE_MINUTES
from ..core.types import EntityId


@dataclass(frozen=True)
class ShiftSchedule:
    """Per-weekday override row of a shift (0=Sunday .. 6=Saturday)."""

    day_of_week: int
    is_off_day: bool = False
    is_half_day: bool = False
    start_time: Optional[time] = None
    end_time: Optional[time] = None


@dataclass(frozen=True)
class Shift:
    """Domain entity: a named work schedule with defaults and tolerances.

    Instances are immutable and hashable so one configuration snapshot can be
    shared by every worker of a batch.
    """

    shift_id: EntityId
    shift_name: str
    default_start: time
    default_end: time
    late_tolerance_minutes: int = DEFAULT_LATE_TOLERANCE_MINUTES
    early_departure_tolerance_minutes: int = DEFAULT_EARLY_DEPARTURE_TOLERANCE_MINUTES
    schedules: tuple[ShiftSchedule, ...] = ()
    description: Optional[str] = None

    def schedule_for(self, day_of_week: int) -> Optional[ShiftSchedule]:
        for schedule in self.schedules:
            if schedule.day_of_week == day_of_week:
                return schedule
        return None
