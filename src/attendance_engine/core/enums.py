from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Classified status of one employee-day."""

    PRESENT = "PRESENT"
    LATE = "LATE"
    ABSENT = "ABSENT"
    ON_LEAVE = "ON_LEAVE"
    UNSCHEDULED = "UNSCHEDULED"
    OFF_DAY = "OFF_DAY"


class DayType(str, Enum):
    """Kind of day a shift resolves to."""

    WORKING = "WORKING"
    HALF_DAY = "HALF_DAY"
    OFF_DAY = "OFF_DAY"
    UNSCHEDULED = "UNSCHEDULED"


class Anomaly(str, Enum):
    """Per-record flags raised for manual review (never abort a batch)."""

    INVERTED_PUNCH = "INVERTED_PUNCH"
    OPEN_PUNCH = "OPEN_PUNCH"
    CHECK_OUT_WITHOUT_CHECK_IN = "CHECK_OUT_WITHOUT_CHECK_IN"
    DUPLICATE_PUNCH = "DUPLICATE_PUNCH"
    UNKNOWN_EMPLOYEE = "UNKNOWN_EMPLOYEE"
    INVALID_PUNCH = "INVALID_PUNCH"
