"""Build and validate ``Shift`` values from collaborator payloads.

Payload shape (``HH:mm`` strings)::

    {"id": 1, "name": "Day", "defaultStart": "09:00", "defaultEnd": "17:00",
     "lateToleranceMinutes": 15, "earlyDepartureToleranceMinutes": 15,
     "schedules": [{"dayOfWeek": 0, "isOffDay": true, "isHalfDay": false}]}

``startTime``/``endTime`` are accepted for the defaults as well.
"""

from __future__ import annotations

from datetime import time
from typing import Any, Iterable, Mapping, Optional

from ..common.datetime_utils import parse_hhmm
from ..common.validators import require_non_empty, require_non_negative
from ..core.constants import (
    DAYS_PER_WEEK,
    DEFAULT_EARLY_DEPARTURE_TOLERANCE_MINUTES,
    DEFAULT_LATE_TOLERANCE_MINUTES,
)
from ..core.exceptions import ConfigurationError, ValidationError
from .model import Shift, ShiftSchedule


def validate_shift(shift: Shift) -> Shift:
    """Reject malformed shifts; returns the shift unchanged when valid."""
    label = f"Shift {shift.shift_id!r}"

    if shift.default_start == shift.default_end:
        raise ConfigurationError(f"{label}: default start and end are equal ({shift.default_start:%H:%M})")

    require_non_negative(shift.late_tolerance_minutes, f"{label}: lateToleranceMinutes")
    require_non_negative(shift.early_departure_tolerance_minutes, f"{label}: earlyDepartureToleranceMinutes")

    if len(shift.schedules) > DAYS_PER_WEEK:
        raise ConfigurationError(f"{label}: at most {DAYS_PER_WEEK} schedule entries allowed")

    seen: set[int] = set()
    for schedule in shift.schedules:
        day = schedule.day_of_week
        if not isinstance(day, int) or not 0 <= day < DAYS_PER_WEEK:
            raise ConfigurationError(f"{label}: dayOfWeek must be in [0, 6], got {day!r}")
        if day in seen:
            raise ConfigurationError(f"{label}: duplicate schedule for dayOfWeek {day}")
        seen.add(day)
        if schedule.is_off_day and schedule.is_half_day:
            raise ConfigurationError(f"{label}: dayOfWeek {day} is both off day and half day")

    return shift


def build_shift(
    *,
    shift_id,
    name: str,
    default_start: time | str,
    default_end: time | str,
    late_tolerance_minutes: int = DEFAULT_LATE_TOLERANCE_MINUTES,
    early_departure_tolerance_minutes: int = DEFAULT_EARLY_DEPARTURE_TOLERANCE_MINUTES,
    schedules: Iterable[ShiftSchedule] = (),
    description: Optional[str] = None,
) -> Shift:
    try:
        start = parse_hhmm(default_start)
        end = parse_hhmm(default_end)
    except ValidationError as e:
        raise ConfigurationError(f"Shift {shift_id!r}: {e}") from e

    shift = Shift(
        shift_id=shift_id,
        shift_name=_require_name(shift_id, name),
        default_start=start,
        default_end=end,
        late_tolerance_minutes=require_non_negative(late_tolerance_minutes, "lateToleranceMinutes"),
        early_departure_tolerance_minutes=require_non_negative(
            early_departure_tolerance_minutes, "earlyDepartureToleranceMinutes"
        ),
        schedules=tuple(sorted(schedules, key=lambda s: s.day_of_week)),
        description=description,
    )
    return validate_shift(shift)


def _require_name(shift_id, name: str) -> str:
    try:
        return require_non_empty(name, "Shift name")
    except ValidationError as e:
        raise ConfigurationError(f"Shift {shift_id!r}: {e}") from e


def _optional_time(value: Any, field_name: str) -> Optional[time]:
    if value in (None, ""):
        return None
    try:
        return parse_hhmm(value)
    except ValidationError as e:
        raise ConfigurationError(f"{field_name}: {e}") from e


def schedule_from_dict(payload: Mapping[str, Any]) -> ShiftSchedule:
    try:
        day = int(payload["dayOfWeek"])
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigurationError(f"Schedule entry without a valid dayOfWeek: {dict(payload)!r}") from e

    return ShiftSchedule(
        day_of_week=day,
        is_off_day=bool(payload.get("isOffDay", False)),
        is_half_day=bool(payload.get("isHalfDay", False)),
        start_time=_optional_time(payload.get("startTime"), f"dayOfWeek {day} startTime"),
        end_time=_optional_time(payload.get("endTime"), f"dayOfWeek {day} endTime"),
    )


def shift_from_dict(payload: Mapping[str, Any]) -> Shift:
    if "id" not in payload:
        raise ConfigurationError("Shift payload without id")

    start = payload.get("defaultStart", payload.get("startTime"))
    end = payload.get("defaultEnd", payload.get("endTime"))
    if start is None or end is None:
        raise ConfigurationError(f"Shift {payload['id']!r}: default start/end are required")

    return build_shift(
        shift_id=payload["id"],
        name=payload.get("name", ""),
        default_start=start,
        default_end=end,
        late_tolerance_minutes=payload.get("lateToleranceMinutes", DEFAULT_LATE_TOLERANCE_MINUTES),
        early_departure_tolerance_minutes=payload.get(
            "earlyDepartureToleranceMinutes", DEFAULT_EARLY_DEPARTURE_TOLERANCE_MINUTES
        ),
        schedules=[schedule_from_dict(s) for s in payload.get("schedules") or []],
        description=payload.get("description"),
    )


def shifts_from_dicts(payloads: Iterable[Mapping[str, Any]]) -> dict:
    """Index shifts by id; duplicate ids are a configuration error."""
    shifts: dict = {}
    for payload in payloads:
        shift = shift_from_dict(payload)
        if shift.shift_id in shifts:
            raise ConfigurationError(f"Duplicate shift id {shift.shift_id!r}")
        shifts[shift.shift_id] = shift
    return shifts
