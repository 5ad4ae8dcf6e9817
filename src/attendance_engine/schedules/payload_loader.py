"""Build a ``ConfigSnapshot`` and punches from plain dict payloads (JSON shape).

::

    {
      "shifts": [...],                       # see shifts.loader
      "departments": [{"id": 1, "name": "Ops", "defaultShiftId": 1}],
      "employees": [{"id": 7, "name": "Ann", "employeeCode": "E-7",
                     "designation": "Clerk", "departmentId": 1, "shiftId": null}],
      "punches": [{"employeeId": 7, "date": "2026-01-05",
                   "checkInAt": "2026-01-05T09:20:00", "checkOutAt": null}],
      "leave": [{"employeeId": 7, "date": "2026-01-06"}]
    }

Timestamps are local wall-clock time; values with a UTC offset are rejected.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional

from ..attendance.model import RawPunch
from ..common.datetime_utils import parse_iso_date
from ..core.exceptions import ConfigurationError, ValidationError
from ..employees.department_model import Department
from ..employees.model import Employee
from ..shifts.loader import shift_from_dict
from .assignment import ConfigSnapshot


def _require(item: Any, key: str, what: str, error: type = ValidationError) -> Any:
    if not isinstance(item, Mapping) or item.get(key) is None:
        raise error(f'{what} without "{key}": {item!r}')
    return item[key]


def _parse_instant(value: Any) -> Optional[datetime]:
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        instant = value
    else:
        try:
            instant = datetime.fromisoformat(str(value))
        except ValueError as e:
            raise ValidationError(f"Invalid timestamp {value!r}") from e
    if instant.tzinfo is not None:
        raise ValidationError(f"Timestamp {value!s} has a UTC offset, expected local time")
    return instant


def _parse_day(value: Any) -> date:
    if isinstance(value, date):
        return value
    return parse_iso_date(str(value))


def snapshot_from_dict(payload: Mapping[str, Any]) -> ConfigSnapshot:
    departments = [
        Department(
            dept_id=_require(d, "id", "Department", ConfigurationError),
            dept_name=d.get("name", ""),
            default_shift_id=d.get("defaultShiftId"),
        )
        for d in payload.get("departments") or []
    ]
    employees = [
        Employee(
            employee_id=_require(e, "id", "Employee", ConfigurationError),
            full_name=e.get("name", ""),
            employee_code=e.get("employeeCode"),
            designation=e.get("designation"),
            dept_id=e.get("departmentId"),
            shift_id=e.get("shiftId"),
            is_active=bool(e.get("isActive", True)),
        )
        for e in payload.get("employees") or []
    ]
    return ConfigSnapshot.build(
        shifts=[shift_from_dict(s) for s in payload.get("shifts") or []],
        departments=departments,
        employees=[e for e in employees if e.is_active],
    )


def punches_from_dicts(items: Iterable[Mapping[str, Any]]) -> list[RawPunch]:
    return [
        RawPunch(
            employee_id=_require(p, "employeeId", "Punch"),
            work_date=_parse_day(_require(p, "date", "Punch")),
            check_in_at=_parse_instant(p.get("checkInAt")),
            check_out_at=_parse_instant(p.get("checkOutAt")),
        )
        for p in items
    ]


def leave_days_from_dicts(items: Iterable[Mapping[str, Any]]) -> list[tuple]:
    return [
        (_require(item, "employeeId", "Leave day"), _parse_day(_require(item, "date", "Leave day")))
        for item in items
    ]
