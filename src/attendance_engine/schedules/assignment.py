from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from ..common.datetime_utils import now_local
from ..core.exceptions import ConfigurationError
from ..core.types import EntityId
from ..employees.department_model import Department
from ..employees.model import Employee
from ..shifts.loader import validate_shift
from ..shifts.model import Shift


def effective_shift_id(employee: Employee, departments: Mapping[EntityId, Department]) -> Optional[EntityId]:
    """Own shift first, then the department default; ``None`` means unscheduled."""
    if employee.shift_id is not None:
        return employee.shift_id
    if employee.dept_id is not None:
        dept = departments.get(employee.dept_id)
        if dept is not None and dept.default_shift_id is not None:
            return dept.default_shift_id
    return None


@dataclass(frozen=True)
class ConfigSnapshot:
    """Immutable view of shifts, departments and employees for one batch."""

    shifts: Mapping[EntityId, Shift]
    departments: Mapping[EntityId, Department] = field(default_factory=dict)
    employees: Mapping[EntityId, Employee] = field(default_factory=dict)
    taken_at: Optional[datetime] = None

    @classmethod
    def build(
        cls,
        *,
        shifts: Iterable[Shift],
        departments: Iterable[Department] = (),
        employees: Iterable[Employee] = (),
        taken_at: Optional[datetime] = None,
    ) -> "ConfigSnapshot":
        """Index and cross-check the configuration.

        Raises ConfigurationError on malformed shifts, duplicate ids or
        references to shifts that do not exist.
        """
        shift_map: dict = {}
        for shift in shifts:
            validate_shift(shift)
            if shift.shift_id in shift_map:
                raise ConfigurationError(f"Duplicate shift id {shift.shift_id!r}")
            shift_map[shift.shift_id] = shift

        dept_map: dict = {}
        for dept in departments:
            if dept.default_shift_id is not None and dept.default_shift_id not in shift_map:
                raise ConfigurationError(
                    f"Department {dept.dept_id!r} references unknown shift {dept.default_shift_id!r}"
                )
            dept_map[dept.dept_id] = dept

        employee_map: dict = {}
        for employee in employees:
            if employee.shift_id is not None and employee.shift_id not in shift_map:
                raise ConfigurationError(
                    f"Employee {employee.employee_id!r} references unknown shift {employee.shift_id!r}"
                )
            if employee.employee_id in employee_map:
                raise ConfigurationError(f"Duplicate employee id {employee.employee_id!r}")
            employee_map[employee.employee_id] = employee

        return cls(
            shifts=MappingProxyType(shift_map),
            departments=MappingProxyType(dept_map),
            employees=MappingProxyType(employee_map),
            taken_at=taken_at or now_local(),
        )

    def shift_for(self, employee_id: EntityId) -> Optional[Shift]:
        employee = self.employees.get(employee_id)
        if employee is None:
            return None
        shift_id = effective_shift_id(employee, self.departments)
        return self.shifts.get(shift_id) if shift_id is not None else None
