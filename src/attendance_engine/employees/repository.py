from __future__ import annotations

from typing import Protocol, Sequence

from .department_model import Department
from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for employees.

    Note (DIP): services depend on this interface, never on a concrete DB.
    """

    def list_active(self) -> Sequence[Employee]:
        raise NotImplementedError


class DepartmentRepository(Protocol):
    def list_all(self) -> Sequence[Department]:
        raise NotImplementedError
