from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall
from .department_model import Department
from .model import Employee
from .repository import DepartmentRepository, EmployeeRepository


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, full_name, employee_code, designation, dept_id, shift_id, is_active
                FROM employees
                WHERE is_active=1
                ORDER BY full_name
                """
            )
            rows = fetchall(cur)
            return [
                Employee(
                    employee_id=r["employee_id"],
                    full_name=r["full_name"],
                    employee_code=r.get("employee_code"),
                    designation=r.get("designation"),
                    dept_id=r.get("dept_id"),
                    shift_id=r.get("shift_id"),
                    is_active=as_bool(r.get("is_active", True)),
                )
                for r in rows
            ]


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT dept_id, dept_name, default_shift_id FROM departments ORDER BY dept_name")
            rows = fetchall(cur)
            return [
                Department(dept_id=r["dept_id"], dept_name=r["dept_name"], default_shift_id=r.get("default_shift_id"))
                for r in rows
            ]
