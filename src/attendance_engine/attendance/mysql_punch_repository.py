from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.types import EntityId
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_date
from .model import RawPunch
from .repository import LeaveRepository, PunchRepository


class MySQLPunchRepository(PunchRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_range(self, *, start: date, end: date, employee_id: Optional[EntityId] = None) -> Sequence[RawPunch]:
        sql = """
            SELECT employee_id, work_date, check_in_at, check_out_at
            FROM attendance_punches
            WHERE work_date BETWEEN %s AND %s
        """
        params: list = [start, end]
        if employee_id is not None:
            sql += " AND employee_id=%s"
            params.append(employee_id)
        sql += " ORDER BY employee_id, work_date"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            rows = fetchall(cur)
            return [
                RawPunch(
                    employee_id=r["employee_id"],
                    work_date=normalize_mysql_date(r["work_date"]),
                    check_in_at=r.get("check_in_at"),
                    check_out_at=r.get("check_out_at"),
                )
                for r in rows
            ]


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_approved(
        self, *, start: date, end: date, employee_id: Optional[EntityId] = None
    ) -> Sequence[tuple[EntityId, date]]:
        sql = """
            SELECT employee_id, leave_date
            FROM leave_days
            WHERE is_approved=1 AND leave_date BETWEEN %s AND %s
        """
        params: list = [start, end]
        if employee_id is not None:
            sql += " AND employee_id=%s"
            params.append(employee_id)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [(r["employee_id"], normalize_mysql_date(r["leave_date"])) for r in fetchall(cur)]
