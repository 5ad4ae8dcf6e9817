from __future__ import annotations

from collections import defaultdict
from typing import Optional, Sequence

from ..core.types import EntityId
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, normalize_mysql_time
from .loader import build_shift
from .model import Shift, ShiftSchedule
from .repository import ShiftRepository


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT shift_id, shift_name, description, start_time, end_time,
                       late_tolerance_minutes, early_departure_tolerance_minutes
                FROM shifts
                ORDER BY shift_id
                """
            )
            shift_rows = fetchall(cur)
            cur.execute(
                """
                SELECT shift_id, day_of_week, start_time, end_time, is_off_day, is_half_day
                FROM shift_schedules
                ORDER BY shift_id, day_of_week
                """
            )
            schedule_rows = fetchall(cur)

        schedules_by_shift: dict = defaultdict(list)
        for r in schedule_rows:
            schedules_by_shift[r["shift_id"]].append(
                ShiftSchedule(
                    day_of_week=int(r["day_of_week"]),
                    is_off_day=as_bool(r.get("is_off_day")),
                    is_half_day=as_bool(r.get("is_half_day")),
                    start_time=normalize_mysql_time(r.get("start_time")),
                    end_time=normalize_mysql_time(r.get("end_time")),
                )
            )

        # build_shift validates, so a malformed row aborts the load
        return [
            build_shift(
                shift_id=r["shift_id"],
                name=r["shift_name"],
                default_start=normalize_mysql_time(r["start_time"]),
                default_end=normalize_mysql_time(r["end_time"]),
                late_tolerance_minutes=int(r.get("late_tolerance_minutes") or 0),
                early_departure_tolerance_minutes=int(r.get("early_departure_tolerance_minutes") or 0),
                schedules=schedules_by_shift.get(r["shift_id"], []),
                description=r.get("description"),
            )
            for r in shift_rows
        ]

    def get_by_id(self, shift_id: EntityId) -> Optional[Shift]:
        for shift in self.list_all():
            if shift.shift_id == shift_id:
                return shift
        return None
