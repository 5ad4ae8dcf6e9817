from __future__ import annotations

from dataclasses import dataclass

from .attendance.aggregator import AttendanceAggregator
from .attendance.classifier import AttendanceClassifier
from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_punch_repository import MySQLLeaveRepository, MySQLPunchRepository
from .attendance.service import AttendanceService
from .config.settings import EngineSettings
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLDepartmentRepository, MySQLEmployeeRepository
from .reports.service import AttendanceReportService
from .schedules.assignment import ConfigSnapshot
from .schedules.resolver import ScheduleResolver
from .shifts.mysql_shift_repository import MySQLShiftRepository


@dataclass(frozen=True)
class Engine:
    resolver: ScheduleResolver
    classifier: AttendanceClassifier
    aggregator: AttendanceAggregator
    attendance_service: AttendanceService
    report_service: AttendanceReportService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    shifts_repo: MySQLShiftRepository
    employees_repo: MySQLEmployeeRepository
    departments_repo: MySQLDepartmentRepository
    punches_repo: MySQLPunchRepository
    leave_repo: MySQLLeaveRepository

    engine: Engine

    def load_snapshot(self) -> ConfigSnapshot:
        """One consistent configuration snapshot for a whole batch."""
        return ConfigSnapshot.build(
            shifts=self.shifts_repo.list_all(),
            departments=self.departments_repo.list_all(),
            employees=self.employees_repo.list_active(),
        )


def build_engine(settings: EngineSettings) -> Engine:
    resolver = ScheduleResolver(cache_size=settings.resolver_cache_size)
    classifier = AttendanceClassifier(strategy_factory=AttendanceStrategyFactory())
    aggregator = AttendanceAggregator(resolver=resolver, count_off_day_punches=settings.count_off_day_punches)
    return Engine(
        resolver=resolver,
        classifier=classifier,
        aggregator=aggregator,
        attendance_service=AttendanceService(
            resolver=resolver,
            classifier=classifier,
            max_workers=settings.batch_workers,
        ),
        report_service=AttendanceReportService(aggregator=aggregator),
    )


def build_container(settings: EngineSettings) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(settings.db_config))
    return Container(
        conn=conn,
        shifts_repo=MySQLShiftRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        departments_repo=MySQLDepartmentRepository(conn),
        punches_repo=MySQLPunchRepository(conn),
        leave_repo=MySQLLeaveRepository(conn),
        engine=build_engine(settings),
    )
