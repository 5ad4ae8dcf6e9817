from datetime import date, datetime, time

from attendance_engine.attendance.factory import AttendanceStrategyFactory
from attendance_engine.attendance.strategies.absent_strategy import AbsentStrategy
from attendance_engine.attendance.strategies.late_strategy import LateStrategy
from attendance_engine.attendance.strategies.leave_strategy import LeaveStrategy
from attendance_engine.attendance.strategies.normal_strategy import NormalStrategy
from attendance_engine.attendance.strategies.off_day_strategy import OffDayStrategy, OvertimeStrategy
from attendance_engine.attendance.strategies.unscheduled_strategy import UnscheduledStrategy
from attendance_engine.schedules.resolver import resolve_day
from attendance_engine.shifts.model import Shift, ShiftSchedule

SHIFT = Shift(
    shift_id=1,
    shift_name="Morning",
    default_start=time(8, 0),
    default_end=time(17, 0),
    late_tolerance_minutes=5,
    schedules=(ShiftSchedule(day_of_week=0, is_off_day=True),),
)
WEDNESDAY = date(2025, 1, 1)
SUNDAY = date(2025, 1, 5)


def _pick(resolved, check_in_at=None, check_out_at=None, on_leave=False):
    return AttendanceStrategyFactory().for_day(
        resolved=resolved,
        check_in_at=check_in_at,
        check_out_at=check_out_at,
        is_on_approved_leave=on_leave,
    )


def test_factory_checkin_on_time_within_grace():
    strategy = _pick(resolve_day(SHIFT, WEDNESDAY), datetime(2025, 1, 1, 8, 5, 59))

    assert isinstance(strategy, NormalStrategy)
    assert not isinstance(strategy, LateStrategy)


def test_factory_checkin_late_after_grace():
    strategy = _pick(resolve_day(SHIFT, WEDNESDAY), datetime(2025, 1, 1, 8, 6, 0))

    assert isinstance(strategy, LateStrategy)


def test_factory_unscheduled_comes_first():
    strategy = _pick(resolve_day(None, WEDNESDAY), datetime(2025, 1, 1, 8, 0), on_leave=True)

    assert isinstance(strategy, UnscheduledStrategy)


def test_factory_leave_before_off_day():
    assert isinstance(_pick(resolve_day(SHIFT, SUNDAY), on_leave=True), LeaveStrategy)


def test_factory_off_day_with_and_without_punches():
    resolved = resolve_day(SHIFT, SUNDAY)

    assert isinstance(_pick(resolved), OffDayStrategy)
    assert isinstance(_pick(resolved, check_out_at=datetime(2025, 1, 5, 12, 0)), OvertimeStrategy)


def test_factory_no_check_in_is_absent():
    assert isinstance(_pick(resolve_day(SHIFT, WEDNESDAY)), AbsentStrategy)
