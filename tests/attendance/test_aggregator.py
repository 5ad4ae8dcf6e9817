import random
from datetime import date, datetime, time

import pytest

from attendance_engine.attendance.aggregator import AttendanceAggregator
from attendance_engine.attendance.classifier import AttendanceClassifier
from attendance_engine.attendance.model import AttendanceRecord
from attendance_engine.common.date_range import DateRange
from attendance_engine.core.enums import AttendanceStatus
from attendance_engine.core.exceptions import InvalidRangeError, ValidationError
from attendance_engine.employees.model import Employee
from attendance_engine.schedules.assignment import ConfigSnapshot
from attendance_engine.schedules.resolver import resolve_day
from attendance_engine.shifts.model import Shift, ShiftSchedule

# Sunday 2026-01-04 .. Saturday 2026-01-10
WEEK = DateRange(date(2026, 1, 4), date(2026, 1, 10))

SHIFT = Shift(
    shift_id=1,
    shift_name="Office",
    default_start=time(9, 0),
    default_end=time(17, 0),
    schedules=(
        ShiftSchedule(day_of_week=0, is_off_day=True),
        ShiftSchedule(day_of_week=6, is_off_day=True),
    ),
)


def _classify(day: date, check_in=None, check_out=None, on_leave=False, shift=SHIFT) -> AttendanceRecord:
    def at(hhmm):
        if hhmm is None:
            return None
        h, m = hhmm
        return datetime(day.year, day.month, day.day, h, m)

    return AttendanceClassifier().classify(
        resolve_day(shift, day), at(check_in), at(check_out), on_leave, employee_id=1
    )


def _week_records():
    return [
        _classify(date(2026, 1, 5), (9, 0), (17, 0)),  # present 8h
        _classify(date(2026, 1, 6), (9, 30), (17, 0)),  # late 7.5h
        _classify(date(2026, 1, 7)),  # absent
        _classify(date(2026, 1, 8), on_leave=True),
        _classify(date(2026, 1, 9), (9, 0), None),  # present, open punch
        _classify(date(2026, 1, 10), (10, 0), (12, 0)),  # off-day overtime 2h
    ]


def test_week_statistics():
    stats = AttendanceAggregator().aggregate(_week_records(), SHIFT, WEEK)

    assert stats.total_days == 7
    assert stats.working_days == 4
    assert stats.present == 2
    assert stats.late == 1
    assert stats.absent == 1
    assert stats.on_leave == 1
    assert stats.off_days == 1
    assert stats.overtime_days == 1
    assert stats.attendance_rate_percent == 75
    assert stats.total_working_hours == 17.5
    assert stats.total_late_minutes == 15
    assert stats.anomalous_records == 1


def test_off_day_without_punches_excluded_from_working_days():
    stats = AttendanceAggregator().aggregate([], SHIFT, DateRange(date(2026, 1, 4), date(2026, 1, 4)))

    assert stats.working_days == 0
    assert stats.off_days == 1
    assert stats.attendance_rate_percent == 0


def test_missing_record_on_working_day_counts_as_absent():
    stats = AttendanceAggregator().aggregate([], SHIFT, WEEK)

    assert stats.working_days == 5
    assert stats.absent == 5
    assert stats.off_days == 2
    assert stats.attendance_rate_percent == 0


def test_off_day_punches_counted_when_opted_in():
    stats = AttendanceAggregator(count_off_day_punches=True).aggregate(_week_records(), SHIFT, WEEK)

    assert stats.working_days == 5
    assert stats.present == 3
    assert stats.overtime_days == 1
    assert stats.attendance_rate_percent == 80


def test_aggregation_is_order_independent():
    records = _week_records()
    expected = AttendanceAggregator().aggregate(records, SHIFT, WEEK)

    rng = random.Random(42)
    for _ in range(10):
        shuffled = records[:]
        rng.shuffle(shuffled)
        assert AttendanceAggregator().aggregate(shuffled, SHIFT, WEEK) == expected


def test_unscheduled_excluded_from_rate():
    day = date(2026, 1, 5)
    records = [_classify(day, (9, 0), (17, 0), shift=None)]

    stats = AttendanceAggregator().aggregate(records, None, DateRange(day, day))

    assert stats.unscheduled == 1
    assert stats.working_days == 0
    assert stats.attended == 0
    assert stats.attendance_rate_percent == 0
    assert stats.total_working_hours == 8.0


def test_shift_by_date_mapping_and_callable():
    monday = date(2026, 1, 5)
    rng = DateRange(monday, monday)

    by_mapping = AttendanceAggregator().aggregate([], {monday: SHIFT}, rng)
    by_callable = AttendanceAggregator().aggregate([], lambda _d: None, rng)

    assert by_mapping.absent == 1
    assert by_callable.unscheduled == 1


def test_records_outside_range_ignored():
    stats = AttendanceAggregator().aggregate(
        _week_records(), SHIFT, DateRange(date(2026, 1, 5), date(2026, 1, 5))
    )

    assert stats.total_days == 1
    assert stats.present == 1


def test_inverted_range_fails_fast():
    with pytest.raises(InvalidRangeError):
        DateRange(date(2026, 1, 10), date(2026, 1, 4))


def test_duplicate_dates_rejected():
    day = date(2026, 1, 5)
    records = [_classify(day, (9, 0), (17, 0)), _classify(day)]

    with pytest.raises(ValidationError):
        AttendanceAggregator().aggregate(records, SHIFT, WEEK)


def test_several_employees_rejected():
    day = date(2026, 1, 5)
    other = AttendanceRecord(employee_id=2, work_date=date(2026, 1, 6), status=AttendanceStatus.ABSENT)

    with pytest.raises(ValidationError):
        AttendanceAggregator().aggregate([_classify(day), other], SHIFT, WEEK)


def test_cohort_includes_employees_without_records():
    snapshot = ConfigSnapshot.build(
        shifts=[SHIFT],
        employees=[
            Employee(employee_id=1, full_name="A", shift_id=1),
            Employee(employee_id=2, full_name="B", shift_id=1),
            Employee(employee_id=3, full_name="C"),
        ],
    )

    cohort = AttendanceAggregator().aggregate_cohort(_week_records(), snapshot, WEEK)

    assert set(cohort.per_employee) == {1, 2, 3}
    assert cohort.per_employee[2].absent == 5
    assert cohort.per_employee[3].unscheduled == 7
    assert cohort.total.working_days == 9
    assert cohort.total.attended == 3
    assert cohort.total.attendance_rate_percent == 33


def test_cohort_can_be_narrowed():
    snapshot = ConfigSnapshot.build(shifts=[SHIFT], employees=[Employee(employee_id=1, full_name="A", shift_id=1)])

    cohort = AttendanceAggregator().aggregate_cohort(_week_records(), snapshot, WEEK, employee_ids=[1])

    assert list(cohort.per_employee) == [1]
    assert cohort.total == cohort.per_employee[1]


def test_manual_status_on_unscheduled_day_stays_unscheduled():
    day = date(2026, 1, 5)
    manual = AttendanceRecord(
        employee_id=1,
        work_date=day,
        status=AttendanceStatus.LATE,
        check_in_at=datetime(2026, 1, 5, 9, 40),
        is_manual=True,
    )

    stats = AttendanceAggregator().aggregate([manual], None, DateRange(day, day))

    assert stats.unscheduled == 1
    assert stats.working_days == 0
    assert stats.late == 0
    assert stats.attendance_rate_percent == 0
