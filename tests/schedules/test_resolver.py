from datetime import date, datetime, time, timedelta

from attendance_engine.core.enums import DayType
from attendance_engine.schedules.resolver import ScheduleResolver, resolve_day
from attendance_engine.shifts.model import Shift, ShiftSchedule

# 2026-01-04 is a Sunday (dayOfWeek 0)
SUNDAY = date(2026, 1, 4)
MONDAY = date(2026, 1, 5)
SATURDAY = date(2026, 1, 10)


def _shift(*schedules, start=time(9, 0), end=time(18, 0)) -> Shift:
    return Shift(shift_id=1, shift_name="Office", default_start=start, default_end=end, schedules=tuple(schedules))


def test_shift_without_schedules_never_resolves_off_day():
    shift = _shift()
    resolver = ScheduleResolver()

    for offset in range(14):
        resolved = resolver.resolve(shift, SUNDAY + timedelta(days=offset))
        assert resolved.day_type == DayType.WORKING
        assert not resolved.is_off_day


def test_weekday_without_entry_uses_defaults():
    shift = _shift(ShiftSchedule(day_of_week=0, is_off_day=True))

    resolved = resolve_day(shift, MONDAY)

    assert resolved.day_type == DayType.WORKING
    assert resolved.expected_start == datetime(2026, 1, 5, 9, 0)
    assert resolved.expected_end == datetime(2026, 1, 5, 18, 0)
    assert resolved.shift_id == 1
    assert resolved.late_tolerance_minutes == 15


def test_off_day_has_no_expected_times():
    shift = _shift(ShiftSchedule(day_of_week=0, is_off_day=True))

    resolved = resolve_day(shift, SUNDAY)

    assert resolved.is_off_day
    assert resolved.expected_start is None
    assert resolved.expected_end is None


def test_half_day_without_override_ends_at_midpoint():
    shift = _shift(ShiftSchedule(day_of_week=6, is_half_day=True))

    resolved = resolve_day(shift, SATURDAY)

    assert resolved.is_half_day
    assert resolved.expected_start == datetime(2026, 1, 10, 9, 0)
    assert resolved.expected_end == datetime(2026, 1, 10, 13, 30)


def test_half_day_uses_override_start_and_truncates_odd_minutes():
    # default span 09:00-17:01 = 481 minutes, half = 240
    shift = _shift(ShiftSchedule(day_of_week=6, is_half_day=True, start_time=time(8, 0)), end=time(17, 1))

    resolved = resolve_day(shift, SATURDAY)

    assert resolved.expected_start == datetime(2026, 1, 10, 8, 0)
    assert resolved.expected_end == datetime(2026, 1, 10, 12, 0)


def test_override_times_replace_defaults():
    shift = _shift(ShiftSchedule(day_of_week=1, start_time=time(7, 30), end_time=time(15, 0)))

    resolved = resolve_day(shift, MONDAY)

    assert resolved.expected_start == datetime(2026, 1, 5, 7, 30)
    assert resolved.expected_end == datetime(2026, 1, 5, 15, 0)


def test_partial_override_keeps_default_end():
    shift = _shift(ShiftSchedule(day_of_week=1, start_time=time(10, 0)))

    resolved = resolve_day(shift, MONDAY)

    assert resolved.expected_start == datetime(2026, 1, 5, 10, 0)
    assert resolved.expected_end == datetime(2026, 1, 5, 18, 0)


def test_overnight_shift_end_rolls_to_next_day():
    shift = _shift(start=time(22, 0), end=time(6, 0))

    resolved = resolve_day(shift, MONDAY)

    assert resolved.expected_start == datetime(2026, 1, 5, 22, 0)
    assert resolved.expected_end == datetime(2026, 1, 6, 6, 0)
    assert resolved.is_overnight


def test_overnight_half_day_spans_half_of_wrapped_default():
    shift = _shift(ShiftSchedule(day_of_week=1, is_half_day=True), start=time(22, 0), end=time(6, 0))

    resolved = resolve_day(shift, MONDAY)

    assert resolved.expected_end == datetime(2026, 1, 6, 2, 0)


def test_no_shift_is_unscheduled():
    resolved = resolve_day(None, MONDAY)

    assert resolved.unscheduled
    assert resolved.day_type == DayType.UNSCHEDULED
    assert resolved.expected_start is None


def test_resolver_memoizes_per_shift_and_date():
    shift = _shift()
    resolver = ScheduleResolver(cache_size=8)

    first = resolver.resolve(shift, MONDAY)
    second = resolver.resolve(shift, MONDAY)

    assert first is second
    info = resolver.cache_info()
    assert info.hits == 1
    assert info.misses == 1

    resolver.clear()
    assert resolver.cache_info().currsize == 0


def test_equal_shift_values_share_cache_entry():
    resolver = ScheduleResolver()

    resolver.resolve(_shift(), MONDAY)
    resolver.resolve(_shift(), MONDAY)

    assert resolver.cache_info().hits == 1
