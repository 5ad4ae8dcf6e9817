from datetime import date, datetime, timezone

import pytest

from attendance_engine.core.exceptions import ConfigurationError, ValidationError
from attendance_engine.schedules.payload_loader import leave_days_from_dicts, punches_from_dicts, snapshot_from_dict

PAYLOAD = {
    "shifts": [{"id": 1, "name": "Day", "defaultStart": "09:00", "defaultEnd": "17:00"}],
    "departments": [{"id": 10, "name": "Ops", "defaultShiftId": 1}],
    "employees": [
        {"id": 7, "name": "Ann", "employeeCode": "E-7", "departmentId": 10},
        {"id": 8, "name": "Gone", "shiftId": 1, "isActive": False},
    ],
}


def test_snapshot_from_dict_keeps_active_employees():
    snapshot = snapshot_from_dict(PAYLOAD)

    assert list(snapshot.employees) == [7]
    assert snapshot.shift_for(7).shift_name == "Day"
    assert snapshot.employees[7].employee_code == "E-7"


def test_snapshot_from_dict_rejects_unknown_shift_reference():
    payload = dict(PAYLOAD, departments=[{"id": 10, "name": "Ops", "defaultShiftId": 2}])

    with pytest.raises(ConfigurationError):
        snapshot_from_dict(payload)


def test_punches_from_dicts():
    punches = punches_from_dicts(
        [{"employeeId": 7, "date": "2026-01-05", "checkInAt": "2026-01-05T09:20:00", "checkOutAt": None}]
    )

    assert punches[0].work_date == date(2026, 1, 5)
    assert punches[0].check_in_at == datetime(2026, 1, 5, 9, 20)
    assert punches[0].check_out_at is None


def test_bad_timestamp_is_validation_error():
    with pytest.raises(ValidationError):
        punches_from_dicts([{"employeeId": 7, "date": "2026-01-05", "checkInAt": "yesterday"}])


def test_leave_days_from_dicts():
    assert leave_days_from_dicts([{"employeeId": 7, "date": "2026-01-06"}]) == [(7, date(2026, 1, 6))]


def test_timestamp_with_utc_offset_is_validation_error():
    with pytest.raises(ValidationError, match="UTC offset"):
        punches_from_dicts(
            [{"employeeId": 7, "date": "2026-01-05", "checkInAt": "2026-01-05T09:20:00+07:00"}]
        )


def test_aware_datetime_object_is_validation_error():
    aware = datetime(2026, 1, 5, 9, 20, tzinfo=timezone.utc)

    with pytest.raises(ValidationError):
        punches_from_dicts([{"employeeId": 7, "date": "2026-01-05", "checkOutAt": aware}])


def test_employee_without_id_is_configuration_error():
    payload = dict(PAYLOAD, employees=[{"name": "Ann", "shiftId": 1}])

    with pytest.raises(ConfigurationError, match='Employee without "id"'):
        snapshot_from_dict(payload)


def test_department_without_id_is_configuration_error():
    payload = dict(PAYLOAD, departments=[{"name": "Ops", "defaultShiftId": 1}])

    with pytest.raises(ConfigurationError):
        snapshot_from_dict(payload)


def test_punch_without_date_is_validation_error():
    with pytest.raises(ValidationError, match='Punch without "date"'):
        punches_from_dicts([{"employeeId": 7, "checkInAt": "2026-01-05T09:20:00"}])


def test_leave_day_without_employee_is_validation_error():
    with pytest.raises(ValidationError):
        leave_days_from_dicts([{"date": "2026-01-06"}])
