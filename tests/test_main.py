import json
import logging

import pytest
from click.testing import CliRunner

from attendance_engine.main import main

PAYLOAD = {
    "shifts": [
        {
            "id": 1,
            "name": "Day",
            "defaultStart": "09:00",
            "defaultEnd": "17:00",
            "schedules": [{"dayOfWeek": 0, "isOffDay": True}],
        }
    ],
    "employees": [{"id": 7, "name": "Ann", "employeeCode": "E-7", "designation": "Clerk", "shiftId": 1}],
    "punches": [{"employeeId": 7, "date": "2026-01-05", "checkInAt": "2026-01-05T09:20:00", "checkOutAt": "2026-01-05T17:05:00"}],
    "leave": [{"employeeId": 7, "date": "2026-01-06"}],
}

SETTINGS = ["--settings", "attendance_engine.config.testing"]


@pytest.fixture(autouse=True)
def _detach_log_handlers():
    yield
    logging.getLogger("attendance_engine").handlers.clear()


def _write(tmp_path, payload):
    path = tmp_path / "payload.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def _invoke(*args):
    return CliRunner().invoke(main, [*SETTINGS, *args])


def test_cli_exports_csv_from_json_payload(tmp_path):
    out = tmp_path / "report.csv"

    result = _invoke(
        "--input", str(_write(tmp_path, PAYLOAD)),
        "--from", "2026-01-04",
        "--to", "2026-01-07",
        "--output", str(out),
    )

    assert result.exit_code == 0, result.output
    assert f"Report written to {out}" in result.output
    lines = out.read_text(encoding="utf-8-sig").splitlines()
    assert lines[0].startswith("Employee Name,Employee Code")
    assert lines[1] == "Ann,E-7,Clerk,2026-01-05,09:20 AM,05:05 PM,7.75,LATE"
    assert lines[2].endswith(",ON_LEAVE")
    assert lines[3].endswith(",ABSENT")
    assert len(lines) == 4


def test_cli_status_filter(tmp_path):
    out = tmp_path / "late.csv"

    result = _invoke(
        "--input", str(_write(tmp_path, PAYLOAD)),
        "--from", "2026-01-04",
        "--to", "2026-01-07",
        "--status", "LATE",
        "--output", str(out),
    )

    assert result.exit_code == 0, result.output
    assert len(out.read_text(encoding="utf-8-sig").splitlines()) == 2


def test_cli_rejects_unknown_status(tmp_path):
    result = _invoke("--input", str(_write(tmp_path, PAYLOAD)), "--status", "EARLY")

    assert result.exit_code == 2
    assert "EARLY" in result.output


def test_cli_rejects_missing_input_file(tmp_path):
    result = _invoke("--input", str(tmp_path / "nope.json"))

    assert result.exit_code == 2
    assert "does not exist" in result.output


def test_cli_rejects_malformed_date(tmp_path):
    result = _invoke("--input", str(_write(tmp_path, PAYLOAD)), "--from", "05/01/2026")

    assert result.exit_code == 2


def test_cli_configuration_error_returns_non_zero(tmp_path):
    payload = dict(PAYLOAD, shifts=[{"id": 1, "name": "Day", "defaultStart": "09:00", "defaultEnd": "09:00"}])

    result = _invoke("--input", str(_write(tmp_path, payload)), "--output", str(tmp_path / "x.csv"))

    assert result.exit_code == 2
    assert "Error:" in result.output
    assert not (tmp_path / "x.csv").exists()


def test_cli_inverted_range_returns_non_zero(tmp_path):
    result = _invoke("--input", str(_write(tmp_path, PAYLOAD)), "--from", "2026-01-07", "--to", "2026-01-04")

    assert result.exit_code == 2


def test_cli_invalid_json_returns_non_zero(tmp_path):
    path = tmp_path / "payload.json"
    path.write_text('{"shifts": [', encoding="utf-8")

    result = _invoke("--input", str(path), "--output", str(tmp_path / "x.csv"))

    assert result.exit_code == 2
    assert "not valid JSON" in result.output
    assert not isinstance(result.exception, json.JSONDecodeError)


def test_cli_non_object_payload_returns_non_zero(tmp_path):
    result = _invoke("--input", str(_write(tmp_path, [PAYLOAD])))

    assert result.exit_code == 2


def test_cli_employee_without_id_returns_non_zero(tmp_path):
    payload = dict(PAYLOAD, employees=[{"name": "Ann", "shiftId": 1}])

    result = _invoke("--input", str(_write(tmp_path, payload)), "--output", str(tmp_path / "x.csv"))

    assert result.exit_code == 2
    assert not isinstance(result.exception, KeyError)
    assert 'Employee without "id"' in result.output


def test_cli_timestamp_with_offset_returns_non_zero(tmp_path):
    punches = [{"employeeId": 7, "date": "2026-01-05", "checkInAt": "2026-01-05T09:20:00+07:00"}]

    result = _invoke("--input", str(_write(tmp_path, dict(PAYLOAD, punches=punches))), "--from", "2026-01-05", "--to", "2026-01-05")

    assert result.exit_code == 2
    assert not isinstance(result.exception, TypeError)
