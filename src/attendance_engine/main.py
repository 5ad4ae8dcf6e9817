"""Command-line entry point: classify a date range and export the attendance report.

Configuration comes from the MySQL database named in the settings module, or
from a JSON file (``--input``) in the payload shape of
``schedules.payload_loader``.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import click

from .attendance.model import RawPunch
from .common.date_range import DateRange
from .common.logging_utils import configure_logging, get_logger
from .config.settings import EngineSettings, load_settings
from .container import build_container, build_engine
from .core.constants import DEFAULT_REPORT_DAYS
from .core.enums import AttendanceStatus
from .core.exceptions import DomainError, ValidationError
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig
from .reports.export import export_report
from .schedules.assignment import ConfigSnapshot
from .schedules.payload_loader import leave_days_from_dicts, punches_from_dicts, snapshot_from_dict

logger = get_logger("main")

ISO_DAY = click.DateTime(formats=["%Y-%m-%d"])


def _resolve_range(start: Optional[datetime], end: Optional[datetime]) -> DateRange:
    last = end.date() if end else date.today()
    if start:
        return DateRange(start.date(), last)
    return DateRange.last_days(last, DEFAULT_REPORT_DAYS)


def _employee_id(value: Optional[str]):
    if value is None:
        return None
    return int(value) if value.isdigit() else value


def _load_from_json(path: Path) -> tuple[ConfigSnapshot, list[RawPunch], list[tuple]]:
    try:
        with path.open(encoding="utf-8") as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        raise ValidationError(f"{path}: not valid JSON ({e})") from e
    if not isinstance(payload, dict):
        raise ValidationError(f"{path}: expected a JSON object at top level")
    return (
        snapshot_from_dict(payload),
        punches_from_dicts(payload.get("punches") or []),
        leave_days_from_dicts(payload.get("leave") or []),
    )


def run(
    settings: EngineSettings,
    date_range: DateRange,
    *,
    employee_id=None,
    status: Optional[AttendanceStatus] = None,
    search: Optional[str] = None,
    input_path: Optional[Path] = None,
    output: Optional[Path] = None,
) -> Path:
    if input_path:
        engine = build_engine(settings)
        snapshot, punches, leave_days = _load_from_json(input_path)
    else:
        container = build_container(settings)
        engine = container.engine
        logger.debug("Loading snapshot from %s", container.conn.description)
        snapshot = container.load_snapshot()
        punches = container.punches_repo.list_range(start=date_range.start, end=date_range.end, employee_id=employee_id)
        leave_days = container.leave_repo.list_approved(
            start=date_range.start, end=date_range.end, employee_id=employee_id
        )

    result = engine.attendance_service.classify_range(
        snapshot,
        punches,
        date_range,
        leave_days=leave_days,
        employee_ids=[employee_id] if employee_id is not None else None,
    )
    report = engine.report_service.build_report(result, snapshot, date_range, status=status, search=search)

    total = report.statistics.total
    logger.info(
        "working_days=%d present=%d late=%d absent=%d on_leave=%d rate=%d%% hours=%.2f",
        total.working_days,
        total.present,
        total.late,
        total.absent,
        total.on_leave,
        total.attendance_rate_percent,
        total.total_working_hours,
    )

    output = output or Path(settings.report_dir) / f"attendance-{date_range.start.isoformat()}.csv"
    return export_report(report.rows, output)


def init_db(settings: EngineSettings) -> None:
    config = DBConfig.from_mapping(settings.db_config)
    apply_schema(config)
    logger.info("Schema ready on %s (tables=%d)", config.database, len(list_tables(config)))


@click.command(name="attendance-engine")
@click.option("--from", "start", type=ISO_DAY, help="First day, YYYY-MM-DD (default: 7 days back).")
@click.option("--to", "end", type=ISO_DAY, help="Last day, YYYY-MM-DD (default: today).")
@click.option("--employee", help="Limit to one employee id.")
@click.option(
    "--status",
    type=click.Choice([s.value for s in AttendanceStatus]),
    help="Only rows with this status.",
)
@click.option("--search", help="Match employee name or code.")
@click.option(
    "--input",
    "input_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON payload instead of the database.",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="CSV or .xlsx path (default: <REPORT_DIR>/attendance-<from>.csv).",
)
@click.option("--settings", "settings_module", help="Settings module, overrides APP_ENV.")
@click.option("--init-db", "init_schema", is_flag=True, help="Create the database tables and exit.")
@click.pass_context
def main(ctx, start, end, employee, status, search, input_path, output, settings_module, init_schema):
    """Classify a date range and export the attendance report."""
    settings = load_settings(settings_module)
    configure_logging(settings.log_level, settings.log_file)
    logger.debug("settings=%s", settings.settings_module)

    try:
        if init_schema:
            init_db(settings)
            return
        path = run(
            settings,
            _resolve_range(start, end),
            employee_id=_employee_id(employee),
            status=AttendanceStatus(status) if status else None,
            search=search,
            input_path=input_path,
            output=output,
        )
    except DomainError as e:
        logger.error("%s", e)
        click.echo(f"Error: {e}", err=True)
        ctx.exit(2)
    click.echo(f"Report written to {path}")


if __name__ == "__main__":
    main()
