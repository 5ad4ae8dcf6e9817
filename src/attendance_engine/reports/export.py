"""Tabular export of attendance report rows.

Column order is fixed for downstream spreadsheets: dates ``yyyy-MM-dd``,
times ``hh:mm AM/PM``, working hours with two decimals, empty cells for
missing values. ``.xlsx`` targets get an Excel sheet, anything else CSV.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, TextIO

import pandas as pd

from ..common.logging_utils import get_logger
from ..core.constants import EXPORT_COLUMNS, EXPORT_DATE_FORMAT, EXPORT_SHEET_NAME, EXPORT_TIME_FORMAT
from .model import AttendanceReportRow

logger = get_logger("reports.export")


def format_row(row: AttendanceReportRow) -> list[str]:
    return [
        row.employee_name,
        row.employee_code or "",
        row.designation or "",
        row.work_date.strftime(EXPORT_DATE_FORMAT),
        row.check_in_at.strftime(EXPORT_TIME_FORMAT) if row.check_in_at else "",
        row.check_out_at.strftime(EXPORT_TIME_FORMAT) if row.check_out_at else "",
        f"{row.working_hours:.2f}" if row.working_hours is not None else "",
        row.status.value,
    ]


def to_frame(rows: Iterable[AttendanceReportRow]) -> pd.DataFrame:
    return pd.DataFrame([format_row(r) for r in rows], columns=list(EXPORT_COLUMNS))


def write_attendance_csv(rows: Iterable[AttendanceReportRow], out: TextIO) -> int:
    """Write header plus rows to ``out``; returns the number of data rows."""
    df = to_frame(rows)
    df.to_csv(out, index=False, lineterminator="\n")
    return len(df)


def export_attendance_csv(rows: Iterable[AttendanceReportRow], path: str | Path) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    df = to_frame(rows)
    # utf-8-sig so spreadsheet tools detect the encoding
    df.to_csv(target, index=False, encoding="utf-8-sig", lineterminator="\n")
    logger.info("Exported %d attendance rows to %s", len(df), target)
    return target


def export_attendance_xlsx(rows: Iterable[AttendanceReportRow], path: str | Path) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    df = to_frame(rows)
    with pd.ExcelWriter(target, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=EXPORT_SHEET_NAME)
    logger.info("Exported %d attendance rows to %s", len(df), target)
    return target


def export_report(rows: Iterable[AttendanceReportRow], path: str | Path) -> Path:
    if Path(path).suffix.lower() == ".xlsx":
        return export_attendance_xlsx(rows, path)
    return export_attendance_csv(rows, path)
