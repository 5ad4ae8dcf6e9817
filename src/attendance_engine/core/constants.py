"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DAYS_PER_WEEK = 7
MINUTES_PER_DAY = 24 * 60
DEFAULT_LATE_TOLERANCE_MINUTES = 15
DEFAULT_EARLY_DEPARTURE_TOLERANCE_MINUTES = 15
DEFAULT_RESOLVER_CACHE_SIZE = 4096
DEFAULT_BATCH_WORKERS = 4
DEFAULT_REPORT_DAYS = 7

EXPORT_COLUMNS = (
    "Employee Name",
    "Employee Code",
    "Designation",
    "Date",
    "Check In",
    "Check Out",
    "Working Hours",
    "Status",
)
EXPORT_DATE_FORMAT = "%Y-%m-%d"
EXPORT_TIME_FORMAT = "%I:%M %p"
EXPORT_SHEET_NAME = "Attendance"
