"""Attendance engine package.

Organized by feature modules (shifts, schedules, attendance, reports, ...).
The resolver/classifier/aggregator core is pure; repositories and the batch
service sit around it and are wired together in ``container``.
"""

__version__ = "0.1.0"
