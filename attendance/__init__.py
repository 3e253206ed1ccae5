"""
Attendance workbook ingestion.

Reads time-tracker spreadsheet exports and returns normalised
(employee, date, status) facts plus diagnostics.
"""

from attendance.models import (
    AttendanceStatusCode,
    ImportedEmployee,
    ParseResult,
    TimePeriod,
)
from attendance.parser import AttendanceParser, parse_attendance_file, parse_attendance_workbook

__all__ = [
    "AttendanceStatusCode",
    "ImportedEmployee",
    "ParseResult",
    "TimePeriod",
    "AttendanceParser",
    "parse_attendance_file",
    "parse_attendance_workbook",
]
