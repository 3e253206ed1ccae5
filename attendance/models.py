"""
Data Model
==========

Core data structures passed between the parser stages and handed to the
persistence collaborator: TimePeriod, ImportedEmployee, ParseResult and
the flattened attendance records.
"""

from enum import Enum
from typing import Dict, List, Literal

from pydantic import BaseModel, Field


class AttendanceStatusCode(str, Enum):
    """
    Closed set of per-day attendance outcomes exported by the time tracker.

    Anything outside this set is read as ``A`` by the parser.
    """
    W = "W"    # present, on time
    L = "L"    # late
    E = "E"    # early leave
    LE = "LE"  # late and early leave
    A = "A"    # absent
    NS = "NS"  # no schedule, not a work day
    H = "H"    # holiday


AttendanceStatus = Literal[
    "present", "late", "early_leave", "late_and_early", "absent", "no_schedule", "holiday"
]


class TimePeriod(BaseModel):
    """
    Reporting window of an export, used to give bare ``MM-DD`` headers a year.

    Attributes:
        start_year / start_month: first covered month (1-indexed)
        end_year / end_month: last covered month (1-indexed)
    """
    start_year: int
    start_month: int
    end_year: int
    end_month: int

    class Config:
        frozen = True

    @classmethod
    def whole_year(cls, year: int) -> "TimePeriod":
        return cls(start_year=year, start_month=1, end_year=year, end_month=12)

    @property
    def is_cross_year(self) -> bool:
        return self.start_year != self.end_year

    def year_for_month(self, month: int) -> int:
        """Year a bare month belongs to; months before ``start_month`` rolled into ``end_year``."""
        if not self.is_cross_year:
            return self.start_year
        if month >= self.start_month:
            return self.start_year
        return self.end_year


class ColumnMapping(BaseModel):
    """
    Header classification for one sheet.

    Attributes:
        identity: canonical field (Name / ID / Department) -> original header
        dates: original date header -> normalized ``YYYY-MM-DD``, in column order
    """
    identity: Dict[str, str] = Field(default_factory=dict)
    dates: Dict[str, str] = Field(default_factory=dict)


class Employee(BaseModel):
    id: str
    name: str
    department: str


class ImportedEmployee(BaseModel):
    """
    One parsed sheet row.

    ``id`` and ``name`` are never empty; ``department`` may be.
    """
    id: str
    name: str
    department: str
    daily_attendance: Dict[str, AttendanceStatusCode] = Field(default_factory=dict)

    class Config:
        use_enum_values = True
        frozen = True


class ParseResult(BaseModel):
    """
    Output of one parse.

    When ``errors`` is non-empty, ``employees`` and ``date_columns`` must
    not be used.
    """
    employees: List[ImportedEmployee] = Field(default_factory=list)
    date_columns: List[str] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    class Config:
        frozen = True


class AttendanceRecord(BaseModel):
    """A single employee-day fact derived from an :class:`ImportedEmployee`."""
    employee_id: str
    date: str
    status_code: AttendanceStatusCode
    status: AttendanceStatus
    is_violation: bool
    is_work_day: bool

    class Config:
        use_enum_values = True


class BulkImportRecord(BaseModel):
    """
    Flat row handed to the store for upsert keyed by ``(employee_id, date)``.

    ``employee_name`` and ``department`` let the store create employees it
    has not seen before.
    """
    employee_id: str
    date: str
    status_code: AttendanceStatusCode
    employee_name: str = ""
    department: str = ""

    class Config:
        use_enum_values = True


class ImportSummary(BaseModel):
    success: bool
    total_count: int = 0
    success_count: int = 0
    errors: List[str] = Field(default_factory=list)
