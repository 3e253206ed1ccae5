"""
Record expansion: ImportedEmployee → per-day facts for storage.

Also holds the status-code semantics shared with reporting: which codes
count as violations and which days count as work days.
"""

from __future__ import annotations

from typing import Dict, List, Tuple, Union

from attendance.models import (
    AttendanceRecord,
    AttendanceStatus,
    AttendanceStatusCode,
    BulkImportRecord,
    Employee,
    ImportedEmployee,
    ParseResult,
)

StatusLike = Union[AttendanceStatusCode, str]

STATUS_BY_CODE: Dict[AttendanceStatusCode, AttendanceStatus] = {
    AttendanceStatusCode.W: "present",
    AttendanceStatusCode.L: "late",
    AttendanceStatusCode.E: "early_leave",
    AttendanceStatusCode.LE: "late_and_early",
    AttendanceStatusCode.A: "absent",
    AttendanceStatusCode.NS: "no_schedule",
    AttendanceStatusCode.H: "holiday",
}

VIOLATION_CODES = frozenset({
    AttendanceStatusCode.L,
    AttendanceStatusCode.E,
    AttendanceStatusCode.LE,
    AttendanceStatusCode.A,
})
NON_WORK_CODES = frozenset({AttendanceStatusCode.NS, AttendanceStatusCode.H})


def _code(value: StatusLike) -> AttendanceStatusCode:
    return AttendanceStatusCode(value)


def status_label(code: StatusLike) -> AttendanceStatus:
    return STATUS_BY_CODE[_code(code)]


def is_violation(code: StatusLike) -> bool:
    return _code(code) in VIOLATION_CODES


def is_work_day(code: StatusLike) -> bool:
    return _code(code) not in NON_WORK_CODES


def expand_employee(
    imported: ImportedEmployee,
    date_columns: List[str],
) -> Tuple[Employee, List[AttendanceRecord]]:
    """
    Split an imported row into the employee and one record per date column.

    Dates without a status in ``daily_attendance`` are skipped.
    """
    employee = Employee(id=imported.id, name=imported.name, department=imported.department)
    records: List[AttendanceRecord] = []
    for day in date_columns:
        code = imported.daily_attendance.get(day)
        if not code:
            continue
        records.append(AttendanceRecord(
            employee_id=imported.id,
            date=day,
            status_code=code,
            status=status_label(code),
            is_violation=is_violation(code),
            is_work_day=is_work_day(code),
        ))
    return employee, records


def build_bulk_import_records(result: ParseResult) -> List[BulkImportRecord]:
    """
    Flatten a parse into upsert rows, employee by employee in column order.

    A result carrying errors yields nothing.
    """
    if result.errors:
        return []
    payload: List[BulkImportRecord] = []
    for imported in result.employees:
        _, records = expand_employee(imported, result.date_columns)
        for rec in records:
            payload.append(BulkImportRecord(
                employee_id=rec.employee_id,
                date=rec.date,
                status_code=rec.status_code,
                employee_name=imported.name,
                department=imported.department,
            ))
    return payload
