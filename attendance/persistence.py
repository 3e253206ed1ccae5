"""
Persistence hand-off.

The parser does not talk to storage itself. ``AttendanceStore`` is the
contract of the collaborator that receives the flattened records; the
dict-backed ``MemoryAttendanceStore`` implements it for tests and for the
CLI dry-run.
"""

from __future__ import annotations

from typing import Dict, List, Protocol, Tuple, runtime_checkable

from attendance.logger import get_logger
from attendance.models import BulkImportRecord, Employee, ImportSummary, ParseResult
from attendance.records import build_bulk_import_records

logger = get_logger(__name__)


@runtime_checkable
class AttendanceStore(Protocol):
    """
    Bulk upsert keyed by ``(employee_id, date)``.

    Insert or overwrite the status for each pair; create unknown employees,
    filling missing identity fields with placeholders. Returns success.
    """

    def bulk_upsert(self, records: List[BulkImportRecord]) -> bool: ...


class MemoryAttendanceStore:
    """Dict-backed AttendanceStore."""

    def __init__(self) -> None:
        self.employees: Dict[str, Employee] = {}
        self.attendance: Dict[Tuple[str, str], str] = {}

    def bulk_upsert(self, records: List[BulkImportRecord]) -> bool:
        if not records:
            return False
        for rec in records:
            if rec.employee_id not in self.employees:
                self.employees[rec.employee_id] = Employee(
                    id=rec.employee_id,
                    name=rec.employee_name or f"Employee {rec.employee_id}",
                    department=rec.department,
                )
            self.attendance[(rec.employee_id, rec.date)] = rec.status_code
        return True


def import_parse_result(result: ParseResult, store: AttendanceStore) -> ImportSummary:
    """Push a successful parse into *store*; results with errors are refused."""
    if result.errors:
        return ImportSummary(success=False, errors=list(result.errors))

    records = build_bulk_import_records(result)
    if not records:
        return ImportSummary(success=False, errors=["No valid records to import"])

    try:
        ok = store.bulk_upsert(records)
    except Exception as e:
        logger.error("Bulk upsert failed: %s", e, exc_info=True)
        return ImportSummary(success=False, total_count=len(records), errors=[str(e)])

    logger.info("Bulk upsert of %d records: %s", len(records), "ok" if ok else "failed")
    return ImportSummary(
        success=bool(ok),
        total_count=len(records),
        success_count=len(records) if ok else 0,
    )
