"""
RowNormalizer: turn data rows into ImportedEmployee records.

Rows with an empty ID or name are dropped with a warning naming their
1-indexed sheet row; nothing at this stage is a hard error.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from attendance.excel.config import (
    FIELD_DEPARTMENT,
    FIELD_ID,
    FIELD_NAME,
    MSG_EMPTY_ID,
    MSG_EMPTY_NAME,
)
from attendance.excel.data_cleaner import DataCleaner
from attendance.logger import get_logger
from attendance.models import ColumnMapping, ImportedEmployee

logger = get_logger(__name__)


class RowNormalizer:

    @staticmethod
    def row_number(data_index: int, header_row_index: int) -> int:
        """Spreadsheet row number (1-indexed) of the *data_index*-th row below the header."""
        return data_index + header_row_index + 2

    def normalize_row(
        self,
        row: Dict[str, str],
        mapping: ColumnMapping,
    ) -> ImportedEmployee:
        identity = mapping.identity
        employee_id = DataCleaner.cell_to_str(row.get(identity.get(FIELD_ID, FIELD_ID)))
        name = DataCleaner.cell_to_str(row.get(identity.get(FIELD_NAME, FIELD_NAME)))
        department = DataCleaner.clean_department(row.get(identity.get(FIELD_DEPARTMENT, FIELD_DEPARTMENT)))

        daily = {}
        for original, normalized in mapping.dates.items():
            daily[normalized] = DataCleaner.parse_status_code(row.get(original, ""))
        return ImportedEmployee(id=employee_id, name=name, department=department, daily_attendance=daily)

    def normalize(
        self,
        rows: List[Optional[Dict[str, str]]],
        mapping: ColumnMapping,
        header_row_index: int,
    ) -> Tuple[List[ImportedEmployee], List[str]]:
        """
        Return ``(employees, warnings)`` for *rows* (as produced by
        :meth:`SheetGrid.records`). ``None`` entries are blank sheet rows and
        are skipped silently.
        """
        employees: List[ImportedEmployee] = []
        warnings: List[str] = []
        identity = mapping.identity

        for i, row in enumerate(rows):
            if row is None:
                continue
            row_num = self.row_number(i, header_row_index)

            if not DataCleaner.cell_to_str(row.get(identity.get(FIELD_ID, FIELD_ID))):
                warnings.append(MSG_EMPTY_ID.format(row=row_num))
                logger.debug("Row %d skipped: empty ID", row_num)
                continue
            if not DataCleaner.cell_to_str(row.get(identity.get(FIELD_NAME, FIELD_NAME))):
                warnings.append(MSG_EMPTY_NAME.format(row=row_num))
                logger.debug("Row %d skipped: empty name", row_num)
                continue

            employees.append(self.normalize_row(row, mapping))

        return employees, warnings
