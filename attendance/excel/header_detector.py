"""
HeaderDetector: locate the identity-header row beneath report metadata.

Exports from the time tracker carry a title block (company, report name,
Time Period, ...) above the real table. The header row is recognised by
its first three cells, which read Name / ID / Department or their Uzbek
equivalents.
"""

from __future__ import annotations

from attendance.excel.config import HEADER_ROW_MARKERS, ParserConfig, DEFAULT_CONFIG
from attendance.excel.reader import SheetGrid


class HeaderDetector:
    """Find the zero-based header row index of a :class:`SheetGrid`."""

    def __init__(self, cfg: ParserConfig = DEFAULT_CONFIG):
        self._cfg = cfg

    @staticmethod
    def looks_like_header_row(cells: list) -> bool:
        """True when columns A, B, C each contain one of their marker substrings."""
        for col, markers in enumerate(HEADER_ROW_MARKERS):
            value = str(cells[col]).lower() if col < len(cells) else ""
            if not any(marker in value for marker in markers):
                return False
        return True

    def find_header_row(self, grid: SheetGrid) -> int:
        """
        Scan rows ``0..header_scan_rows`` and return the first header-like row.

        Falls back to row ``0`` when nothing in the window matches.
        """
        last = min(grid.n_rows - 1, self._cfg.header_scan_rows)
        width = len(HEADER_ROW_MARKERS)
        for row in range(0, last + 1):
            cells = [grid.cell(row, col) for col in range(width)]
            if self.looks_like_header_row(cells):
                return row
        return 0
