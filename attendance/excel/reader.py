"""
WorkbookReader: decode a spreadsheet byte buffer into a read-only grid.

Encapsulates:
- engine selection (openpyxl for .xlsx, xlrd for .xls, CSV otherwise)
- whole-sheet reads with no header inference or NA coercion
- ``SheetGrid``, the cell-level view every later stage works against
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd
from openpyxl import load_workbook

from attendance.excel.config import ParserConfig, DEFAULT_CONFIG
from attendance.excel.data_cleaner import DataCleaner
from attendance.logger import get_logger

logger = get_logger(__name__)

XLSX_MAGIC = b"PK\x03\x04"
XLS_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"

EMPTY_HEADER_PREFIX = "__EMPTY_"


class NoSheetError(Exception):
    """The workbook decoded but contains no worksheet."""


class SheetGrid:
    """
    Read-only view over one decoded sheet.

    Cells are addressed by zero-based ``(row, col)`` and always come back
    as trimmed strings; positions outside the used range read as ``""``.
    """

    def __init__(self, df: pd.DataFrame, sheet_name: str = ""):
        self._df = df
        self.sheet_name = sheet_name

    @property
    def n_rows(self) -> int:
        return int(self._df.shape[0])

    @property
    def n_cols(self) -> int:
        return int(self._df.shape[1]) if len(self._df.shape) > 1 else 0

    def raw(self, row: int, col: int) -> Any:
        if row < 0 or col < 0 or row >= self.n_rows or col >= self.n_cols:
            return None
        return self._df.iat[row, col]

    def cell(self, row: int, col: int) -> str:
        return DataCleaner.cell_to_str(self.raw(row, col))

    def row_values(self, row: int) -> List[str]:
        return [self.cell(row, col) for col in range(self.n_cols)]

    def headers(self, header_row: int) -> List[str]:
        """Header strings of *header_row*; blank cells get ``__EMPTY_<col>`` placeholders."""
        names: List[str] = []
        for col, text in enumerate(self.row_values(header_row)):
            names.append(text if text else f"{EMPTY_HEADER_PREFIX}{col}")
        return names

    def records(self, header_row: int) -> Tuple[List[str], List[Optional[Dict[str, str]]]]:
        """
        Treat *header_row* as the field-name row and every later row as a record.

        Returns ``(headers, rows)``. Headers keep column order with duplicates
        removed; for a duplicated header the right-most cell wins. Fully blank
        rows are returned as ``None`` so list positions keep matching sheet rows.
        """
        header_cells = self.headers(header_row)
        headers = list(dict.fromkeys(header_cells))
        rows: List[Optional[Dict[str, str]]] = []
        for r in range(header_row + 1, self.n_rows):
            values = self.row_values(r)
            if not any(values):
                rows.append(None)
                continue
            record: Dict[str, str] = {}
            for name, value in zip(header_cells, values):
                record[name] = value
            rows.append(record)
        # Trailing blank rows are part of the used range only by accident
        while rows and rows[-1] is None:
            rows.pop()
        return headers, rows


class WorkbookReader:
    """Decode ``.xlsx`` / ``.xls`` / ``.csv`` bytes into a :class:`SheetGrid`."""

    def __init__(self, cfg: ParserConfig = DEFAULT_CONFIG):
        self._cfg = cfg

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def load(self, data: bytes, filename: Optional[str] = None) -> SheetGrid:
        """
        Read the configured sheet of *data*.

        Raises :class:`NoSheetError` for a workbook without sheets; codec
        errors propagate unchanged.
        """
        kind = self.detect_format(data, filename)
        logger.debug("Decoding %d bytes as %s (filename=%s)", len(data), kind, filename)
        if kind == "csv":
            df = self._read_csv(data)
            return SheetGrid(df, sheet_name=Path(filename).stem if filename else "csv")
        sheet_names = self.list_sheet_names(data, kind)
        if not sheet_names:
            raise NoSheetError("workbook has no sheets")
        index = self._cfg.sheet_index if 0 <= self._cfg.sheet_index < len(sheet_names) else 0
        sheet_name = sheet_names[index]
        df = self._read_excel(data, sheet_name, kind)
        return SheetGrid(df, sheet_name=sheet_name)

    @staticmethod
    def detect_format(data: bytes, filename: Optional[str] = None) -> str:
        """Return ``"xlsx"``, ``"xls"`` or ``"csv"`` from the suffix, else from magic bytes."""
        suffix = Path(filename).suffix.lower() if filename else ""
        if suffix in (".xlsx", ".xlsm"):
            return "xlsx"
        if suffix == ".xls":
            return "xls"
        if suffix == ".csv":
            return "csv"
        if data.startswith(XLSX_MAGIC):
            return "xlsx"
        if data.startswith(XLS_MAGIC):
            return "xls"
        return "csv"

    @staticmethod
    def list_sheet_names(data: bytes, kind: str) -> List[str]:
        if kind == "xls":
            import xlrd
            wb = xlrd.open_workbook(file_contents=data)
            return wb.sheet_names()
        wb = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
        try:
            return list(wb.sheetnames or [])
        finally:
            wb.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _read_excel(data: bytes, sheet_name: str, kind: str) -> pd.DataFrame:
        engine = "xlrd" if kind == "xls" else "openpyxl"
        return pd.read_excel(
            io.BytesIO(data),
            sheet_name=sheet_name,
            header=None,
            dtype=object,
            keep_default_na=False,
            engine=engine,
        )

    @staticmethod
    def _read_csv(data: bytes) -> pd.DataFrame:
        # Metadata rows above the header are shorter than data rows, which
        # pandas.read_csv rejects; build the frame from csv rows instead.
        text = data.decode("utf-8-sig")
        rows = list(csv.reader(io.StringIO(text)))
        return pd.DataFrame(rows, dtype=object)
