"""
DataCleaner: value normalisation utilities for the attendance parser.

Responsibilities:
- Cell-level string conversion (``cell_to_str``)
- Header-text normalisation for alias lookup
- Department-name cleanup
- Status-code coercion
"""

from __future__ import annotations

import re
from datetime import date, datetime, time
from typing import Any

import pandas as pd

from attendance.excel.config import (
    DEFAULT_STATUS_CODE,
    DEPARTMENT_PREFIX_RE,
    VALID_STATUS_CODES,
)
from attendance.models import AttendanceStatusCode


class DataCleaner:
    """Stateless helper that normalises raw cell values and header text."""

    # ----- cell → string ---------------------------------------------------

    @staticmethod
    def cell_to_str(value: Any) -> str:
        """
        Convert an arbitrary cell value to a clean string.

        Integral floats lose their ``.0`` and midnight datetimes collapse to
        ``YYYY-MM-DD`` so that values the codec auto-converted still read
        the way they were typed in the sheet.
        """
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        try:
            if pd.isna(value):
                return ""
        except (TypeError, ValueError):
            pass
        if isinstance(value, bool):
            return str(value)
        if isinstance(value, (datetime, pd.Timestamp)):
            if value.time() == time(0, 0):
                return value.date().isoformat()
            return value.isoformat(sep=" ", timespec="seconds")
        if isinstance(value, date):
            return value.isoformat()
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        # Rich-text objects from openpyxl may expose .plain or .text
        plain_attr = getattr(value, "plain", None)
        if isinstance(plain_attr, str):
            return plain_attr.strip()
        text_attr = getattr(value, "text", None)
        if isinstance(text_attr, str):
            return text_attr.strip()
        text = str(value).strip()
        if text.lower() in {"nan", "none", "nat"}:
            return ""
        return text

    # ----- header text normalisation ---------------------------------------

    @staticmethod
    def normalize_header(text: Any) -> str:
        """Trim, lower-case and collapse internal whitespace for alias lookup."""
        if text is None:
            return ""
        return re.sub(r"\s+", " ", str(text).strip().lower())

    # ----- semantic value normalisation ------------------------------------

    @staticmethod
    def clean_department(text: Any) -> str:
        """
        Strip the ``All Departments>`` breadcrumb the exporter prepends,
        then trim and upper-case what remains.
        """
        cleaned = DEPARTMENT_PREFIX_RE.sub("", DataCleaner.cell_to_str(text))
        return cleaned.strip().upper()

    @staticmethod
    def parse_status_code(text: Any) -> AttendanceStatusCode:
        """Case-insensitive exact match against the status codes; anything else is ``A``."""
        normalized = DataCleaner.cell_to_str(text).upper()
        if normalized in VALID_STATUS_CODES:
            return AttendanceStatusCode(normalized)
        return AttendanceStatusCode(DEFAULT_STATUS_CODE)
