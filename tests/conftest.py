"""
Pytest configuration and shared fixtures.
"""
import io
import os
import sys
from datetime import date

import pytest
from openpyxl import Workbook

# Add project root to path for imports
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)


def build_xlsx(rows, title="Sheet1"):
    """Write *rows* (lists of cell values) to an in-memory .xlsx and return the bytes."""
    wb = Workbook()
    ws = wb.active
    ws.title = title
    for row in rows:
        ws.append(list(row))
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def build_csv(lines):
    return ("\n".join(lines) + "\n").encode("utf-8")


def template_rows(period_text, header, data_rows):
    """
    Rows shaped like the time tracker's export: a title block of seven
    metadata rows (Time Period on row 7), one more metadata row, then the table.
    """
    return [
        ["Attendance Report"],
        [":Company: Example LLC:"],
        [":Report Type: Daily Attendance:"],
        [":Department: All Departments:"],
        [":Generated By: admin:"],
        [":Generated At: 2026-02-01 09:00:00:"],
        [period_text],
        [":Shift: All:"],
        header,
        *data_rows,
    ]


@pytest.fixture
def xlsx_bytes():
    return build_xlsx


@pytest.fixture
def csv_bytes():
    return build_csv


@pytest.fixture
def export_rows():
    return template_rows


@pytest.fixture
def fixed_today():
    return date(2031, 5, 5)
