"""
Centralised configuration for the attendance workbook parser.

All scan windows, regex patterns, alias tables, status codes and diagnostic
message templates live here so the pipeline stages stay free of
hard-coded values.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Pattern, Tuple


# ---------------------------------------------------------------------------
# Identity columns
# ---------------------------------------------------------------------------

FIELD_NAME = "Name"
FIELD_ID = "ID"
FIELD_DEPARTMENT = "Department"

REQUIRED_FIELDS: Tuple[str, ...] = (FIELD_NAME, FIELD_ID, FIELD_DEPARTMENT)

# Normalized header text -> canonical field. Order of the dict is the
# order in which fields are tried for a single header.
COLUMN_ALIASES: Dict[str, Tuple[str, ...]] = {
    FIELD_NAME: ("name", "ism", "f.i.sh", "fio", "xodim", "employee", "employee name"),
    FIELD_ID: ("id", "xodim id", "employee id", "tabel", "tabel raqami"),
    FIELD_DEPARTMENT: ("department", "bo'lim", "bolim", "dept", "отдел"),
}

# Substrings looked for in columns A, B and C by the header locator.
HEADER_ROW_MARKERS: Tuple[Tuple[str, ...], ...] = (
    ("name", "ism"),
    ("id", "tabel"),
    ("department", "bo'lim"),
)


# ---------------------------------------------------------------------------
# Date header patterns
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DateHeaderPattern:
    """One recognised date-header shape and the meaning of its groups."""

    name: str
    regex: Pattern[str]
    field_order: Tuple[str, ...]


# Tried in order; first match wins.
DATE_HEADER_PATTERNS: Tuple[DateHeaderPattern, ...] = (
    DateHeaderPattern("MM-DD", re.compile(r"^(\d{2})-(\d{2})$"), ("month", "day")),
    DateHeaderPattern("MM/DD", re.compile(r"^(\d{2})/(\d{2})$"), ("month", "day")),
    DateHeaderPattern("YYYY-MM-DD", re.compile(r"^(\d{4})-(\d{2})-(\d{2})$"), ("year", "month", "day")),
    DateHeaderPattern("DD.MM", re.compile(r"^(\d{2})\.(\d{2})$"), ("day", "month")),
    DateHeaderPattern("DD.MM.YYYY", re.compile(r"^(\d{2})\.(\d{2})\.(\d{4})$"), ("day", "month", "year")),
)


# ---------------------------------------------------------------------------
# Time Period metadata
# ---------------------------------------------------------------------------

PERIOD_PREFERRED_KEYWORDS: Tuple[str, ...] = ("time period",)
PERIOD_FALLBACK_KEYWORDS: Tuple[str, ...] = ("time period", "davr")

ISO_DATE_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2})")
DMY_DATE_RE = re.compile(r"(\d{1,2})[/.](\d{1,2})[/.](\d{4})")


# ---------------------------------------------------------------------------
# Status codes and department cleanup
# ---------------------------------------------------------------------------

VALID_STATUS_CODES: Tuple[str, ...] = ("W", "L", "E", "LE", "A", "NS", "H")
DEFAULT_STATUS_CODE = "A"

DEPARTMENT_PREFIX_RE = re.compile(r"All\s*Departments\s*>\s*", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Diagnostic messages (Uzbek, as shown to operators)
# ---------------------------------------------------------------------------

MSG_NO_SHEET = "Excel faylda hech qanday varaq topilmadi"
MSG_NO_DATA = "Excel faylda ma'lumot topilmadi"
MSG_MISSING_COLUMN = "Majburiy ustun topilmadi: {field}"
MSG_READ_ERROR = "Faylni o'qishda xatolik: {error}"
MSG_UNKNOWN_ERROR = "Noma'lum xatolik"
MSG_NO_DATE_COLUMNS = "Sana ustunlari topilmadi. Faqat xodim ma'lumotlari import qilinadi."
MSG_EMPTY_ID = "{row}-qator: ID bo'sh, o'tkazib yuborildi"
MSG_EMPTY_NAME = "{row}-qator: Ism bo'sh, o'tkazib yuborildi"
MSG_PERIOD_MANUAL = "Qo'lda kiritilgan yil ishlatiladi: {year}"
MSG_PERIOD_SINGLE_YEAR = "Time Period topildi: {year} yil"
MSG_PERIOD_CROSS_YEAR = (
    "Time Period topildi: {start_year}-{end_year} yillar "
    "({start_month}-oydan {end_month}-oygacha)"
)
MSG_PERIOD_DEFAULT = "Time Period topilmadi, joriy yil ishlatiladi: {year}"


# ---------------------------------------------------------------------------
# ParserConfig: tunable scan windows
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ParserConfig:
    """Immutable bag of scan windows used throughout the parser."""

    # Header locator: rows 0..header_scan_rows (inclusive)
    header_scan_rows: int = 15

    # Period resolver: designated template row, then a rows x cols window
    period_row: int = 6
    period_scan_rows: int = 10
    period_scan_cols: int = 10

    # Sheet index handed to the codec
    sheet_index: int = 0


# Singleton default config
DEFAULT_CONFIG = ParserConfig()
