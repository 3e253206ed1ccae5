"""
SchemaMapper: classify header strings into identity and date columns.

Identity headers are looked up in the alias table from
``attendance.excel.config``; date headers are recognised by the ordered
``DATE_HEADER_PATTERNS`` table and normalised to ``YYYY-MM-DD`` using the
resolved :class:`~attendance.models.TimePeriod`.

Typical call sequence inside the parser::

    mapper = SchemaMapper()
    identity = mapper.map_identity_columns(headers)
    missing = mapper.missing_identity_fields(identity)
    dates = mapper.map_date_columns(headers, identity, period)
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from attendance.excel.config import (
    COLUMN_ALIASES,
    DATE_HEADER_PATTERNS,
    REQUIRED_FIELDS,
    DateHeaderPattern,
)
from attendance.excel.data_cleaner import DataCleaner
from attendance.models import ColumnMapping, TimePeriod


class SchemaMapper:
    """Map raw headers to canonical fields and normalised dates."""

    # ------------------------------------------------------------------
    # Identity columns
    # ------------------------------------------------------------------

    @staticmethod
    def identity_field_for(header: str) -> Optional[str]:
        """Canonical field whose alias list contains *header*, or ``None``."""
        normalized = DataCleaner.normalize_header(header)
        if not normalized:
            return None
        for field, aliases in COLUMN_ALIASES.items():
            if normalized in aliases or normalized == field.lower():
                return field
        return None

    @staticmethod
    def map_identity_columns(headers: List[str]) -> Dict[str, str]:
        """
        Return ``{field: original header}``.

        A later header mapping to an already-seen field replaces the earlier one.
        """
        mapping: Dict[str, str] = {}
        for header in headers:
            field = SchemaMapper.identity_field_for(header)
            if field:
                mapping[field] = header
        return mapping

    @staticmethod
    def missing_identity_fields(mapping: Dict[str, str]) -> List[str]:
        return [field for field in REQUIRED_FIELDS if field not in mapping]

    # ------------------------------------------------------------------
    # Date columns
    # ------------------------------------------------------------------

    @staticmethod
    def match_date_pattern(header: str) -> Optional[Tuple[DateHeaderPattern, Dict[str, int]]]:
        """
        Return the first matching pattern and its parsed fields, e.g.
        ``{"month": 12, "day": 1}`` for ``"12-01"``.
        """
        text = str(header or "").strip()
        for pattern in DATE_HEADER_PATTERNS:
            m = pattern.regex.match(text)
            if m:
                fields = {name: int(value) for name, value in zip(pattern.field_order, m.groups())}
                return pattern, fields
        return None

    @staticmethod
    def is_date_column(header: str) -> bool:
        return SchemaMapper.match_date_pattern(header) is not None

    @staticmethod
    def normalize_date(header: str, period: TimePeriod) -> str:
        """
        Turn a date header into ``YYYY-MM-DD``.

        Headers without a year take it from *period*; in a cross-year period
        a month earlier than ``start_month`` belongs to ``end_year``.
        Unrecognised headers are returned trimmed and otherwise unchanged.
        """
        matched = SchemaMapper.match_date_pattern(header)
        if matched is None:
            return str(header or "").strip()
        _, fields = matched
        month, day = fields["month"], fields["day"]
        # Headers carrying their own year keep it; DD.MM.YYYY is re-emitted as
        # YYYY-MM-DD so every date column shares one key shape.
        year = fields.get("year")
        if year is None:
            year = period.year_for_month(month)
        return f"{year:04d}-{month:02d}-{day:02d}"

    @staticmethod
    def map_date_columns(
        headers: List[str],
        identity: Dict[str, str],
        period: TimePeriod,
    ) -> Dict[str, str]:
        """Return ``{original header: normalised date}`` in column order."""
        identity_headers = set(identity.values())
        dates: Dict[str, str] = {}
        for header in headers:
            if header in identity_headers:
                continue
            if not SchemaMapper.is_date_column(header):
                continue
            dates[header] = SchemaMapper.normalize_date(header, period)
        return dates

    def build(self, headers: List[str], period: TimePeriod) -> ColumnMapping:
        identity = self.map_identity_columns(headers)
        return ColumnMapping(identity=identity, dates=self.map_date_columns(headers, identity, period))
