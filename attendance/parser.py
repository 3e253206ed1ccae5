"""
Parser Module
=============

Thin orchestrator over the excel stages:

  WorkbookReader  – bytes → SheetGrid
  PeriodResolver  – Time Period / manual year / current year
  HeaderDetector  – header row below the report title block
  SchemaMapper    – identity and date columns
  RowNormalizer   – rows → ImportedEmployee

``AttendanceParser.parse`` never raises: codec failures and structural
problems come back as strings in ``ParseResult.errors``.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Callable, List, Optional, Union

from attendance.excel import (
    DEFAULT_CONFIG,
    HeaderDetector,
    NoSheetError,
    ParserConfig,
    PeriodResolver,
    RowNormalizer,
    SchemaMapper,
    WorkbookReader,
)
from attendance.excel.config import (
    MSG_MISSING_COLUMN,
    MSG_NO_DATA,
    MSG_NO_DATE_COLUMNS,
    MSG_NO_SHEET,
    MSG_READ_ERROR,
    MSG_UNKNOWN_ERROR,
)
from attendance.logger import get_logger
from attendance.models import ParseResult

logger = get_logger(__name__)


class AttendanceParser:
    """
    Parse one attendance export per call.

    Args:
        cfg: scan windows, see :class:`ParserConfig`
        clock: returns "today"; only consulted when neither a manual year
            nor a Time Period cell is available
    """

    def __init__(
        self,
        cfg: ParserConfig = DEFAULT_CONFIG,
        clock: Callable[[], date] = date.today,
    ):
        self._cfg = cfg
        self._clock = clock
        self.reader = WorkbookReader(cfg)
        self.header_detector = HeaderDetector(cfg)
        self.period_resolver = PeriodResolver(cfg)
        self.schema_mapper = SchemaMapper()
        self.row_normalizer = RowNormalizer()

    def parse(
        self,
        data: bytes,
        manual_year: Optional[int] = None,
        filename: Optional[str] = None,
    ) -> ParseResult:
        """Run the whole pipeline over *data*; see module docstring."""
        warnings: List[str] = []
        try:
            return self._parse(data, manual_year, filename, warnings)
        except NoSheetError:
            logger.error("No worksheet in %s", filename or "<buffer>")
            return ParseResult(errors=[MSG_NO_SHEET], warnings=warnings)
        except Exception as e:
            logger.error("Failed to read %s: %s", filename or "<buffer>", e, exc_info=True)
            message = str(e) or MSG_UNKNOWN_ERROR
            return ParseResult(errors=[MSG_READ_ERROR.format(error=message)], warnings=warnings)

    def _parse(
        self,
        data: bytes,
        manual_year: Optional[int],
        filename: Optional[str],
        warnings: List[str],
    ) -> ParseResult:
        grid = self.reader.load(data, filename)

        period, notice = self.period_resolver.resolve(grid, manual_year, self._clock())
        warnings.append(notice)

        header_row = self.header_detector.find_header_row(grid)
        logger.info("Header row %d in sheet %r", header_row, grid.sheet_name)

        headers, rows = grid.records(header_row)
        if not any(row is not None for row in rows):
            return ParseResult(errors=[MSG_NO_DATA], warnings=warnings)

        mapping = self.schema_mapper.build(headers, period)
        missing = self.schema_mapper.missing_identity_fields(mapping.identity)
        if missing:
            logger.warning("Required columns missing: %s", missing)
            return ParseResult(
                errors=[MSG_MISSING_COLUMN.format(field=field) for field in missing],
                warnings=warnings,
            )

        date_columns = list(mapping.dates.values())
        if not date_columns:
            warnings.append(MSG_NO_DATE_COLUMNS)

        employees, row_warnings = self.row_normalizer.normalize(rows, mapping, header_row)
        warnings.extend(row_warnings)

        logger.info(
            "Parsed %d employees, %d date columns, %d warnings",
            len(employees), len(date_columns), len(warnings),
        )
        return ParseResult(employees=employees, date_columns=date_columns, warnings=warnings)


def parse_attendance_workbook(
    data: bytes,
    manual_year: Optional[int] = None,
    today: Optional[date] = None,
    filename: Optional[str] = None,
    cfg: ParserConfig = DEFAULT_CONFIG,
) -> ParseResult:
    """
    Convenience wrapper around :class:`AttendanceParser`.

    Pass *today* to pin the current-year fallback.
    """
    clock = (lambda: today) if today is not None else date.today
    return AttendanceParser(cfg, clock=clock).parse(data, manual_year=manual_year, filename=filename)


def parse_attendance_file(
    path: Union[str, Path],
    manual_year: Optional[int] = None,
    today: Optional[date] = None,
    cfg: ParserConfig = DEFAULT_CONFIG,
) -> ParseResult:
    """Read *path* and parse it; an unreadable file is reported like a corrupt buffer."""
    file_path = Path(path)
    try:
        data = file_path.read_bytes()
    except OSError as e:
        logger.error("Cannot read %s: %s", file_path, e)
        return ParseResult(errors=[MSG_READ_ERROR.format(error=str(e) or MSG_UNKNOWN_ERROR)])
    return parse_attendance_workbook(data, manual_year=manual_year, today=today, filename=file_path.name, cfg=cfg)
