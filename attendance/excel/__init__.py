"""
Excel parsing subpackage.

Public API:
  - WorkbookReader / SheetGrid  (byte buffer -> cell grid)
  - HeaderDetector              (header row location)
  - PeriodResolver              (Time Period detection, year fallback)
  - SchemaMapper                (identity / date column classification)
  - RowNormalizer               (rows -> ImportedEmployee)
  - DataCleaner                 (cell / status / department normalisation)
  - ParserConfig                (scan windows)
"""

from attendance.excel.config import ParserConfig, DEFAULT_CONFIG
from attendance.excel.data_cleaner import DataCleaner
from attendance.excel.reader import NoSheetError, SheetGrid, WorkbookReader
from attendance.excel.header_detector import HeaderDetector
from attendance.excel.period_resolver import PeriodResolver
from attendance.excel.schema_mapper import SchemaMapper
from attendance.excel.row_normalizer import RowNormalizer

__all__ = [
    "ParserConfig",
    "DEFAULT_CONFIG",
    "DataCleaner",
    "NoSheetError",
    "SheetGrid",
    "WorkbookReader",
    "HeaderDetector",
    "PeriodResolver",
    "SchemaMapper",
    "RowNormalizer",
]
