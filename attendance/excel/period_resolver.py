"""
PeriodResolver: work out which calendar year(s) a sheet's day columns belong to.

The export writes its reporting window into a metadata cell such as
``:Time Period: 2025-12-01 - 2026-01-31:``. Columns are then labelled with
bare ``MM-DD`` headers, so the window is what places ``01-05`` in 2026
rather than 2025.

Resolution order: caller-supplied year, detected Time Period, current year.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Tuple

from attendance.excel.config import (
    DMY_DATE_RE,
    ISO_DATE_RE,
    MSG_PERIOD_CROSS_YEAR,
    MSG_PERIOD_DEFAULT,
    MSG_PERIOD_MANUAL,
    MSG_PERIOD_SINGLE_YEAR,
    PERIOD_FALLBACK_KEYWORDS,
    PERIOD_PREFERRED_KEYWORDS,
    ParserConfig,
    DEFAULT_CONFIG,
)
from attendance.excel.reader import SheetGrid
from attendance.logger import get_logger
from attendance.models import TimePeriod

logger = get_logger(__name__)


class PeriodResolver:
    """Detect the Time Period metadata cell and pick the effective period."""

    def __init__(self, cfg: ParserConfig = DEFAULT_CONFIG):
        self._cfg = cfg

    # -----------------------------------------------------------------
    # Text extraction
    # -----------------------------------------------------------------

    @staticmethod
    def extract_period(text: str) -> Optional[TimePeriod]:
        """
        Pull a start/end (year, month) pair out of a Time Period cell.

        Tried in order: two ISO dates, one ISO date (used as start and end),
        two ``D.M.YYYY`` / ``D/M/YYYY`` dates. Day values are ignored.
        """
        iso = ISO_DATE_RE.findall(text or "")
        if len(iso) >= 2:
            (sy, sm, _), (ey, em, _) = iso[0], iso[1]
            return TimePeriod(start_year=int(sy), start_month=int(sm), end_year=int(ey), end_month=int(em))
        if len(iso) == 1:
            year, month, _ = iso[0]
            return TimePeriod(start_year=int(year), start_month=int(month), end_year=int(year), end_month=int(month))

        dmy = DMY_DATE_RE.findall(text or "")
        if len(dmy) >= 2:
            (_, sm, sy), (_, em, ey) = dmy[0], dmy[1]
            return TimePeriod(start_year=int(sy), start_month=int(sm), end_year=int(ey), end_month=int(em))
        return None

    # -----------------------------------------------------------------
    # Sheet scan
    # -----------------------------------------------------------------

    def _scan(
        self,
        grid: SheetGrid,
        rows: Iterable[int],
        keywords: Tuple[str, ...],
    ) -> Optional[TimePeriod]:
        last_col = min(grid.n_cols - 1, self._cfg.period_scan_cols)
        for row in rows:
            for col in range(0, last_col + 1):
                value = grid.cell(row, col)
                lowered = value.lower()
                if not any(k in lowered for k in keywords):
                    continue
                period = self.extract_period(value)
                if period is not None:
                    logger.debug("Time Period found at (%d, %d): %r", row, col, value)
                    return period
        return None

    def detect(self, grid: SheetGrid) -> Optional[TimePeriod]:
        """Look in the template's metadata row first, then in the top-left window."""
        preferred = self._cfg.period_row
        if preferred < grid.n_rows:
            period = self._scan(grid, [preferred], PERIOD_PREFERRED_KEYWORDS)
            if period is not None:
                return period
        last_row = min(grid.n_rows - 1, self._cfg.period_scan_rows)
        return self._scan(grid, range(0, last_row + 1), PERIOD_FALLBACK_KEYWORDS)

    # -----------------------------------------------------------------
    # Effective period
    # -----------------------------------------------------------------

    def resolve(
        self,
        grid: SheetGrid,
        manual_year: Optional[int],
        today: date,
    ) -> Tuple[TimePeriod, str]:
        """
        Return ``(period, notice)``.

        *notice* names the path taken and is always produced, so callers
        append exactly one period warning per parse.
        """
        if manual_year:
            logger.info("Using manual year %d", manual_year)
            return TimePeriod.whole_year(manual_year), MSG_PERIOD_MANUAL.format(year=manual_year)

        detected = self.detect(grid)
        if detected is not None:
            logger.info(
                "Detected Time Period %d-%02d .. %d-%02d",
                detected.start_year, detected.start_month, detected.end_year, detected.end_month,
            )
            if not detected.is_cross_year:
                return detected, MSG_PERIOD_SINGLE_YEAR.format(year=detected.start_year)
            return detected, MSG_PERIOD_CROSS_YEAR.format(
                start_year=detected.start_year,
                end_year=detected.end_year,
                start_month=detected.start_month,
                end_month=detected.end_month,
            )

        logger.info("No Time Period in sheet, defaulting to %d", today.year)
        return TimePeriod.whole_year(today.year), MSG_PERIOD_DEFAULT.format(year=today.year)
