"""
Income Percentile Service implementation.

Loads the income distribution once, keeps the parsed table for the lifetime
of the process, and answers percentile queries against it.

Until a load has succeeded the service reports "not ready" and every query
returns None, so callers can show the wage-per-minute figure without waiting
for (or depending on) the dataset.
"""

from __future__ import annotations

import asyncio
import logging
import math
from numbers import Real

from ..core.config import Settings, get_settings
from ..distribution import ParsedTable, lookup, parse_distribution
from ..errors import LivingMinuteError
from ..sources import DatasetSource, dataset_source_from_settings

logger = logging.getLogger(__name__)


class IncomePercentileService:
    """
    Cached income percentile lookups.

    Features:
    - Single async load shared by concurrent callers
    - Immutable parsed table cached after the first successful load
    - Failed loads leave the service "not ready" and record the error
    """

    def __init__(self, source: DatasetSource, settings: Settings | None = None):
        """
        Initialize the service.

        Args:
            source: Where the raw dataset text comes from
            settings: Column names and scale (defaults to global settings)
        """
        self._source = source
        self._settings = settings or get_settings()
        self._table: ParsedTable | None = None
        self._lock = asyncio.Lock()
        self.load_error: Exception | None = None

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "IncomePercentileService":
        settings = settings or get_settings()
        return cls(dataset_source_from_settings(settings), settings)

    @property
    def is_ready(self) -> bool:
        return self._table is not None

    @property
    def table(self) -> ParsedTable | None:
        """The parsed table, or None if no load has succeeded yet."""
        return self._table

    async def load(self) -> ParsedTable:
        """
        Fetch and parse the dataset, once.

        Later calls return the cached table. If a load fails the error is
        logged, stored on `load_error` and re-raised; a later call tries again.

        Raises:
            LivingMinuteError: Parse or source errors
            ExternalAPIError: If the HTTP fetch fails
        """
        if self._table is not None:
            return self._table

        async with self._lock:
            if self._table is not None:
                return self._table

            try:
                raw = await self._source.get_raw_dataset()
                table = parse_distribution(
                    raw,
                    count_column=self._settings.count_column,
                    label_column=self._settings.label_column,
                    income_scale=self._settings.income_scale,
                )
            except Exception as e:
                self.load_error = e
                code = e.code if isinstance(e, LivingMinuteError) else type(e).__name__
                logger.error("Failed to load income distribution [%s]: %s", code, e)
                raise

            self._table = table
            self.load_error = None
            logger.info(
                "Income distribution loaded: %d buckets, %d households",
                len(table),
                table.total_count,
            )
            return table

    def income_percentile_for(self, yearly_income: float) -> float | None:
        """
        Percentage of single-person households earning at least the bucket
        that `yearly_income` falls into.

        Returns:
            Percentile in [0, 100], or None if the dataset is not loaded or
            the income is not a number
        """
        if self._table is None:
            return None
        if isinstance(yearly_income, bool) or not isinstance(yearly_income, Real):
            return None
        if isinstance(yearly_income, float) and math.isnan(yearly_income):
            return None
        return lookup(self._table, yearly_income)

    async def close(self) -> None:
        await self._source.close()

    def get_status(self) -> dict:
        """Get service status."""
        return {
            "service": "income_percentile",
            "ready": self.is_ready,
            "buckets": len(self._table) if self._table is not None else 0,
            "total_households": self._table.total_count if self._table is not None else 0,
            "error": str(self.load_error) if self.load_error is not None else None,
        }


# Singleton instance
_service: IncomePercentileService | None = None


def get_income_percentile_service() -> IncomePercentileService:
    """Get the process-wide service, building it from settings on first use."""
    global _service
    if _service is None:
        _service = IncomePercentileService.from_settings()
    return _service


def set_income_percentile_service(service: IncomePercentileService | None) -> None:
    """Replace the process-wide service (tests, custom sources)."""
    global _service
    _service = service


def income_percentile_for(yearly_income: float) -> float | None:
    """Query the process-wide service. None until its dataset has loaded."""
    if _service is None:
        return None
    return _service.income_percentile_for(yearly_income)
