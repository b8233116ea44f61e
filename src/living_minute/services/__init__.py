"""
Services module for living-minute.

This module provides:
- income_percentile: Cached dataset load and income percentile queries

Usage:
    from living_minute.services import get_income_percentile_service
    service = get_income_percentile_service()
    await service.load()
    service.income_percentile_for(42_000)
"""

from .income_percentile import (
    IncomePercentileService,
    get_income_percentile_service,
    income_percentile_for,
    set_income_percentile_service,
)

__all__ = [
    "IncomePercentileService",
    "get_income_percentile_service",
    "set_income_percentile_service",
    "income_percentile_for",
]
