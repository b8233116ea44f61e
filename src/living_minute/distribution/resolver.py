"""
Percentile lookup over a parsed income distribution.
"""

from __future__ import annotations

import logging
import math
from numbers import Real
from typing import Callable

from ..errors import InvalidInputError, InvariantViolationError
from .models import ParsedTable

logger = logging.getLogger(__name__)


def lookup(table: ParsedTable, income: float) -> float:
    """
    Return the cumulative percentile of the bucket `income` falls into.

    Buckets are sorted descending by income_min, so the first bucket whose
    lower bound is <= income is the right one. Lower bounds are inclusive.

    Raises:
        InvalidInputError: If income is not a real number, is a bool, or is NaN
        InvariantViolationError: If no bucket matches (table skipped validation)
    """
    if isinstance(income, bool) or not isinstance(income, Real):
        raise InvalidInputError(income)
    if isinstance(income, float) and math.isnan(income):
        raise InvalidInputError(income)

    for bucket in table.buckets:
        if bucket.income_min <= income:
            return bucket.cumulative_percentile

    logger.error("No bucket for income %s in table %r", income, table)
    raise InvariantViolationError(income)


def make_percentile_function(table: ParsedTable) -> Callable[[float], float]:
    """Bind `table` into a plain income -> percentile function."""

    def get_income_percentile(income: float) -> float:
        return lookup(table, income)

    return get_income_percentile
