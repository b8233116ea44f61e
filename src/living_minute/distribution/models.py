"""
Immutable data types for the income distribution table.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass(frozen=True)
class IncomeBucket:
    """One data row of the source table. `line` is its physical line in the file."""

    label: str
    count: int
    line: int | None = field(default=None, compare=False)


@dataclass(frozen=True)
class ParsedBucket:
    """
    A bucket with numeric bounds and its cumulative percentile.

    Attributes:
        label: Source label, e.g. "10 and 20"
        count: Households in this bucket
        income_min: Lower bound in euros, -inf for the open-low bucket
        income_max: Upper bound in euros, +inf for an open-high bucket
        cumulative_percentile: Share of households at or above income_min,
            computed as 100 - cumulative_count / total * 100
    """

    label: str
    count: int
    income_min: float
    income_max: float
    cumulative_percentile: float

    @property
    def is_open_low(self) -> bool:
        return self.income_min == -math.inf

    @property
    def is_open_high(self) -> bool:
        return self.income_max == math.inf


@dataclass(frozen=True)
class ParsedTable:
    """Buckets sorted descending by income_min, plus the household total."""

    buckets: tuple[ParsedBucket, ...]
    total_count: int

    def __len__(self) -> int:
        return len(self.buckets)

    def __iter__(self):
        return iter(self.buckets)

    @property
    def thresholds(self) -> tuple[float, ...]:
        return tuple(b.income_min for b in self.buckets)

    def lookup(self, income: float) -> float:
        """Percentile for `income`. See resolver.lookup."""
        from .resolver import lookup

        return lookup(self, income)
