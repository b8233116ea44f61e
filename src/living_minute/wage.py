"""
Wage normalisation and per-minute conversion.

A wage is converted to a yearly figure, then spread over every minute of the
year ("per living minute"), sleeping and weekends included.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

from .errors import WageInputError

if TYPE_CHECKING:
    from .services.income_percentile import IncomePercentileService

MINUTES_PER_YEAR = 365 * 24 * 60
MONTHS_PER_YEAR = 12


class WageFrequency(str, Enum):
    YEARLY = "yearly"
    MONTHLY = "monthly"
    HOURLY = "hourly"


class PeriodsPerYear(int, Enum):
    """How often an hourly worker's hours repeat in a year."""

    WEEK = 52
    MONTH = 12
    FOUR_WEEKS = 13


def with_holiday_pay(wage: float, holiday_pay_percentage: Optional[float]) -> float:
    """Add holiday pay (e.g. 8 for the Dutch 8% vakantiegeld)."""
    if not holiday_pay_percentage:
        return wage
    return wage * (1 + holiday_pay_percentage / 100)


def yearly_wage(
    wage: float,
    frequency: WageFrequency | str = WageFrequency.MONTHLY,
    hours_per_period: float = 24,
    periods_per_year: int = PeriodsPerYear.WEEK,
    holiday_pay_percentage: Optional[float] = None,
) -> float:
    """
    Convert a wage at the given frequency to a yearly wage, holiday pay included.

    Raises:
        WageInputError: Unknown frequency, or hourly with zero hours or periods
    """
    try:
        frequency = WageFrequency(frequency)
    except ValueError:
        raise WageInputError(f"Invalid wage frequency: {frequency!r}")

    wage = with_holiday_pay(wage, holiday_pay_percentage)

    if frequency is WageFrequency.YEARLY:
        return wage
    if frequency is WageFrequency.MONTHLY:
        return wage * MONTHS_PER_YEAR

    if not hours_per_period or not periods_per_year:
        raise WageInputError(
            "Hourly wages need hours per period and periods per year",
            detail=f"hours_per_period={hours_per_period}, periods_per_year={periods_per_year}",
        )
    return wage * hours_per_period * periods_per_year


def wage_per_minute(yearly: float) -> float:
    return yearly / MINUTES_PER_YEAR


@dataclass(frozen=True)
class WageQuote:
    """Everything the result screen shows."""

    yearly_wage: float
    per_minute: float
    income_percentile: Optional[float] = None

    @property
    def has_percentile(self) -> bool:
        return self.income_percentile is not None


def quote(
    wage: float,
    frequency: WageFrequency | str = WageFrequency.MONTHLY,
    hours_per_period: float = 24,
    periods_per_year: int = PeriodsPerYear.WEEK,
    holiday_pay_percentage: Optional[float] = None,
    percentiles: "IncomePercentileService | None" = None,
) -> WageQuote:
    """
    Build a WageQuote.

    The percentile is looked up only when a loaded service is given; its
    absence never affects the per-minute figure.
    """
    if isinstance(wage, float) and math.isnan(wage):
        raise WageInputError("Wage is not a number")
    yearly = yearly_wage(
        wage,
        frequency,
        hours_per_period=hours_per_period,
        periods_per_year=periods_per_year,
        holiday_pay_percentage=holiday_pay_percentage,
    )
    percentile = percentiles.income_percentile_for(yearly) if percentiles is not None else None
    return WageQuote(
        yearly_wage=yearly,
        per_minute=wage_per_minute(yearly),
        income_percentile=percentile,
    )
