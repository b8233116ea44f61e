"""
Tests for wage conversion and quotes.
"""

import math

import pytest

from living_minute.errors import WageInputError
from living_minute.services import IncomePercentileService
from living_minute.sources import StaticDatasetSource
from living_minute.wage import (
    MINUTES_PER_YEAR,
    PeriodsPerYear,
    WageFrequency,
    quote,
    wage_per_minute,
    yearly_wage,
)


class TestYearlyWage:
    def test_yearly(self):
        assert yearly_wage(52_560, WageFrequency.YEARLY) == 52_560

    def test_monthly(self):
        assert yearly_wage(3_000, "monthly") == 36_000

    def test_hourly(self):
        assert yearly_wage(20, "hourly", hours_per_period=40, periods_per_year=PeriodsPerYear.WEEK) == 41_600

    def test_hourly_four_weekly(self):
        assert yearly_wage(20, "hourly", hours_per_period=160, periods_per_year=PeriodsPerYear.FOUR_WEEKS) == 41_600

    def test_hourly_fractional_periods(self):
        assert yearly_wage(10, "hourly", hours_per_period=10, periods_per_year=4.5) == pytest.approx(450)

    def test_holiday_pay(self):
        assert yearly_wage(3_000, "monthly", holiday_pay_percentage=8) == pytest.approx(38_880)

    def test_zero_holiday_pay(self):
        assert yearly_wage(3_000, "monthly", holiday_pay_percentage=0) == 36_000

    @pytest.mark.parametrize("hours,periods", [(0, 52), (40, 0)])
    def test_hourly_needs_hours_and_periods(self, hours, periods):
        with pytest.raises(WageInputError):
            yearly_wage(20, "hourly", hours_per_period=hours, periods_per_year=periods)

    def test_unknown_frequency(self):
        with pytest.raises(WageInputError, match="Invalid wage frequency"):
            yearly_wage(20, "weekly")


class TestPerMinute:
    def test_minutes_per_year(self):
        assert MINUTES_PER_YEAR == 525_600

    def test_wage_per_minute(self):
        assert wage_per_minute(52_560) == pytest.approx(0.1)


class TestQuote:
    def test_without_dataset(self):
        result = quote(4_380, "monthly")
        assert result.yearly_wage == 52_560
        assert result.per_minute == pytest.approx(0.1)
        assert result.income_percentile is None
        assert not result.has_percentile

    def test_unloaded_service_does_not_block_per_minute(self, simple_csv, settings):
        service = IncomePercentileService(StaticDatasetSource(simple_csv), settings)
        result = quote(15_000, "yearly", percentiles=service)
        assert result.per_minute == pytest.approx(15_000 / MINUTES_PER_YEAR)
        assert result.income_percentile is None

    @pytest.mark.asyncio
    async def test_with_loaded_service(self, simple_csv, settings):
        service = IncomePercentileService(StaticDatasetSource(simple_csv), settings)
        await service.load()

        result = quote(1_250, "monthly", percentiles=service)
        assert result.yearly_wage == 15_000
        assert result.income_percentile == pytest.approx(20)
        assert result.has_percentile

    def test_nan_wage(self):
        with pytest.raises(WageInputError):
            quote(math.nan, "yearly")
