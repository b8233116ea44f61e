"""
Living Minute

Converts a wage into earnings per living minute and ranks the yearly income
among Dutch single-person households, using the CBS standardised income
distribution.

Key Features:
- All-or-nothing parsing of the CBS distribution export
- Inclusive lower-bound percentile lookup over the parsed buckets
- Async, load-once dataset cache with a "not ready" state

Usage:
    from living_minute import IncomePercentileService, StaticDatasetSource, quote

    service = IncomePercentileService(StaticDatasetSource(csv_text))
    await service.load()

    result = quote(3200, "monthly", holiday_pay_percentage=8, percentiles=service)
    result.per_minute, result.income_percentile
"""

from .distribution import (
    IncomeBucket,
    ParsedBucket,
    ParsedTable,
    lookup,
    make_percentile_function,
    parse_distribution,
    parse_distribution_file,
)
from .errors import (
    DatasetParseError,
    DatasetSourceError,
    DuplicateBoundaryError,
    EmptyDistributionError,
    InvalidCountError,
    InvalidInputError,
    InvariantViolationError,
    LivingMinuteError,
    MissingLowerBoundError,
    SchemaError,
    UnrecognizedLabelError,
    WageInputError,
)
from .services import (
    IncomePercentileService,
    get_income_percentile_service,
    income_percentile_for,
    set_income_percentile_service,
)
from .sources import (
    DatasetSource,
    FileDatasetSource,
    HttpDatasetSource,
    StaticDatasetSource,
    dataset_source_from_settings,
)
from .wage import WageFrequency, WageQuote, quote, wage_per_minute, yearly_wage

__all__ = [
    # Distribution
    "IncomeBucket",
    "ParsedBucket",
    "ParsedTable",
    "parse_distribution",
    "parse_distribution_file",
    "lookup",
    "make_percentile_function",
    # Errors
    "LivingMinuteError",
    "DatasetParseError",
    "SchemaError",
    "UnrecognizedLabelError",
    "DuplicateBoundaryError",
    "MissingLowerBoundError",
    "InvalidCountError",
    "EmptyDistributionError",
    "InvariantViolationError",
    "InvalidInputError",
    "DatasetSourceError",
    "WageInputError",
    # Sources
    "DatasetSource",
    "StaticDatasetSource",
    "FileDatasetSource",
    "HttpDatasetSource",
    "dataset_source_from_settings",
    # Service
    "IncomePercentileService",
    "get_income_percentile_service",
    "set_income_percentile_service",
    "income_percentile_for",
    # Wage
    "WageFrequency",
    "WageQuote",
    "yearly_wage",
    "wage_per_minute",
    "quote",
]
