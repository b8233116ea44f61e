"""
Error taxonomy for living-minute.

Every error carries a machine-readable `code`, a human-readable `message`
and optional `detail`, so a hosting layer can report failures uniformly:
{
    "code": "ERROR_CODE",
    "message": "Human-readable message",
    "detail": "Optional additional context"
}
"""

from __future__ import annotations


class LivingMinuteError(Exception):
    """Base class for all living-minute errors."""

    code = "LIVING_MINUTE_ERROR"

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_dict(self) -> dict[str, str | None]:
        return {"code": self.code, "message": self.message, "detail": self.detail}


# =============================================================================
# Dataset parsing
# =============================================================================


class DatasetParseError(LivingMinuteError):
    """A dataset could not be turned into a percentile table. Aborts the whole load."""

    code = "DATASET_PARSE_ERROR"


class SchemaError(DatasetParseError):
    """A required column is missing from the header row."""

    code = "SCHEMA_ERROR"

    def __init__(self, missing: list[str], found: list[str]):
        self.missing = missing
        self.found = found
        super().__init__(
            "CSV does not contain the required columns",
            detail=f"missing {missing!r}, found {found!r}",
        )


class UnrecognizedLabelError(DatasetParseError):
    """An income-range label matches none of the known patterns."""

    code = "UNRECOGNIZED_LABEL"

    def __init__(self, label: str, row: int | None = None):
        self.label = label
        self.row = row
        super().__init__(
            f"Invalid income range: {label}",
            detail=f"row {row}" if row is not None else None,
        )


class DuplicateBoundaryError(DatasetParseError):
    """Two rows claim the same lower boundary (e.g. two open-low rows)."""

    code = "DUPLICATE_BOUNDARY"

    def __init__(self, message: str, label: str | None = None, row: int | None = None):
        self.label = label
        self.row = row
        super().__init__(message, detail=f"row {row}: {label!r}" if row is not None else label)


class MissingLowerBoundError(DatasetParseError):
    """No row anchors the distribution at negative infinity."""

    code = "MISSING_LOWER_BOUND"

    def __init__(self):
        super().__init__("No first row, with income minimum of -inf found")


class InvalidCountError(DatasetParseError):
    """A household count is not a non-negative integer."""

    code = "INVALID_COUNT"

    def __init__(self, value: str, row: int):
        self.value = value
        self.row = row
        super().__init__(f"Invalid household count: {value!r}", detail=f"row {row}")


class EmptyDistributionError(DatasetParseError):
    """The households sum to zero, so no percentile can be normalised."""

    code = "EMPTY_DISTRIBUTION"

    def __init__(self):
        super().__init__("Income distribution has a total household count of zero")


# =============================================================================
# Lookup
# =============================================================================


class InvariantViolationError(LivingMinuteError, AssertionError):
    """
    A lookup found no bucket for an income.

    Only possible if a table bypassed validation. This is a logic defect and
    must not be caught and retried.
    """

    code = "INVARIANT_VIOLATION"

    def __init__(self, income: float):
        self.income = income
        super().__init__(f"No income match found for income {income}")


class InvalidInputError(LivingMinuteError, ValueError):
    """A lookup was called with something that is not a usable number."""

    code = "INVALID_INPUT"

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Income must be a real number, got {value!r}")


# =============================================================================
# Sources and wages
# =============================================================================


class DatasetSourceError(LivingMinuteError):
    """The raw dataset could not be located or read."""

    code = "DATASET_SOURCE_ERROR"


class WageInputError(LivingMinuteError, ValueError):
    """Wage inputs cannot be converted to a yearly figure."""

    code = "WAGE_INPUT_ERROR"
