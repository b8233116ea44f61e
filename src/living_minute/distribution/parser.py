"""
CBS income distribution parser.

Turns the delimited CBS export into a ParsedTable: one bucket per data row,
each carrying its lower income bound (in euros) and the percentage of
households at or above that bound.

CSV Format (delimiter is inferred from the header row):
    standardised income (x 1000 euros);Single persion
    less than 10;41
    10 and 11;25
    ...
    more than 200;12

Rows are expected lowest income first. The parse is all or nothing: any bad
row aborts it and no partial table is ever returned.
"""

from __future__ import annotations

import csv
import io
import logging
import math
import re
from pathlib import Path

from ..core.config import DEFAULT_COUNT_COLUMN, DEFAULT_LABEL_COLUMN
from ..errors import (
    DuplicateBoundaryError,
    EmptyDistributionError,
    InvalidCountError,
    MissingLowerBoundError,
    SchemaError,
    UnrecognizedLabelError,
)
from .labels import LabelBounds, LabelKind, classify_label
from .models import IncomeBucket, ParsedBucket, ParsedTable

logger = logging.getLogger(__name__)

CANDIDATE_DELIMITERS = (";", ",", "\t", "|")
COUNT_PATTERN = re.compile(r"\d+")


def detect_delimiter(header_line: str) -> str:
    """Pick the candidate delimiter occurring most often in the header, comma if none do."""
    best = max(CANDIDATE_DELIMITERS, key=header_line.count)
    return best if header_line.count(best) else ","


def _clean_header(name: str) -> str:
    return name.replace("\ufeff", "").strip().strip('"').strip()


def _parse_count(value: str, row: int) -> int:
    raw = (value or "").strip()
    if not COUNT_PATTERN.fullmatch(raw):
        raise InvalidCountError(raw, row)
    return int(raw)


def read_buckets(
    raw_text: str,
    count_column: str = DEFAULT_COUNT_COLUMN,
    label_column: str = DEFAULT_LABEL_COLUMN,
) -> list[IncomeBucket]:
    """
    Read the raw rows of the table, in file order.

    Raises:
        SchemaError: If either required column is absent
        InvalidCountError: If a household count is not a non-negative integer
    """
    text = raw_text.lstrip("\ufeff")
    header_line = next((line for line in text.splitlines() if line.strip()), "")
    reader = csv.reader(io.StringIO(text), delimiter=detect_delimiter(header_line))

    header: list[str] = []
    for cells in reader:
        if any(c.strip() for c in cells):
            header = [_clean_header(c) for c in cells]
            break

    missing = [col for col in (count_column, label_column) if col not in header]
    if missing:
        raise SchemaError(missing=missing, found=header)

    count_idx = header.index(count_column)
    label_idx = header.index(label_column)

    buckets = []
    for cells in reader:
        if not any(c.strip() for c in cells):
            continue
        label = cells[label_idx].strip() if label_idx < len(cells) else ""
        count = cells[count_idx] if count_idx < len(cells) else ""
        line = reader.line_num
        buckets.append(IncomeBucket(label=label, count=_parse_count(count, line), line=line))
    return buckets


def classify_buckets(buckets: list[IncomeBucket]) -> list[LabelBounds]:
    """
    Classify every bucket label.

    Raises:
        UnrecognizedLabelError: If a label matches no pattern
        DuplicateBoundaryError: If more than one label is open-low
    """
    seen_open_low = False
    bounds = []
    for bucket in buckets:
        row = bucket.line
        b = classify_label(bucket.label)
        if b is None:
            raise UnrecognizedLabelError(bucket.label, row=row)
        if b.kind is LabelKind.OPEN_LOW:
            if seen_open_low:
                raise DuplicateBoundaryError(
                    "Double first row regex match", label=bucket.label, row=row
                )
            seen_open_low = True
        bounds.append(b)
    return bounds


def build_table(
    buckets: list[IncomeBucket],
    income_scale: int = 1000,
) -> ParsedTable:
    """
    Build the descending percentile table from raw buckets in file order.

    Raises:
        ValueError: If income_scale is below 1
        UnrecognizedLabelError, DuplicateBoundaryError, MissingLowerBoundError,
        EmptyDistributionError
    """
    if income_scale < 1:
        raise ValueError(f"income_scale must be at least 1, got {income_scale!r}")

    bounds = classify_buckets(buckets)
    if not any(b.kind is LabelKind.OPEN_LOW for b in bounds):
        raise MissingLowerBoundError()

    total = sum(b.count for b in buckets)
    if total <= 0:
        raise EmptyDistributionError()

    cumulative = 0
    parsed = []
    for bucket, b in zip(buckets, bounds):
        cumulative += bucket.count
        parsed.append(
            ParsedBucket(
                label=bucket.label,
                count=bucket.count,
                income_min=b.low * income_scale,
                income_max=b.high * income_scale,
                cumulative_percentile=100 - (cumulative / total) * 100,
            )
        )

    parsed.sort(key=lambda p: p.income_min, reverse=True)

    for higher, lower in zip(parsed, parsed[1:]):
        if higher.income_min == lower.income_min:
            raise DuplicateBoundaryError(
                f"Two buckets start at income {lower.income_min:g}",
                label=f"{lower.label} / {higher.label}",
            )

    return ParsedTable(buckets=tuple(parsed), total_count=total)


def parse_distribution(
    raw_text: str,
    count_column: str = DEFAULT_COUNT_COLUMN,
    label_column: str = DEFAULT_LABEL_COLUMN,
    income_scale: int = 1000,
) -> ParsedTable:
    """
    Parse a CBS income distribution export.

    Args:
        raw_text: Full text of the delimited file, header row first
        count_column: Header of the household-count column
        label_column: Header of the income-range label column
        income_scale: Multiplier from dataset units to euros

    Returns:
        ParsedTable sorted descending by income_min

    Raises:
        DatasetParseError: Any subclass; the table is never partially built
        ValueError: If income_scale is below 1
    """
    buckets = read_buckets(raw_text, count_column=count_column, label_column=label_column)
    table = build_table(buckets, income_scale=income_scale)
    lowest_finite = min((b.income_min for b in table if not math.isinf(b.income_min)), default=None)
    logger.debug(
        "Parsed income distribution: %d buckets, %d households, lowest finite threshold %s",
        len(table),
        table.total_count,
        lowest_finite,
    )
    return table


def parse_distribution_file(
    path: str | Path,
    count_column: str = DEFAULT_COUNT_COLUMN,
    label_column: str = DEFAULT_LABEL_COLUMN,
    income_scale: int = 1000,
) -> ParsedTable:
    """Parse a CBS export stored on disk (UTF-8, BOM tolerated)."""
    text = Path(path).read_text(encoding="utf-8-sig")
    return parse_distribution(
        text,
        count_column=count_column,
        label_column=label_column,
        income_scale=income_scale,
    )
