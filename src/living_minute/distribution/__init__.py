"""
Income distribution parsing and percentile lookup.
"""

from .labels import LabelBounds, LabelKind, classify_label
from .models import IncomeBucket, ParsedBucket, ParsedTable
from .parser import parse_distribution, parse_distribution_file
from .resolver import lookup, make_percentile_function

__all__ = [
    "IncomeBucket",
    "ParsedBucket",
    "ParsedTable",
    "LabelBounds",
    "LabelKind",
    "classify_label",
    "parse_distribution",
    "parse_distribution_file",
    "lookup",
    "make_percentile_function",
]
