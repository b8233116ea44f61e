"""
Income-range label matchers.

CBS labels come in three shapes:
    "less than 10"   -> (-inf, 10)
    "10 and 20"      -> (10, 20)
    "more than 200"  -> (200, +inf)

Each matcher returns a LabelBounds or None; classify_label tries them in
order and stops at the first hit. Bounds are in dataset units (thousands).
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional


class LabelKind(str, Enum):
    RANGE = "range"
    OPEN_LOW = "open_low"
    OPEN_HIGH = "open_high"


@dataclass(frozen=True)
class LabelBounds:
    kind: LabelKind
    low: float
    high: float


RANGE_PATTERN = re.compile(r"(-?\d+) and (-?\d+)$", re.IGNORECASE)
OPEN_LOW_PATTERN = re.compile(r"less than (-?\d+)", re.IGNORECASE)
OPEN_HIGH_PATTERN = re.compile(r"more than (-?\d+)", re.IGNORECASE)


def match_range(label: str) -> Optional[LabelBounds]:
    m = RANGE_PATTERN.search(label.strip())
    if m is None:
        return None
    return LabelBounds(LabelKind.RANGE, int(m.group(1)), int(m.group(2)))


def match_open_low(label: str) -> Optional[LabelBounds]:
    m = OPEN_LOW_PATTERN.search(label)
    if m is None:
        return None
    return LabelBounds(LabelKind.OPEN_LOW, -math.inf, int(m.group(1)))


def match_open_high(label: str) -> Optional[LabelBounds]:
    m = OPEN_HIGH_PATTERN.search(label)
    if m is None:
        return None
    return LabelBounds(LabelKind.OPEN_HIGH, int(m.group(1)), math.inf)


# Order matters: a range label is checked before the open-ended ones.
MATCHERS: tuple[Callable[[str], Optional[LabelBounds]], ...] = (
    match_range,
    match_open_low,
    match_open_high,
)


def classify_label(label: str) -> Optional[LabelBounds]:
    """Return the bounds of the first matcher that accepts `label`, or None."""
    for matcher in MATCHERS:
        bounds = matcher(label)
        if bounds is not None:
            return bounds
    return None
