"""
Pytest configuration for living-minute tests.
"""

from pathlib import Path

import pytest

from living_minute.core.config import Settings
from living_minute.services import income_percentile as income_percentile_module

FIXTURES_DIR = Path(__file__).parent / "fixtures"

LABEL = "standardised income (x 1000 euros)"
COUNT = "Single persion"


def make_csv(rows, delimiter=",", header=(LABEL, COUNT)):
    """Build a CSV text from (label, count) rows."""
    lines = [delimiter.join(header)]
    lines.extend(f"{label}{delimiter}{count}" for label, count in rows)
    return "\n".join(lines) + "\n"


@pytest.fixture
def simple_rows():
    return [("less than 10", 5), ("10 and 20", 3), ("more than 20", 2)]


@pytest.fixture
def simple_csv(simple_rows):
    return make_csv(simple_rows)


@pytest.fixture
def cbs_path():
    """A CBS-shaped export: semicolons, quoted headers, an extra column."""
    return FIXTURES_DIR / "income-distribution.csv"


@pytest.fixture
def cbs_csv(cbs_path):
    return cbs_path.read_text(encoding="utf-8")


@pytest.fixture
def settings(monkeypatch):
    """Settings isolated from the developer's environment and .env file."""
    for key in ("DATASET_URL", "DATASET_PATH", "COUNT_COLUMN", "LABEL_COLUMN", "INCOME_SCALE", "LOG_LEVEL", "DEBUG"):
        monkeypatch.delenv(f"LIVING_MINUTE_{key}", raising=False)
    return Settings(_env_file=None)


@pytest.fixture(autouse=True)
def reset_service_singleton():
    """Each test starts without a process-wide percentile service."""
    income_percentile_module.set_income_percentile_service(None)
    yield
    income_percentile_module.set_income_percentile_service(None)
