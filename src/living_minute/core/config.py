"""
Configuration management for living-minute.

Uses Pydantic settings for type-safe configuration with environment variable support.
Every setting can be overridden with a LIVING_MINUTE_ prefixed environment variable,
e.g. LIVING_MINUTE_DATASET_PATH=/srv/data/income-distribution.csv
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

# The CBS export spells the household column this way. It is the exact header
# the parser requires, so keep the typo unless the dataset changes.
DEFAULT_COUNT_COLUMN = "Single persion"
DEFAULT_LABEL_COLUMN = "standardised income (x 1000 euros)"


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    The dataset is located through either `dataset_path` (local file) or
    `dataset_url` (fetched over HTTP). When both are set the file wins.
    """

    model_config = SettingsConfigDict(
        env_prefix="LIVING_MINUTE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================================================
    # Application Metadata
    # ==========================================================================
    app_name: str = "Living Minute"
    environment: str = Field(default="development", description="development, staging, production")
    debug: bool = False
    log_level: str = Field(default="INFO", description="Root log level used by configure_logging")

    # ==========================================================================
    # Income Distribution Dataset
    # ==========================================================================
    dataset_url: Optional[str] = Field(
        default=None,
        description="URL of the CBS income distribution CSV",
    )
    dataset_path: Optional[str] = Field(
        default=None,
        description="Local path of the CBS income distribution CSV",
    )
    count_column: str = Field(
        default=DEFAULT_COUNT_COLUMN,
        description="Header of the household-count column",
    )
    label_column: str = Field(
        default=DEFAULT_LABEL_COLUMN,
        description="Header of the income-range label column",
    )
    income_scale: int = Field(
        default=1000,
        ge=1,
        description="Multiplier from dataset units (thousands of euros) to euros",
    )

    # ==========================================================================
    # HTTP
    # ==========================================================================
    http_timeout: float = Field(default=10.0, gt=0)
    http_max_retries: int = Field(default=3, ge=1, le=10)

    @computed_field
    @property
    def has_dataset_source(self) -> bool:
        """Whether a dataset location is configured."""
        return bool(self.dataset_path or self.dataset_url)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
