"""
Core module for living-minute.

This module provides the foundational components:
- Configuration management (config.py)
- Logging setup (logging.py)
- Shared HTTP client infrastructure (http.py)

Usage:
    from living_minute.core import Settings, get_settings, configure_logging
    from living_minute.core.http import BaseHttpClient, ExternalAPIError
"""

from .config import Settings, get_settings
from .logging import configure_logging

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
]
