"""Logging setup for applications embedding living-minute."""

import logging

from .config import Settings, get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(settings: Settings | None = None) -> int:
    """
    Configure root logging from settings.

    Library modules only create loggers; the hosting application calls this
    once at startup. Returns the effective level.
    """
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=DATE_FORMAT)
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
    return level
