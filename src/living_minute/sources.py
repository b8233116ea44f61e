"""
Raw dataset providers.

The percentile service only needs one thing from the outside world: the raw
text of the income distribution. This module provides a small abstraction
over where that text comes from:
1. HttpDatasetSource - fetched over HTTP (the browser-hosted CSV)
2. FileDatasetSource - read from local disk
3. StaticDatasetSource - text already in memory (tests, embedded data)

Usage:
    from living_minute.sources import dataset_source_from_settings
    source = dataset_source_from_settings()
    text = await source.get_raw_dataset()
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path

import httpx

from .core.config import Settings, get_settings
from .core.http import BaseHttpClient
from .errors import DatasetSourceError

logger = logging.getLogger(__name__)


class DatasetSource(ABC):
    """Supplies the raw text of the income distribution dataset."""

    @abstractmethod
    async def get_raw_dataset(self) -> str:
        """Return the full dataset text."""
        ...

    async def close(self) -> None:
        """Release any held resources."""
        return None


class StaticDatasetSource(DatasetSource):
    """Dataset text held in memory."""

    def __init__(self, text: str):
        self._text = text

    async def get_raw_dataset(self) -> str:
        return self._text


class FileDatasetSource(DatasetSource):
    """Dataset read from a local file, off the event loop thread."""

    def __init__(self, path: str | Path, encoding: str = "utf-8-sig"):
        self.path = Path(path)
        self.encoding = encoding

    async def get_raw_dataset(self) -> str:
        logger.info("Reading income distribution from %s", self.path)
        try:
            return await asyncio.to_thread(self.path.read_text, encoding=self.encoding)
        except OSError as e:
            raise DatasetSourceError(
                f"Could not read dataset file {self.path}", detail=str(e)
            ) from e


class HttpDatasetSource(DatasetSource):
    """Dataset fetched over HTTP with the shared retrying client."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 10.0,
        max_retries: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self._client = BaseHttpClient(
            timeout=timeout,
            max_retries=max_retries,
            transport=transport,
        )

    async def get_raw_dataset(self) -> str:
        logger.info("Fetching income distribution from %s", self.url)
        return await self._client.get_text(self.url)

    async def close(self) -> None:
        await self._client.close()


def dataset_source_from_settings(settings: Settings | None = None) -> DatasetSource:
    """
    Build the configured dataset source.

    A local path takes precedence over a URL.

    Raises:
        DatasetSourceError: If neither dataset_path nor dataset_url is set
    """
    settings = settings or get_settings()
    if settings.dataset_path:
        return FileDatasetSource(settings.dataset_path)
    if settings.dataset_url:
        return HttpDatasetSource(
            settings.dataset_url,
            timeout=settings.http_timeout,
            max_retries=settings.http_max_retries,
        )
    raise DatasetSourceError(
        "No income distribution dataset configured",
        detail="set LIVING_MINUTE_DATASET_PATH or LIVING_MINUTE_DATASET_URL",
    )
