"""
Shared HTTP client infrastructure for fetching remote datasets.

Provides BaseHttpClient with retries and error handling. Responses are
returned as text, since the datasets we fetch are delimited files.

Usage:
    async with BaseHttpClient(base_url="https://example.org") as client:
        text = await client.get_text("/income-distribution.csv")
"""

import asyncio
import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class ExternalAPIError(Exception):
    """Raised when a remote fetch fails."""

    def __init__(
        self,
        message: str,
        code: str = "EXTERNAL_API_ERROR",
        status_code: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code


class BaseHttpClient:
    """
    Async HTTP client with retries.

    Use as an async context manager, or rely on lazy initialisation and call
    close() when done. A `transport` may be injected (httpx.MockTransport in tests).
    """

    BASE_URL: str = ""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        headers: dict[str, str] | None = None,
        timeout: float = 30.0,
        max_retries: int = 3,
        follow_redirects: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or self.BASE_URL).rstrip("/")
        self._default_headers = headers or {}
        self._timeout = timeout
        self._max_retries = max_retries
        self._follow_redirects = follow_redirects
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    # -- Lifecycle -----------------------------------------------------------

    async def __aenter__(self) -> "BaseHttpClient":
        self._client = self._make_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _make_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._default_headers,
            timeout=httpx.Timeout(self._timeout),
            follow_redirects=self._follow_redirects,
            transport=self._transport,
        )

    @property
    def client(self) -> httpx.AsyncClient:
        """Return the HTTP client, lazily creating it if needed."""
        if self._client is None or self._client.is_closed:
            self._client = self._make_client()
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    # -- HTTP methods --------------------------------------------------------

    async def get_text(
        self,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> str:
        """GET a resource and return its decoded body."""
        response = await self._request("GET", path, params=params)
        return response.text

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """
        Make an HTTP request with retry logic.

        Client errors are raised immediately. Server and transport errors are
        retried with exponential backoff.

        Raises:
            ExternalAPIError: If the request fails after retries
        """
        last_error: Exception | None = None

        for attempt in range(self._max_retries):
            try:
                response = await self.client.request(method=method, url=path, params=params)
                response.raise_for_status()
                return response

            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                last_error = ExternalAPIError(
                    f"HTTP {status}: {e.response.text[:200]}",
                    status_code=status,
                )
                if 400 <= status < 500:
                    raise last_error
                if attempt < self._max_retries - 1:
                    wait = 2 ** attempt
                    logger.warning(f"Request failed, retrying in {wait}s: {e}")
                    await asyncio.sleep(wait)

            except httpx.RequestError as e:
                last_error = ExternalAPIError(f"Request failed: {str(e)}")
                if attempt < self._max_retries - 1:
                    wait = 2 ** attempt
                    logger.warning(f"Request error, retrying in {wait}s: {e}")
                    await asyncio.sleep(wait)

        raise last_error or ExternalAPIError("Request failed after retries")
