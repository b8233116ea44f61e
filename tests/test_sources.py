"""
Tests for raw dataset sources and the shared HTTP client.
"""

import httpx
import pytest

from living_minute.core import http as http_module
from living_minute.core.http import BaseHttpClient, ExternalAPIError
from living_minute.errors import DatasetSourceError
from living_minute.services import IncomePercentileService
from living_minute.sources import (
    FileDatasetSource,
    HttpDatasetSource,
    StaticDatasetSource,
    dataset_source_from_settings,
)

DATASET_URL = "https://example.org/income-distribution.csv"


@pytest.fixture
def no_backoff(monkeypatch):
    """Skip retry sleeps."""
    sleeps = []

    async def fake_sleep(seconds):
        sleeps.append(seconds)

    monkeypatch.setattr(http_module.asyncio, "sleep", fake_sleep)
    return sleeps


def serve(*responses):
    """MockTransport answering with the given responses in order."""
    requests = []
    queue = list(responses)

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, Exception):
            raise item
        return item

    return httpx.MockTransport(handler), requests


# =========================================================================
# Static and file sources
# =========================================================================


class TestLocalSources:
    @pytest.mark.asyncio
    async def test_static(self, simple_csv):
        assert await StaticDatasetSource(simple_csv).get_raw_dataset() == simple_csv

    @pytest.mark.asyncio
    async def test_file(self, cbs_path, cbs_csv):
        assert await FileDatasetSource(cbs_path).get_raw_dataset() == cbs_csv

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        source = FileDatasetSource(tmp_path / "missing.csv")
        with pytest.raises(DatasetSourceError) as exc:
            await source.get_raw_dataset()
        assert exc.value.code == "DATASET_SOURCE_ERROR"


# =========================================================================
# HTTP source
# =========================================================================


class TestHttpSource:
    @pytest.mark.asyncio
    async def test_fetch(self, simple_csv):
        transport, requests = serve(httpx.Response(200, text=simple_csv))
        source = HttpDatasetSource(DATASET_URL, transport=transport)
        try:
            assert await source.get_raw_dataset() == simple_csv
        finally:
            await source.close()
        assert str(requests[0].url) == DATASET_URL

    @pytest.mark.asyncio
    async def test_server_error_is_retried(self, simple_csv, no_backoff):
        transport, requests = serve(
            httpx.Response(503, text="busy"),
            httpx.Response(200, text=simple_csv),
        )
        source = HttpDatasetSource(DATASET_URL, transport=transport)

        assert await source.get_raw_dataset() == simple_csv
        assert len(requests) == 2
        assert no_backoff == [1]
        await source.close()

    @pytest.mark.asyncio
    async def test_client_error_is_not_retried(self, no_backoff):
        transport, requests = serve(httpx.Response(404, text="not found"))
        source = HttpDatasetSource(DATASET_URL, transport=transport)

        with pytest.raises(ExternalAPIError) as exc:
            await source.get_raw_dataset()
        assert exc.value.status_code == 404
        assert len(requests) == 1
        await source.close()

    @pytest.mark.asyncio
    async def test_transport_errors_exhaust_retries(self, no_backoff):
        transport, requests = serve(httpx.ConnectError("refused"))
        source = HttpDatasetSource(DATASET_URL, max_retries=3, transport=transport)

        with pytest.raises(ExternalAPIError, match="Request failed"):
            await source.get_raw_dataset()
        assert len(requests) == 3
        assert no_backoff == [1, 2]
        await source.close()

    @pytest.mark.asyncio
    async def test_service_over_http(self, cbs_csv, settings):
        transport, _ = serve(httpx.Response(200, text=cbs_csv))
        service = IncomePercentileService(HttpDatasetSource(DATASET_URL, transport=transport), settings)

        await service.load()
        assert service.income_percentile_for(25_000) == pytest.approx(20)
        await service.close()

    @pytest.mark.asyncio
    async def test_client_context_manager(self):
        transport, _ = serve(httpx.Response(200, text="ok"))
        async with BaseHttpClient(base_url="https://example.org", transport=transport) as client:
            assert await client.get_text("/ping") == "ok"
        assert client._client is None


# =========================================================================
# Selection from settings
# =========================================================================


class TestSourceFromSettings:
    def test_path_wins(self, settings, cbs_path):
        configured = settings.model_copy(update={"dataset_path": str(cbs_path), "dataset_url": DATASET_URL})
        source = dataset_source_from_settings(configured)
        assert isinstance(source, FileDatasetSource)
        assert source.path == cbs_path

    def test_url(self, settings):
        configured = settings.model_copy(update={"dataset_url": DATASET_URL})
        source = dataset_source_from_settings(configured)
        assert isinstance(source, HttpDatasetSource)
        assert source.url == DATASET_URL

    def test_nothing_configured(self, settings):
        with pytest.raises(DatasetSourceError):
            dataset_source_from_settings(settings)
