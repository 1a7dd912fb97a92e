"""Unit tests for ProxyService with a stubbed TMDB client."""

from __future__ import annotations

from typing import Optional

import pytest

from core.config import Settings
from core.exceptions import ConfigurationError, ExternalServiceError, UpstreamError
from models.proxy import UpstreamRequest, UpstreamResponse
from proxy.service import ProxyService

from ._helpers import API_KEY


class StubTMDBClient:
    """Records fetches and answers with a canned response or error."""

    def __init__(
        self,
        response: Optional[UpstreamResponse] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.calls: list[tuple[UpstreamRequest, str]] = []
        self.response = response or UpstreamResponse(status_code=200, content=b"{}")
        self.error = error

    async def fetch(self, request: UpstreamRequest, api_key: str) -> UpstreamResponse:
        self.calls.append((request, api_key))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.mark.asyncio
async def test_relay_routes_and_returns_response(settings: Settings) -> None:
    client = StubTMDBClient(UpstreamResponse(status_code=200, content=b'{"id":550}'))
    service = ProxyService(settings, client)  # type: ignore[arg-type]

    response = await service.relay({"id": "550", "query": "fight club"})

    assert response.content == b'{"id":550}'
    request, api_key = client.calls[0]
    assert request.path == "movie/550"
    assert request.params == {}
    assert api_key == API_KEY


@pytest.mark.asyncio
async def test_missing_key_raises_before_fetching(keyless_settings: Settings) -> None:
    client = StubTMDBClient()
    service = ProxyService(keyless_settings, client)  # type: ignore[arg-type]

    with pytest.raises(ConfigurationError, match="Server key missing"):
        await service.relay({"query": "batman"})

    assert client.calls == []


@pytest.mark.asyncio
async def test_non_2xx_raises_upstream_error(settings: Settings) -> None:
    client = StubTMDBClient(UpstreamResponse(status_code=404, content=b"{}"))
    service = ProxyService(settings, client)  # type: ignore[arg-type]

    with pytest.raises(UpstreamError) as exc_info:
        await service.relay({"genre": "28"})

    assert exc_info.value.status_code == 404
    assert exc_info.value.path == "discover/movie"
    assert len(client.calls) == 1


@pytest.mark.asyncio
async def test_unreachable_upstream_propagates(settings: Settings) -> None:
    error = ExternalServiceError("TMDB request timed out", service="tmdb")
    service = ProxyService(settings, StubTMDBClient(error=error))  # type: ignore[arg-type]

    with pytest.raises(ExternalServiceError) as exc_info:
        await service.relay({})

    assert exc_info.value is error
