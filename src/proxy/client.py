"""TMDB API client.

This module provides the HTTP client that performs the single upstream
request behind every proxied call.
"""

import time
from typing import Optional

import httpx

from core.base import BaseClient
from core.config import Settings
from core.exceptions import ExternalServiceError
from core.monitoring import track_external_service
from models.proxy import UpstreamRequest, UpstreamResponse


class TMDBClient(BaseClient):
    """HTTP client for TMDB v3 resources."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        """Initialize the TMDB client.

        Args:
            settings: Application settings.
            transport: Optional httpx transport, used instead of the network.
        """
        super().__init__(
            name="TMDB",
            base_url=settings.tmdb_api_url,
            timeout=settings.tmdb_timeout,
        )
        self.transport = transport

    async def fetch(self, request: UpstreamRequest, api_key: str) -> UpstreamResponse:
        """Fetch one TMDB resource.

        The key is appended as the ``api_key`` query parameter at send time
        and is kept out of every log line.

        Args:
            request: Resource to fetch.
            api_key: TMDB API key.

        Returns:
            UpstreamResponse: Status and raw body, whatever the status.

        Raises:
            ExternalServiceError: When TMDB could not be reached.
        """
        url = self._build_url(request.path)
        params = {**request.params, "api_key": api_key}
        start_time = time.time()

        self._log_request("GET", url)

        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.get(
                    url,
                    params=params,
                    headers={"Accept": "application/json"},
                    timeout=self.timeout,
                )
        except httpx.TimeoutException as e:
            duration = time.time() - start_time
            track_external_service("tmdb", 0, duration)
            raise ExternalServiceError(
                "TMDB request timed out",
                service="tmdb",
                details={"path": request.path},
                cause=e,
            )
        except httpx.RequestError as e:
            duration = time.time() - start_time
            track_external_service("tmdb", 0, duration)
            # httpx error messages may embed the full URL, key included.
            raise ExternalServiceError(
                f"TMDB request failed: {type(e).__name__}",
                service="tmdb",
                details={"path": request.path},
                cause=e,
            )

        duration = time.time() - start_time
        self._log_response("GET", url, response.status_code, duration)
        track_external_service("tmdb", response.status_code, duration)

        return UpstreamResponse(
            status_code=response.status_code,
            content=response.content,
            elapsed_time=duration,
        )
