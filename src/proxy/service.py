"""Proxy service.

Checks the server credential, routes inbound parameters to a TMDB resource
and fetches it.
"""

from typing import Mapping

import structlog

from core.config import Settings
from core.exceptions import ConfigurationError, ExternalServiceError, UpstreamError
from core.monitoring import track_proxy_request
from models.proxy import UpstreamResponse

from .client import TMDBClient
from .rules import parse_query


class ProxyService:
    """Relays one inbound query to TMDB."""

    def __init__(self, settings: Settings, client: TMDBClient) -> None:
        self.settings = settings
        self.client = client
        self.logger = structlog.get_logger("ProxyService")

    async def relay(self, params: Mapping[str, str]) -> UpstreamResponse:
        """Relay a query to TMDB.

        Args:
            params: Single-valued inbound query parameters.

        Returns:
            UpstreamResponse: The successful upstream response.

        Raises:
            ConfigurationError: When no TMDB key is configured.
            UpstreamError: When TMDB answers with a non-2xx status.
            ExternalServiceError: When TMDB could not be reached.
        """
        api_key = self.settings.upstream_key
        if not api_key:
            track_proxy_request("none", "misconfigured")
            raise ConfigurationError("Server key missing")

        query = parse_query(params)
        upstream = query.to_upstream()

        self.logger.debug("Routed query", route=query.kind, path=upstream.path)

        try:
            response = await self.client.fetch(upstream, api_key)
        except ExternalServiceError:
            track_proxy_request(query.kind, "unreachable")
            raise

        if not response.is_success:
            track_proxy_request(query.kind, "upstream_error")
            raise UpstreamError(
                f"TMDB returned {response.status_code}",
                status_code=response.status_code,
                path=upstream.path,
            )

        track_proxy_request(query.kind, "relayed")
        return response
