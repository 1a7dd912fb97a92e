"""Base classes and utilities.

This module provides the base HTTP client shared by the upstream TMDB client
and the browsing client's proxy client.
"""

from typing import Optional

import structlog


class BaseClient:
    """Base HTTP client class.

    Provides URL building and request/response logging for HTTP clients.
    """

    def __init__(self, name: str, base_url: str, timeout: float = 30) -> None:
        """Initialize the client.

        Args:
            name: Client name for logging.
            base_url: Base URL for the service.
            timeout: Request timeout in seconds.
        """
        self.name = name
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.logger = structlog.get_logger(f"{name}Client")

    def _build_url(self, path: Optional[str] = None) -> str:
        """Build full URL from path.

        Args:
            path: URL path relative to the base URL. The base URL itself is
                returned when empty.

        Returns:
            str: Full URL.
        """
        if not path:
            return self.base_url
        return f"{self.base_url}/{path.lstrip('/')}"

    def _log_request(self, method: str, url: str) -> None:
        """Log outgoing request.

        Args:
            method: HTTP method.
            url: Request URL, without credentials.
        """
        self.logger.info(
            "Outgoing request",
            method=method,
            url=url,
            timeout=self.timeout,
        )

    def _log_response(self, method: str, url: str, status_code: int, duration: float) -> None:
        """Log response.

        Args:
            method: HTTP method.
            url: Request URL, without credentials.
            status_code: Response status code.
            duration: Request duration in seconds.
        """
        self.logger.info(
            "Response received",
            method=method,
            url=url,
            status_code=status_code,
            duration=f"{duration:.4f}s",
        )
