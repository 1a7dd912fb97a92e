"""Custom exception classes.

This module defines the exceptions raised by the proxy and the browsing
client.
"""

from typing import Any, Dict, Optional


class BaseAppException(Exception):
    """Base exception class for the application.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Error message.
            details: Additional error details.
            cause: Underlying exception that caused this error.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}('{self.message}', details={self.details})"


class ConfigurationError(BaseAppException):
    """Raised when required configuration, such as the TMDB key, is missing."""
    pass


class ExternalServiceError(BaseAppException):
    """Raised when an external service call fails.

    Attributes:
        service: Name of the external service.
        status_code: HTTP status code if the service answered.
    """

    def __init__(
        self,
        message: str,
        service: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        super().__init__(message, details, cause)
        self.service = service
        self.status_code = status_code


class UpstreamError(ExternalServiceError):
    """Raised when TMDB answers with a non-2xx status.

    Attributes:
        path: Upstream resource path that failed.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        path: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, "tmdb", status_code, details)
        self.path = path


class BrowserError(BaseAppException):
    """Raised by the browsing client; the message is shown to the user."""
    pass
