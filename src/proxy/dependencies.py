"""Proxy dependencies for FastAPI."""

from fastapi import Depends

from core.config import Settings, get_settings

from .client import TMDBClient
from .service import ProxyService


def get_tmdb_client(settings: Settings = Depends(get_settings)) -> TMDBClient:
    """Get a TMDB client bound to the current settings."""
    return TMDBClient(settings)


def get_proxy_service(
    settings: Settings = Depends(get_settings),
    client: TMDBClient = Depends(get_tmdb_client),
) -> ProxyService:
    """Get the proxy service for the current request."""
    return ProxyService(settings, client)
