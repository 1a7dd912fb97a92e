"""Shared fixtures for proxy and browsing client tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from browser.cache import GenreCache, LocalStorage
from core.config import BrowserSettings, Settings
from main import create_app

from ._helpers import API_KEY, PROXY_BASE


@pytest.fixture
def settings() -> Settings:
    """Proxy settings with a configured TMDB key."""
    return Settings(_env_file=None, tmdb_api_key=API_KEY, metrics_enabled=False)


@pytest.fixture
def keyless_settings() -> Settings:
    """Proxy settings without a TMDB key."""
    return Settings(_env_file=None, tmdb_api_key=None, metrics_enabled=False)


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    """Test client for a proxy holding the TMDB key."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def keyless_client(keyless_settings: Settings) -> Iterator[TestClient]:
    """Test client for a proxy deployed without the TMDB key."""
    with TestClient(create_app(keyless_settings)) as test_client:
        yield test_client


@pytest.fixture
def storage_path(tmp_path: Path) -> Path:
    return tmp_path / "moviearc" / "storage.json"


@pytest.fixture
def genre_cache(storage_path: Path) -> GenreCache:
    return GenreCache(LocalStorage(storage_path))


@pytest.fixture
def browser_settings(storage_path: Path) -> BrowserSettings:
    return BrowserSettings(_env_file=None, proxy_base=PROXY_BASE, storage_path=storage_path)
