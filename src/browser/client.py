"""Proxy client and browsing facade.

The browsing client only ever talks to the proxy; it never sees the TMDB
key.
"""

import time
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

import httpx
from pydantic import ValidationError

from core.base import BaseClient
from core.exceptions import BrowserError
from models.common import BaseModel
from models.movie import GenreList, Movie, MovieDetails, MovieList

from .cache import GenreCache, GenreTable

M = TypeVar("M", bound=BaseModel)

PROXY_URL_MISSING = "Proxy URL missing. Set MOVIEARC_PROXY_BASE to your proxy URL."


class ProxyClient(BaseClient):
    """Synchronous client for the MovieArc proxy."""

    def __init__(
        self,
        base_url: Optional[str],
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        if not base_url:
            raise BrowserError(PROXY_URL_MISSING)
        super().__init__(name="MovieArcProxy", base_url=base_url, timeout=timeout)
        self.transport = transport

    def _get(self, params: Dict[str, str], model: Type[M], failure_message: str) -> M:
        """Query the proxy and parse the JSON body into ``model``.

        Any network error, non-2xx status or malformed body surfaces as a
        ``BrowserError`` carrying ``failure_message``.
        """
        url = self._build_url()
        start_time = time.time()
        self._log_request("GET", url)

        try:
            with httpx.Client(transport=self.transport, timeout=self.timeout) as client:
                response = client.get(url, params=params)
        except httpx.HTTPError as e:
            self.logger.warning("Proxy request failed", params=params, error=str(e))
            raise BrowserError(failure_message, details={"params": params}, cause=e)

        self._log_response("GET", url, response.status_code, time.time() - start_time)

        if not response.is_success:
            raise BrowserError(
                failure_message,
                details={"params": params, "status_code": response.status_code},
            )

        try:
            payload: Any = response.json()
            return model.model_validate(payload)
        except (ValueError, ValidationError) as e:
            self.logger.warning("Malformed proxy response", params=params, error=str(e))
            raise BrowserError(failure_message, details={"params": params}, cause=e)

    def popular(self) -> List[Movie]:
        """Popular titles."""
        return self._get({"popular": "1"}, MovieList, "Failed to fetch movies").results

    def search(self, term: str) -> List[Movie]:
        """Titles matching a search term."""
        return self._get({"query": term}, MovieList, "Failed to search movies").results

    def movies(self, title: str = "") -> List[Movie]:
        """Popular titles for a blank title, else a title search."""
        if not title.strip():
            return self.popular()
        return self._get({"query": title}, MovieList, "Failed to fetch movies").results

    def discover(self, genre: Optional[int] = None, year: Optional[int] = None) -> List[Movie]:
        """Titles filtered by genre and/or release year.

        With neither filter the proxy falls back to the popular list.
        """
        params: Dict[str, str] = {}
        if genre is not None:
            params["genre"] = str(genre)
        if year is not None:
            params["year"] = str(year)
        if not params:
            params["popular"] = "1"
        return self._get(params, MovieList, "Failed to fetch movies").results

    def details(self, movie_id: Union[int, str]) -> MovieDetails:
        """Full details for one title.

        Args:
            movie_id: TMDB movie id.

        Returns:
            MovieDetails: Parsed detail payload.

        Raises:
            BrowserError: If the proxy cannot deliver the details.
        """
        return self._get({"id": str(movie_id)}, MovieDetails, "Failed to load movie details")

    def genres(self) -> GenreTable:
        """Fetch the genre table from the proxy, bypassing the cache."""
        return self._get({"genres": "1"}, GenreList, "Failed to fetch genres").to_table()


class MovieBrowser:
    """Browsing operations with the genre table cached client-side."""

    def __init__(self, client: ProxyClient, genre_cache: GenreCache) -> None:
        self.client = client
        self.genre_cache = genre_cache

    def load_genres(self, refresh: bool = False) -> GenreTable:
        """Return the genre table, fetching and caching it on a miss."""
        if refresh:
            self.genre_cache.invalidate()
        else:
            cached = self.genre_cache.get()
            if cached is not None:
                return cached

        table = self.client.genres()
        self.genre_cache.set(table)
        return table

    def browse(self, title: str = "") -> List[Movie]:
        return self.client.movies(title)

    def search(self, term: str) -> List[Movie]:
        return self.client.search(term)

    def discover(self, genre: Optional[int] = None, year: Optional[int] = None) -> List[Movie]:
        return self.client.discover(genre=genre, year=year)

    def details(self, movie_id: Union[int, str]) -> MovieDetails:
        return self.client.details(movie_id)
