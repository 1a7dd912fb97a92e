"""Proxy-related data models.

Inbound parameters are parsed into exactly one query variant; each variant
knows the TMDB resource it maps to.
"""

from typing import Annotated, Dict, Literal, Optional, Union
from urllib.parse import quote

from pydantic import Field

from .common import BaseModel


class UpstreamRequest(BaseModel):
    """A TMDB resource to fetch, without credentials."""

    path: str = Field(..., description="Path relative to the TMDB base URL")
    params: Dict[str, str] = Field(default_factory=dict, description="Query parameters")


class UpstreamResponse(BaseModel):
    """Raw TMDB response, relayed as-is."""

    status_code: int = Field(..., description="HTTP status code")
    content: bytes = Field(default=b"", description="Response body")
    elapsed_time: float = Field(default=0.0, description="Request duration in seconds")

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class PopularQuery(BaseModel):
    """Popular titles."""

    kind: Literal["popular"] = "popular"

    def to_upstream(self) -> UpstreamRequest:
        return UpstreamRequest(path="movie/popular")


class SearchQuery(BaseModel):
    """Free-text title search."""

    kind: Literal["search"] = "search"
    term: str = Field(..., description="Title search term")

    def to_upstream(self) -> UpstreamRequest:
        # httpx encodes parameters when sending, so the term stays raw here.
        return UpstreamRequest(path="search/movie", params={"query": self.term})


class DiscoverQuery(BaseModel):
    """Titles filtered by genre and/or release year, most popular first."""

    kind: Literal["discover"] = "discover"
    genre: Optional[str] = Field(None, description="TMDB genre id")
    year: Optional[str] = Field(None, description="Primary release year")

    def to_upstream(self) -> UpstreamRequest:
        params = {"sort_by": "popularity.desc"}
        if self.genre is not None:
            params["with_genres"] = self.genre
        if self.year is not None:
            params["primary_release_year"] = self.year
        return UpstreamRequest(path="discover/movie", params=params)


class DetailQuery(BaseModel):
    """A single title."""

    kind: Literal["detail"] = "detail"
    id: str = Field(..., description="TMDB movie id")

    def to_upstream(self) -> UpstreamRequest:
        segment = quote(self.id, safe="")
        # Bare dot segments would be collapsed by URL normalization.
        if segment in (".", ".."):
            segment = segment.replace(".", "%2E")
        return UpstreamRequest(path=f"movie/{segment}")


class GenreListQuery(BaseModel):
    """The movie genre table."""

    kind: Literal["genres"] = "genres"

    def to_upstream(self) -> UpstreamRequest:
        return UpstreamRequest(path="genre/movie/list")


ProxyQuery = Annotated[
    Union[PopularQuery, SearchQuery, DiscoverQuery, DetailQuery, GenreListQuery],
    Field(discriminator="kind"),
]
