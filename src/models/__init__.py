"""Pydantic models for the application.

Proxy routing variants, upstream request/response envelopes, and the TMDB
payloads read by the browsing client.
"""

from .common import BaseModel, ErrorResponse, HealthResponse
from .movie import Genre, GenreList, Movie, MovieDetails, MovieList
from .proxy import (
    DetailQuery,
    DiscoverQuery,
    GenreListQuery,
    PopularQuery,
    ProxyQuery,
    SearchQuery,
    UpstreamRequest,
    UpstreamResponse,
)

__all__ = [
    # Common models
    "BaseModel",
    "ErrorResponse",
    "HealthResponse",
    # Proxy models
    "DetailQuery",
    "DiscoverQuery",
    "GenreListQuery",
    "PopularQuery",
    "ProxyQuery",
    "SearchQuery",
    "UpstreamRequest",
    "UpstreamResponse",
    # TMDB payloads
    "Genre",
    "GenreList",
    "Movie",
    "MovieDetails",
    "MovieList",
]
