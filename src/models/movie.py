"""TMDB payload models read by the browsing client.

Only the fields the client renders are declared; everything else in the
upstream payload is ignored.
"""

from typing import Dict, List, Optional

from pydantic import Field

from .common import BaseModel


class Genre(BaseModel):
    """Genre identifier and display name."""

    id: int
    name: str


class GenreList(BaseModel):
    """Payload of the genre list resource."""

    genres: List[Genre] = Field(default_factory=list)

    def to_table(self) -> Dict[int, str]:
        """Map genre ids to display names."""
        return {genre.id: genre.name for genre in self.genres}


class Movie(BaseModel):
    """A title as listed by popular, search and discover resources."""

    id: int
    title: str = ""
    poster_path: Optional[str] = None
    release_date: Optional[str] = None
    vote_average: float = 0.0
    genre_ids: List[int] = Field(default_factory=list)


class MovieList(BaseModel):
    """Payload of the list resources."""

    page: int = 1
    results: List[Movie] = Field(default_factory=list)
    total_results: Optional[int] = None


class MovieDetails(BaseModel):
    """Payload of the detail resource."""

    id: int
    title: str = ""
    overview: Optional[str] = None
    release_date: Optional[str] = None
    runtime: Optional[int] = None
    vote_average: float = 0.0
    backdrop_path: Optional[str] = None
    poster_path: Optional[str] = None
    genres: List[Genre] = Field(default_factory=list)
    tagline: Optional[str] = None
