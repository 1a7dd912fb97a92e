"""Rich renderables for result grids and the detail view."""

from typing import List, Optional, Sequence

from rich.columns import Columns
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.text import Text

from models.movie import Movie, MovieDetails

from .cache import GenreTable

IMAGE_BASE = "https://image.tmdb.org/t/p"
POSTER_PLACEHOLDER = "https://via.placeholder.com/400x600"
NO_GENRES = "N/A"


def poster_url(path: Optional[str], size: str = "w500") -> str:
    """Build a poster image URL.

    Args:
        path: TMDB poster path, or None when the title has no poster.
        size: TMDB image size segment.

    Returns:
        str: Image URL, or the placeholder when there is no poster.
    """
    if path is None:
        return POSTER_PLACEHOLDER
    return f"{IMAGE_BASE}/{size}{path}"


def backdrop_url(path: Optional[str]) -> Optional[str]:
    """Backdrop image URL, or None when the title has none."""
    return f"{IMAGE_BASE}/w1280{path}" if path else None


def release_year(release_date: Optional[str]) -> str:
    """Year part of a TMDB release date, empty when unknown."""
    return release_date[:4] if release_date else ""


def genre_names(movie: Movie, genre_table: GenreTable) -> str:
    """Comma-joined names for the movie's genre ids, or ``N/A``.

    Ids missing from the table are skipped.
    """
    names = [genre_table[genre_id] for genre_id in movie.genre_ids if genre_id in genre_table]
    return ", ".join(names) if names else NO_GENRES


def render_card(movie: Movie, genre_table: GenreTable) -> Panel:
    """One result card."""
    body = Text()
    body.append(f"{release_year(movie.release_date)}\n", style="dim")
    body.append(f"{movie.title}\n", style="bold")
    body.append(f"Rating : {movie.vote_average:.1f}\n")
    body.append(f"Genres: {genre_names(movie, genre_table)}\n")
    body.append(poster_url(movie.poster_path), style="blue")
    return Panel(body, title=f"#{movie.id}", title_align="left", width=40)


def render_grid(movies: Sequence[Movie], genre_table: GenreTable) -> RenderableType:
    """Cards for every result, or a notice when there are none."""
    if not movies:
        return Text("No movies found", justify="center")
    return Columns([render_card(movie, genre_table) for movie in movies], equal=True)


def render_details(movie: MovieDetails) -> Panel:
    """The detail view for one title."""
    names = ", ".join(genre.name for genre in movie.genres) or NO_GENRES

    header = Text()
    year = release_year(movie.release_date)
    if year:
        header.append(f"{year}\n", style="dim")
    header.append(movie.title, style="bold")
    if movie.tagline:
        header.append(f"\n“{movie.tagline}”", style="italic")

    badges: List[str] = [f"⭐ {movie.vote_average:.1f}"]
    if movie.runtime:
        badges.append(f"⏱ {movie.runtime} min")
    badges.append(f"Genres: {names}")

    images = Text(f"Poster: {poster_url(movie.poster_path)}", style="blue")
    backdrop = backdrop_url(movie.backdrop_path)
    if backdrop:
        images.append(f"\nBackdrop: {backdrop}")

    return Panel(
        Group(
            header,
            Text("  ".join(badges)),
            Text("Overview", style="bold underline"),
            Text(movie.overview or "No description available."),
            images,
        ),
        title=f"#{movie.id}",
        title_align="left",
    )
