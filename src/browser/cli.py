"""Terminal browsing client for the MovieArc proxy."""

from typing import Callable, List, Optional, Tuple, TypeVar

import typer
from rich.console import Console

from core.config import BrowserSettings, get_browser_settings
from core.exceptions import BrowserError
from core.logging import setup_cli_logging
from models.movie import Movie

from .cache import GenreCache, GenreTable, LocalStorage
from .client import MovieBrowser, ProxyClient
from .render import render_details, render_grid

app = typer.Typer(help="Browse popular movies, search titles and view details through the MovieArc proxy")
console = Console()

T = TypeVar("T")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log proxy requests to stderr"),
) -> None:
    """Browse movies through the MovieArc proxy."""
    setup_cli_logging(verbose)


def build_browser(settings: BrowserSettings) -> MovieBrowser:
    """Wire a browser from client settings."""
    client = ProxyClient(settings.proxy_base, timeout=settings.timeout)
    return MovieBrowser(client, GenreCache(LocalStorage(settings.storage_path)))


def _fail(error: BrowserError) -> None:
    typer.secho(str(error), fg=typer.colors.RED, err=True)


def _run(action: Callable[[MovieBrowser], T]) -> T:
    """Run one browsing action, turning failures into a message and exit 1."""
    try:
        browser = build_browser(get_browser_settings())
        with console.status("Loading..."):
            return action(browser)
    except BrowserError as e:
        _fail(e)
        raise typer.Exit(code=1)


def _show_movies(fetch: Callable[[MovieBrowser], List[Movie]]) -> None:
    """Render a result grid; a genre table failure only costs the genre names."""

    def fetch_with_genres(browser: MovieBrowser) -> Tuple[List[Movie], GenreTable]:
        movies = fetch(browser)
        try:
            genre_table = browser.load_genres()
        except BrowserError as e:
            _fail(e)
            genre_table = {}
        return movies, genre_table

    movies, genre_table = _run(fetch_with_genres)
    console.print(render_grid(movies, genre_table))


@app.command()
def popular() -> None:
    """List popular movies."""
    _show_movies(lambda browser: browser.browse(""))


@app.command()
def search(term: str = typer.Argument(..., help="Title to search for")) -> None:
    """Search movies by title."""
    _show_movies(lambda browser: browser.search(term))


@app.command()
def discover(
    genre: Optional[int] = typer.Option(None, "--genre", "-g", help="TMDB genre id"),
    year: Optional[int] = typer.Option(None, "--year", "-y", help="Primary release year"),
) -> None:
    """List the most popular movies for a genre and/or release year."""
    _show_movies(lambda browser: browser.discover(genre=genre, year=year))


@app.command()
def show(movie_id: int = typer.Argument(..., help="TMDB movie id")) -> None:
    """Show details for one movie."""
    details = _run(lambda browser: browser.details(movie_id))
    console.print(render_details(details))


@app.command()
def genres(
    refresh: bool = typer.Option(False, "--refresh", help="Drop the cached table and refetch"),
) -> None:
    """Print the genre table."""
    table = _run(lambda browser: browser.load_genres(refresh=refresh))
    for genre_id, name in sorted(table.items()):
        typer.echo(f"{genre_id:>6}  {name}")


if __name__ == "__main__":
    app()
