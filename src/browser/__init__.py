"""Browsing client.

Queries the MovieArc proxy, caches the genre table locally and renders
results in the terminal.
"""

from .cache import GenreCache, LocalStorage
from .client import MovieBrowser, ProxyClient

__all__ = [
    "GenreCache",
    "LocalStorage",
    "MovieBrowser",
    "ProxyClient",
]
