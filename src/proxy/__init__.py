"""Proxy module.

This module relays browsing queries to TMDB, attaching the server-held API
key on the way out.
"""

from .client import TMDBClient
from .router import router
from .rules import ROUTING_RULES, parse_query
from .service import ProxyService

__all__ = [
    "ProxyService",
    "TMDBClient",
    "ROUTING_RULES",
    "parse_query",
    "router",
]
