"""Ordered routing rules for inbound proxy parameters.

Rules are evaluated top to bottom and the first match decides the query
variant. The last rule always matches, so every parameter combination
routes somewhere.
"""

from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Tuple

from models.proxy import (
    DetailQuery,
    DiscoverQuery,
    GenreListQuery,
    PopularQuery,
    ProxyQuery,
    SearchQuery,
)

Params = Mapping[str, str]


def _value(params: Params, name: str) -> Optional[str]:
    """Return a parameter's value, treating empty strings as absent."""
    value = params.get(name)
    return value or None


def _flag(params: Params, name: str) -> bool:
    return params.get(name) == "1"


@dataclass(frozen=True)
class RoutingRule:
    """One row of the routing table."""

    name: str
    matches: Callable[[Params], bool]
    build: Callable[[Params], ProxyQuery]


ROUTING_RULES: Tuple[RoutingRule, ...] = (
    RoutingRule(
        name="detail",
        matches=lambda p: _value(p, "id") is not None,
        build=lambda p: DetailQuery(id=p["id"]),
    ),
    RoutingRule(
        name="genres",
        matches=lambda p: _flag(p, "genres"),
        build=lambda p: GenreListQuery(),
    ),
    RoutingRule(
        name="discover",
        matches=lambda p: _value(p, "genre") is not None or _value(p, "year") is not None,
        build=lambda p: DiscoverQuery(genre=_value(p, "genre"), year=_value(p, "year")),
    ),
    RoutingRule(
        name="popular",
        matches=lambda p: _flag(p, "popular") or _value(p, "query") is None,
        build=lambda p: PopularQuery(),
    ),
    RoutingRule(
        name="search",
        matches=lambda p: True,
        build=lambda p: SearchQuery(term=p["query"]),
    ),
)


def match_rule(params: Params, rules: Tuple[RoutingRule, ...] = ROUTING_RULES) -> RoutingRule:
    """Return the first rule matching ``params``."""
    for rule in rules:
        if rule.matches(params):
            return rule
    raise LookupError("No routing rule matched")


def parse_query(params: Params) -> ProxyQuery:
    """Parse inbound query parameters into a proxy query variant.

    Args:
        params: Single-valued query parameters.

    Returns:
        ProxyQuery: The variant chosen by the first matching rule.
    """
    return match_rule(params).build(params)
