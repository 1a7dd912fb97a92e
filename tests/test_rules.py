"""Tests for routing precedence and upstream resource building."""

from __future__ import annotations

import pytest

from models.proxy import (
    DetailQuery,
    DiscoverQuery,
    GenreListQuery,
    PopularQuery,
    SearchQuery,
)
from proxy.rules import ROUTING_RULES, match_rule, parse_query


def test_rule_table_order() -> None:
    assert [rule.name for rule in ROUTING_RULES] == [
        "detail",
        "genres",
        "discover",
        "popular",
        "search",
    ]


@pytest.mark.parametrize(
    "params",
    [
        {"id": "550"},
        {"id": "550", "query": "batman"},
        {"id": "550", "genres": "1"},
        {"id": "550", "genre": "28", "year": "1999", "popular": "1"},
    ],
)
def test_id_wins_over_everything(params: dict[str, str]) -> None:
    assert parse_query(params) == DetailQuery(id="550")


@pytest.mark.parametrize(
    "params",
    [
        {"genres": "1"},
        {"genres": "1", "genre": "28"},
        {"genres": "1", "query": "batman", "popular": "1"},
    ],
)
def test_genre_list_when_no_id(params: dict[str, str]) -> None:
    assert parse_query(params) == GenreListQuery()


def test_genres_flag_requires_exact_one() -> None:
    assert parse_query({"genres": "yes"}) == PopularQuery()


@pytest.mark.parametrize(
    ("params", "expected"),
    [
        ({"genre": "28"}, DiscoverQuery(genre="28")),
        ({"year": "1999"}, DiscoverQuery(year="1999")),
        ({"genre": "28", "year": "1999"}, DiscoverQuery(genre="28", year="1999")),
        ({"genre": "28", "query": "batman"}, DiscoverQuery(genre="28")),
        ({"year": "2008", "popular": "1"}, DiscoverQuery(year="2008")),
        ({"genre": "", "year": "2008"}, DiscoverQuery(year="2008")),
    ],
)
def test_filters_route_to_discovery(params: dict[str, str], expected: DiscoverQuery) -> None:
    assert parse_query(params) == expected


@pytest.mark.parametrize(
    "params",
    [
        {},
        {"popular": "1"},
        {"popular": "1", "query": "batman"},
        {"query": ""},
        {"id": "", "genre": "", "year": ""},
    ],
)
def test_popular_fallback(params: dict[str, str]) -> None:
    assert parse_query(params) == PopularQuery()


def test_search_when_only_query() -> None:
    assert parse_query({"query": "batman"}) == SearchQuery(term="batman")
    assert match_rule({"query": "batman"}).name == "search"


def test_popular_flag_other_than_one_still_searches() -> None:
    assert parse_query({"popular": "0", "query": "heat"}) == SearchQuery(term="heat")


class TestUpstreamResources:
    def test_popular(self) -> None:
        upstream = PopularQuery().to_upstream()
        assert upstream.path == "movie/popular"
        assert upstream.params == {}

    def test_search_keeps_term_unencoded(self) -> None:
        upstream = SearchQuery(term="star wars & co").to_upstream()
        assert upstream.path == "search/movie"
        assert upstream.params == {"query": "star wars & co"}

    def test_discover_sets_only_present_filters(self) -> None:
        assert DiscoverQuery(genre="28").to_upstream().params == {
            "sort_by": "popularity.desc",
            "with_genres": "28",
        }
        assert DiscoverQuery(year="1999").to_upstream().params == {
            "sort_by": "popularity.desc",
            "primary_release_year": "1999",
        }
        both = DiscoverQuery(genre="28", year="1999").to_upstream()
        assert both.path == "discover/movie"
        assert both.params == {
            "sort_by": "popularity.desc",
            "with_genres": "28",
            "primary_release_year": "1999",
        }

    def test_detail(self) -> None:
        assert DetailQuery(id="550").to_upstream().path == "movie/550"

    def test_detail_id_stays_one_path_segment(self) -> None:
        assert DetailQuery(id="../account").to_upstream().path == "movie/..%2Faccount"

    @pytest.mark.parametrize(("movie_id", "path"), [("..", "movie/%2E%2E"), (".", "movie/%2E")])
    def test_detail_dot_segments_are_escaped(self, movie_id: str, path: str) -> None:
        assert DetailQuery(id=movie_id).to_upstream().path == path

    def test_genre_list(self) -> None:
        assert GenreListQuery().to_upstream().path == "genre/movie/list"
