"""Tests for keyword search ranking and filters."""

from datetime import datetime
from types import SimpleNamespace

import pytest

from discovery.services.geo import Coordinate
from discovery.services.search import (
    SearchContext,
    SearchFilters,
    TIER_CATEGORY,
    TIER_DESCRIPTION,
    TIER_EXACT_NAME,
    TIER_NAME_PREFIX,
    TIER_NAME_SUBSTRING,
    is_open_at,
    search,
)


def place(name, category="cafe", description="", rating=None, lat=12.9784, lng=77.6408, **meta):
    return SimpleNamespace(
        name=name,
        category=category,
        description=description,
        rating=rating,
        latitude=lat,
        longitude=lng,
        meta=meta,
        weather_suitability={},
    )


class TestTextTiers:
    def test_tiers_strictly_decrease(self):
        assert TIER_EXACT_NAME > TIER_NAME_PREFIX > TIER_NAME_SUBSTRING > TIER_CATEGORY > TIER_DESCRIPTION

    def test_ranking_follows_match_kind(self):
        places = [
            place("Quiet Corner", description="great coffee"),
            place("Brew & Co", category="coffee"),
            place("The Coffee Room"),
            place("Coffee House"),
            place("Coffee"),
        ]
        results = search("coffee", places)
        assert [r.place.name for r in results] == [
            "Coffee",
            "Coffee House",
            "The Coffee Room",
            "Brew & Co",
            "Quiet Corner",
        ]
        assert results[0].score == TIER_EXACT_NAME

    def test_match_is_case_insensitive(self):
        assert len(search("TOIT", [place("Toit Brewpub")])) == 1

    def test_non_matching_places_are_dropped(self):
        assert search("sushi", [place("Toit Brewpub", category="bar")]) == []


class TestShortQueries:
    @pytest.mark.parametrize("query", ["", " ", "a", " b "])
    def test_short_query_returns_nothing(self, query):
        assert search(query, [place("a"), place("b")]) == []


class TestBonuses:
    def test_rating_bonus(self):
        [result] = search("toit", [place("Toit", rating=4.5)])
        assert result.score == pytest.approx(TIER_EXACT_NAME + 9.0)

    def test_distance_bonus_only_with_location(self):
        here = Coordinate(12.9784, 77.6408)
        [with_location] = search("toit", [place("Toit")], context=SearchContext(user_location=here))
        [without] = search("toit", [place("Toit")])
        assert with_location.score == pytest.approx(TIER_EXACT_NAME + 10.0)
        assert with_location.distance_meters == pytest.approx(0.0)
        assert without.distance_meters is None
        assert without.score == TIER_EXACT_NAME

    def test_closer_place_wins_a_tie(self):
        here = Coordinate(12.9784, 77.6408)
        far = place("Cafe Far", lat=12.99, lng=77.64)
        near = place("Cafe Near")
        results = search("cafe", [far, near], context=SearchContext(user_location=here))
        assert [r.place.name for r in results] == ["Cafe Near", "Cafe Far"]

    def test_equal_scores_keep_input_order(self):
        places = [place(f"Cafe {i}") for i in range(4)]
        assert [r.place.name for r in search("cafe", places)] == [p.name for p in places]


class TestFilters:
    def test_category_filter_is_case_insensitive(self):
        places = [place("Toit", category="Bar"), place("Toit Cafe", category="cafe")]
        results = search("toit", places, SearchFilters(category="BAR"))
        assert [r.place.name for r in results] == ["Toit"]

    def test_max_distance_needs_a_location(self):
        far = place("Cafe Far", lat=12.999, lng=77.649)
        assert len(search("cafe", [far], SearchFilters(max_distance_meters=100))) == 1

        here = Coordinate(12.9784, 77.6408)
        results = search(
            "cafe",
            [far, place("Cafe Near")],
            SearchFilters(max_distance_meters=100),
            SearchContext(user_location=here),
        )
        assert [r.place.name for r in results] == ["Cafe Near"]

    def test_open_now_keeps_places_without_hours(self):
        late = datetime(2024, 1, 15, 23, 30)
        places = [
            place("Cafe Day", opening_hours={"open": "08:00", "close": "20:00"}),
            place("Cafe Unknown"),
        ]
        results = search("cafe", places, SearchFilters(open_now=True), SearchContext(now=late))
        assert [r.place.name for r in results] == ["Cafe Unknown"]


class TestOpeningHours:
    def test_regular_hours(self):
        p = place("x", opening_hours={"open": "08:00", "close": "20:00"})
        assert is_open_at(p, datetime(2024, 1, 1, 8, 0)) is True
        assert is_open_at(p, datetime(2024, 1, 1, 20, 0)) is False

    def test_hours_past_midnight(self):
        p = place("x", opening_hours={"open": "18:00", "close": "02:00"})
        assert is_open_at(p, datetime(2024, 1, 1, 23, 0)) is True
        assert is_open_at(p, datetime(2024, 1, 1, 1, 30)) is True
        assert is_open_at(p, datetime(2024, 1, 1, 12, 0)) is False

    def test_malformed_hours_are_unknown(self):
        p = place("x", opening_hours={"open": "late", "close": "early"})
        assert is_open_at(p, datetime(2024, 1, 1, 12, 0)) is None


def test_contextual_recommendations():
    morning = SearchContext(time_of_day="morning")
    [result] = search("subko", [place("Subko Coffee", category="cafe", rating=4.7)], context=morning)
    assert result.contextual_recommendations == ["Perfect for morning coffee", "Exceptional reviews"]
