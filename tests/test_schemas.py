"""Tests for request schema validation."""

import uuid

import pytest
from pydantic import ValidationError

from discovery.schemas.community import CommunitySuggestionCreate, RatingCreate
from discovery.schemas.journey import JourneyCreate, JourneyStopIn, normalise_stop_orders
from discovery.schemas.place import PlaceCreate


def stop(order=None):
    return JourneyStopIn(place_id=uuid.uuid4(), stop_order=order)


class TestStopOrders:
    def test_missing_orders_follow_position(self):
        stops = normalise_stop_orders([stop(), stop(), stop()])
        assert [s.stop_order for s in stops] == [0, 1, 2]

    def test_explicit_orders_are_sorted(self):
        stops = normalise_stop_orders([stop(2), stop(0), stop(1)])
        assert [s.stop_order for s in stops] == [0, 1, 2]

    @pytest.mark.parametrize("orders", [[0, 0], [1, 2], [0, 2]])
    def test_duplicates_or_gaps_rejected(self, orders):
        with pytest.raises(ValueError):
            normalise_stop_orders([stop(o) for o in orders])

    def test_journey_create_runs_the_check(self):
        with pytest.raises(ValidationError):
            JourneyCreate(slug="walk", title="Walk", stops=[stop(0), stop(0)])

    def test_slug_pattern(self):
        with pytest.raises(ValidationError):
            JourneyCreate(slug="Not A Slug", title="Walk")


class TestPlaceCreate:
    def test_outside_neighbourhood_rejected(self):
        with pytest.raises(ValidationError):
            PlaceCreate(name="Toit Brewpub", latitude=12.90, longitude=77.64)

    def test_rating_steps(self):
        assert PlaceCreate(name="Toit", latitude=12.97, longitude=77.64, rating=4.3).rating == 4.3
        with pytest.raises(ValidationError):
            PlaceCreate(name="Toit", latitude=12.97, longitude=77.64, rating=4.35)


class TestCommunitySchemas:
    def test_rating_out_of_range(self):
        with pytest.raises(ValidationError):
            RatingCreate(entity_type="place", entity_id=uuid.uuid4(), rating=5.5)

    def test_suggestion_constraints(self):
        valid = {
            "submitter_name": "Asha",
            "submitter_email": "asha@example.com",
            "place_name": "New Cafe",
            "suggested_latitude": 12.978,
            "suggested_longitude": 77.641,
            "category": "cafe",
            "personal_notes": "Lovely filter coffee and quiet corners.",
        }
        assert CommunitySuggestionCreate(**valid).category == "cafe"

        for field, bad in [
            ("submitter_name", "A"),
            ("submitter_email", "not-an-email"),
            ("category", "nightclub"),
            ("personal_notes", "short"),
            ("suggested_latitude", 13.5),
        ]:
            with pytest.raises(ValidationError):
                CommunitySuggestionCreate(**{**valid, field: bad})
