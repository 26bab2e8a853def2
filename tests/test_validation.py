"""Tests for shared input checks."""

import math

import pytest

from discovery.schemas.validation import (
    COMMENT_MAX_LENGTH,
    sanitize_comment,
    validate_indiranagar,
    validate_rating,
)


class TestValidateIndiranagar:
    def test_inside(self):
        assert validate_indiranagar(12.9784, 77.6408)

    def test_edges_are_inclusive(self):
        assert validate_indiranagar(12.95, 77.58)
        assert validate_indiranagar(13.00, 77.65)

    @pytest.mark.parametrize(("lat", "lng"), [(10.0, 77.615), (12.97, 77.70), (13.01, 77.6)])
    def test_outside(self, lat, lng):
        assert not validate_indiranagar(lat, lng)

    def test_nan_is_rejected(self):
        assert not validate_indiranagar(math.nan, 77.6)


class TestValidateRating:
    @pytest.mark.parametrize("rating", [1.0, 1.1, 3.7, 4.5, 5.0])
    def test_valid(self, rating):
        assert validate_rating(rating)

    def test_every_tenth_from_one_to_five(self):
        ratings = [round(tenths / 10, 1) for tenths in range(10, 51)]
        assert len(ratings) == 41
        assert all(validate_rating(r) for r in ratings)

    @pytest.mark.parametrize("rating", [0.9, 5.1, 4.35, 4.55, 3.14, math.nan])
    def test_invalid(self, rating):
        assert not validate_rating(rating)


class TestSanitizeComment:
    def test_strips_script_blocks(self):
        assert sanitize_comment("Nice <script>alert(1)</script>place") == "Nice place"

    def test_script_match_is_case_insensitive(self):
        assert sanitize_comment("<SCRIPT src=x>steal()</SCRIPT> hi") == "hi"

    def test_truncates(self):
        assert len(sanitize_comment("x" * 5000)) == COMMENT_MAX_LENGTH

    def test_surrounding_whitespace_is_trimmed(self):
        assert sanitize_comment("\n  great coffee \t") == "great coffee"

    def test_other_markup_is_left_alone(self):
        assert sanitize_comment("  <b>bold</b>  ") == "<b>bold</b>"
