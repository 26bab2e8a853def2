"""Tests for great-circle distance and walking time."""

import math

import pytest

from discovery.services.geo import (
    Coordinate,
    distance,
    format_distance,
    route_distance,
    walking_time,
)

WALKS = [0, 0.5, 1, 83, 83.4, 84, 500, 999.9, 1000, 1000.1, 2500, 10_000]


class TestDistance:
    def test_same_point_is_zero(self):
        point = Coordinate(12.9784, 77.6408)
        assert distance(point, point) == 0

    def test_is_symmetric(self):
        a = Coordinate(12.9716, 77.6411)
        b = Coordinate(12.9784, 77.6408)
        assert distance(a, b) == pytest.approx(distance(b, a))

    def test_one_degree_of_latitude(self):
        """One degree along a meridian is ~111.2 km on a 6371 km sphere."""
        meters = distance(Coordinate(12.0, 77.6), Coordinate(13.0, 77.6))
        assert meters == pytest.approx(111_195, rel=1e-3)

    def test_colinear_points_add_up(self):
        a, b, c = Coordinate(12.95, 77.64), Coordinate(12.97, 77.64), Coordinate(13.00, 77.64)
        assert distance(a, c) == pytest.approx(distance(a, b) + distance(b, c), rel=1e-9)

    def test_nan_propagates(self):
        assert math.isnan(distance(Coordinate(math.nan, 77.6), Coordinate(12.9, 77.6)))


class TestWalkingTime:
    def test_zero_and_negative_are_zero(self):
        assert walking_time(0) == 0
        assert walking_time(-50) == 0

    def test_rounds_up_to_whole_minutes(self):
        # 5 km/h is 83.33 m per minute
        assert walking_time(1) == 1
        assert walking_time(83) == 1
        assert walking_time(84) == 2

    def test_one_kilometre(self):
        assert walking_time(1000) == 12

    @pytest.mark.parametrize(("shorter", "longer"), list(zip(WALKS, WALKS[1:])))
    def test_non_decreasing(self, shorter, longer):
        assert walking_time(shorter) <= walking_time(longer)

    def test_nan_returns_nan(self):
        assert math.isnan(walking_time(math.nan))


class TestRouteDistance:
    def test_fewer_than_two_stops_is_empty(self):
        assert route_distance([]).legs == []
        single = route_distance([Coordinate(12.97, 77.64)])
        assert single.total_meters == 0
        assert single.total_minutes == 0

    def test_sums_consecutive_legs(self):
        a, b, c = Coordinate(12.970, 77.640), Coordinate(12.975, 77.640), Coordinate(12.975, 77.645)
        summary = route_distance([a, b, c])
        assert len(summary.legs) == 2
        assert summary.total_meters == pytest.approx(distance(a, b) + distance(b, c))
        assert summary.total_minutes == walking_time(summary.total_meters)


def test_format_distance():
    assert format_distance(450.4) == "450m"
    assert format_distance(1234) == "1.2km"
