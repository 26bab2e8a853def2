"""
Geo helpers — great-circle distance and walking-time estimates.

Pure functions. No validation: NaN or out-of-range coordinates propagate
as NaN, so callers validate upstream (see discovery.schemas.validation).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import NamedTuple, Sequence

EARTH_RADIUS_METERS = 6_371_000.0
WALKING_SPEED_KMH = 5.0


class Coordinate(NamedTuple):
    latitude: float
    longitude: float


@dataclass
class RouteSummary:
    """Output of route_distance()."""

    legs: list[float] = field(default_factory=list)   # metres per consecutive pair
    total_meters: float = 0.0
    total_minutes: int = 0


def distance(a: Coordinate, b: Coordinate) -> float:
    """Haversine distance in metres on a spherical earth."""
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    d_phi = math.radians(b.latitude - a.latitude)
    d_lambda = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    return 2 * EARTH_RADIUS_METERS * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def walking_time(meters: float) -> int:
    """
    Minutes to walk `meters` at a constant 5 km/h, rounded up to a whole minute.
    NaN input is returned unchanged.
    """
    if math.isnan(meters):
        return meters  # type: ignore[return-value]
    if meters <= 0:
        return 0
    return math.ceil(meters * 60 / (WALKING_SPEED_KMH * 1000))


def route_distance(stops: Sequence[Coordinate]) -> RouteSummary:
    """Sum consecutive-pair distances. Zero or one stop yields an empty route."""
    if len(stops) < 2:
        return RouteSummary()

    legs = [distance(a, b) for a, b in zip(stops, stops[1:])]
    total = sum(legs)
    return RouteSummary(
        legs=legs,
        total_meters=total,
        total_minutes=walking_time(total),
    )


def format_distance(meters: float) -> str:
    """'450m' below a kilometre, '1.2km' above."""
    if meters < 1000:
        return f"{round(meters)}m"
    return f"{meters / 1000:.1f}km"
