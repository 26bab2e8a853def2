"""
Keyword search over an in-memory list of places.

Pure Python. No DB calls — the router loads candidates and passes them in.

Score = text tier + distance bonus + rating bonus
  Text tier (first match wins, strictly decreasing):
    exact name         100
    name prefix         80
    name substring      60
    category            40
    description only    20
  Distance bonus   10 / (1 + km)   only when a user location is supplied
  Rating bonus     2 × rating

Queries shorter than two characters (after stripping) return [] without
scanning the corpus.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, time
from typing import Any, Optional, Sequence

from pydantic import ValidationError

from discovery.schemas.place import OpeningHours
from discovery.services.geo import Coordinate, distance

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2

TIER_EXACT_NAME = 100
TIER_NAME_PREFIX = 80
TIER_NAME_SUBSTRING = 60
TIER_CATEGORY = 40
TIER_DESCRIPTION = 20

RATING_WEIGHT = 2.0
DISTANCE_WEIGHT = 10.0


@dataclass
class SearchFilters:
    category: Optional[str] = None
    max_distance_meters: Optional[float] = None
    open_now: bool = False


@dataclass
class SearchContext:
    user_location: Optional[Coordinate] = None
    time_of_day: str = "afternoon"
    now: Optional[datetime] = None          # local time, used by open_now
    weather_condition: Optional[str] = None


@dataclass
class RankedResult:
    """Output of search() — one per matching place."""

    place: Any
    score: float
    distance_meters: Optional[float] = None
    matching_factors: list[str] = field(default_factory=list)
    contextual_recommendations: list[str] = field(default_factory=list)


def _text_tier(query: str, place: Any) -> tuple[int, str | None]:
    """Return (points, factor) for the best text match, or (0, None)."""
    name = (place.name or "").lower()
    category = (place.category or "").lower()
    description = (place.description or "").lower()

    if name == query:
        return TIER_EXACT_NAME, "Exact name match"
    if name.startswith(query):
        return TIER_NAME_PREFIX, "Name starts with query"
    if query in name:
        return TIER_NAME_SUBSTRING, "Name contains query"
    if query in category:
        return TIER_CATEGORY, f"Category: {place.category}"
    if query in description:
        return TIER_DESCRIPTION, "Mentioned in description"
    return 0, None


def _parse_hhmm(value: str) -> time:
    hours, minutes = value.split(":")
    return time(int(hours), int(minutes))


def is_open_at(place: Any, now: datetime) -> Optional[bool]:
    """
    True/False when the place carries opening_hours in its meta, None when it
    does not (or the hours are malformed). Handles closing after midnight.
    """
    raw = (place.meta or {}).get("opening_hours")
    if not raw:
        return None
    try:
        hours = OpeningHours.model_validate(raw)
        opens = _parse_hhmm(hours.open)
        closes = _parse_hhmm(hours.close)
    except (ValidationError, ValueError):
        logger.debug("Ignoring malformed opening_hours on %s: %r", place.name, raw)
        return None

    current = now.time().replace(second=0, microsecond=0)
    if opens <= closes:
        return opens <= current < closes
    return current >= opens or current < closes


def _contextual_recommendations(place: Any, context: SearchContext) -> list[str]:
    recommendations: list[str] = []
    category = (place.category or "").lower()

    if context.time_of_day == "morning" and "cafe" in category:
        recommendations.append("Perfect for morning coffee")
    if context.time_of_day == "evening" and "restaurant" in category:
        recommendations.append("Great for dinner")

    if place.rating is not None and place.rating >= 4.5:
        recommendations.append("Exceptional reviews")

    if context.weather_condition and "rain" in context.weather_condition:
        ideal = (place.weather_suitability or {}).get("ideal_conditions") or []
        if "rainy" in ideal or "heavy_rain" in ideal:
            recommendations.append("Perfect for rainy weather")

    return recommendations


def search(
    query: str,
    places: Sequence[Any],
    filters: SearchFilters | None = None,
    context: SearchContext | None = None,
) -> list[RankedResult]:
    """
    Rank `places` against `query`. Places are any objects exposing name,
    description, category, latitude, longitude, rating, meta and
    weather_suitability (ORM rows or PlaceRead).
    """
    needle = query.strip().lower()
    if len(needle) < MIN_QUERY_LENGTH:
        return []

    filters = filters or SearchFilters()
    context = context or SearchContext()
    wanted_category = filters.category.lower() if filters.category else None

    results: list[RankedResult] = []
    for place in places:
        tier, factor = _text_tier(needle, place)
        if factor is None:
            continue

        if wanted_category and (place.category or "").lower() != wanted_category:
            continue

        meters: float | None = None
        if context.user_location is not None:
            meters = distance(
                context.user_location, Coordinate(place.latitude, place.longitude)
            )
        # max_distance_meters is ignored without a user location
        if filters.max_distance_meters is not None and meters is not None:
            if meters > filters.max_distance_meters:
                continue

        if filters.open_now and context.now is not None:
            if is_open_at(place, context.now) is False:
                continue

        factors = [factor]
        total = float(tier)

        if meters is not None:
            total += DISTANCE_WEIGHT / (1 + meters / 1000)
            factors.append(f"{meters / 1000:.1f} km away")

        if place.rating:
            total += RATING_WEIGHT * float(place.rating)
            factors.append(f"Rated {float(place.rating):.1f}")

        results.append(
            RankedResult(
                place=place,
                score=round(total, 4),
                distance_meters=meters,
                matching_factors=factors,
                contextual_recommendations=_contextual_recommendations(place, context),
            )
        )

    results.sort(key=lambda r: r.score, reverse=True)
    return results
