"""
Map marker sizing, zoom-based culling, and draw priority.

Visibility buckets (lower zoom bound → minimum rating):
  zoom ≥ 15   any place
  zoom ≥ 13   rating ≥ 4.5 (featured)
  zoom ≥ 11   rating ≥ 4.0
  any zoom    rating ≥ 4.8

should_render() treats the buckets cumulatively: a place is visible at zoom
z when it satisfies ANY bucket whose lower bound is ≤ z. Zooming in only
ever adds buckets, so a place visible at z1 stays visible at every z2 > z1
regardless of how the thresholds are tuned.
"""

from __future__ import annotations

from typing import Any, Literal

MarkerSize = Literal["small", "medium", "large"]

FEATURED_RATING = 4.5

# (min_zoom, min_rating); None means any rating, including unrated
VISIBILITY_BUCKETS: tuple[tuple[float, float | None], ...] = (
    (15, None),
    (13, FEATURED_RATING),
    (11, 4.0),
    (float("-inf"), 4.8),
)

PRIORITY_RATING_WEIGHT = 10
PRIORITY_FEATURED_BONUS = 20
PRIORITY_PHOTO_BONUS = 15


def marker_size(zoom: float) -> MarkerSize:
    if zoom >= 16:
        return "large"
    if zoom >= 14:
        return "medium"
    return "small"


def _rating(place: Any) -> float:
    return float(place.rating) if place.rating is not None else 0.0


def is_featured(place: Any) -> bool:
    return _rating(place) >= FEATURED_RATING


def should_render(place: Any, zoom: float) -> bool:
    rating = _rating(place)
    for min_zoom, min_rating in VISIBILITY_BUCKETS:
        if zoom >= min_zoom and (min_rating is None or rating >= min_rating):
            return True
    return False


def priority(place: Any) -> float:
    """Sort key for clustering and z-order. Not persisted."""
    score = _rating(place) * PRIORITY_RATING_WEIGHT
    if is_featured(place):
        score += PRIORITY_FEATURED_BONUS
    if place.primary_image:
        score += PRIORITY_PHOTO_BONUS
    return score


def visible_markers(places: list[Any], zoom: float) -> list[tuple[Any, float]]:
    """Places that render at `zoom` with their priority, highest first."""
    visible = [(place, priority(place)) for place in places if should_render(place, zoom)]
    visible.sort(key=lambda pair: pair[1], reverse=True)
    return visible
