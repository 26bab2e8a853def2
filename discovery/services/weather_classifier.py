"""
Weather classifier and suitability scorer — pure functions, no I/O.

classify() maps a numeric reading to a coarse condition label using ordered
threshold checks; the first match wins, so the order below is part of the
contract (a hot, wet afternoon is 'hot', never 'cloudy').

score() ranks candidates tagged with ideal / acceptable / avoid condition
lists against the current condition:
  ideal       +2
  acceptable   0
  avoid       -2
  unlisted     0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Mapping, Sequence, TypeVar

T = TypeVar("T")

CONDITIONS: tuple[str, ...] = (
    "extreme_heat", "hot", "heavy_rain", "rainy",
    "cool", "humid", "cloudy", "sunny", "pleasant",
)

IDEAL_SCORE = 2
ACCEPTABLE_SCORE = 0
AVOID_SCORE = -2

# Daylight window for 'sunny' (inclusive hours, local time)
_DAYLIGHT_START = 6
_DAYLIGHT_END = 17


def classify(
    temperature: float,
    rain_probability: float,
    humidity: float,
    hour: int,
) -> str:
    """Return the condition label for a reading. Temperature checks run first."""
    if temperature > 35:
        return "extreme_heat"
    if temperature > 30:
        return "hot"
    if rain_probability >= 70:
        return "heavy_rain"
    if rain_probability >= 40:
        return "rainy"
    if temperature < 20:
        return "cool"
    if humidity > 80:
        return "humid"
    if rain_probability >= 25:
        return "cloudy"
    if _DAYLIGHT_START <= hour <= _DAYLIGHT_END:
        return "sunny"
    return "pleasant"


@dataclass
class ScoredCandidate(Generic[T]):
    """One candidate after scoring."""

    item: T
    score: int
    reason: str


def _default_suitability(item: Any) -> Mapping[str, Any] | None:
    if isinstance(item, Mapping):
        return item.get("weather_suitability")
    return getattr(item, "weather_suitability", None)


def suitability_score(suitability: Mapping[str, Any] | None, condition: str) -> tuple[int, str]:
    """Score a single suitability mapping. Returns (score, reason)."""
    if not suitability:
        return 0, ""

    label = condition.replace("_", " ")
    if condition in (suitability.get("ideal_conditions") or []):
        return IDEAL_SCORE, f"Ideal for {label} weather"
    if condition in (suitability.get("avoid_conditions") or []):
        return AVOID_SCORE, f"Best avoided in {label} weather"
    if condition in (suitability.get("acceptable_conditions") or []):
        return ACCEPTABLE_SCORE, f"Fine in {label} weather"
    return 0, ""


def score(
    candidates: Sequence[T],
    condition: str,
    get_suitability: Callable[[T], Mapping[str, Any] | None] = _default_suitability,
) -> list[ScoredCandidate[T]]:
    """
    Score every candidate and return the full list sorted by score descending.
    Python's sort is stable, so equal scores keep their input order.
    Callers slice a top-N.
    """
    scored: list[ScoredCandidate[T]] = []
    for item in candidates:
        pts, reason = suitability_score(get_suitability(item), condition)
        scored.append(ScoredCandidate(item=item, score=pts, reason=reason))

    scored.sort(key=lambda c: c.score, reverse=True)
    return scored
