"""Pydantic schemas for weather snapshots and weather-aware recommendations."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

WeatherCondition = Literal[
    "extreme_heat", "hot", "heavy_rain", "rainy",
    "cool", "humid", "cloudy", "sunny", "pleasant",
]

WeatherSource = Literal["openweather", "weatherapi", "fallback", "cache"]


class WeatherSuitability(BaseModel):
    """Condition lists a place or journey is tagged with."""

    ideal_conditions: list[str] = Field(default_factory=list)
    acceptable_conditions: list[str] = Field(default_factory=list)
    avoid_conditions: list[str] = Field(default_factory=list)


class WeatherSnapshot(BaseModel):
    """A single weather reading for a location. Never persisted."""

    condition: WeatherCondition
    temperature: float
    humidity: float
    rain_probability: float
    description: str
    recommendations: list[str] = Field(default_factory=list)
    source: WeatherSource
    timestamp: datetime


class WeatherResponse(BaseModel):
    """Response for GET /api/weather."""

    success: bool = True
    data: WeatherSnapshot


class ScoredItem(BaseModel):
    """A place or journey ranked against the current condition."""

    id: str
    name: str
    score: int
    reason: str
    item: dict[str, Any]


class WeatherRecommendationResponse(BaseModel):
    """Response for GET /api/recommendations/weather."""

    weather: WeatherSnapshot
    time_of_day: Literal["morning", "afternoon", "evening", "night"]
    summary: str
    places: list[ScoredItem]
    journeys: list[ScoredItem]
    insights: list[str]
