"""Pydantic schemas for journeys, their stops, and walking routes."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from discovery.schemas.place import PlaceRead
from discovery.schemas.weather import WeatherSuitability

Difficulty = Literal["easy", "moderate", "challenging"]


class JourneyStopIn(BaseModel):
    """One stop in a create/update body. stop_order defaults to list position."""

    place_id: uuid.UUID
    stop_order: Optional[int] = Field(default=None, ge=0)
    duration_minutes: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None


def normalise_stop_orders(stops: list[JourneyStopIn]) -> list[JourneyStopIn]:
    """
    Fill missing stop_order values from list position, then require the
    orders to be unique and dense from zero. Returns stops sorted by order.
    """
    filled = [
        stop if stop.stop_order is not None else stop.model_copy(update={"stop_order": idx})
        for idx, stop in enumerate(stops)
    ]
    orders = sorted(stop.stop_order for stop in filled)
    if orders != list(range(len(filled))):
        raise ValueError("Stop orders must be unique and contiguous starting at 0")
    return sorted(filled, key=lambda s: s.stop_order)


class JourneyCreate(BaseModel):
    """Body for POST /api/admin/journeys."""

    slug: str = Field(..., min_length=1, max_length=255, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    title: str = Field(..., min_length=1)
    description: str = ""
    mood_tags: list[str] = Field(default_factory=list)
    difficulty: Difficulty = "moderate"
    duration_minutes: Optional[int] = Field(default=None, ge=0)
    distance_km: Optional[float] = Field(default=None, ge=0)
    weather_suitability: WeatherSuitability = Field(default_factory=WeatherSuitability)
    is_published: bool = True
    stops: list[JourneyStopIn] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_stops(self) -> "JourneyCreate":
        self.stops = normalise_stop_orders(self.stops)
        return self


class JourneyUpdate(BaseModel):
    """Body for PUT /api/admin/journeys/{id}. A supplied `stops` list replaces all stops."""

    slug: Optional[str] = Field(
        default=None, min_length=1, max_length=255, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$"
    )
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    mood_tags: Optional[list[str]] = None
    difficulty: Optional[Difficulty] = None
    duration_minutes: Optional[int] = Field(default=None, ge=0)
    distance_km: Optional[float] = Field(default=None, ge=0)
    weather_suitability: Optional[WeatherSuitability] = None
    is_published: Optional[bool] = None
    stops: Optional[list[JourneyStopIn]] = None

    @model_validator(mode="after")
    def _check_stops(self) -> "JourneyUpdate":
        if self.stops is not None:
            self.stops = normalise_stop_orders(self.stops)
        return self


class JourneyStopRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    place_id: uuid.UUID
    stop_order: int
    duration_minutes: Optional[int]
    notes: Optional[str]
    place: Optional[PlaceRead] = None


class JourneyRead(BaseModel):
    """Journey with its stops in order."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    slug: str
    title: str
    description: str
    mood_tags: list[str]
    difficulty: str
    duration_minutes: Optional[int]
    distance_km: Optional[float]
    weather_suitability: dict[str, Any]
    is_published: bool
    view_count: int
    stops: list[JourneyStopRead] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class JourneyListResponse(BaseModel):
    journeys: list[JourneyRead]
    total: int


class RouteLeg(BaseModel):
    from_place_id: uuid.UUID
    to_place_id: uuid.UUID
    meters: float
    minutes: int
    label: str


class JourneyRouteResponse(BaseModel):
    """Walking legs between consecutive stops."""

    slug: str
    legs: list[RouteLeg]
    total_meters: float
    total_minutes: int
    total_label: str
