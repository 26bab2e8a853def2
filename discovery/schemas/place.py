"""Pydantic schemas for places, admin place management, and the map view."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Annotated, Any, Literal, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from discovery.schemas.validation import INDIRANAGAR_BOUNDS, validate_rating
from discovery.schemas.weather import WeatherSuitability


def _check_latitude(value: float) -> float:
    lo, hi = INDIRANAGAR_BOUNDS["lat"]
    if not lo <= value <= hi:
        raise ValueError("Latitude outside Indiranagar boundaries")
    return value


def _check_longitude(value: float) -> float:
    lo, hi = INDIRANAGAR_BOUNDS["lng"]
    if not lo <= value <= hi:
        raise ValueError("Longitude outside Indiranagar boundaries")
    return value


def _check_rating(value: float) -> float:
    if not validate_rating(value):
        raise ValueError("Rating must be between 1 and 5 in 0.1 increments")
    return round(value, 1)


Latitude = Annotated[float, AfterValidator(_check_latitude)]
Longitude = Annotated[float, AfterValidator(_check_longitude)]
PlaceRating = Annotated[float, AfterValidator(_check_rating)]


class OpeningHours(BaseModel):
    """Local opening hours, 'HH:MM'. close < open means the place closes after midnight."""

    open: str = Field(..., pattern=r"^\d{2}:\d{2}$")
    close: str = Field(..., pattern=r"^\d{2}:\d{2}$")


class PlaceCreate(BaseModel):
    """Body for POST /api/admin/places."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    category: Optional[str] = Field(default=None, max_length=100)
    latitude: Latitude
    longitude: Longitude
    rating: Optional[PlaceRating] = None
    has_visited: bool = False
    primary_image: Optional[str] = None
    best_time_to_visit: Optional[str] = Field(default=None, max_length=100)
    weather_suitability: WeatherSuitability = Field(default_factory=WeatherSuitability)
    meta: dict[str, Any] = Field(default_factory=dict)


class PlaceUpdate(BaseModel):
    """Body for PUT /api/admin/places/{id} — only supplied fields change."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    category: Optional[str] = Field(default=None, max_length=100)
    latitude: Optional[Latitude] = None
    longitude: Optional[Longitude] = None
    rating: Optional[PlaceRating] = None
    has_visited: Optional[bool] = None
    primary_image: Optional[str] = None
    best_time_to_visit: Optional[str] = Field(default=None, max_length=100)
    weather_suitability: Optional[WeatherSuitability] = None
    meta: Optional[dict[str, Any]] = None


class PlaceRead(BaseModel):
    """Place as returned by every read endpoint."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: str
    category: Optional[str]
    latitude: float
    longitude: float
    rating: Optional[float]
    has_visited: bool
    primary_image: Optional[str]
    best_time_to_visit: Optional[str]
    weather_suitability: dict[str, Any]
    meta: dict[str, Any]
    created_at: datetime
    updated_at: datetime


class PlaceListResponse(BaseModel):
    places: list[PlaceRead]
    total: int


class BulkDeleteRequest(BaseModel):
    """Body for POST /api/admin/places/bulk-delete."""

    ids: list[uuid.UUID] = Field(..., min_length=1, max_length=500)


class BulkDeleteResponse(BaseModel):
    deleted: list[uuid.UUID]
    not_found: list[uuid.UUID]


class MapMarker(BaseModel):
    """A place that should render at the requested zoom."""

    place: PlaceRead
    size: Literal["small", "medium", "large"]
    priority: float
    featured: bool


class MapResponse(BaseModel):
    zoom: float
    markers: list[MapMarker]
