"""
Weather router — current conditions for a point inside Indiranagar.

Endpoints:
  GET /api/weather?lat=&lng=   — cached snapshot (60 requests per hour per IP)

Coordinates arrive as raw strings so that missing, non-numeric, and
out-of-bounds values each get their own 400 message.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request, status

from discovery.routers.deps import client_ip
from discovery.schemas.validation import validate_indiranagar
from discovery.schemas.weather import WeatherResponse
from discovery.services.rate_limit import weather_limiter
from discovery.services.weather import get_current_weather

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/weather", tags=["weather"])


def parse_coordinates(lat: Optional[str], lng: Optional[str]) -> tuple[float, float]:
    """Parse and bounds-check query coordinates, raising 400 on any problem."""
    if not lat or not lng:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing latitude or longitude parameters",
        )
    try:
        latitude, longitude = float(lat), float(lng)
    except ValueError:
        latitude = longitude = math.nan
    if math.isnan(latitude) or math.isnan(longitude):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid latitude or longitude values",
        )
    if not validate_indiranagar(latitude, longitude):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Coordinates must be within Indiranagar boundaries",
        )
    return latitude, longitude


@router.get("", response_model=WeatherResponse)
async def current_weather(
    request: Request,
    lat: Optional[str] = Query(default=None),
    lng: Optional[str] = Query(default=None),
) -> WeatherResponse:
    if not weather_limiter.hit(client_ip(request)):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Rate limit exceeded. Please try again later.",
        )

    latitude, longitude = parse_coordinates(lat, lng)
    snapshot = await get_current_weather(latitude, longitude)
    return WeatherResponse(data=snapshot)
