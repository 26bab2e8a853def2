"""
Recommendations router — weather-aware picks for right now.

Endpoints:
  GET /api/recommendations/weather?lat=&lng=&limit=   — places and journeys
      ranked against the current weather condition, plus short insights

Shares the weather rate limit and coordinate validation with /api/weather.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from discovery.database import get_db
from discovery.models.journey import Journey
from discovery.routers.deps import client_ip
from discovery.routers.places import load_public_places
from discovery.routers.weather import parse_coordinates
from discovery.schemas.journey import JourneyRead
from discovery.schemas.place import PlaceRead
from discovery.schemas.weather import ScoredItem, WeatherRecommendationResponse
from discovery.services.rate_limit import weather_limiter
from discovery.services.weather import get_current_weather, local_now
from discovery.services.weather_classifier import score
from discovery.utils.weather_copy import describe, insights, time_of_day

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/recommendations", tags=["recommendations"])


@router.get("/weather", response_model=WeatherRecommendationResponse)
async def weather_recommendations(
    request: Request,
    lat: Optional[str] = Query(default=None),
    lng: Optional[str] = Query(default=None),
    limit: int = Query(default=6, ge=1, le=25),
    db: AsyncSession = Depends(get_db),
) -> WeatherRecommendationResponse:
    """
    Score every public place and published journey against the current
    condition (ideal +2, acceptable 0, avoid -2) and return the top `limit`
    of each. Equal scores keep rating order for places and newest-first
    order for journeys.
    """
    if not weather_limiter.hit(client_ip(request)):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Rate limit exceeded. Please try again later.",
        )

    latitude, longitude = parse_coordinates(lat, lng)
    snapshot = await get_current_weather(latitude, longitude)
    period = time_of_day(local_now().hour)

    places = await load_public_places(db)
    places.sort(key=lambda p: p.rating or 0, reverse=True)

    journey_rows = await db.execute(
        select(Journey)
        .where(Journey.is_published.is_(True))
        .order_by(Journey.created_at.desc())
    )
    journeys = list(journey_rows.scalars().all())

    scored_places = [
        ScoredItem(
            id=str(c.item.id),
            name=c.item.name,
            score=c.score,
            reason=c.reason,
            item=PlaceRead.model_validate(c.item).model_dump(mode="json"),
        )
        for c in score(places, snapshot.condition)[:limit]
    ]
    scored_journeys = [
        ScoredItem(
            id=str(c.item.id),
            name=c.item.title,
            score=c.score,
            reason=c.reason,
            item=JourneyRead.model_validate(c.item).model_dump(mode="json"),
        )
        for c in score(journeys, snapshot.condition)[:limit]
    ]

    logger.info(
        "Weather recommendations: condition=%s places=%d journeys=%d",
        snapshot.condition, len(scored_places), len(scored_journeys),
    )
    return WeatherRecommendationResponse(
        weather=snapshot,
        time_of_day=period,
        summary=describe(snapshot.temperature, snapshot.rain_probability, period),
        places=scored_places,
        journeys=scored_journeys,
        insights=insights(snapshot.temperature, snapshot.rain_probability, period),
    )
