"""
Journeys router — public curated walks.

Endpoints:
  GET /api/journeys?mood=          — published journeys, optionally by mood tag
  GET /api/journeys/{slug}         — one journey with ordered stops
  GET /api/journeys/{slug}/route   — walking legs between consecutive stops
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from discovery.database import get_db
from discovery.models.journey import Journey
from discovery.schemas.journey import (
    JourneyListResponse,
    JourneyRead,
    JourneyRouteResponse,
    RouteLeg,
)
from discovery.services.geo import Coordinate, format_distance, route_distance, walking_time

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/journeys", tags=["journeys"])


async def _published_by_slug(db: AsyncSession, slug: str) -> Journey:
    stmt = select(Journey).where(Journey.slug == slug, Journey.is_published.is_(True))
    journey = (await db.execute(stmt)).scalar_one_or_none()
    if journey is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Journey not found",
        )
    return journey


@router.get("", response_model=JourneyListResponse)
async def list_journeys(
    mood: Optional[str] = Query(default=None),
    db: AsyncSession = Depends(get_db),
) -> JourneyListResponse:
    stmt = (
        select(Journey)
        .where(Journey.is_published.is_(True))
        .order_by(Journey.created_at.desc())
    )
    journeys = list((await db.execute(stmt)).scalars().all())

    # mood_tags is a JSON list; filter here to stay portable across backends
    if mood:
        wanted = mood.lower()
        journeys = [j for j in journeys if wanted in (t.lower() for t in j.mood_tags or [])]

    return JourneyListResponse(
        journeys=[JourneyRead.model_validate(j) for j in journeys],
        total=len(journeys),
    )


@router.get("/{slug}", response_model=JourneyRead)
async def get_journey(
    slug: str,
    db: AsyncSession = Depends(get_db),
) -> JourneyRead:
    journey = await _published_by_slug(db, slug)
    journey.view_count = (journey.view_count or 0) + 1
    await db.commit()
    return JourneyRead.model_validate(journey)


@router.get("/{slug}/route", response_model=JourneyRouteResponse)
async def get_journey_route(
    slug: str,
    db: AsyncSession = Depends(get_db),
) -> JourneyRouteResponse:
    journey = await _published_by_slug(db, slug)
    stops = sorted(journey.stops, key=lambda s: s.stop_order)

    summary = route_distance(
        [Coordinate(s.place.latitude, s.place.longitude) for s in stops]
    )
    legs = [
        RouteLeg(
            from_place_id=a.place_id,
            to_place_id=b.place_id,
            meters=round(meters, 1),
            minutes=walking_time(meters),
            label=format_distance(meters),
        )
        for a, b, meters in zip(stops, stops[1:], summary.legs)
    ]
    return JourneyRouteResponse(
        slug=journey.slug,
        legs=legs,
        total_meters=round(summary.total_meters, 1),
        total_minutes=summary.total_minutes,
        total_label=format_distance(summary.total_meters),
    )
