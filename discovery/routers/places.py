"""
Places router — public place directory, map markers, and the Google Places proxy.

Endpoints:
  GET  /api/places                  — whitelisted places, rating desc
  GET  /api/places/search?q=        — keyword search (records search history)
  GET  /api/places/map?zoom=        — markers visible at a zoom level
  POST /api/places/nearby           — proxy: nearby search (origin allow-listed)
  POST /api/places/autocomplete     — proxy: autocomplete
  POST /api/places/details          — proxy: place details
  GET  /api/places/photo            — proxy: photo bytes
  GET  /api/places/{place_id}       — single place

Public reads only ever return places whose name is on the approved whitelist
(ENFORCE_PLACE_WHITELIST).
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import Response
from pydantic import BaseModel, Field
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from discovery.config import settings
from discovery.database import get_db
from discovery.models.place import Place
from discovery.routers.deps import client_ip, require_vendor_proxy
from discovery.schemas.place import (
    Latitude,
    Longitude,
    MapMarker,
    MapResponse,
    PlaceListResponse,
    PlaceRead,
)
from discovery.schemas.search import SearchResponse, SearchResultItem
from discovery.schemas.validation import validate_indiranagar
from discovery.services import google_places
from discovery.services.geo import Coordinate
from discovery.services.markers import is_featured, marker_size, visible_markers
from discovery.services.search import MIN_QUERY_LENGTH, SearchContext, SearchFilters, search
from discovery.services.weather import local_now
from discovery.stores.search_history import history_for
from discovery.utils.approved_places import APPROVED_PLACES_SET
from discovery.utils.weather_copy import time_of_day

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/places", tags=["places"])

FEATURED_MIN_RATING = 4.0
FEATURED_LIMIT = 5


def public_place_filters() -> list[Any]:
    """WHERE clauses every public place query must include."""
    if not settings.enforce_place_whitelist:
        return []
    return [func.lower(Place.name).in_(sorted(APPROVED_PLACES_SET))]


async def load_public_places(db: AsyncSession) -> list[Place]:
    rows = await db.execute(select(Place).where(*public_place_filters()))
    return list(rows.scalars().all())


@router.get("", response_model=PlaceListResponse)
async def list_places(
    category: Optional[str] = Query(default=None),
    featured: bool = Query(default=False),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    db: AsyncSession = Depends(get_db),
) -> PlaceListResponse:
    """
    Whitelisted places ordered by rating (unrated last).
    featured=true returns at most 5 places rated ≥ 4.0, most recently updated first.
    """
    filters = public_place_filters()
    if category:
        filters.append(func.lower(Place.category) == category.lower())

    if featured:
        filters.append(Place.rating >= FEATURED_MIN_RATING)
        stmt = (
            select(Place)
            .where(*filters)
            .order_by(Place.updated_at.desc())
            .limit(FEATURED_LIMIT)
        )
        places = list((await db.execute(stmt)).scalars().all())
        return PlaceListResponse(
            places=[PlaceRead.model_validate(p) for p in places],
            total=len(places),
        )

    total = await db.scalar(select(func.count()).select_from(Place).where(*filters))
    stmt = (
        select(Place)
        .where(*filters)
        .order_by(Place.rating.desc().nulls_last(), Place.name)
        .offset(offset)
        .limit(limit)
    )
    places = (await db.execute(stmt)).scalars().all()
    return PlaceListResponse(
        places=[PlaceRead.model_validate(p) for p in places],
        total=total or 0,
    )


@router.get("/search", response_model=SearchResponse)
async def search_places(
    request: Request,
    q: str = Query(default=""),
    category: Optional[str] = Query(default=None),
    max_distance: Optional[float] = Query(default=None, gt=0),
    open_now: bool = Query(default=False),
    lat: Optional[float] = Query(default=None),
    lng: Optional[float] = Query(default=None),
    db: AsyncSession = Depends(get_db),
) -> SearchResponse:
    """
    Keyword search over whitelisted places. Queries shorter than two
    characters return no results without touching the database.
    """
    if len(q.strip()) < MIN_QUERY_LENGTH:
        return SearchResponse(query=q, results=[], total=0)

    user_location: Optional[Coordinate] = None
    if lat is not None and lng is not None:
        if not validate_indiranagar(lat, lng):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Coordinates must be within Indiranagar boundaries",
            )
        user_location = Coordinate(lat, lng)

    now = local_now()
    context = SearchContext(
        user_location=user_location,
        time_of_day=time_of_day(now.hour),
        now=now,
    )
    filters = SearchFilters(
        category=category,
        max_distance_meters=max_distance,
        open_now=open_now,
    )

    places = await load_public_places(db)
    ranked = search(q, places, filters, context)
    history_for(client_ip(request)).add(q)

    results = [
        SearchResultItem(
            place=PlaceRead.model_validate(r.place),
            score=r.score,
            distance_meters=r.distance_meters,
            matching_factors=r.matching_factors,
            contextual_recommendations=r.contextual_recommendations,
        )
        for r in ranked
    ]
    return SearchResponse(query=q, results=results, total=len(results))


@router.get("/map", response_model=MapResponse)
async def map_markers(
    zoom: float = Query(..., ge=0, le=22),
    db: AsyncSession = Depends(get_db),
) -> MapResponse:
    """Places that render at `zoom`, highest priority first, with their marker size."""
    places = await load_public_places(db)
    size = marker_size(zoom)
    markers = [
        MapMarker(
            place=PlaceRead.model_validate(place),
            size=size,
            priority=score,
            featured=is_featured(place),
        )
        for place, score in visible_markers(places, zoom)
    ]
    return MapResponse(zoom=zoom, markers=markers)


# ── Google Places proxy ──────────────────────────────────────────────────────

class NearbyRequest(BaseModel):
    lat: Latitude
    lng: Longitude
    radius: int = Field(default=1500, ge=1, le=5000)
    type: Optional[str] = None
    keyword: Optional[str] = None


class AutocompleteLocation(BaseModel):
    lat: float
    lng: float


class AutocompleteRequest(BaseModel):
    input: str = Field(..., min_length=1)
    session_token: Optional[str] = Field(default=None, alias="sessionToken")
    location: Optional[AutocompleteLocation] = None
    radius: Optional[int] = Field(default=None, ge=1, le=50_000)


class DetailsRequest(BaseModel):
    place_id: str = Field(..., alias="placeId", min_length=1)
    fields: Optional[list[str]] = None


def _proxy_error(exc: google_places.GooglePlacesError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=exc.message)


@router.post("/nearby", dependencies=[Depends(require_vendor_proxy)])
async def nearby(body: NearbyRequest) -> dict:
    try:
        results = await google_places.nearby_search(
            body.lat, body.lng, body.radius, place_type=body.type, keyword=body.keyword
        )
    except google_places.GooglePlacesError as exc:
        raise _proxy_error(exc)
    logger.info("Places nearby: %d results", len(results))
    return {"results": results, "status": "OK" if results else "ZERO_RESULTS"}


@router.post("/autocomplete", dependencies=[Depends(require_vendor_proxy)])
async def autocomplete(body: AutocompleteRequest) -> dict:
    location = (
        Coordinate(body.location.lat, body.location.lng) if body.location else None
    )
    try:
        predictions = await google_places.autocomplete(
            body.input, body.session_token, location, body.radius
        )
    except google_places.GooglePlacesError as exc:
        raise _proxy_error(exc)
    return {"predictions": predictions}


@router.post("/details", dependencies=[Depends(require_vendor_proxy)])
async def details(body: DetailsRequest) -> dict:
    try:
        result = await google_places.place_details(body.place_id, body.fields)
    except google_places.GooglePlacesError as exc:
        raise _proxy_error(exc)
    return {"result": result}


@router.get("/photo", dependencies=[Depends(require_vendor_proxy)])
async def photo(
    photo_reference: str = Query(..., min_length=1),
    maxwidth: int = Query(default=800, ge=1, le=1600),
) -> Response:
    try:
        content, content_type = await google_places.fetch_photo(photo_reference, maxwidth)
    except google_places.GooglePlacesError as exc:
        raise _proxy_error(exc)
    return Response(
        content=content,
        media_type=content_type,
        headers={"Cache-Control": "public, max-age=86400"},
    )


# ── Single place (declared last so static paths above win) ──────────────────

@router.get("/{place_id}", response_model=PlaceRead)
async def get_place(
    place_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> PlaceRead:
    stmt = select(Place).where(Place.id == place_id, *public_place_filters())
    place = (await db.execute(stmt)).scalar_one_or_none()
    if place is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Place not found",
        )
    return PlaceRead.model_validate(place)
