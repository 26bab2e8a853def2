"""
Scheduled event fetch — pulls nearby venues from Google Places and stages
them as `pending` DiscoveredEvents for admin moderation.

Triggered by POST /api/cron/fetch-events (every 6 h in production).
Known external_ids are skipped, so re-running is idempotent.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from discovery.models.event import DiscoveredEvent, EventSource
from discovery.schemas.event import FetchEventsResult
from discovery.services.google_places import GooglePlacesError, nearby_search, place_details

logger = logging.getLogger(__name__)

SOURCE_ID = "google-places"
CENTER = (12.9716, 77.6411)      # Indiranagar
RADIUS_METERS = 2000
VENUE_TYPES = ("restaurant", "cafe", "bar")
MAX_EVENTS_PER_RUN = 5
EVENT_DURATION = timedelta(hours=2)
DEFAULT_QUALITY_SCORE = 0.8

_DETAIL_FIELDS = [
    "name", "formatted_address", "geometry", "opening_hours",
    "website", "photos", "editorial_summary",
]


def _to_event(place: dict[str, Any], details: dict[str, Any], now: datetime) -> dict[str, Any]:
    location = (details.get("geometry") or {}).get("location") or {}
    types = place.get("types") or []
    return {
        "external_id": place["place_id"],
        "source_id": SOURCE_ID,
        "title": f"Visit {details.get('name') or place.get('name')}",
        "description": (details.get("editorial_summary") or {}).get("overview")
        or "Popular spot in Indiranagar",
        "category": "dining" if "restaurant" in types else "venue",
        "start_time": now,
        "end_time": now + EVENT_DURATION,
        "venue_name": details.get("name") or place.get("name"),
        "venue_address": details.get("formatted_address"),
        "latitude": location.get("lat"),
        "longitude": location.get("lng"),
        "external_url": details.get("website"),
        "cost_type": "free",
        "quality_score": DEFAULT_QUALITY_SCORE,
        "moderation_status": "pending",
        "is_active": True,
    }


async def fetch_google_places_events(now: datetime | None = None) -> tuple[list[dict[str, Any]], list[str]]:
    """Return (event dicts, error messages). Never raises for vendor failures."""
    now = now or datetime.now(timezone.utc)
    errors: list[str] = []

    lat, lng = CENTER
    searches = await asyncio.gather(
        *(nearby_search(lat, lng, RADIUS_METERS, place_type=t) for t in VENUE_TYPES),
        return_exceptions=True,
    )

    candidates: dict[str, dict[str, Any]] = {}
    for venue_type, outcome in zip(VENUE_TYPES, searches):
        if isinstance(outcome, GooglePlacesError):
            errors.append(f"nearby[{venue_type}]: {outcome.message}")
            continue
        if isinstance(outcome, BaseException):
            raise outcome
        for place in outcome:
            if place.get("place_id"):
                candidates.setdefault(place["place_id"], place)

    selected = list(candidates.values())[:MAX_EVENTS_PER_RUN]
    detail_results = await asyncio.gather(
        *(place_details(p["place_id"], _DETAIL_FIELDS) for p in selected),
        return_exceptions=True,
    )

    events: list[dict[str, Any]] = []
    for place, details in zip(selected, detail_results):
        if isinstance(details, GooglePlacesError):
            errors.append(f"details[{place['place_id']}]: {details.message}")
            continue
        if isinstance(details, BaseException):
            raise details
        if details:
            events.append(_to_event(place, details, now))

    return events, errors


async def _ensure_source(db: AsyncSession) -> EventSource:
    source = await db.get(EventSource, SOURCE_ID)
    if source is None:
        source = EventSource(id=SOURCE_ID, name="Google Places", type="places_api")
        db.add(source)
        await db.flush()
    return source


async def store_new_events(
    db: AsyncSession,
    events: list[dict[str, Any]],
    errors: list[str] | None = None,
) -> FetchEventsResult:
    """Insert events whose external_id is new. Commits once; rolls back on failure."""
    errors = list(errors or [])
    try:
        source = await _ensure_source(db)

        ids = [e["external_id"] for e in events]
        known: set[str] = set()
        if ids:
            rows = await db.execute(
                select(DiscoveredEvent.external_id).where(DiscoveredEvent.external_id.in_(ids))
            )
            known = set(rows.scalars().all())

        inserted = 0
        for event in events:
            if event["external_id"] in known:
                continue
            db.add(DiscoveredEvent(**event))
            known.add(event["external_id"])
            inserted += 1

        source.last_fetched_at = datetime.now(timezone.utc)
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(
        "Event fetch completed: found %d, inserted %d, %d errors",
        len(events), inserted, len(errors),
    )
    return FetchEventsResult(
        fetched=len(events),
        inserted=inserted,
        skipped=len(events) - inserted,
        errors=errors,
    )
