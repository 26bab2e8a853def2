"""
Cron router — scheduled jobs triggered by the platform scheduler.

Endpoints:
  POST /api/cron/fetch-events   — stage nearby venues as pending events

Authentication: Authorization: Bearer CRON_SECRET.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from discovery.config import settings
from discovery.database import get_db
from discovery.routers.deps import require_cron
from discovery.schemas.event import FetchEventsResult
from discovery.services.event_fetcher import fetch_google_places_events, store_new_events

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/cron",
    tags=["cron"],
    dependencies=[Depends(require_cron)],
)


@router.post("/fetch-events", response_model=FetchEventsResult)
async def fetch_events(db: AsyncSession = Depends(get_db)) -> FetchEventsResult:
    if not settings.enable_event_fetch:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Event fetching disabled",
        )

    logger.info("Starting scheduled event fetch")
    events, errors = await fetch_google_places_events()
    try:
        return await store_new_events(db, events, errors)
    except Exception as exc:
        logger.error("Event fetch failed to store results: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch events",
        )
