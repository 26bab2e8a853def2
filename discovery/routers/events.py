"""
Events router — publicly visible discovered events.

Only events an admin approved AND that are still active are ever returned.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from discovery.database import get_db
from discovery.models.event import DiscoveredEvent
from discovery.schemas.event import EventListResponse, EventRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/events", tags=["events"])


@router.get("/discovered", response_model=EventListResponse)
async def discovered_events(
    category: Optional[str] = Query(default=None),
    start: Optional[datetime] = Query(default=None),
    end: Optional[datetime] = Query(default=None),
    limit: int = Query(default=50, ge=1, le=200),
    db: AsyncSession = Depends(get_db),
) -> EventListResponse:
    filters = [
        DiscoveredEvent.moderation_status == "approved",
        DiscoveredEvent.is_active.is_(True),
    ]
    if category:
        filters.append(DiscoveredEvent.category == category)
    if start is not None:
        filters.append(DiscoveredEvent.start_time >= start)
    if end is not None:
        filters.append(DiscoveredEvent.start_time <= end)

    stmt = (
        select(DiscoveredEvent)
        .where(*filters)
        .order_by(DiscoveredEvent.start_time.asc())
        .limit(limit)
    )
    events = (await db.execute(stmt)).scalars().all()
    return EventListResponse(
        events=[EventRead.model_validate(e) for e in events],
        total=len(events),
    )
