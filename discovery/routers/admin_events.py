"""
Admin events router — moderation queue for discovered events.

Endpoints:
  GET  /api/admin/events?status=              — queue, newest first
  GET  /api/admin/events/stats                — counts by status and source
  POST /api/admin/events/{event_id}/moderate  — approve or reject
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from discovery.database import get_db
from discovery.models.event import DiscoveredEvent
from discovery.routers.deps import require_admin
from discovery.schemas.event import (
    EventListResponse,
    EventRead,
    EventStats,
    ModerateRequest,
    ModerationStatus,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/admin/events",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=EventListResponse)
async def list_events(
    status_filter: Optional[ModerationStatus] = Query(default="pending", alias="status"),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    db: AsyncSession = Depends(get_db),
) -> EventListResponse:
    filters = []
    if status_filter:
        filters.append(DiscoveredEvent.moderation_status == status_filter)

    total = await db.scalar(select(func.count()).select_from(DiscoveredEvent).where(*filters))
    stmt = (
        select(DiscoveredEvent)
        .where(*filters)
        .order_by(DiscoveredEvent.created_at.desc())
        .offset(offset)
        .limit(limit)
    )
    events = (await db.execute(stmt)).scalars().all()
    return EventListResponse(
        events=[EventRead.model_validate(e) for e in events],
        total=total or 0,
    )


@router.get("/stats", response_model=EventStats)
async def event_stats(db: AsyncSession = Depends(get_db)) -> EventStats:
    by_status_rows = await db.execute(
        select(DiscoveredEvent.moderation_status, func.count()).group_by(
            DiscoveredEvent.moderation_status
        )
    )
    by_status = dict(by_status_rows.all())

    by_source_rows = await db.execute(
        select(DiscoveredEvent.source_id, func.count()).group_by(DiscoveredEvent.source_id)
    )
    by_source = {source or "unknown": count for source, count in by_source_rows.all()}

    active_approved = await db.scalar(
        select(func.count())
        .select_from(DiscoveredEvent)
        .where(
            DiscoveredEvent.moderation_status == "approved",
            DiscoveredEvent.is_active.is_(True),
        )
    )

    return EventStats(
        total=sum(by_status.values()),
        pending=by_status.get("pending", 0),
        approved=by_status.get("approved", 0),
        rejected=by_status.get("rejected", 0),
        active_approved=active_approved or 0,
        by_source=by_source,
    )


@router.post("/{event_id}/moderate", response_model=EventRead)
async def moderate_event(
    event_id: uuid.UUID,
    body: ModerateRequest,
    db: AsyncSession = Depends(get_db),
) -> EventRead:
    event = await db.get(DiscoveredEvent, event_id)
    if event is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event not found",
        )

    event.moderation_status = body.status
    event.moderated_at = datetime.now(timezone.utc)
    try:
        await db.commit()
    except Exception as exc:
        await db.rollback()
        logger.error("Failed to moderate event %s: %s", event_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to moderate event",
        )

    logger.info("Event %s moderated → %s", event_id, body.status)
    return EventRead.model_validate(event)
