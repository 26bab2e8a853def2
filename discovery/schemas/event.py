"""Pydantic schemas for discovered events and their moderation."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

ModerationStatus = Literal["pending", "approved", "rejected"]


class EventRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    external_id: Optional[str]
    source_id: Optional[str]
    title: str
    description: Optional[str]
    category: Optional[str]
    start_time: datetime
    end_time: Optional[datetime]
    venue_name: Optional[str]
    venue_address: Optional[str]
    latitude: Optional[float]
    longitude: Optional[float]
    external_url: Optional[str]
    cost_type: str
    quality_score: float
    moderation_status: str
    moderated_at: Optional[datetime]
    is_active: bool
    created_at: datetime


class EventListResponse(BaseModel):
    events: list[EventRead]
    total: int


class ModerateRequest(BaseModel):
    """Body for POST /api/admin/events/{id}/moderate."""

    status: Literal["approved", "rejected"]


class EventStats(BaseModel):
    """Counts for the admin dashboard."""

    total: int
    pending: int
    approved: int
    rejected: int
    active_approved: int
    by_source: dict[str, int]


class FetchEventsResult(BaseModel):
    """Response for POST /api/cron/fetch-events."""

    fetched: int
    inserted: int
    skipped: int
    errors: list[str]
