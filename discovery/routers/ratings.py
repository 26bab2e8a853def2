"""
Ratings router — 1.0–5.0 star ratings, one per (entity, IP).

Endpoints:
  GET  /api/ratings?entity_type=&entity_id=   — average, count, 1–5 distribution, caller's rating
  POST /api/ratings                           — upsert the caller's rating
"""

from __future__ import annotations

import logging
import math
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from discovery.database import get_db
from discovery.models.community import Rating
from discovery.routers.deps import client_ip
from discovery.schemas.community import EntityType, RatingCreate, RatingSummary
from discovery.services.entities import EntityNotFoundError, get_entity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ratings", tags=["community"])


def _star_bucket(value: float) -> int:
    """Nearest whole star, clamped to 1–5 (half rounds up)."""
    return min(5, max(1, math.floor(value + 0.5)))


async def _summary(
    db: AsyncSession,
    entity_type: EntityType,
    entity_id: uuid.UUID,
    ip: str,
) -> RatingSummary:
    rows = (
        await db.execute(
            select(Rating.rating, Rating.ip_address).where(
                Rating.entity_type == entity_type.value,
                Rating.entity_id == entity_id,
            )
        )
    ).all()

    distribution = {star: 0 for star in range(1, 6)}
    user_rating = None
    for value, rater_ip in rows:
        distribution[_star_bucket(value)] += 1
        if rater_ip == ip:
            user_rating = value

    total = len(rows)
    average = round(sum(v for v, _ in rows) / total, 2) if total else None
    return RatingSummary(
        entity_type=entity_type,
        entity_id=entity_id,
        average=average,
        total=total,
        distribution=distribution,
        user_rating=user_rating,
    )


@router.get("", response_model=RatingSummary)
async def get_ratings(
    request: Request,
    entity_type: EntityType = Query(...),
    entity_id: uuid.UUID = Query(...),
    db: AsyncSession = Depends(get_db),
) -> RatingSummary:
    return await _summary(db, entity_type, entity_id, client_ip(request))


@router.post("", response_model=RatingSummary)
async def submit_rating(
    request: Request,
    body: RatingCreate,
    db: AsyncSession = Depends(get_db),
) -> RatingSummary:
    """Insert or overwrite the caller's rating and return the fresh summary."""
    ip = client_ip(request)
    try:
        await get_entity(db, body.entity_type, body.entity_id)
    except EntityNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        )

    existing = (
        await db.execute(
            select(Rating).where(
                Rating.entity_type == body.entity_type.value,
                Rating.entity_id == body.entity_id,
                Rating.ip_address == ip,
            )
        )
    ).scalar_one_or_none()

    if existing is not None:
        existing.rating = body.rating
    else:
        db.add(
            Rating(
                entity_type=body.entity_type.value,
                entity_id=body.entity_id,
                rating=body.rating,
                ip_address=ip,
            )
        )

    try:
        await db.commit()
    except Exception as exc:
        await db.rollback()
        logger.error("Failed to submit rating: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to submit rating",
        )

    return await _summary(db, body.entity_type, body.entity_id, ip)
