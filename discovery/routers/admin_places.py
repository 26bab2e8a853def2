"""
Admin places router — full CRUD over every place (whitelist not applied).

Endpoints:
  GET    /api/admin/places               — list with search/category/status filters
  POST   /api/admin/places               — create
  POST   /api/admin/places/bulk-delete   — delete many in one transaction
  GET    /api/admin/places/{place_id}
  PUT    /api/admin/places/{place_id}    — partial update
  DELETE /api/admin/places/{place_id}

Authentication: Bearer ADMIN_TOKEN or the admin-token cookie.
"""

from __future__ import annotations

import logging
import uuid
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from discovery.database import get_db
from discovery.models.place import Place
from discovery.routers.deps import require_admin
from discovery.schemas.place import (
    BulkDeleteRequest,
    BulkDeleteResponse,
    PlaceCreate,
    PlaceListResponse,
    PlaceRead,
    PlaceUpdate,
)
from discovery.services.journey_stops import detach_places
from discovery.utils.approved_places import is_approved_place

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/admin/places",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


async def _get_or_404(db: AsyncSession, place_id: uuid.UUID) -> Place:
    place = await db.get(Place, place_id)
    if place is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Place not found",
        )
    return place


@router.get("", response_model=PlaceListResponse)
async def list_places(
    search: Optional[str] = Query(default=None),
    category: Optional[str] = Query(default=None),
    status_filter: Literal["all", "visited", "not_visited"] = Query(default="all", alias="status"),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    db: AsyncSession = Depends(get_db),
) -> PlaceListResponse:
    filters = []
    if search:
        pattern = f"%{search.lower()}%"
        filters.append(
            or_(func.lower(Place.name).like(pattern), func.lower(Place.description).like(pattern))
        )
    if category:
        filters.append(func.lower(Place.category) == category.lower())
    if status_filter != "all":
        filters.append(Place.has_visited.is_(status_filter == "visited"))

    total = await db.scalar(select(func.count()).select_from(Place).where(*filters))
    stmt = (
        select(Place)
        .where(*filters)
        .order_by(Place.updated_at.desc())
        .offset(offset)
        .limit(limit)
    )
    places = (await db.execute(stmt)).scalars().all()
    return PlaceListResponse(
        places=[PlaceRead.model_validate(p) for p in places],
        total=total or 0,
    )


@router.post("", response_model=PlaceRead, status_code=status.HTTP_201_CREATED)
async def create_place(
    body: PlaceCreate,
    db: AsyncSession = Depends(get_db),
) -> PlaceRead:
    if not is_approved_place(body.name):
        logger.warning("Creating place '%s' which is not on the approved whitelist", body.name)

    data = body.model_dump()
    place = Place(**data)
    db.add(place)
    try:
        await db.commit()
    except Exception as exc:
        await db.rollback()
        logger.error("Failed to create place '%s': %s", body.name, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create place",
        )
    await db.refresh(place)
    logger.info("Created place %s (%s)", place.id, place.name)
    return PlaceRead.model_validate(place)


@router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete(
    body: BulkDeleteRequest,
    db: AsyncSession = Depends(get_db),
) -> BulkDeleteResponse:
    """Delete every listed place that exists, renumbering journeys that lose stops. All-or-nothing."""
    requested = list(dict.fromkeys(body.ids))
    rows = await db.execute(select(Place.id).where(Place.id.in_(requested)))
    existing = set(rows.scalars().all())

    try:
        if existing:
            await detach_places(db, list(existing))
            await db.execute(delete(Place).where(Place.id.in_(list(existing))))
        await db.commit()
    except Exception as exc:
        await db.rollback()
        logger.error("Bulk delete of %d places failed: %s", len(existing), exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete places",
        )

    logger.info("Bulk deleted %d places", len(existing))
    return BulkDeleteResponse(
        deleted=[pid for pid in requested if pid in existing],
        not_found=[pid for pid in requested if pid not in existing],
    )


@router.get("/{place_id}", response_model=PlaceRead)
async def get_place(
    place_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> PlaceRead:
    return PlaceRead.model_validate(await _get_or_404(db, place_id))


@router.put("/{place_id}", response_model=PlaceRead)
async def update_place(
    place_id: uuid.UUID,
    body: PlaceUpdate,
    db: AsyncSession = Depends(get_db),
) -> PlaceRead:
    place = await _get_or_404(db, place_id)
    for field, value in body.model_dump(exclude_unset=True).items():
        if value is None and not Place.__table__.c[field].nullable:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Field '{field}' cannot be null",
            )
        setattr(place, field, value)

    try:
        await db.commit()
    except Exception as exc:
        await db.rollback()
        logger.error("Failed to update place %s: %s", place_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update place",
        )
    await db.refresh(place)
    return PlaceRead.model_validate(place)


@router.delete("/{place_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_place(
    place_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> None:
    place = await _get_or_404(db, place_id)
    try:
        await detach_places(db, [place_id])
        await db.delete(place)
        await db.commit()
    except Exception as exc:
        await db.rollback()
        logger.error("Failed to delete place %s: %s", place_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete place",
        )
    logger.info("Deleted place %s", place_id)
