"""
Admin journeys router.

Endpoints:
  GET    /api/admin/journeys                 — every journey, published or not
  POST   /api/admin/journeys                 — create journey + stops
  GET    /api/admin/journeys/{journey_id}
  PUT    /api/admin/journeys/{journey_id}    — update; a `stops` list replaces all stops
  DELETE /api/admin/journeys/{journey_id}

The journey row and its stops are written in ONE transaction: if any stop
fails to insert, the journey row is rolled back with it.
"""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from discovery.database import get_db
from discovery.models.journey import Journey, JourneyStop
from discovery.models.place import Place
from discovery.routers.deps import require_admin
from discovery.schemas.journey import (
    JourneyCreate,
    JourneyListResponse,
    JourneyRead,
    JourneyStopIn,
    JourneyUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/admin/journeys",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


async def _load(db: AsyncSession, journey_id: uuid.UUID) -> Journey:
    stmt = (
        select(Journey)
        .where(Journey.id == journey_id)
        .execution_options(populate_existing=True)
    )
    journey = (await db.execute(stmt)).scalar_one_or_none()
    if journey is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Journey not found",
        )
    return journey


async def _check_places_exist(db: AsyncSession, stops: list[JourneyStopIn]) -> None:
    wanted = {stop.place_id for stop in stops}
    if not wanted:
        return
    rows = await db.execute(select(Place.id).where(Place.id.in_(list(wanted))))
    missing = wanted - set(rows.scalars().all())
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown place id(s): {', '.join(sorted(str(m) for m in missing))}",
        )


def _build_stops(stops: list[JourneyStopIn]) -> list[JourneyStop]:
    return [
        JourneyStop(
            place_id=stop.place_id,
            stop_order=stop.stop_order,
            duration_minutes=stop.duration_minutes,
            notes=stop.notes,
        )
        for stop in stops
    ]


def conflict_detail(exc: IntegrityError) -> str:
    """Only a unique-slug violation is reported as a duplicate slug."""
    message = str(exc.orig).lower()
    if "slug" in message:
        return "A journey with this slug already exists"
    return "Journey conflicts with existing data"


async def _commit_or_raise(db: AsyncSession, action: str, flush_only: bool = False) -> None:
    """Commit (or just flush); on failure roll the whole transaction back."""
    try:
        if flush_only:
            await db.flush()
        else:
            await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        logger.warning("Journey %s rejected by constraint: %s", action, exc.orig)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=conflict_detail(exc),
        )
    except Exception as exc:
        await db.rollback()
        logger.error("Journey %s failed, transaction rolled back: %s", action, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to {action} journey",
        )


@router.get("", response_model=JourneyListResponse)
async def list_journeys(db: AsyncSession = Depends(get_db)) -> JourneyListResponse:
    journeys = (
        await db.execute(select(Journey).order_by(Journey.updated_at.desc()))
    ).scalars().all()
    return JourneyListResponse(
        journeys=[JourneyRead.model_validate(j) for j in journeys],
        total=len(journeys),
    )


@router.post("", response_model=JourneyRead, status_code=status.HTTP_201_CREATED)
async def create_journey(
    body: JourneyCreate,
    db: AsyncSession = Depends(get_db),
) -> JourneyRead:
    await _check_places_exist(db, body.stops)

    journey = Journey(**body.model_dump(exclude={"stops"}))
    journey.stops = _build_stops(body.stops)
    db.add(journey)
    await _commit_or_raise(db, "create")

    logger.info("Created journey %s with %d stops", journey.slug, len(body.stops))
    return JourneyRead.model_validate(await _load(db, journey.id))


@router.get("/{journey_id}", response_model=JourneyRead)
async def get_journey(
    journey_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> JourneyRead:
    return JourneyRead.model_validate(await _load(db, journey_id))


@router.put("/{journey_id}", response_model=JourneyRead)
async def update_journey(
    journey_id: uuid.UUID,
    body: JourneyUpdate,
    db: AsyncSession = Depends(get_db),
) -> JourneyRead:
    journey = await _load(db, journey_id)
    changes = body.model_dump(exclude_unset=True, exclude={"stops"})
    for field, value in changes.items():
        if value is None and not Journey.__table__.c[field].nullable:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Field '{field}' cannot be null",
            )
        setattr(journey, field, value)

    if body.stops is not None:
        await _check_places_exist(db, body.stops)
        # Old stops must be gone before new orders hit the unique constraint
        journey.stops.clear()
        await _commit_or_raise(db, "update", flush_only=True)
        journey.stops.extend(_build_stops(body.stops))

    await _commit_or_raise(db, "update")
    return JourneyRead.model_validate(await _load(db, journey_id))


@router.delete("/{journey_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_journey(
    journey_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> None:
    journey = await _load(db, journey_id)
    await db.delete(journey)
    await _commit_or_raise(db, "delete")
    logger.info("Deleted journey %s", journey_id)
