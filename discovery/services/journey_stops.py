"""
Keeps journey stop orders dense (0..n-1) when places disappear.

Callers own the transaction: nothing here commits.
"""

from __future__ import annotations

import logging
import uuid
from typing import Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from discovery.models.journey import JourneyStop

logger = logging.getLogger(__name__)


async def detach_places(db: AsyncSession, place_ids: Sequence[uuid.UUID]) -> int:
    """
    Delete every stop that points at one of `place_ids`, then renumber the
    remaining stops of each affected journey in their previous order.
    Returns the number of stops removed.
    """
    place_ids = list(place_ids)
    if not place_ids:
        return 0

    rows = await db.execute(
        select(JourneyStop.journey_id).where(JourneyStop.place_id.in_(place_ids)).distinct()
    )
    journey_ids = list(rows.scalars().all())
    if not journey_ids:
        return 0

    removed = await db.execute(
        delete(JourneyStop)
        .where(JourneyStop.place_id.in_(place_ids))
        .execution_options(synchronize_session="fetch")
    )

    remaining = await db.execute(
        select(JourneyStop.id, JourneyStop.journey_id, JourneyStop.stop_order)
        .where(JourneyStop.journey_id.in_(journey_ids))
        .order_by(JourneyStop.journey_id, JourneyStop.stop_order)
    )

    # Ascending order: each target slot is already free when it is written
    next_order: dict[uuid.UUID, int] = {}
    for stop_id, journey_id, stop_order in remaining.all():
        new_order = next_order.get(journey_id, 0)
        next_order[journey_id] = new_order + 1
        if new_order != stop_order:
            await db.execute(
                update(JourneyStop)
                .where(JourneyStop.id == stop_id)
                .values(stop_order=new_order)
                .execution_options(synchronize_session="fetch")
            )

    logger.info(
        "Removed %d stops from %d journeys and renumbered the rest",
        removed.rowcount or 0, len(journey_ids),
    )
    return removed.rowcount or 0
