"""
Polymorphic entity lookup for comments and ratings.

Every EntityType member must have an entry in ENTITY_MODELS; the assertion
below fails at import time if a new kind is added without one.
"""

from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from discovery.database import Base
from discovery.models.event import DiscoveredEvent
from discovery.models.journey import Journey
from discovery.models.place import Place
from discovery.schemas.community import EntityType

ENTITY_MODELS: dict[EntityType, type[Base]] = {
    EntityType.place: Place,
    EntityType.journey: Journey,
    EntityType.event: DiscoveredEvent,
}

assert set(ENTITY_MODELS) == set(EntityType), "ENTITY_MODELS must cover every EntityType"


class EntityNotFoundError(ValueError):
    """Raised when an (entity_type, entity_id) pair points at no row."""


async def get_entity(db: AsyncSession, entity_type: EntityType, entity_id: uuid.UUID) -> Base:
    """Return the target row or raise EntityNotFoundError."""
    model = ENTITY_MODELS[entity_type]
    row = await db.get(model, entity_id)
    if row is None:
        raise EntityNotFoundError(f"{entity_type.value.capitalize()} not found")
    return row
