"""Place ORM model — the curated neighbourhood directory."""

import uuid

from sqlalchemy import (
    Column, Text, String, Numeric, Boolean, JSON, Uuid,
    DateTime, Double, func,
)

from discovery.database import Base, utcnow


class Place(Base):
    """
    A curated place in Indiranagar. Created and edited by an admin; read-only
    for end users. Public reads are further scoped by the approved-name
    whitelist in discovery.utils.approved_places.
    """

    __tablename__ = "places"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=False, default="")
    category = Column(String(100), nullable=True)

    latitude = Column(Double, nullable=False)
    longitude = Column(Double, nullable=False)

    rating = Column(Numeric(3, 1, asdecimal=False), nullable=True)
    has_visited = Column(Boolean, nullable=False, default=False)

    primary_image = Column(Text, nullable=True)
    best_time_to_visit = Column(String(100), nullable=True)

    # {"ideal_conditions": [...], "acceptable_conditions": [...], "avoid_conditions": [...]}
    weather_suitability = Column(JSON, nullable=False, default=dict)

    # search_keywords, brand_name, opening_hours {"open": "HH:MM", "close": "HH:MM"}
    meta = Column(JSON, nullable=False, default=dict)

    created_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )
