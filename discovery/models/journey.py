"""Journey and JourneyStop ORM models."""

import uuid

from sqlalchemy import (
    Column, Integer, Text, String, Boolean, JSON, Uuid, Double,
    DateTime, ForeignKey, UniqueConstraint, func,
)
from sqlalchemy.orm import relationship

from discovery.database import Base, utcnow


class Journey(Base):
    """A curated walk through several places, stored with its ordered stops."""

    __tablename__ = "journeys"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    slug = Column(String(255), nullable=False, unique=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False, default="")

    mood_tags = Column(JSON, nullable=False, default=list)
    difficulty = Column(String(20), nullable=False, default="moderate")
    duration_minutes = Column(Integer, nullable=True)
    distance_km = Column(Double, nullable=True)

    weather_suitability = Column(JSON, nullable=False, default=dict)

    is_published = Column(Boolean, nullable=False, default=True)
    view_count = Column(Integer, nullable=False, default=0)

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

    # Relationships
    stops = relationship(
        "JourneyStop",
        back_populates="journey",
        cascade="all, delete-orphan",
        order_by="JourneyStop.stop_order",
        lazy="selectin",
    )


class JourneyStop(Base):
    """
    One stop of a journey. stop_order is unique per journey and dense from
    zero; the schema layer enforces density, the table enforces uniqueness.
    """

    __tablename__ = "journey_stops"
    __table_args__ = (
        UniqueConstraint("journey_id", "stop_order", name="uq_journey_stop_order"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    journey_id = Column(
        Uuid,
        ForeignKey("journeys.id", ondelete="CASCADE"),
        nullable=False,
    )
    place_id = Column(
        Uuid,
        ForeignKey("places.id", ondelete="CASCADE"),
        nullable=False,
    )
    stop_order = Column(Integer, nullable=False)
    duration_minutes = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)

    # Relationships
    journey = relationship("Journey", back_populates="stops")
    place = relationship("Place", lazy="selectin")
