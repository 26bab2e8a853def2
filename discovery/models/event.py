"""DiscoveredEvent and EventSource ORM models."""

import uuid

from sqlalchemy import (
    Column, Text, String, Boolean, Uuid, Double, Float,
    DateTime, ForeignKey, func,
)
from sqlalchemy.orm import relationship

from discovery.database import Base, utcnow


class EventSource(Base):
    """An upstream feed the scheduled fetch job pulls events from."""

    __tablename__ = "event_sources"

    id = Column(String(64), primary_key=True)   # e.g. 'google-places'
    name = Column(Text, nullable=False)
    type = Column(String(50), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    last_fetched_at = Column(DateTime(timezone=True), nullable=True)

    events = relationship("DiscoveredEvent", back_populates="source")


class DiscoveredEvent(Base):
    """
    An event found by the fetch job. Inserted as 'pending'; only rows that an
    admin moved to 'approved' and that are still active are served publicly.
    """

    __tablename__ = "discovered_events"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    external_id = Column(String(255), nullable=True, unique=True)
    source_id = Column(
        String(64),
        ForeignKey("event_sources.id", ondelete="SET NULL"),
        nullable=True,
    )

    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(50), nullable=True)

    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=True)

    venue_name = Column(Text, nullable=True)
    venue_address = Column(Text, nullable=True)
    latitude = Column(Double, nullable=True)
    longitude = Column(Double, nullable=True)

    external_url = Column(Text, nullable=True)
    cost_type = Column(String(20), nullable=False, default="free")
    quality_score = Column(Float, nullable=False, default=0.0)

    moderation_status = Column(
        String(20), nullable=False, default="pending"
    )  # 'pending' | 'approved' | 'rejected'
    moderated_at = Column(DateTime(timezone=True), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )

    source = relationship("EventSource", back_populates="events")
