"""Community ORM models — comments, ratings, suggestions, votes and questions.

Comments and ratings attach to a place, journey or event through the
(entity_type, entity_id) pair; discovery.services.entities resolves the pair
to a concrete table.
"""

import uuid

from sqlalchemy import (
    Column, Integer, Text, String, Numeric, JSON, Uuid, Double,
    DateTime, ForeignKey, UniqueConstraint, func,
)
from sqlalchemy.orm import relationship

from discovery.database import Base, utcnow


class Comment(Base):
    """A comment or a one-level reply (parent_id set) on an entity."""

    __tablename__ = "comments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    entity_type = Column(String(20), nullable=False)
    entity_id = Column(Uuid, nullable=False)
    parent_id = Column(
        Uuid,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
    )

    content = Column(Text, nullable=False)
    author_name = Column(String(100), nullable=False, default="Anonymous")
    author_ip = Column(String(64), nullable=False)
    likes = Column(Integer, nullable=False, default=0)

    created_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )


class CommentLike(Base):
    """One like per (comment, IP)."""

    __tablename__ = "comment_likes"
    __table_args__ = (
        UniqueConstraint("comment_id", "ip_address", name="uq_comment_like_ip"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    comment_id = Column(
        Uuid,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    )
    ip_address = Column(String(64), nullable=False)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )


class Rating(Base):
    """A 1.0–5.0 rating, one per (entity, IP); re-rating overwrites."""

    __tablename__ = "ratings"
    __table_args__ = (
        UniqueConstraint(
            "entity_type", "entity_id", "ip_address", name="uq_rating_entity_ip"
        ),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    entity_type = Column(String(20), nullable=False)
    entity_id = Column(Uuid, nullable=False)
    rating = Column(Numeric(2, 1, asdecimal=False), nullable=False)
    ip_address = Column(String(64), nullable=False)

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


class CommunitySuggestion(Base):
    """A place suggested by a visitor, pending admin review."""

    __tablename__ = "community_place_suggestions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    submitter_name = Column(String(100), nullable=False)
    submitter_email = Column(String(255), nullable=False, index=True)
    submitter_social = Column(JSON, nullable=False, default=dict)

    place_name = Column(String(255), nullable=False)
    suggested_latitude = Column(Double, nullable=False)
    suggested_longitude = Column(Double, nullable=False)
    category = Column(String(50), nullable=False)
    personal_notes = Column(Text, nullable=False)

    status = Column(String(20), nullable=False, default="submitted")
    votes = Column(Integer, nullable=False, default=0)

    created_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )

    vote_records = relationship(
        "SuggestionVote", back_populates="suggestion", cascade="all, delete-orphan"
    )


class SuggestionVote(Base):
    """One vote per (suggestion, voter fingerprint)."""

    __tablename__ = "suggestion_votes"
    __table_args__ = (
        UniqueConstraint(
            "suggestion_id", "voter_fingerprint", name="uq_suggestion_vote_fingerprint"
        ),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    suggestion_id = Column(
        Uuid,
        ForeignKey("community_place_suggestions.id", ondelete="CASCADE"),
        nullable=False,
    )
    voter_fingerprint = Column(String(64), nullable=False)
    ip_address = Column(String(64), nullable=False)
    user_agent = Column(Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )

    suggestion = relationship("CommunitySuggestion", back_populates="vote_records")


class Question(Base):
    """A free-form question sent through the 'ask' form."""

    __tablename__ = "questions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    question = Column(Text, nullable=False)
    location = Column(String(200), nullable=True)
    contact_name = Column(String(100), nullable=False)
    contact_email = Column(String(255), nullable=False)
    contact_phone = Column(String(20), nullable=True)
    status = Column(String(20), nullable=False, default="new")  # 'new' | 'answered'
    response = Column(Text, nullable=True)
    responded_at = Column(DateTime(timezone=True), nullable=True)
    ip_address = Column(String(64), nullable=False)
    submitted_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )
