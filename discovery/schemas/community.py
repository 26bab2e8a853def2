"""
Pydantic schemas for community features — comments, likes, ratings,
place suggestions, votes, and questions.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from discovery.schemas.place import Latitude, Longitude, PlaceRating


class EntityType(str, Enum):
    """Kinds of record a comment or rating can attach to."""

    place = "place"
    journey = "journey"
    event = "event"


# ── Comments ──────────────────────────────────────────────────────────────────

class CommentCreate(BaseModel):
    """Body for POST /api/comments. Content is sanitised server-side."""

    entity_type: EntityType
    entity_id: uuid.UUID
    content: str = Field(..., min_length=1)
    author_name: Optional[str] = Field(default=None, max_length=100)
    parent_id: Optional[uuid.UUID] = None


class CommentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    entity_type: str
    entity_id: uuid.UUID
    parent_id: Optional[uuid.UUID]
    content: str
    author_name: str
    likes: int
    created_at: datetime
    user_has_liked: bool = False
    replies: list["CommentRead"] = Field(default_factory=list)


class CommentListResponse(BaseModel):
    comments: list[CommentRead]
    total: int


class LikeResponse(BaseModel):
    liked: bool
    likes: int


# ── Ratings ───────────────────────────────────────────────────────────────────

class RatingCreate(BaseModel):
    """Body for POST /api/ratings — upserts the caller's rating."""

    entity_type: EntityType
    entity_id: uuid.UUID
    rating: PlaceRating


class RatingSummary(BaseModel):
    """Aggregate for one entity, plus the caller's own rating if any."""

    entity_type: EntityType
    entity_id: uuid.UUID
    average: Optional[float]
    total: int
    distribution: dict[int, int]     # star bucket 1–5 → count
    user_rating: Optional[float] = None


# ── Community place suggestions ───────────────────────────────────────────────

SuggestionCategory = Literal["restaurant", "cafe", "bar", "shopping", "culture", "activity"]


class SubmitterSocial(BaseModel):
    instagram: Optional[str] = None
    twitter: Optional[str] = None
    linkedin: Optional[str] = None


class CommunitySuggestionCreate(BaseModel):
    """Body for POST /api/community-suggestions."""

    submitter_name: str = Field(..., min_length=2, max_length=100)
    submitter_email: EmailStr
    submitter_social: Optional[SubmitterSocial] = None
    place_name: str = Field(..., min_length=2, max_length=255)
    suggested_latitude: Latitude
    suggested_longitude: Longitude
    category: SuggestionCategory
    personal_notes: str = Field(..., min_length=10, max_length=2000)


class CommunitySuggestionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    submitter_name: str
    place_name: str
    suggested_latitude: float
    suggested_longitude: float
    category: str
    personal_notes: str
    status: str
    votes: int
    created_at: datetime


class CommunitySuggestionCreated(BaseModel):
    success: bool = True
    suggestion: CommunitySuggestionRead


class CommunitySuggestionListResponse(BaseModel):
    suggestions: list[CommunitySuggestionRead]
    total: int


class VoteResponse(BaseModel):
    success: bool = True
    votes: int


# ── Questions ─────────────────────────────────────────────────────────────────

class QuestionCreate(BaseModel):
    """Body for POST /api/suggestions (the 'ask a question' form)."""

    question: str = Field(..., min_length=10, max_length=1000)
    location: Optional[str] = Field(default=None, max_length=200)
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(default=None, max_length=20)


class QuestionCreated(BaseModel):
    success: bool = True
    message: str
    id: uuid.UUID


QuestionStatus = Literal["new", "answered"]


class QuestionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    question: str
    location: Optional[str]
    contact_name: str
    contact_email: str
    contact_phone: Optional[str]
    status: str
    response: Optional[str]
    responded_at: Optional[datetime]
    submitted_at: datetime


class QuestionListResponse(BaseModel):
    questions: list[QuestionRead]
    total: int


class QuestionRespond(BaseModel):
    """Body for PUT /api/admin/questions/{id}/respond."""

    response: str = Field(..., min_length=1, max_length=5000)


class QuestionBulkUpdate(BaseModel):
    """Body for POST /api/admin/questions/bulk-update."""

    ids: list[uuid.UUID] = Field(..., min_length=1, max_length=500)
    status: QuestionStatus


class QuestionBulkUpdateResult(BaseModel):
    success: bool = True
    updated: int
