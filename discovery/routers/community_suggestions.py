"""
Community suggestions router — visitors propose places; others vote.

Endpoints:
  POST /api/community-suggestions                  — submit (3 per day per email)
  GET  /api/community-suggestions?status=          — list, newest first
  POST /api/community-suggestions/{id}/vote        — one vote per IP+User-Agent fingerprint
"""

from __future__ import annotations

import hashlib
import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from discovery.database import get_db
from discovery.models.community import CommunitySuggestion, SuggestionVote
from discovery.routers.deps import client_ip
from discovery.schemas.community import (
    CommunitySuggestionCreate,
    CommunitySuggestionCreated,
    CommunitySuggestionListResponse,
    CommunitySuggestionRead,
    VoteResponse,
)
from discovery.services.rate_limit import community_suggestion_limiter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/community-suggestions", tags=["community"])


def voter_fingerprint(ip: str, user_agent: str) -> str:
    return hashlib.sha256(f"{ip}{user_agent}".encode()).hexdigest()


@router.post("", response_model=CommunitySuggestionCreated)
async def submit_suggestion(
    body: CommunitySuggestionCreate,
    db: AsyncSession = Depends(get_db),
) -> CommunitySuggestionCreated:
    if not community_suggestion_limiter.hit(body.submitter_email.lower()):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Rate limit exceeded. Maximum 3 suggestions per day.",
        )

    data = body.model_dump()
    data["submitter_social"] = data.get("submitter_social") or {}
    suggestion = CommunitySuggestion(**data)
    db.add(suggestion)
    try:
        await db.commit()
    except Exception as exc:
        await db.rollback()
        logger.error("Suggestion submission failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to submit suggestion",
        )
    await db.refresh(suggestion)

    logger.info("Community suggestion %s: %s", suggestion.id, suggestion.place_name)
    return CommunitySuggestionCreated(
        suggestion=CommunitySuggestionRead.model_validate(suggestion)
    )


@router.get("", response_model=CommunitySuggestionListResponse)
async def list_suggestions(
    status_filter: Optional[str] = Query(default=None, alias="status"),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    db: AsyncSession = Depends(get_db),
) -> CommunitySuggestionListResponse:
    filters = []
    if status_filter:
        filters.append(CommunitySuggestion.status == status_filter)

    total = await db.scalar(
        select(func.count()).select_from(CommunitySuggestion).where(*filters)
    )
    stmt = (
        select(CommunitySuggestion)
        .where(*filters)
        .order_by(CommunitySuggestion.created_at.desc())
        .offset(offset)
        .limit(limit)
    )
    rows = (await db.execute(stmt)).scalars().all()
    return CommunitySuggestionListResponse(
        suggestions=[CommunitySuggestionRead.model_validate(r) for r in rows],
        total=total or 0,
    )


@router.post("/{suggestion_id}/vote", response_model=VoteResponse)
async def vote(
    suggestion_id: uuid.UUID,
    request: Request,
    user_agent: Optional[str] = Header(default=None),
    db: AsyncSession = Depends(get_db),
) -> VoteResponse:
    suggestion = await db.get(CommunitySuggestion, suggestion_id)
    if suggestion is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Suggestion not found",
        )

    ip = client_ip(request)
    fingerprint = voter_fingerprint(ip, user_agent or "")
    already = await db.scalar(
        select(SuggestionVote.id).where(
            SuggestionVote.suggestion_id == suggestion_id,
            SuggestionVote.voter_fingerprint == fingerprint,
        )
    )
    if already is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Already voted for this suggestion",
        )

    db.add(
        SuggestionVote(
            suggestion_id=suggestion_id,
            voter_fingerprint=fingerprint,
            ip_address=ip,
            user_agent=user_agent,
        )
    )
    suggestion.votes = (suggestion.votes or 0) + 1
    try:
        await db.commit()
    except Exception as exc:
        await db.rollback()
        logger.error("Voting error on %s: %s", suggestion_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to record vote",
        )
    return VoteResponse(votes=suggestion.votes)
