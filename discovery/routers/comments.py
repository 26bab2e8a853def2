"""
Comments router — threaded comments on places, journeys, and events.

Endpoints:
  GET  /api/comments?entity_type=&entity_id=   — top-level comments with one level of replies
  POST /api/comments                           — create a comment or a reply
  POST /api/comments/{comment_id}/like         — toggle the caller's like

Content is sanitised before storage: <script> blocks are stripped and the
result is truncated to 1000 characters. Replies may only target a top-level
comment on the same entity. More than 10 comments from one IP within the
last hour → 429.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from discovery.database import get_db
from discovery.models.community import Comment, CommentLike
from discovery.routers.deps import client_ip
from discovery.schemas.community import (
    CommentCreate,
    CommentListResponse,
    CommentRead,
    EntityType,
    LikeResponse,
)
from discovery.schemas.validation import sanitize_comment
from discovery.services.entities import EntityNotFoundError, get_entity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/comments", tags=["community"])

MAX_COMMENTS_PER_HOUR = 10


@router.get("", response_model=CommentListResponse)
async def list_comments(
    request: Request,
    entity_type: EntityType = Query(...),
    entity_id: uuid.UUID = Query(...),
    db: AsyncSession = Depends(get_db),
) -> CommentListResponse:
    """Top-level comments newest first; replies oldest first under their parent."""
    stmt = (
        select(Comment)
        .where(Comment.entity_type == entity_type.value, Comment.entity_id == entity_id)
        .order_by(Comment.created_at.desc())
    )
    comments = (await db.execute(stmt)).scalars().all()

    liked: set[uuid.UUID] = set()
    if comments:
        like_rows = await db.execute(
            select(CommentLike.comment_id).where(
                CommentLike.ip_address == client_ip(request),
                CommentLike.comment_id.in_([c.id for c in comments]),
            )
        )
        liked = set(like_rows.scalars().all())

    by_id: dict[uuid.UUID, CommentRead] = {}
    for comment in comments:
        read = CommentRead.model_validate(comment)
        read.user_has_liked = comment.id in liked
        by_id[comment.id] = read

    top_level: list[CommentRead] = []
    for comment in comments:
        node = by_id[comment.id]
        if comment.parent_id is None:
            top_level.append(node)
        elif comment.parent_id in by_id:
            by_id[comment.parent_id].replies.insert(0, node)

    return CommentListResponse(comments=top_level, total=len(comments))


@router.post("", response_model=CommentRead, status_code=status.HTTP_201_CREATED)
async def create_comment(
    request: Request,
    body: CommentCreate,
    db: AsyncSession = Depends(get_db),
) -> CommentRead:
    ip = client_ip(request)

    try:
        await get_entity(db, body.entity_type, body.entity_id)
    except EntityNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        )

    since = datetime.now(timezone.utc) - timedelta(hours=1)
    recent = await db.scalar(
        select(func.count())
        .select_from(Comment)
        .where(Comment.author_ip == ip, Comment.created_at >= since)
    )
    if (recent or 0) > MAX_COMMENTS_PER_HOUR:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many comments. Please wait before posting again.",
        )

    if body.parent_id is not None:
        parent = await db.get(Comment, body.parent_id)
        if (
            parent is None
            or parent.entity_type != body.entity_type.value
            or parent.entity_id != body.entity_id
        ):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Parent comment not found",
            )
        if parent.parent_id is not None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Replies can only be one level deep",
            )

    content = sanitize_comment(body.content)
    if not content:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Comment content is required",
        )

    comment = Comment(
        entity_type=body.entity_type.value,
        entity_id=body.entity_id,
        parent_id=body.parent_id,
        content=content,
        author_name=(body.author_name or "").strip() or "Anonymous",
        author_ip=ip,
    )
    db.add(comment)
    try:
        await db.commit()
    except Exception as exc:
        await db.rollback()
        logger.error("Failed to create comment: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create comment",
        )
    await db.refresh(comment)
    return CommentRead.model_validate(comment)


@router.post("/{comment_id}/like", response_model=LikeResponse)
async def toggle_like(
    comment_id: uuid.UUID,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> LikeResponse:
    ip = client_ip(request)
    if ip == "unknown":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot identify user",
        )

    comment = await db.get(Comment, comment_id)
    if comment is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Comment not found",
        )

    existing = (
        await db.execute(
            select(CommentLike).where(
                CommentLike.comment_id == comment_id, CommentLike.ip_address == ip
            )
        )
    ).scalar_one_or_none()

    if existing is not None:
        await db.delete(existing)
        comment.likes = max(0, (comment.likes or 0) - 1)
        liked = False
    else:
        db.add(CommentLike(comment_id=comment_id, ip_address=ip))
        comment.likes = (comment.likes or 0) + 1
        liked = True

    try:
        await db.commit()
    except Exception as exc:
        await db.rollback()
        logger.error("Failed to toggle like on %s: %s", comment_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to toggle like",
        )
    return LikeResponse(liked=liked, likes=comment.likes)
