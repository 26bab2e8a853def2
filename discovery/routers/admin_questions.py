"""
Admin questions router — inbox for the 'ask us' form.

Endpoints:
  GET    /api/admin/questions?status=            newest first
  POST   /api/admin/questions/bulk-update        set status on many questions
  PUT    /api/admin/questions/{question_id}/respond
  DELETE /api/admin/questions/{question_id}
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from discovery.database import get_db
from discovery.models.community import Question
from discovery.routers.deps import require_admin
from discovery.schemas.community import (
    QuestionBulkUpdate,
    QuestionBulkUpdateResult,
    QuestionListResponse,
    QuestionRead,
    QuestionRespond,
    QuestionStatus,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/admin/questions",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


async def _get_or_404(db: AsyncSession, question_id: uuid.UUID) -> Question:
    question = await db.get(Question, question_id)
    if question is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Question not found",
        )
    return question


@router.get("", response_model=QuestionListResponse)
async def list_questions(
    status_filter: Optional[QuestionStatus] = Query(default=None, alias="status"),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    db: AsyncSession = Depends(get_db),
) -> QuestionListResponse:
    filters = []
    if status_filter:
        filters.append(Question.status == status_filter)

    total = await db.scalar(select(func.count()).select_from(Question).where(*filters))
    stmt = (
        select(Question)
        .where(*filters)
        .order_by(Question.submitted_at.desc())
        .offset(offset)
        .limit(limit)
    )
    questions = (await db.execute(stmt)).scalars().all()
    return QuestionListResponse(
        questions=[QuestionRead.model_validate(q) for q in questions],
        total=total or 0,
    )


@router.post("/bulk-update", response_model=QuestionBulkUpdateResult)
async def bulk_update(
    body: QuestionBulkUpdate,
    db: AsyncSession = Depends(get_db),
) -> QuestionBulkUpdateResult:
    """Set one status on every listed question that exists. All-or-nothing."""
    ids = list(dict.fromkeys(body.ids))
    try:
        result = await db.execute(
            update(Question).where(Question.id.in_(ids)).values(status=body.status)
        )
        await db.commit()
    except Exception as exc:
        await db.rollback()
        logger.error("Bulk update of %d questions failed: %s", len(ids), exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update questions",
        )

    logger.info("Bulk set %d questions to %s", result.rowcount, body.status)
    return QuestionBulkUpdateResult(updated=result.rowcount or 0)


@router.put("/{question_id}/respond", response_model=QuestionRead)
async def respond(
    question_id: uuid.UUID,
    body: QuestionRespond,
    db: AsyncSession = Depends(get_db),
) -> QuestionRead:
    question = await _get_or_404(db, question_id)
    question.response = body.response
    question.status = "answered"
    question.responded_at = datetime.now(timezone.utc)
    try:
        await db.commit()
    except Exception as exc:
        await db.rollback()
        logger.error("Failed to respond to question %s: %s", question_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to respond to question",
        )

    logger.info("Question %s answered", question_id)
    return QuestionRead.model_validate(question)


@router.delete("/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_question(
    question_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> None:
    question = await _get_or_404(db, question_id)
    try:
        await db.delete(question)
        await db.commit()
    except Exception as exc:
        await db.rollback()
        logger.error("Failed to delete question %s: %s", question_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete question",
        )
    logger.info("Deleted question %s", question_id)
