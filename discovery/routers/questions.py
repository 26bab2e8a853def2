"""
Questions router — the 'ask us anything about Indiranagar' form.

Endpoints:
  POST /api/suggestions   — submit a question (5 per hour per IP)
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from discovery.database import get_db
from discovery.models.community import Question
from discovery.routers.deps import client_ip
from discovery.schemas.community import QuestionCreate, QuestionCreated
from discovery.services.rate_limit import question_limiter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/suggestions", tags=["community"])


@router.post("", response_model=QuestionCreated)
async def submit_question(
    request: Request,
    body: QuestionCreate,
    db: AsyncSession = Depends(get_db),
) -> QuestionCreated:
    ip = client_ip(request)
    if not question_limiter.hit(ip):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many submissions. Please try again later.",
        )

    question = Question(
        question=body.question,
        location=body.location or None,
        contact_name=body.name,
        contact_email=body.email,
        contact_phone=body.phone or None,
        ip_address=ip,
    )
    db.add(question)
    try:
        await db.commit()
    except Exception as exc:
        await db.rollback()
        logger.error("Failed to save question: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to submit question",
        )

    logger.info("Question %s received", question.id)
    return QuestionCreated(
        message="Thanks! We'll get back to you soon.",
        id=question.id,
    )
