"""
Search history router.

Endpoints:
  GET    /api/search/history   — the caller's recent queries, most recent first
  DELETE /api/search/history   — forget them

History is keyed by client IP and lives only in process memory.
"""

from __future__ import annotations

from fastapi import APIRouter, Request, status

from discovery.routers.deps import client_ip
from discovery.schemas.search import SearchHistoryResponse
from discovery.stores.search_history import history_for

router = APIRouter(prefix="/api/search", tags=["search"])


@router.get("/history", response_model=SearchHistoryResponse)
async def search_history(request: Request) -> SearchHistoryResponse:
    return SearchHistoryResponse(queries=history_for(client_ip(request)).entries())


@router.delete("/history", status_code=status.HTTP_204_NO_CONTENT)
async def clear_search_history(request: Request) -> None:
    history_for(client_ip(request)).clear()
