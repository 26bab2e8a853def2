"""Pydantic schemas for keyword search and search history."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from discovery.schemas.place import PlaceRead


class SearchResultItem(BaseModel):
    """One ranked match."""

    place: PlaceRead
    score: float
    distance_meters: Optional[float] = None
    matching_factors: list[str] = Field(default_factory=list)
    contextual_recommendations: list[str] = Field(default_factory=list)


class SearchResponse(BaseModel):
    query: str
    results: list[SearchResultItem]
    total: int


class SearchHistoryResponse(BaseModel):
    queries: list[str]
