"""Pydantic schemas for admin-editable site settings."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SiteSettingRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    value: Any
    updated_at: datetime


class SiteSettingsUpdate(BaseModel):
    """Body for PUT /api/admin/settings — each key is upserted, others untouched."""

    settings: dict[str, Any] = Field(..., min_length=1)


class SiteSettingsResponse(BaseModel):
    settings: dict[str, Any]
