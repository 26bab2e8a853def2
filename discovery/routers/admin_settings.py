"""
Admin settings router — key/value site configuration.

Endpoints:
  GET /api/admin/settings   — every setting as {key: value}
  PUT /api/admin/settings   — upsert the given keys; others are left alone
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from discovery.database import get_db
from discovery.models.site_setting import SiteSetting
from discovery.routers.deps import require_admin
from discovery.schemas.site_setting import SiteSettingsResponse, SiteSettingsUpdate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/admin/settings",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


async def _all_settings(db: AsyncSession) -> dict:
    rows = (await db.execute(select(SiteSetting).order_by(SiteSetting.key))).scalars().all()
    return {row.key: row.value for row in rows}


@router.get("", response_model=SiteSettingsResponse)
async def get_settings(db: AsyncSession = Depends(get_db)) -> SiteSettingsResponse:
    return SiteSettingsResponse(settings=await _all_settings(db))


@router.put("", response_model=SiteSettingsResponse)
async def update_settings(
    body: SiteSettingsUpdate,
    db: AsyncSession = Depends(get_db),
) -> SiteSettingsResponse:
    for key, value in body.settings.items():
        row = await db.get(SiteSetting, key)
        if row is None:
            db.add(SiteSetting(key=key, value=value))
        else:
            row.value = value

    try:
        await db.commit()
    except Exception as exc:
        await db.rollback()
        logger.error("Failed to update settings: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update settings",
        )

    logger.info("Site settings updated: %s", ", ".join(sorted(body.settings)))
    return SiteSettingsResponse(settings=await _all_settings(db))
