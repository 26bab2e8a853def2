"""
cleanup_places.py — remove places whose names are not on the approved list.

Journey stops that point at a removed place are deleted with it, and the
affected journeys are renumbered. Everything happens in one transaction:
either every unlisted place goes, or none does.

Usage:
    python scripts/cleanup_places.py --dry-run   # list what would be deleted
    python scripts/cleanup_places.py
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import async_sessionmaker

from discovery.database import AsyncSessionLocal, engine
from discovery.models import Place
from discovery.services.journey_stops import detach_places
from discovery.utils.approved_places import is_approved_place

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


async def run_cleanup(
    dry_run: bool = False,
    session_factory: async_sessionmaker = AsyncSessionLocal,
) -> int:
    """Delete unlisted places. Returns how many were (or would be) removed."""
    async with session_factory() as session:
        rows = (await session.execute(select(Place.id, Place.name))).all()
        doomed = [(place_id, name) for place_id, name in rows if not is_approved_place(name)]

        logger.info("%d places total, %d not on the approved list.", len(rows), len(doomed))
        for _, name in doomed:
            logger.info("  ✗ %s", name)

        if dry_run or not doomed:
            if dry_run:
                logger.info("-- DRY RUN: nothing deleted --")
            return len(doomed)

        ids = [place_id for place_id, _ in doomed]
        try:
            stops = await detach_places(session, ids)
            await session.execute(delete(Place).where(Place.id.in_(ids)))
            await session.commit()
        except Exception:
            await session.rollback()
            logger.exception("Cleanup failed; rolled back, nothing deleted.")
            raise

    logger.info("Deleted %d places and %d journey stops.", len(ids), stops)
    return len(ids)


async def run(dry_run: bool = False) -> int:
    """Script entry: run the cleanup, then release the engine however it ended."""
    try:
        return await run_cleanup(dry_run=dry_run)
    finally:
        await engine.dispose()


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Delete places that are not on the approved list.")
    parser.add_argument("--dry-run", action="store_true", help="Report only, no deletes")
    args = parser.parse_args()
    asyncio.run(run(dry_run=args.dry_run))


if __name__ == "__main__":
    main()
