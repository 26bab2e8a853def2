"""
seed_places.py — load curated places from a CSV file.

Expected columns (header row required):
    name, latitude, longitude                       required
    description, category, rating, primary_image,
    best_time_to_visit, has_visited,
    ideal_conditions, acceptable_conditions,
    avoid_conditions, opening_hours                 optional

Condition columns are '|'-separated labels (e.g. "sunny|pleasant").
opening_hours is "HH:MM-HH:MM".

Rows are rejected when the name is not on the approved whitelist, the
coordinates fall outside Indiranagar, or the rating is not a 0.1 step in
1.0–5.0. Existing places (matched by case-insensitive name) are updated.

Usage:
    python scripts/seed_places.py --csv data/places.csv
    python scripts/seed_places.py --csv data/places.csv --dry-run
    python scripts/seed_places.py --csv data/places.csv --allow-unlisted
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import re
import sys
from pathlib import Path
from typing import Any, Optional

import pandas as pd

sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import func, select

from discovery.database import AsyncSessionLocal, create_schema, engine
from discovery.models import Place
from discovery.schemas.validation import validate_indiranagar, validate_rating
from discovery.services.weather_classifier import CONDITIONS
from discovery.utils.approved_places import is_approved_place

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("name", "latitude", "longitude")

_HOURS = re.compile(r"^\s*(\d{2}:\d{2})\s*-\s*(\d{2}:\d{2})\s*$")


class RowError(ValueError):
    """A CSV row that cannot be imported."""


# ── Column parsing helpers ───────────────────────────────────────────────────


def _text(val: object) -> Optional[str]:
    if val is None or pd.isna(val):
        return None
    cleaned = str(val).strip()
    return cleaned or None


def _float(val: object) -> Optional[float]:
    if val is None or pd.isna(val) or not str(val).strip():
        return None
    try:
        return float(val)
    except (TypeError, ValueError):
        return None


def _bool(val: object) -> bool:
    return str(val).strip().lower() in ("1", "true", "yes", "y")


def _conditions(val: object) -> list[str]:
    """Split a '|'-separated condition list, keeping only known labels."""
    raw = _text(val)
    if raw is None:
        return []
    labels = [part.strip().lower().replace(" ", "_") for part in raw.split("|")]
    unknown = [label for label in labels if label and label not in CONDITIONS]
    if unknown:
        logger.warning("Ignoring unknown weather conditions: %s", ", ".join(unknown))
    return [label for label in labels if label in CONDITIONS]


def _opening_hours(val: object) -> Optional[dict[str, str]]:
    raw = _text(val)
    if raw is None:
        return None
    match = _HOURS.match(raw)
    if match is None:
        raise RowError(f"Bad opening_hours '{raw}' (expected HH:MM-HH:MM)")
    return {"open": match.group(1), "close": match.group(2)}


def parse_row(row: dict[str, Any], allow_unlisted: bool = False) -> dict[str, Any]:
    """
    Turn one CSV row into Place column values.
    Raises RowError with a human-readable reason when the row is rejected.
    """
    name = _text(row.get("name"))
    if name is None:
        raise RowError("Missing name")
    if not allow_unlisted and not is_approved_place(name):
        raise RowError(f"'{name}' is not on the approved places list")

    lat, lng = _float(row.get("latitude")), _float(row.get("longitude"))
    if lat is None or lng is None:
        raise RowError(f"'{name}': missing or non-numeric coordinates")
    if not validate_indiranagar(lat, lng):
        raise RowError(f"'{name}': coordinates ({lat}, {lng}) are outside Indiranagar")

    rating = _float(row.get("rating"))
    if rating is not None and not validate_rating(rating):
        raise RowError(f"'{name}': rating {rating} must be 1.0–5.0 in 0.1 steps")

    meta: dict[str, Any] = {}
    hours = _opening_hours(row.get("opening_hours"))
    if hours:
        meta["opening_hours"] = hours

    return {
        "name": name,
        "description": _text(row.get("description")) or "",
        "category": _text(row.get("category")),
        "latitude": lat,
        "longitude": lng,
        "rating": rating,
        "has_visited": _bool(row.get("has_visited")),
        "primary_image": _text(row.get("primary_image")),
        "best_time_to_visit": _text(row.get("best_time_to_visit")),
        "weather_suitability": {
            "ideal_conditions": _conditions(row.get("ideal_conditions")),
            "acceptable_conditions": _conditions(row.get("acceptable_conditions")),
            "avoid_conditions": _conditions(row.get("avoid_conditions")),
        },
        "meta": meta,
    }


def load_rows(csv_path: str) -> pd.DataFrame:
    df = pd.read_csv(csv_path)
    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise SystemExit(f"CSV is missing required columns: {', '.join(missing)}")

    before = len(df)
    df = df.drop_duplicates(subset=["name"], keep="last")
    logger.info("Loaded %d rows (%d duplicate names dropped).", len(df), before - len(df))
    return df


# ── Main seeding logic ───────────────────────────────────────────────────────


async def run_seed(csv_path: str, dry_run: bool = False, allow_unlisted: bool = False) -> None:
    df = load_rows(csv_path)

    parsed: list[dict[str, Any]] = []
    rejected = 0
    for _, row in df.iterrows():
        try:
            parsed.append(parse_row(row.to_dict(), allow_unlisted=allow_unlisted))
        except RowError as exc:
            logger.warning("Skipping row: %s", exc)
            rejected += 1

    if dry_run:
        logger.info("-- DRY RUN: %d valid, %d rejected, no DB writes --", len(parsed), rejected)
        return

    await create_schema()

    inserted = updated = 0
    async with AsyncSessionLocal() as session:
        try:
            for values in parsed:
                existing = (
                    await session.execute(
                        select(Place).where(func.lower(Place.name) == values["name"].lower())
                    )
                ).scalar_one_or_none()
                if existing is None:
                    session.add(Place(**values))
                    inserted += 1
                else:
                    for field, value in values.items():
                        setattr(existing, field, value)
                    updated += 1
            await session.commit()
        except Exception:
            await session.rollback()
            logger.exception("Seeding failed; no rows were written.")
            raise

    logger.info(
        "Seeding complete. Inserted: %d, Updated: %d, Rejected: %d",
        inserted, updated, rejected,
    )
    await engine.dispose()


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Seed curated Indiranagar places from a CSV file.")
    parser.add_argument("--csv", required=True, help="Path to the places CSV")
    parser.add_argument("--dry-run", action="store_true", help="Validate only, no DB writes")
    parser.add_argument(
        "--allow-unlisted",
        action="store_true",
        help="Import places that are not on the approved whitelist",
    )
    args = parser.parse_args()

    asyncio.run(run_seed(args.csv, dry_run=args.dry_run, allow_unlisted=args.allow_unlisted))


if __name__ == "__main__":
    main()
