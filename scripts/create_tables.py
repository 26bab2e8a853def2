"""
create_tables.py — idempotent table creation script.
Run this before starting the API for the first time, or after schema changes.
Safe to run multiple times (all DDL uses IF NOT EXISTS).

Usage:
    python scripts/create_tables.py
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

# Ensure the project root is on the path
sys.path.insert(0, str(Path(__file__).parent.parent))

from discovery.database import create_schema, engine


async def main() -> None:
    print("Creating tables...")
    for table in await create_schema():
        print(f"  ✓ {table}")

    print("\nDone. Run `python scripts/seed_places.py --csv data/places.csv` next.")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
