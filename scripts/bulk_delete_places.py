"""
bulk_delete_places.py — admin client for bulk place deletion over HTTP.

Fetches the admin place list with the given filters, selects every row
(or only those whose name contains --match), and sends one bulk-delete
request. Uses the same selection store as the admin list screen.

Usage:
    python scripts/bulk_delete_places.py --base-url http://localhost:8000 \\
        --token $ADMIN_TOKEN --category cafe --status not_visited --dry-run
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import requests

sys.path.insert(0, str(Path(__file__).parent.parent))

from discovery.stores.admin_selection import AdminSelectionStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)

TIMEOUT_SECONDS = 15


class AdminClient:
    def __init__(self, base_url: str, token: str) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.session.headers["Authorization"] = f"Bearer {token}"

    def list_places(self, params: dict[str, str]) -> list[dict[str, Any]]:
        response = self.session.get(
            f"{self.base_url}/api/admin/places",
            params={**params, "limit": 500},
            timeout=TIMEOUT_SECONDS,
        )
        response.raise_for_status()
        return response.json()["places"]

    def bulk_delete(self, payload: dict[str, list[str]]) -> dict[str, Any]:
        response = self.session.post(
            f"{self.base_url}/api/admin/places/bulk-delete",
            json=payload,
            timeout=TIMEOUT_SECONDS,
        )
        response.raise_for_status()
        return response.json()


def select_matching(store: AdminSelectionStore, match: Optional[str]) -> None:
    """Select every loaded row, or only rows whose name contains `match`."""
    if not match:
        store.select_all()
        return
    needle = match.lower()
    for item in store.items:
        if needle in item["name"].lower() and not store.is_selected(str(item["id"])):
            store.toggle(str(item["id"]))


def run(
    client: AdminClient,
    filters: dict[str, str],
    match: Optional[str] = None,
    dry_run: bool = False,
) -> AdminSelectionStore:
    store = AdminSelectionStore()
    for key, value in filters.items():
        store.set_filter(key, value)

    store.replace(client.list_places(store.query_params()))
    select_matching(store, match)

    names = {str(item["id"]): item["name"] for item in store.items}
    logger.info("%d places listed, %d selected.", len(store.items), len(store.selected))
    for item_id in store.selected:
        logger.info("  ✗ %s", names[item_id])

    if dry_run or not store.selected:
        return store

    result = client.bulk_delete(store.bulk_delete_payload())
    store.remove(result["deleted"])
    logger.info(
        "Deleted %d places (%d already gone).",
        len(result["deleted"]), len(result["not_found"]),
    )
    return store


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Bulk-delete places through the admin API.")
    parser.add_argument("--base-url", default="http://localhost:8000")
    parser.add_argument("--token", required=True, help="ADMIN_TOKEN")
    parser.add_argument("--search", default="")
    parser.add_argument("--category", default="")
    parser.add_argument("--status", default="all", choices=["all", "visited", "not_visited"])
    parser.add_argument("--match", default=None, help="Only select names containing this text")
    parser.add_argument("--dry-run", action="store_true", help="List the selection only")
    args = parser.parse_args()

    client = AdminClient(args.base_url, args.token)
    try:
        run(
            client,
            {"search": args.search, "category": args.category, "status": args.status},
            match=args.match,
            dry_run=args.dry_run,
        )
    except requests.RequestException as exc:
        logger.error("Admin API request failed: %s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
