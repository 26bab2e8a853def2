"""
AdminSelectionStore — client-side mirror of an admin list screen.

Holds the last list fetched from the server, the ordered set of selected row
ids, and the filter fields. Filters never filter locally: changing one marks
the list stale and the caller re-fetches with query_params(). After a fetch,
replace() reconciles the selection with the fresh rows; after a confirmed
delete, remove() patches both.
"""

from __future__ import annotations

from typing import Any, Iterable

FILTER_KEYS: tuple[str, ...] = ("search", "category", "status")

_DEFAULT_FILTERS: dict[str, str] = {"search": "", "category": "", "status": "all"}


class AdminSelectionStore:
    def __init__(self) -> None:
        self.items: list[dict[str, Any]] = []
        self.selected: list[str] = []
        self.filters: dict[str, str] = dict(_DEFAULT_FILTERS)
        self.stale: bool = True

    # ── Selection ──────────────────────────────────────────────────────────────

    def toggle(self, item_id: str) -> None:
        if item_id in self.selected:
            self.selected.remove(item_id)
        else:
            self.selected.append(item_id)

    def select_all(self) -> None:
        self.selected = [str(item["id"]) for item in self.items]

    def clear(self) -> None:
        self.selected = []

    def is_selected(self, item_id: str) -> bool:
        return item_id in self.selected

    # ── Filters ────────────────────────────────────────────────────────────────

    def set_filter(self, key: str, value: str) -> None:
        """Update one filter field and mark the list stale. Unknown keys raise KeyError."""
        if key not in FILTER_KEYS:
            raise KeyError(f"Unknown filter '{key}'")
        if self.filters[key] != value:
            self.filters[key] = value
            self.stale = True

    def query_params(self) -> dict[str, str]:
        """Non-default filters, as sent to the server on re-fetch."""
        return {
            key: value
            for key, value in self.filters.items()
            if value and value != _DEFAULT_FILTERS[key]
        }

    # ── Server reconciliation ──────────────────────────────────────────────────

    def replace(self, items: Iterable[dict[str, Any]]) -> None:
        """Adopt a freshly fetched list; drop selections that no longer exist."""
        self.items = list(items)
        live_ids = {str(item["id"]) for item in self.items}
        self.selected = [item_id for item_id in self.selected if item_id in live_ids]
        self.stale = False

    def remove(self, item_ids: Iterable[str]) -> None:
        """Patch local state after the server confirmed a delete."""
        gone = {str(item_id) for item_id in item_ids}
        self.items = [item for item in self.items if str(item["id"]) not in gone]
        self.selected = [item_id for item_id in self.selected if item_id not in gone]

    def bulk_delete_payload(self) -> dict[str, list[str]]:
        return {"ids": list(self.selected)}
