"""
Recent-search log — advisory UX state, never authoritative.

SearchHistory keeps queries most-recent-first, deduplicated by exact query
string and capped at MAX_ENTRIES. The API keeps one history per client key
(IP) in a cachetools TTLCache, so idle histories disappear after a day.
"""

from __future__ import annotations

from cachetools import TTLCache

MAX_ENTRIES = 50
MIN_QUERY_LENGTH = 2


class SearchHistory:
    def __init__(self, max_entries: int = MAX_ENTRIES) -> None:
        self.max_entries = max_entries
        self._queries: list[str] = []

    def add(self, query: str) -> None:
        """Record a successful search. Short queries are ignored."""
        if len(query.strip()) < MIN_QUERY_LENGTH:
            return
        if query in self._queries:
            self._queries.remove(query)
        self._queries.insert(0, query)
        del self._queries[self.max_entries:]

    def entries(self) -> list[str]:
        return list(self._queries)

    def clear(self) -> None:
        self._queries.clear()

    def __len__(self) -> int:
        return len(self._queries)


# Key  : client IP
# Value: SearchHistory
# TTL  : 86,400 s   MaxSize: 10,000
_histories: TTLCache = TTLCache(maxsize=10_000, ttl=86_400)


def history_for(client_key: str) -> SearchHistory:
    history = _histories.get(client_key)
    if history is None:
        history = SearchHistory()
        _histories[client_key] = history
    return history


def reset_histories() -> None:
    _histories.clear()
