"""
In-process TTL caches for vendor responses.

TTLStore wraps cachetools.TLRUCache so every entry carries its own TTL.
Expiry is lazy: an expired entry reads as a miss and is overwritten by the
next set(). The timer is injectable so tests can move the clock.

Module-level singletons live for the lifetime of one process and are NOT
shared across instances; a multi-instance deployment needs an external store.

Weather cache
  Key  : weather_{lat:.3f}_{lng:.3f}   (3 decimals ≈ 110 m cells)
  Value: WeatherSnapshot
  TTL  : WEATHER_CACHE_TTL_SECONDS (default 1800 s)   MaxSize: 1,000
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Generic, Hashable, TypeVar

from cachetools import TLRUCache

from discovery.config import settings
from discovery.schemas.weather import WeatherSnapshot

logger = logging.getLogger(__name__)

V = TypeVar("V")

WEATHER_KEY_PRECISION = 3


@dataclass(frozen=True)
class _Entry(Generic[V]):
    value: V
    ttl_seconds: float


def _time_to_use(_key: Hashable, entry: _Entry, now: float) -> float:
    return now + entry.ttl_seconds


class TTLStore(Generic[V]):
    """Keyed cache where each entry expires `ttl_seconds` after it was set."""

    def __init__(
        self,
        maxsize: int = 1_000,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._cache: TLRUCache = TLRUCache(maxsize=maxsize, ttu=_time_to_use, timer=timer)

    def get(self, key: Hashable) -> V | None:
        entry = self._cache.get(key)
        if entry is None:
            return None
        return entry.value

    def set(self, key: Hashable, value: V, ttl_seconds: float) -> None:
        self._cache[key] = _Entry(value=value, ttl_seconds=ttl_seconds)

    def delete(self, key: Hashable) -> None:
        self._cache.pop(key, None)

    def clear(self) -> None:
        self._cache.clear()

    def keys(self) -> list[Hashable]:
        """Live (unexpired) keys."""
        self._cache.expire()
        return list(self._cache.keys())

    def __len__(self) -> int:
        self._cache.expire()
        return len(self._cache)


# ── Weather cache ────────────────────────────────────────────────────────────

def weather_cache_key(lat: float, lng: float) -> str:
    return f"weather_{lat:.{WEATHER_KEY_PRECISION}f}_{lng:.{WEATHER_KEY_PRECISION}f}"


class WeatherCache:
    """Weather snapshots by rounded coordinate. Hits are re-labelled source='cache'."""

    def __init__(
        self,
        ttl_seconds: float | None = None,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = (
            ttl_seconds if ttl_seconds is not None else settings.weather_cache_ttl_seconds
        )
        self._store: TTLStore[WeatherSnapshot] = TTLStore(maxsize=1_000, timer=timer)

    def get(self, lat: float, lng: float) -> WeatherSnapshot | None:
        key = weather_cache_key(lat, lng)
        snapshot = self._store.get(key)
        if snapshot is None:
            logger.debug("Weather cache MISS (key=%s)", key)
            return None
        logger.debug("Weather cache HIT (key=%s)", key)
        return snapshot.model_copy(update={"source": "cache"})

    def set(self, lat: float, lng: float, snapshot: WeatherSnapshot) -> None:
        self._store.set(weather_cache_key(lat, lng), snapshot, self.ttl_seconds)

    def clear(self) -> None:
        self._store.clear()

    def stats(self) -> dict[str, Any]:
        keys = self._store.keys()
        return {"size": len(keys), "keys": keys, "ttl_seconds": self.ttl_seconds}


weather_cache = WeatherCache()
