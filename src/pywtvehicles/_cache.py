"""Explicit TTL cache for computed catalog statistics."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pywtvehicles._constants import DEFAULT_STATS_CACHE_TTL
from pywtvehicles.models.stats import CatalogStats

if TYPE_CHECKING:
    from pywtvehicles.config import CatalogConfig

DEFAULT_MAX_ENTRIES = 64


@dataclass(slots=True)
class _CacheEntry:
    stats: CatalogStats
    expires_at: float


class StatsCache:
    """Cache :class:`CatalogStats` per requested version.

    The key ``None`` stands for the current (live) catalog. The cache is
    owned by whoever builds the service; call :meth:`invalidate` after
    new snapshots are ingested. Callers get deep copies, so mutating a
    returned result never changes the cached one.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_STATS_CACHE_TTL,
        *,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl
        self._max_entries = max_entries
        self._clock = clock
        self._entries: dict[str | None, _CacheEntry] = {}

    @classmethod
    def from_config(cls, config: CatalogConfig) -> StatsCache:
        return cls(ttl=config.stats_cache_ttl)

    @property
    def enabled(self) -> bool:
        return self._ttl > 0 and self._max_entries > 0

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, version: str | None) -> CatalogStats | None:
        entry = self._entries.get(version)
        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            del self._entries[version]
            return None
        return entry.stats.model_copy(deep=True)

    def put(self, version: str | None, stats: CatalogStats) -> None:
        if not self.enabled:
            return
        now = self._clock()
        self._purge_expired(now)
        self._entries.pop(version, None)
        while len(self._entries) >= self._max_entries:
            # dicts keep insertion order; the first key is the oldest entry
            del self._entries[next(iter(self._entries))]
        self._entries[version] = _CacheEntry(stats=stats.model_copy(deep=True), expires_at=now + self._ttl)

    def _purge_expired(self, now: float) -> None:
        expired = [key for key, entry in self._entries.items() if now >= entry.expires_at]
        for key in expired:
            del self._entries[key]

    def discard(self, version: str | None) -> None:
        """Drop the cached result for a single version."""
        self._entries.pop(version, None)

    def invalidate(self) -> None:
        """Drop every cached result."""
        self._entries.clear()
