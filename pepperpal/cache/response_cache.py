"""In-memory response cache with per-entry TTL."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable

from loguru import logger

from pepperpal.constants import CacheTTL
from pepperpal.utils.helpers import normalize_query


@dataclass(slots=True)
class CacheEntry:
    response: str
    timestamp: float
    ttl: float
    hits: int = 0


@dataclass(frozen=True, slots=True)
class CacheLookup:
    hit: bool
    response: str | None = None


@dataclass(frozen=True, slots=True)
class CacheEntryStats:
    key: str
    hits: int
    age_seconds: float


@dataclass(frozen=True, slots=True)
class CacheStats:
    size: int
    entries: list[CacheEntryStats] = field(default_factory=list)


_MISS = CacheLookup(hit=False)


class ResponseCache:
    """
    Answers keyed by ``normalize_query`` form.

    Expired entries are dropped lazily on read. When full, writing a new key
    evicts the entry with the oldest timestamp; hit counts never influence
    eviction.
    """

    def __init__(
        self,
        max_entries: int = 500,
        default_ttl: float = CacheTTL.FACTS,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the cache.

        Args:
            max_entries: Upper bound on stored entries.
            default_ttl: Lifetime in seconds for entries set without a TTL.
            clock: Time source, seconds.
        """
        self._max_entries = max_entries
        self._default_ttl = default_ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, query: str) -> CacheLookup:
        key = normalize_query(query)
        entry = self._entries.get(key)
        if entry is None:
            return _MISS

        age = self._clock() - entry.timestamp
        if age >= entry.ttl:
            del self._entries[key]
            logger.debug(f"Cache expired: {key[:30]!r}")
            return _MISS

        entry.hits += 1
        logger.debug(f"Cache hit: {key[:30]!r} (hits={entry.hits}, age={age:.0f}s)")
        return CacheLookup(hit=True, response=entry.response)

    def set(self, query: str, response: str, ttl: float | None = None) -> None:
        """
        Store *response* for *query*.

        Args:
            query: Raw query; normalized here.
            response: Text to return on later hits.
            ttl: Lifetime in seconds, defaults to the cache's default TTL.
        """
        key = normalize_query(query)
        if key not in self._entries and len(self._entries) >= self._max_entries:
            self._evict_oldest()

        ttl = self._default_ttl if ttl is None else ttl
        self._entries[key] = CacheEntry(response=response, timestamp=self._clock(), ttl=ttl)
        logger.debug(f"Cache set: {key[:30]!r} (ttl={ttl}s, size={len(self._entries)})")

    def _evict_oldest(self) -> None:
        if not self._entries:
            return
        oldest = min(self._entries, key=lambda k: self._entries[k].timestamp)
        del self._entries[oldest]
        logger.debug(f"Cache evicted: {oldest[:30]!r}")

    def clear(self) -> int:
        """Drop every entry; returns how many were removed."""
        removed = len(self._entries)
        self._entries.clear()
        logger.info(f"Cache cleared: {removed} entries removed")
        return removed

    def get_stats(self) -> CacheStats:
        """Size plus the ten most-hit entries."""
        now = self._clock()
        entries = [
            CacheEntryStats(key=key[:30], hits=entry.hits, age_seconds=now - entry.timestamp)
            for key, entry in self._entries.items()
        ]
        entries.sort(key=lambda e: e.hits, reverse=True)
        return CacheStats(size=len(self._entries), entries=entries[:10])

    @property
    def size(self) -> int:
        return len(self._entries)
