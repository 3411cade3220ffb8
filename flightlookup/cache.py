"""
In-memory cache for upstream flight responses.

Provides a time-aware cache keyed by the provider query, enabling:
- Collapsing duplicate lookups issued within a short window
- Automatic expiration of stale entries
- Thread-safe operations for concurrent requests

The TTL is short (60 seconds by default). It only reduces duplicate
calls against the provider's monthly quota; it is not a correctness
mechanism and callers must not rely on entries being present.
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from flightlookup.config import config

logger = logging.getLogger(__name__)

CacheKey = Tuple[Tuple[str, str], ...]


def make_key(params: Mapping[str, Any]) -> CacheKey:
    """Build a hashable, order-independent key from query parameters."""
    return tuple(sorted((str(k), str(v)) for k, v in params.items()))


@dataclass
class CachedResponse:
    """Decoded provider payload plus cache metadata."""
    payload: Any
    cached_at: float = field(default_factory=time.time)


class ResponseCache:
    """
    Thread-safe TTL cache for decoded provider payloads.

    Only successful responses are stored; errors are never cached so a
    transient failure doesn't stick for the whole TTL.
    """

    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        max_entries: Optional[int] = None,
        clock=time.time,
    ):
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else config.cache.ttl_seconds
        self.max_entries = max_entries if max_entries is not None else config.cache.max_entries
        self._clock = clock

        self._cache: Dict[CacheKey, CachedResponse] = {}
        self._lock = threading.RLock()

        # Statistics
        self._hits = 0
        self._misses = 0

    def get(self, key: CacheKey) -> Optional[Any]:
        """
        Get cached payload for a query key.

        Returns None if not cached or expired.
        """
        with self._lock:
            entry = self._cache.get(key)
            if entry is not None:
                age = self._clock() - entry.cached_at
                if age < self.ttl_seconds:
                    self._hits += 1
                    return entry.payload
                # Expired
                del self._cache[key]
            self._misses += 1
        return None

    def set(self, key: CacheKey, payload: Any) -> None:
        """Store a payload, evicting the oldest entries when over capacity."""
        if self.ttl_seconds <= 0:
            return

        with self._lock:
            self._cache[key] = CachedResponse(payload=payload, cached_at=self._clock())

            if len(self._cache) > self.max_entries:
                self._evict_oldest()

    def _evict_oldest(self) -> None:
        """Remove oldest entries when over capacity."""
        entries = sorted(
            self._cache.items(),
            key=lambda x: x[1].cached_at
        )
        # Remove oldest 10%
        to_remove = max(1, len(entries) // 10)
        for key, _ in entries[:to_remove]:
            del self._cache[key]
        logger.debug(f'Evicted {to_remove} cached responses')

    def clear(self) -> None:
        """Clear entire cache."""
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    @property
    def stats(self) -> dict:
        """Get cache statistics."""
        with self._lock:
            total = self._hits + self._misses
            return {
                'entries': len(self._cache),
                'hits': self._hits,
                'misses': self._misses,
                'hit_rate': self._hits / total if total > 0 else 0,
                'ttl_seconds': self.ttl_seconds,
            }
