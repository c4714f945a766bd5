"""
Time-boxed in-memory cache shared by the fetchers.

Entries are served while younger than the freshness window and silently
replaced on the next put. Stale entries are never purged proactively.

There is no locking: two concurrent misses on the same key both fetch and
both store, and the last write wins. Fetches are idempotent so this is safe.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from ..config.settings import CACHE_CONFIG

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    payload: Any
    fetched_at: float


class TimeBoxedCache:
    """
    Mapping of key -> (payload, fetched_at) with a fixed freshness window.

    Args:
        freshness_seconds: maximum age of a served entry
        clock: returns the current time in seconds; injectable for tests
    """

    def __init__(
        self,
        freshness_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.time,
    ):
        if freshness_seconds is None:
            freshness_seconds = CACHE_CONFIG["freshness_seconds"]
        if freshness_seconds <= 0:
            raise ValueError(f"freshness_seconds must be positive, got {freshness_seconds}")
        self.freshness_seconds = freshness_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[Any]:
        """Return the payload if fresh, else None."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        age = self._clock() - entry.fetched_at
        if age < self.freshness_seconds:
            return entry.payload
        logger.debug("Cache entry %s is stale (%.0fs old)", key, age)
        return None

    def put(self, key: str, payload: Any) -> None:
        """Store payload, overwriting any previous entry for key."""
        self._entries[key] = CacheEntry(payload=payload, fetched_at=self._clock())

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
