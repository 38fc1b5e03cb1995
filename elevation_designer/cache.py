"""Bounded in-memory memoisation for synthesized shadow stacks."""
from __future__ import annotations

import json
import logging
import threading
from typing import Any, Dict, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 500

V = TypeVar("V")


def stable_key(obj: Any) -> str:
    """Serialise ``obj`` with sorted keys so mapping order never changes the key."""

    return json.dumps(obj, sort_keys=True, separators=(",", ":"), default=str)


class BoundedCache(Generic[V]):
    """An insertion-ordered cache that evicts its oldest entry once full.

    Eviction is FIFO, not LRU. Access is lock-guarded; sync FastAPI handlers
    share one engine across worker threads.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        self._capacity = max(1, capacity)
        self._entries: Dict[str, V] = {}
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def get(self, key: str) -> Optional[V]:
        with self._lock:
            return self._entries.get(key)

    def put(self, key: str, value: V) -> None:
        with self._lock:
            if key not in self._entries and len(self._entries) >= self._capacity:
                oldest = next(iter(self._entries))
                del self._entries[oldest]
                logger.debug("Evicted cache entry %s", oldest)
            self._entries[key] = value

    def clear(self) -> None:
        with self._lock:
            dropped = len(self._entries)
            self._entries.clear()
        logger.debug("Cleared %d cache entries", dropped)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["BoundedCache", "DEFAULT_CAPACITY", "stable_key"]
