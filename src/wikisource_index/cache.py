"""Key/value cache with per-entry time-to-live.

``IndexPage`` reaches its cache only through the ``CacheStore`` protocol,
so any store with ``get`` and ``set`` can be passed in. ``MemoryCache`` is
the in-process implementation used by default and in tests.
"""

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class CacheStore(Protocol):
    """Interface for the cache backing Index page metadata and HTML."""

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any, ttl: int) -> None: ...


@dataclass(frozen=True)
class CacheEntry:
    """A stored value and the monotonic time at which it expires."""

    key: str
    value: Any
    expires_at: float

    def expired(self, now: float) -> bool:
        return now >= self.expires_at


class MemoryCache:
    """Thread-safe in-memory cache implementing CacheStore.

    Entries are replaced whole under a lock, so readers see either a
    complete earlier value or nothing. Expired entries are dropped when
    they are next read.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def get(self, key: str) -> Any | None:
        """Return the value stored under ``key``, or None if absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.expired(self._clock()):
                logger.debug(f"Cache entry expired: {key}")
                del self._entries[key]
                return None
            return entry.value

    def set(self, key: str, value: Any, ttl: int) -> None:
        """Store ``value`` under ``key`` for ``ttl`` seconds."""
        entry = CacheEntry(key=key, value=value, expires_at=self._clock() + ttl)
        with self._lock:
            self._entries[key] = entry

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


default_cache = MemoryCache()
