"""In-memory cache of API responses with expiry and eviction."""

from __future__ import annotations

import hashlib
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional


@dataclass(frozen=True)
class CacheStats:
    """Counts of entries held by a ResponseCache."""

    total_entries: int
    expired_entries: int
    active_entries: int


@dataclass
class _CacheEntry:
    response: str
    timestamp: float
    access_count: int = 1


class ResponseCache:
    """A bounded, thread-safe cache whose entries expire after a TTL."""

    def __init__(
        self,
        max_size: int,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_size = max_size
        self.ttl = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, _CacheEntry] = {}
        self._lock = threading.Lock()

    @staticmethod
    def generate_key(user_message: str, tool_results: Iterable[str]) -> str:
        """Hash a user message and the tool results that followed it."""
        hasher = hashlib.sha256(user_message.encode("utf-8"))
        for result in tool_results:
            hasher.update(b"|")
            hasher.update(result.encode("utf-8"))
        return hasher.hexdigest()

    def _expired(self, entry: _CacheEntry, now: float) -> bool:
        return now - entry.timestamp > self.ttl

    def get(self, key: str) -> Optional[str]:
        """Return the cached response, or None if absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            now = self._clock()
            if self._expired(entry, now):
                del self._entries[key]
                return None
            entry.access_count += 1
            entry.timestamp = now
            return entry.response

    def put(self, key: str, response: str) -> None:
        """Store a response, evicting the least used entry when full."""
        with self._lock:
            if len(self._entries) >= self.max_size and key not in self._entries and self._entries:
                victim = min(
                    self._entries,
                    key=lambda k: (self._entries[k].access_count, self._entries[k].timestamp),
                )
                del self._entries[victim]
            self._entries[key] = _CacheEntry(response, self._clock())

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._entries.clear()

    def stats(self) -> CacheStats:
        """Count total, expired and active entries."""
        with self._lock:
            now = self._clock()
            total = len(self._entries)
            expired = sum(1 for entry in self._entries.values() if self._expired(entry, now))
        return CacheStats(total, expired, total - expired)