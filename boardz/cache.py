"""
Short-lived read-through cache

Keeps the component list and page configs around for a few seconds so the
onboarding pages don't refetch them on every request. The clock is injected
so tests can move time forward.
"""

import threading
import time
from typing import Any, Callable, Dict, NamedTuple, Optional


class CacheEntry(NamedTuple):
    value: Any
    expires_at: float

    def is_fresh(self, now: float) -> bool:
        return now < self.expires_at


class TimedCache:
    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None when missing or expired"""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if not entry.is_fresh(self.clock()):
                del self._entries[key]
                return None
            return entry.value

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._entries[key] = CacheEntry(value, self.clock() + self.ttl_seconds)

    def get_or_load(self, key: str, loader: Callable[[], Any]) -> Any:
        """
        Return the cached value for key, calling loader on a miss

        Args:
            key: Cache key
            loader: Zero-argument callable producing the value

        Returns:
            Cached or freshly loaded value
        """
        value = self.get(key)
        if value is not None:
            return value
        value = loader()
        if self.ttl_seconds > 0:
            self.set(key, value)
        return value

    def invalidate(self, key: Optional[str] = None) -> None:
        with self._lock:
            if key is None:
                self._entries.clear()
            else:
                self._entries.pop(key, None)
