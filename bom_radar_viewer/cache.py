"""In-memory, short-lived cache of assembled weather responses."""

import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

DEFAULT_TTL_SECONDS = 300.0
DEFAULT_MAX_ENTRIES = 1024


def make_key(lat: float, lng: float) -> str:
    """Cache key for a coordinate pair.

    Coordinates are used exactly as given; -27.4698 and -27.46980001 are
    different keys.
    """
    return f"{lat},{lng}"


class WeatherCache:
    """Payloads keyed by coordinate string, valid for ``ttl_seconds``.

    Stale entries are not removed when read, just ignored until the next
    ``put`` for the same key replaces them. When ``max_entries`` is reached,
    stale entries go first, then the oldest writes.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, float]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            payload, stored_at = entry
            if self._clock() - stored_at >= self.ttl_seconds:
                return None
            return payload

    def put(self, key: str, payload: Any) -> None:
        with self._lock:
            now = self._clock()
            # Re-inserting keeps dict order == write order
            self._entries.pop(key, None)
            if len(self._entries) >= self.max_entries:
                self._evict(now)
            self._entries[key] = (payload, now)

    def _evict(self, now: float) -> None:
        stale = [k for k, (_, stored_at) in self._entries.items() if now - stored_at >= self.ttl_seconds]
        for k in stale:
            del self._entries[k]
        while self._entries and len(self._entries) >= self.max_entries:
            del self._entries[next(iter(self._entries))]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
