"""
In-memory LRU cache for resolved lyrics
"""

import threading
from collections import OrderedDict
from typing import List, Optional

from .models import LyricsResult


class LyricsCache:
    """
    Thread-safe least-recently-used cache of LyricsResult objects

    Entries never expire on their own; the least recently used entry is
    evicted when a put would exceed capacity. Reading with get() counts as a
    use, peek() and contains() do not.
    """

    def __init__(self, capacity: int = 50):
        """
        Initialize cache

        Args:
            capacity: Maximum number of entries (at least 1)
        """
        if capacity < 1:
            raise ValueError(f"Cache capacity must be at least 1, got {capacity}")

        self.capacity = capacity
        self._entries: "OrderedDict[str, LyricsResult]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[LyricsResult]:
        """Return the cached result and mark it most recently used"""
        with self._lock:
            result = self._entries.get(key)
            if result is not None:
                self._entries.move_to_end(key)
            return result

    def peek(self, key: str) -> Optional[LyricsResult]:
        """Return the cached result without touching recency"""
        with self._lock:
            return self._entries.get(key)

    def contains(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def __contains__(self, key: str) -> bool:
        return self.contains(key)

    def put(self, key: str, result: LyricsResult) -> None:
        """
        Store a result as most recently used, evicting the LRU entry on overflow

        Args:
            key: Cache key (see models.make_cache_key)
            result: Resolved lyrics

        Raises:
            ValueError: If the result has no displayable content
        """
        if not result.has_displayable_content():
            raise ValueError(f"Refusing to cache lyrics without displayable content for '{key}'")

        with self._lock:
            self._entries[key] = result
            self._entries.move_to_end(key)
            while len(self._entries) > self.capacity:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def keys(self) -> List[str]:
        """Snapshot of keys ordered from least to most recently used"""
        with self._lock:
            return list(self._entries.keys())

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
