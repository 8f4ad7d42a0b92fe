"""
In-Memory TTL Cache

Process-local cache. Expired entries are dropped lazily on read or by an
explicit `cleanup_expired()` sweep; there is no background timer.
"""
import asyncio
import logging
import re
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Pattern

from .cache_strategy import CacheStrategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """Cached value with its absolute expiry instant."""
    value: Any
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


def glob_to_regex(pattern: str) -> Pattern:
    """'*' matches any run of characters; everything else is literal."""
    return re.compile(".*".join(re.escape(part) for part in pattern.split("*")))


class InMemoryCache(CacheStrategy):
    """
    Dict-backed cache guarded by an asyncio.Lock.

    Usage:
        cache = InMemoryCache()
        await cache.put("app_details:com.example:en:us", details, ttl=3600)
        details = await cache.get("app_details:com.example:en:us")
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._clock = clock or time.monotonic
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> Optional[Any]:
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                del self._entries[key]
                logger.debug(f"Cache entry expired: {key}")
                return None
            return entry.value

    async def put(self, key: str, value: Any, ttl: float) -> None:
        async with self._lock:
            self._entries[key] = CacheEntry(value, self._clock() + ttl)

    async def remove(self, key: str) -> None:
        async with self._lock:
            self._entries.pop(key, None)

    async def clear(self) -> None:
        async with self._lock:
            self._entries.clear()

    async def clear_pattern(self, pattern: str) -> None:
        regex = glob_to_regex(pattern)
        async with self._lock:
            matching = [key for key in self._entries if regex.fullmatch(key)]
            for key in matching:
                del self._entries[key]
        logger.debug(f"Cleared {len(matching)} cache entries matching '{pattern}'")

    async def cleanup_expired(self) -> int:
        """
        Remove all expired entries.

        Returns:
            Number of entries removed
        """
        async with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def size(self) -> int:
        """Number of stored entries, including expired ones not yet evicted."""
        return len(self._entries)
