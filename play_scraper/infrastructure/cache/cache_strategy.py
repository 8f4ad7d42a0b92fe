"""
Cache Strategy Port

Interface for the TTL caches the repository reads through.
"""
from abc import ABC, abstractmethod
from typing import Any, Optional

KEY_SEPARATOR = ":"


def build_cache_key(*parts: Any) -> str:
    """
    Join key parts with ':'.

    build_cache_key("app_details", "com.example", "en", "us")
    -> "app_details:com.example:en:us"
    """
    return KEY_SEPARATOR.join(str(part) for part in parts)


class CacheStrategy(ABC):
    """
    Abstract key/value cache with per-entry expiry.

    TTLs are in seconds.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None if absent or expired."""
        pass

    @abstractmethod
    async def put(self, key: str, value: Any, ttl: float) -> None:
        """Store `value`, replacing any existing entry, for `ttl` seconds."""
        pass

    @abstractmethod
    async def remove(self, key: str) -> None:
        pass

    @abstractmethod
    async def clear(self) -> None:
        pass

    @abstractmethod
    async def clear_pattern(self, pattern: str) -> None:
        """
        Remove every key matching a glob pattern.

        Args:
            pattern: '*' matches any run of characters, e.g. "app_*"
        """
        pass


class NoCaching(CacheStrategy):
    """Cache that never stores anything."""

    async def get(self, key: str) -> Optional[Any]:
        return None

    async def put(self, key: str, value: Any, ttl: float) -> None:
        pass

    async def remove(self, key: str) -> None:
        pass

    async def clear(self) -> None:
        pass

    async def clear_pattern(self, pattern: str) -> None:
        pass
