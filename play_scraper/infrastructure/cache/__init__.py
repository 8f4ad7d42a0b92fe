"""
Caching for fetched records.
"""
from .cache_strategy import CacheStrategy, NoCaching, build_cache_key
from .in_memory_cache import CacheEntry, InMemoryCache

__all__ = [
    "CacheStrategy",
    "NoCaching",
    "build_cache_key",
    "CacheEntry",
    "InMemoryCache",
]
