"""
Play Store Repository

Cache-first implementation of IPlayStoreRepository. A result is written to
the cache only after the remote fetch fully succeeds.
"""
import logging
from typing import Any, AsyncIterator, Awaitable, Callable, List, Optional, TypeVar

from play_scraper.domain.entities import App, AppDetails, AppReview, Permission
from play_scraper.domain.repository_ports import IPlayStoreRepository
from play_scraper.domain.value_objects import Category, Collection, ReviewSortOrder
from play_scraper.infrastructure.cache.cache_strategy import (
    CacheStrategy,
    NoCaching,
    build_cache_key,
)
from play_scraper.infrastructure.config import CacheTTLConfig
from .remote_data_source import PlayStoreRemoteDataSource

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PlayStoreRepository(IPlayStoreRepository):
    """
    Repository reading through a cache.

    Args:
        remote: Source of fresh records
        cache: Cache strategy (default: no caching)
        ttl: Cache lifetimes per operation
    """

    def __init__(
        self,
        remote: PlayStoreRemoteDataSource,
        cache: Optional[CacheStrategy] = None,
        ttl: Optional[CacheTTLConfig] = None,
    ):
        self._remote = remote
        self._cache = cache or NoCaching()
        self._ttl = ttl or CacheTTLConfig()

    @property
    def cache(self) -> CacheStrategy:
        return self._cache

    async def get_app_details(
        self, app_id: str, language: str, country: str
    ) -> AppDetails:
        return await self._cached(
            build_cache_key("app_details", app_id, language, country),
            self._ttl.app_details,
            lambda: self._remote.fetch_app_details(app_id, language, country),
        )

    async def get_developer_apps(
        self, developer_id: str, language: str, country: str, limit: int
    ) -> List[App]:
        return await self._cached(
            build_cache_key("developer_apps", developer_id, language, country, limit),
            self._ttl.developer_apps,
            lambda: self._remote.fetch_developer_apps(developer_id, language, country, limit),
        )

    async def get_similar_apps(
        self, app_id: str, language: str, country: str, limit: int
    ) -> List[App]:
        return await self._cached(
            build_cache_key("similar_apps", app_id, language, country, limit),
            self._ttl.similar_apps,
            lambda: self._remote.fetch_similar_apps(app_id, language, country, limit),
        )

    async def get_category_apps(
        self,
        category: Category,
        collection: Collection,
        language: str,
        country: str,
        limit: int,
    ) -> List[App]:
        return await self._cached(
            build_cache_key(
                "category_apps", category.id, collection.id, language, country, limit
            ),
            self._ttl.category_apps,
            lambda: self._remote.fetch_category_apps(
                category, collection, language, country, limit
            ),
        )

    async def search_apps(
        self, query: str, language: str, country: str, limit: int
    ) -> List[App]:
        return await self._cached(
            build_cache_key("search", query, language, country, limit),
            self._ttl.search,
            lambda: self._remote.search_apps(query, language, country, limit),
        )

    async def get_app_permissions(
        self, app_id: str, language: str
    ) -> List[Permission]:
        return await self._cached(
            build_cache_key("permissions", app_id, language),
            self._ttl.permissions,
            lambda: self._remote.fetch_app_permissions(app_id, language),
        )

    async def get_app_reviews(
        self,
        app_id: str,
        sort_order: ReviewSortOrder,
        language: str,
        country: str,
        limit: int,
    ) -> List[AppReview]:
        return await self._cached(
            build_cache_key("reviews", app_id, sort_order.name, language, country, limit),
            self._ttl.reviews,
            lambda: self._remote.fetch_app_reviews(
                app_id, sort_order, language, country, limit
            ),
        )

    async def iter_app_reviews(
        self,
        app_id: str,
        sort_order: ReviewSortOrder,
        language: str,
        country: str,
        limit: int,
    ) -> AsyncIterator[AppReview]:
        reviews = await self._remote.fetch_app_reviews(
            app_id, sort_order, language, country, limit
        )
        for review in reviews:
            yield review

    async def _cached(
        self,
        key: str,
        ttl: float,
        fetch: Callable[[], Awaitable[T]],
    ) -> T:
        cached: Any = await self._cache.get(key)
        if cached is not None:
            logger.debug(f"Cache hit: {key}")
            return cached

        logger.debug(f"Cache miss: {key}")
        value = await fetch()
        await self._cache.put(key, value, ttl)
        return value
