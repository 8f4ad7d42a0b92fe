"""
Play Store Scraper - Public API

Usage:
    async with PlayStoreScraper() as scraper:
        details = await scraper.get_app_details("com.example.app")
        print(details.title, details.score)

    # Custom configuration
    config = ScraperConfig(retry_policy="aggressive", throttle="fixed")
    async with PlayStoreScraper(config) as scraper:
        apps = await scraper.search_apps("notes")
"""
import logging
from typing import AsyncIterator, List, Optional

from play_scraper.domain.entities import App, AppDetails, AppReview, Permission
from play_scraper.domain.repository_ports import IPlayStoreRepository
from play_scraper.domain.value_objects import Category, Collection, ReviewSortOrder
from play_scraper.infrastructure.cache.cache_strategy import CacheStrategy, NoCaching
from play_scraper.infrastructure.cache.in_memory_cache import InMemoryCache
from play_scraper.infrastructure.config import ScraperConfig
from play_scraper.infrastructure.http.client import PlayStoreHttpClient
from play_scraper.infrastructure.http.request_throttler import (
    RequestThrottler,
    build_throttler,
)
from play_scraper.infrastructure.http.user_agent import UserAgentProvider
from play_scraper.infrastructure.remote_data_source import PlayStoreRemoteDataSource
from play_scraper.infrastructure.repository import PlayStoreRepository
from play_scraper.infrastructure.resilience.retry_policy import RetryPolicy

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 120
MAX_LIST_LIMIT = 500
DEFAULT_REVIEW_LIMIT = 100
MAX_REVIEW_LIMIT = 1000
MIN_QUERY_LENGTH = 2


def _require_text(value: str, name: str) -> None:
    if not value or not value.strip():
        raise ValueError(f"{name} cannot be blank")


def _require_limit(limit: int, maximum: int) -> None:
    if limit <= 0:
        raise ValueError("Limit must be greater than 0")
    if limit > maximum:
        raise ValueError(f"Limit cannot exceed {maximum}")


class PlayStoreScraper:
    """
    Entry point for scraping the Google Play web store.

    Wires the HTTP client, throttler, retry policy, cache and parsers from a
    ScraperConfig. Explicit arguments override the configured components.

    Args:
        config: Settings (default: ScraperConfig())
        cache: Cache strategy; ignored when caching is disabled
        throttler: Request throttler shared by all requests of this scraper
        retry_policy: Backoff policy
        user_agent_provider: Source of User-Agent headers
        repository: Fully built repository (bypasses all wiring)
    """

    def __init__(
        self,
        config: Optional[ScraperConfig] = None,
        cache: Optional[CacheStrategy] = None,
        throttler: Optional[RequestThrottler] = None,
        retry_policy: Optional[RetryPolicy] = None,
        user_agent_provider: Optional[UserAgentProvider] = None,
        repository: Optional[IPlayStoreRepository] = None,
    ):
        self._config = config or ScraperConfig()
        self._client: Optional[PlayStoreHttpClient] = None

        if repository is not None:
            self._repository = repository
            return

        self._client = PlayStoreHttpClient(
            throttler=throttler or build_throttler(
                self._config.throttle, self._config.throttle_base_delay
            ),
            user_agent_provider=user_agent_provider,
            timeout=self._config.timeout,
            minimal_headers=self._config.minimal_headers,
        )
        remote = PlayStoreRemoteDataSource(
            self._client,
            retry_policy=retry_policy or RetryPolicy.from_name(self._config.retry_policy),
            strict_parsing=self._config.strict_parsing,
        )
        self._repository = PlayStoreRepository(
            remote,
            cache=self._select_cache(cache),
            ttl=self._config.cache_ttl,
        )

    def _select_cache(self, cache: Optional[CacheStrategy]) -> CacheStrategy:
        if not self._config.enable_cache:
            return NoCaching()
        return cache or InMemoryCache()

    @property
    def config(self) -> ScraperConfig:
        return self._config

    async def close(self) -> None:
        """Release the HTTP session."""
        if self._client is not None:
            await self._client.close()

    async def __aenter__(self) -> "PlayStoreScraper":
        if self._client is not None:
            await self._client.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def get_app_details(
        self,
        app_id: str,
        language: Optional[str] = None,
        country: Optional[str] = None,
    ) -> AppDetails:
        """
        Get the details of an app.

        Args:
            app_id: Package name, e.g. "com.example.app"
            language: Language code (default from config)
            country: Country code (default from config)

        Raises:
            ValueError: Blank app id, language or country
            ScraperError: Fetch or parse failure
        """
        language, country = self._locale(language, country)
        _require_text(app_id, "App ID")
        _require_text(language, "Language")
        _require_text(country, "Country")
        return await self._repository.get_app_details(app_id, language, country)

    async def get_developer_apps(
        self,
        developer_id: str,
        language: Optional[str] = None,
        country: Optional[str] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> List[App]:
        language, country = self._locale(language, country)
        _require_text(developer_id, "Developer ID")
        _require_limit(limit, MAX_LIST_LIMIT)
        return await self._repository.get_developer_apps(
            developer_id, language, country, limit
        )

    async def get_similar_apps(
        self,
        app_id: str,
        language: Optional[str] = None,
        country: Optional[str] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> List[App]:
        language, country = self._locale(language, country)
        _require_text(app_id, "App ID")
        _require_limit(limit, MAX_LIST_LIMIT)
        return await self._repository.get_similar_apps(app_id, language, country, limit)

    async def get_category_apps(
        self,
        category: Category,
        collection: Collection = Collection.TOP_FREE,
        language: Optional[str] = None,
        country: Optional[str] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> List[App]:
        """Get a chart (top free, top paid, ...) of a category."""
        language, country = self._locale(language, country)
        _require_limit(limit, MAX_LIST_LIMIT)
        return await self._repository.get_category_apps(
            category, collection, language, country, limit
        )

    async def search_apps(
        self,
        query: str,
        language: Optional[str] = None,
        country: Optional[str] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> List[App]:
        """
        Search apps by keyword.

        Raises:
            ValueError: Blank query, query shorter than 2 characters, or limit
                outside 1..500
        """
        language, country = self._locale(language, country)
        _require_text(query, "Search query")
        if len(query.strip()) < MIN_QUERY_LENGTH:
            raise ValueError(
                f"Search query must be at least {MIN_QUERY_LENGTH} characters"
            )
        _require_limit(limit, MAX_LIST_LIMIT)
        return await self._repository.search_apps(query, language, country, limit)

    async def get_app_permissions(
        self, app_id: str, language: Optional[str] = None
    ) -> List[Permission]:
        language, _ = self._locale(language, None)
        _require_text(app_id, "App ID")
        return await self._repository.get_app_permissions(app_id, language)

    async def get_app_reviews(
        self,
        app_id: str,
        sort_order: ReviewSortOrder = ReviewSortOrder.NEWEST,
        language: Optional[str] = None,
        country: Optional[str] = None,
        limit: int = DEFAULT_REVIEW_LIMIT,
    ) -> List[AppReview]:
        """
        Get reviews of an app.

        Raises:
            ValueError: Blank app id or limit outside 1..1000
        """
        language, country = self._locale(language, country)
        _require_text(app_id, "App ID")
        _require_limit(limit, MAX_REVIEW_LIMIT)
        return await self._repository.get_app_reviews(
            app_id, sort_order, language, country, limit
        )

    def iter_app_reviews(
        self,
        app_id: str,
        sort_order: ReviewSortOrder = ReviewSortOrder.NEWEST,
        language: Optional[str] = None,
        country: Optional[str] = None,
        limit: int = DEFAULT_REVIEW_LIMIT,
    ) -> AsyncIterator[AppReview]:
        """
        Stream reviews one at a time. Never cached.

        Usage:
            async for review in scraper.iter_app_reviews("com.example.app"):
                print(review.score, review.text)
        """
        language, country = self._locale(language, country)
        _require_text(app_id, "App ID")
        _require_limit(limit, MAX_REVIEW_LIMIT)
        return self._repository.iter_app_reviews(
            app_id, sort_order, language, country, limit
        )

    def _locale(self, language: Optional[str], country: Optional[str]):
        return (
            self._config.language if language is None else language,
            self._config.country if country is None else country,
        )
