"""
Play Store Remote Data Source

Fetches store pages and parses them into domain records. Each fetch-and-
parse unit runs under the retry policy; whatever escapes the retries is
surfaced as a ScraperError.
"""
import logging
from typing import Awaitable, Callable, List, Mapping, Optional, TypeVar

from play_scraper.domain.entities import App, AppDetails, AppReview, Permission
from play_scraper.domain.errors import ScraperError
from play_scraper.domain.value_objects import Category, Collection, ReviewSortOrder
from play_scraper.infrastructure.adapters.app_details_parser import AppDetailsParser
from play_scraper.infrastructure.adapters.app_reviews_parser import AppReviewsParser
from play_scraper.infrastructure.adapters.apps_list_parser import AppsListParser
from play_scraper.infrastructure.adapters.permissions_parser import PermissionsParser
from play_scraper.infrastructure.http.client import PlayStoreHttpClient, category_path
from play_scraper.infrastructure.resilience.error_classifier import classify_error
from play_scraper.infrastructure.resilience.retry_policy import RetryExecutor, RetryPolicy

logger = logging.getLogger(__name__)

T = TypeVar("T")

DETAILS_PATH = "/store/apps/details"
DEVELOPER_PATH = "/store/apps/developer"
SEARCH_PATH = "/store/search"
DATA_SAFETY_PATH = "/store/apps/datasafety"


class PlayStoreRemoteDataSource:
    """
    Remote data source for store pages.

    Usage:
        async with PlayStoreHttpClient() as client:
            source = PlayStoreRemoteDataSource(client)
            details = await source.fetch_app_details("com.example", "en", "us")
    """

    def __init__(
        self,
        http_client: PlayStoreHttpClient,
        retry_policy: Optional[RetryPolicy] = None,
        retry_executor: Optional[RetryExecutor] = None,
        details_parser: Optional[AppDetailsParser] = None,
        list_parser: Optional[AppsListParser] = None,
        reviews_parser: Optional[AppReviewsParser] = None,
        permissions_parser: Optional[PermissionsParser] = None,
        strict_parsing: bool = False,
    ):
        self._client = http_client
        self._retry_policy = retry_policy or RetryPolicy.DEFAULT
        self._executor = retry_executor or RetryExecutor()
        self._details_parser = details_parser or AppDetailsParser()
        self._list_parser = list_parser or AppsListParser()
        self._reviews_parser = reviews_parser or AppReviewsParser()
        self._permissions_parser = permissions_parser or PermissionsParser()
        self._strict_parsing = strict_parsing

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._retry_policy

    async def fetch_app_details(
        self, app_id: str, language: str, country: str
    ) -> AppDetails:
        async def operation(attempt: int) -> AppDetails:
            html = await self._fetch(
                DETAILS_PATH, {"id": app_id, "hl": language, "gl": country}, app_id
            )
            return self._details_parser.parse(app_id, html, strict=self._strict_parsing)

        return await self._run(operation)

    async def fetch_developer_apps(
        self, developer_id: str, language: str, country: str, limit: int
    ) -> List[App]:
        async def operation(attempt: int) -> List[App]:
            html = await self._fetch(
                DEVELOPER_PATH,
                {"id": developer_id, "hl": language, "gl": country},
                developer_id,
            )
            return self._list_parser.parse(html)[:limit]

        return await self._run(operation)

    async def fetch_similar_apps(
        self, app_id: str, language: str, country: str, limit: int
    ) -> List[App]:
        # Similar apps ride along on the detail page
        async def operation(attempt: int) -> List[App]:
            html = await self._fetch(
                DETAILS_PATH, {"id": app_id, "hl": language, "gl": country}, app_id
            )
            return self._list_parser.parse_similar_apps(html)[:limit]

        return await self._run(operation)

    async def fetch_category_apps(
        self,
        category: Category,
        collection: Collection,
        language: str,
        country: str,
        limit: int,
    ) -> List[App]:
        async def operation(attempt: int) -> List[App]:
            html = await self._fetch(
                category_path(category.id, collection.id),
                {"hl": language, "gl": country},
                category.id,
            )
            return self._list_parser.parse(html)[:limit]

        return await self._run(operation)

    async def search_apps(
        self, query: str, language: str, country: str, limit: int
    ) -> List[App]:
        async def operation(attempt: int) -> List[App]:
            html = await self._fetch(
                SEARCH_PATH,
                {"q": query, "c": "apps", "hl": language, "gl": country},
                query,
            )
            return self._list_parser.parse_search_results(html)[:limit]

        return await self._run(operation)

    async def fetch_app_permissions(self, app_id: str, language: str) -> List[Permission]:
        async def operation(attempt: int) -> List[Permission]:
            html = await self._fetch(DATA_SAFETY_PATH, {"id": app_id, "hl": language}, app_id)
            return self._permissions_parser.parse(html)

        return await self._run(operation)

    async def fetch_app_reviews(
        self,
        app_id: str,
        sort_order: ReviewSortOrder,
        language: str,
        country: str,
        limit: int,
    ) -> List[AppReview]:
        async def operation(attempt: int) -> List[AppReview]:
            html = await self._fetch(
                DETAILS_PATH,
                {
                    "id": app_id,
                    "hl": language,
                    "gl": country,
                    "showAllReviews": "true",
                    "sort": str(sort_order.value),
                },
                app_id,
            )
            return self._reviews_parser.parse(html)[:limit]

        return await self._run(operation)

    async def _fetch(self, path: str, params: Mapping[str, str], resource_id: str) -> str:
        return await self._client.get(path, params, resource_id=resource_id)

    async def _run(self, operation: Callable[[int], Awaitable[T]]) -> T:
        try:
            return await self._executor.execute(self._retry_policy, operation)
        except ScraperError:
            raise
        except Exception as e:
            error = classify_error(e)
            logger.error(f"Request failed ({error.kind.value}): {error}")
            raise error from e
