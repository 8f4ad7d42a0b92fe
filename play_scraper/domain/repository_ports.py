"""
Play Store Repository Interface (Port)

Abstract contract between the public facade and the data layer.
Following Hexagonal Architecture / Ports and Adapters pattern.
"""
from abc import ABC, abstractmethod
from typing import AsyncIterator, List

from .entities import App, AppDetails, AppReview, Permission
from .value_objects import Category, Collection, ReviewSortOrder


class IPlayStoreRepository(ABC):
    """
    Port for reading store data.

    Implementations decide how results are fetched and cached.
    Failures are raised as ScraperError subclasses.
    """

    @abstractmethod
    async def get_app_details(
        self, app_id: str, language: str, country: str
    ) -> AppDetails:
        """
        Get the detail page of an app.

        Args:
            app_id: Package name, e.g. "com.example.app".
            language: Language code ("hl").
            country: Country code ("gl").
        """
        pass

    @abstractmethod
    async def get_developer_apps(
        self, developer_id: str, language: str, country: str, limit: int
    ) -> List[App]:
        pass

    @abstractmethod
    async def get_similar_apps(
        self, app_id: str, language: str, country: str, limit: int
    ) -> List[App]:
        pass

    @abstractmethod
    async def get_category_apps(
        self,
        category: Category,
        collection: Collection,
        language: str,
        country: str,
        limit: int,
    ) -> List[App]:
        pass

    @abstractmethod
    async def search_apps(
        self, query: str, language: str, country: str, limit: int
    ) -> List[App]:
        pass

    @abstractmethod
    async def get_app_permissions(
        self, app_id: str, language: str
    ) -> List[Permission]:
        pass

    @abstractmethod
    async def get_app_reviews(
        self,
        app_id: str,
        sort_order: ReviewSortOrder,
        language: str,
        country: str,
        limit: int,
    ) -> List[AppReview]:
        pass

    @abstractmethod
    def iter_app_reviews(
        self,
        app_id: str,
        sort_order: ReviewSortOrder,
        language: str,
        country: str,
        limit: int,
    ) -> AsyncIterator[AppReview]:
        """Stream reviews one by one. Never served from cache."""
        pass
