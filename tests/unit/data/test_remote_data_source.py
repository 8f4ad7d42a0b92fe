"""
Tests for PlayStoreRemoteDataSource.
"""
import asyncio
from unittest.mock import AsyncMock, Mock

import aiohttp
import pytest

from play_scraper.domain.errors import (
    GenericError,
    NetworkError,
    NotFoundError,
    ParseError,
)
from play_scraper.domain.value_objects import Category, Collection, ReviewSortOrder
from play_scraper.infrastructure.remote_data_source import PlayStoreRemoteDataSource
from play_scraper.infrastructure.resilience.retry_policy import RetryExecutor, RetryPolicy
from tests.fixtures.play_pages import (
    data_callback,
    details_page,
    list_item,
    listing_payload,
    page,
    permissions_payload,
    review_item,
    reviews_payload,
    search_payload,
)


class RecordingSleep:

    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


def make_source(responses, **kwargs):
    """Data source over a mocked client whose get() yields `responses`."""
    client = Mock()
    if isinstance(responses, list):
        client.get = AsyncMock(side_effect=responses)
    else:
        client.get = AsyncMock(return_value=responses)
    sleep = RecordingSleep()
    source = PlayStoreRemoteDataSource(
        client,
        retry_executor=RetryExecutor(sleep=sleep),
        **kwargs,
    )
    return source, client, sleep


def listing_page(*app_ids):
    return page(data_callback("ds:3", listing_payload(
        [list_item(app_id, app_id.upper()) for app_id in app_ids]
    )))


class TestFetchAppDetails:
    """Tests for fetch_app_details()."""

    @pytest.mark.asyncio
    async def test_fetches_and_parses(self):
        source, client, _ = make_source(details_page())

        details = await source.fetch_app_details("com.sample.app", "en", "us")

        assert details.title == "Sample App"
        client.get.assert_awaited_once_with(
            "/store/apps/details",
            {"id": "com.sample.app", "hl": "en", "gl": "us"},
            resource_id="com.sample.app",
        )

    @pytest.mark.asyncio
    async def test_retries_network_failures(self):
        """Transient failures are retried with backoff."""
        source, client, sleep = make_source([
            NetworkError("reset"),
            NetworkError("reset"),
            details_page(),
        ])

        details = await source.fetch_app_details("com.sample.app", "en", "us")

        assert details.title == "Sample App"
        assert client.get.await_count == 3
        assert sleep.delays == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_not_found_not_retried(self):
        source, client, _ = make_source([NotFoundError("com.gone")])

        with pytest.raises(NotFoundError):
            await source.fetch_app_details("com.gone", "en", "us")

        assert client.get.await_count == 1

    @pytest.mark.asyncio
    async def test_strict_parsing_raises(self):
        source, _, _ = make_source(page(), strict_parsing=True)

        with pytest.raises(ParseError):
            await source.fetch_app_details("com.sample.app", "en", "us")

    @pytest.mark.asyncio
    async def test_lenient_parsing_returns_defaults(self):
        source, _, _ = make_source(page())

        details = await source.fetch_app_details("com.sample.app", "en", "us")

        assert details.title == ""
        assert "title" in details.missing_fields

    @pytest.mark.asyncio
    async def test_transport_errors_converted_after_exhaustion(self):
        """Raw transport failures surface as NetworkError."""
        failure = aiohttp.ClientConnectionError("refused")
        source, client, _ = make_source(
            [failure, failure],
            retry_policy=RetryPolicy(max_attempts=2),
        )

        with pytest.raises(NetworkError) as exc_info:
            await source.fetch_app_details("com.sample.app", "en", "us")

        assert exc_info.value.cause is failure
        assert client.get.await_count == 2

    @pytest.mark.asyncio
    async def test_timeout_converted(self):
        source, _, _ = make_source(
            [asyncio.TimeoutError()], retry_policy=RetryPolicy.NO_RETRY
        )

        with pytest.raises(NetworkError):
            await source.fetch_app_details("com.sample.app", "en", "us")

    @pytest.mark.asyncio
    async def test_unexpected_errors_are_generic(self):
        source, _, _ = make_source([RuntimeError("bug")])

        with pytest.raises(GenericError) as exc_info:
            await source.fetch_app_details("com.sample.app", "en", "us")

        assert isinstance(exc_info.value.__cause__, RuntimeError)


class TestFetchListings:
    """Tests for listing fetches."""

    @pytest.mark.asyncio
    async def test_developer_apps(self):
        source, client, _ = make_source(listing_page("com.a", "com.b", "com.c"))

        apps = await source.fetch_developer_apps("5700313618786177705", "en", "us", 2)

        assert [a.app_id for a in apps] == ["com.a", "com.b"]
        path, params = client.get.call_args[0]
        assert path == "/store/apps/developer"
        assert params["id"] == "5700313618786177705"

    @pytest.mark.asyncio
    async def test_similar_apps_from_details_page(self):
        html = page(data_callback("ds:7", listing_payload([list_item("com.sim", "Sim")])))
        source, client, _ = make_source(html)

        apps = await source.fetch_similar_apps("com.sample.app", "en", "us", 10)

        assert [a.app_id for a in apps] == ["com.sim"]
        assert client.get.call_args[0][0] == "/store/apps/details"

    @pytest.mark.asyncio
    async def test_category_apps(self):
        source, client, _ = make_source(listing_page("com.game"))

        apps = await source.fetch_category_apps(
            Category.GAME_ACTION, Collection.TOP_PAID, "en", "us", 10
        )

        assert [a.app_id for a in apps] == ["com.game"]
        assert client.get.call_args[0][0] == (
            "/store/apps/category/GAME_ACTION/collection/topselling_paid"
        )

    @pytest.mark.asyncio
    async def test_search(self):
        html = page(data_callback("ds:3", search_payload([list_item("com.found", "Found")])))
        source, client, _ = make_source(html)

        apps = await source.search_apps("notes", "en", "us", 10)

        assert [a.app_id for a in apps] == ["com.found"]
        path, params = client.get.call_args[0]
        assert path == "/store/search"
        assert params["q"] == "notes"
        assert params["c"] == "apps"


class TestFetchPermissionsAndReviews:
    """Tests for permissions and reviews fetches."""

    @pytest.mark.asyncio
    async def test_permissions(self):
        html = page(data_callback("ds:3", permissions_payload([("Camera", "Take pictures")])))
        source, client, _ = make_source(html)

        permissions = await source.fetch_app_permissions("com.sample.app", "en")

        assert [p.type for p in permissions] == ["Camera"]
        path, params = client.get.call_args[0]
        assert path == "/store/apps/datasafety"
        assert params == {"id": "com.sample.app", "hl": "en"}

    @pytest.mark.asyncio
    async def test_reviews(self):
        items = [review_item(review_id=f"gp:{n}") for n in range(5)]
        html = page(data_callback("ds:11", reviews_payload(items)))
        source, client, _ = make_source(html)

        reviews = await source.fetch_app_reviews(
            "com.sample.app", ReviewSortOrder.RATING, "en", "us", 3
        )

        assert [r.review_id for r in reviews] == ["gp:0", "gp:1", "gp:2"]
        params = client.get.call_args[0][1]
        assert params["sort"] == "3"
        assert params["showAllReviews"] == "true"
