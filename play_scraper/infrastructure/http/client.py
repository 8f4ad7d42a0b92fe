"""
Play Store HTTP Client

Thin aiohttp wrapper: every GET passes the throttler gate, carries
browser-like headers and turns non-2xx statuses into ScraperErrors.
"""
import logging
from typing import Dict, Mapping, Optional
from urllib.parse import quote, urlencode

import aiohttp

from play_scraper.domain.entities import STORE_BASE_URL
from play_scraper.infrastructure.resilience.error_classifier import classify_status
from .request_throttler import HumanBehaviorThrottler, RequestThrottler
from .user_agent import DefaultUserAgentProvider, UserAgentProvider

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0

BROWSER_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Cache-Control": "no-cache",
    "DNT": "1",
    "Upgrade-Insecure-Requests": "1",
}


def build_url(path: str, params: Optional[Mapping[str, str]] = None) -> str:
    """
    Absolute store URL for `path` with an encoded query string.

    Params whose value is None are left out.
    """
    url = f"{STORE_BASE_URL}{path}"
    query = {k: v for k, v in (params or {}).items() if v is not None}
    if query:
        url = f"{url}?{urlencode(query)}"
    return url


def category_path(category: str, collection: str) -> str:
    return f"/store/apps/category/{quote(category)}/collection/{quote(collection)}"


class PlayStoreHttpClient:
    """
    HTTP client for store pages.

    Usage:
        async with PlayStoreHttpClient() as client:
            html = await client.get("/store/apps/details", {"id": app_id})
    """

    def __init__(
        self,
        throttler: Optional[RequestThrottler] = None,
        user_agent_provider: Optional[UserAgentProvider] = None,
        timeout: float = DEFAULT_TIMEOUT,
        minimal_headers: bool = False,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize the client.

        Args:
            throttler: Gate awaited before each request
            user_agent_provider: Source of the User-Agent header
            timeout: Total request timeout in seconds
            minimal_headers: Send only the User-Agent header
            session: Existing session to use (not closed by this client)
        """
        self._throttler = throttler or HumanBehaviorThrottler()
        self._user_agents = user_agent_provider or DefaultUserAgentProvider()
        self._timeout = timeout
        self._minimal_headers = minimal_headers
        self._session = session
        self._owns_session = session is None

    async def start(self) -> None:
        """Create the HTTP session."""
        if self._session is None:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout),
            )
            self._owns_session = True

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> "PlayStoreHttpClient":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def build_headers(self) -> Dict[str, str]:
        headers = {"User-Agent": self._user_agents.provide()}
        if not self._minimal_headers:
            headers.update(BROWSER_HEADERS)
        return headers

    async def get(
        self,
        path: str,
        params: Optional[Mapping[str, str]] = None,
        resource_id: str = "",
    ) -> str:
        """
        Fetch a store page.

        Args:
            path: Path below the store host
            params: Query parameters
            resource_id: Identifier reported if the page is not found

        Returns:
            Response body as text

        Raises:
            NotFoundError: 404
            RateLimitError: 429 or 503
            HttpError: Any other non-2xx status
            aiohttp.ClientError, asyncio.TimeoutError: Transport failures
        """
        if self._session is None:
            await self.start()

        await self._throttler.await_continue()

        url = build_url(path, params)
        logger.debug(f"GET {url}")

        async with self._session.get(url, headers=self.build_headers()) as response:
            if not 200 <= response.status < 300:
                raise classify_status(
                    response.status,
                    response.headers,
                    resource_id=resource_id or url,
                )
            return await response.text()
