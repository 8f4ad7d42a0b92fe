"""
Error Classification

Pure mapping from arbitrary exceptions to the ScraperError taxonomy.
No network access; safe to call from anywhere.
"""
import asyncio
from typing import Mapping, Optional

import aiohttp

from play_scraper.domain.errors import (
    GenericError,
    HttpError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    ScraperError,
)

RATE_LIMIT_STATUS_CODES = frozenset({429, 503})
NOT_FOUND_STATUS = 404


def parse_retry_after(value: Optional[str]) -> Optional[int]:
    """
    Parse a Retry-After header given in seconds.

    HTTP-date values and anything else unparseable yield None.
    """
    if value is None:
        return None
    try:
        seconds = int(str(value).strip())
    except ValueError:
        return None
    return seconds if seconds >= 0 else None


def classify_status(
    status: int,
    headers: Optional[Mapping[str, str]] = None,
    resource_id: str = "",
    message: str = "",
) -> ScraperError:
    """
    Map a non-2xx HTTP status to its error kind.

    Args:
        status: Response status code
        headers: Response headers (Retry-After is read for rate limits)
        resource_id: Identifier reported by NotFoundError
        message: Optional detail for the error message
    """
    if status == NOT_FOUND_STATUS:
        return NotFoundError(resource_id, message)
    if status in RATE_LIMIT_STATUS_CODES:
        retry_after = parse_retry_after((headers or {}).get("Retry-After"))
        return RateLimitError(
            message or f"Rate limit exceeded (HTTP {status})",
            retry_after=retry_after,
        )
    return HttpError(status, message)


def classify_error(error: BaseException) -> ScraperError:
    """
    Classify any exception into a ScraperError.

    ScraperError instances pass through unchanged; everything else is
    wrapped, with the original kept as `cause`.
    """
    if isinstance(error, ScraperError):
        return error

    if isinstance(error, aiohttp.ClientResponseError):
        request_info = getattr(error, "request_info", None)
        resource_id = str(request_info.url) if request_info is not None else ""
        classified = classify_status(
            error.status, error.headers, resource_id, error.message or ""
        )
        classified.cause = error
        classified.__cause__ = error
        return classified

    if isinstance(error, (asyncio.TimeoutError, aiohttp.ClientError, OSError)):
        return NetworkError(str(error) or type(error).__name__, cause=error)

    return GenericError(str(error) or type(error).__name__, cause=error)
