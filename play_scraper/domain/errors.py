"""
Scraper Error Taxonomy

Closed set of failure kinds surfaced by the scraper.
Every failure that reaches a caller is one of these, carrying a message
and, where one exists, the wrapped cause.
"""
from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Discriminator for the ScraperError variants."""
    NETWORK = "network"
    HTTP = "http"
    PARSE = "parse"
    RATE_LIMIT = "rate_limit"
    NOT_FOUND = "not_found"
    GENERIC = "generic"


class ScraperError(Exception):
    """Base class for all scraper errors."""

    kind: ErrorKind = ErrorKind.GENERIC

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        recoverable: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.recoverable = recoverable
        if cause is not None:
            self.__cause__ = cause


class NetworkError(ScraperError):
    """Transport failure or timeout."""

    kind = ErrorKind.NETWORK

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message, cause=cause, recoverable=True)


class HttpError(ScraperError):
    """Non-2xx response not covered by a more specific kind."""

    kind = ErrorKind.HTTP

    def __init__(
        self,
        status_code: int,
        message: str = "",
        cause: Optional[BaseException] = None,
    ):
        super().__init__(
            message or f"HTTP error: {status_code}",
            cause=cause,
            recoverable=status_code >= 500,
        )
        self.status_code = status_code

    def __str__(self) -> str:
        return f"HTTP {self.status_code}: {self.message}"


class ParseError(ScraperError):
    """
    Embedded page data is missing or malformed.

    Keeps a truncated sample of the markup for debugging.
    """

    kind = ErrorKind.PARSE

    def __init__(
        self,
        message: str,
        html_sample: str = "",
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, cause=cause, recoverable=False)
        self.html_sample = html_sample[:500] if html_sample else ""


class RateLimitError(ScraperError):
    """Server throttled us (429 or 503)."""

    kind = ErrorKind.RATE_LIMIT

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, cause=cause, recoverable=True)
        self.retry_after = retry_after


class NotFoundError(ScraperError):
    """Requested resource does not exist (404)."""

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        resource_id: str,
        message: str = "",
        cause: Optional[BaseException] = None,
    ):
        super().__init__(
            message or f"Resource not found: {resource_id}",
            cause=cause,
            recoverable=False,
        )
        self.resource_id = resource_id


class GenericError(ScraperError):
    """Anything not otherwise classified."""

    kind = ErrorKind.GENERIC
