"""
play_scraper - Google Play web store scraper.

Extracts app details, listings, reviews and permissions from the data
embedded in store pages, behind a throttled, retrying, cached fetch layer.
"""
from play_scraper.domain.entities import (
    App,
    AppDetails,
    AppReview,
    Permission,
    RatingHistogram,
)
from play_scraper.domain.errors import (
    ErrorKind,
    GenericError,
    HttpError,
    NetworkError,
    NotFoundError,
    ParseError,
    RateLimitError,
    ScraperError,
)
from play_scraper.domain.value_objects import Category, Collection, ReviewSortOrder
from play_scraper.infrastructure.config import CacheTTLConfig, ScraperConfig
from play_scraper.infrastructure.resilience.retry_policy import RetryPolicy
from play_scraper.scraper import PlayStoreScraper

__version__ = "1.0.0"

__all__ = [
    "PlayStoreScraper",
    "ScraperConfig",
    "CacheTTLConfig",
    "RetryPolicy",
    "App",
    "AppDetails",
    "AppReview",
    "Permission",
    "RatingHistogram",
    "Category",
    "Collection",
    "ReviewSortOrder",
    "ErrorKind",
    "ScraperError",
    "NetworkError",
    "HttpError",
    "ParseError",
    "RateLimitError",
    "NotFoundError",
    "GenericError",
]
