"""
Structured logging for the scraper.
"""
from .scraper_logger import (
    ROOT_LOGGER_NAME,
    HumanFormatter,
    JSONFormatter,
    LogContext,
    LogLevel,
    ScraperLogger,
    configure_logging,
    create_scraper_logger,
    new_correlation_id,
)

__all__ = [
    "ROOT_LOGGER_NAME",
    "HumanFormatter",
    "JSONFormatter",
    "LogContext",
    "LogLevel",
    "ScraperLogger",
    "configure_logging",
    "create_scraper_logger",
    "new_correlation_id",
]
