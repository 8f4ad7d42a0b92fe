"""
Play Store Scraper Command-Line Interface.

Provides commands for:
- details: App details
- developer: Apps published by a developer
- similar: Apps similar to an app
- category: Category charts
- search: Keyword search
- permissions: Data-safety entries
- reviews: User reviews
- config: Show configuration

Records are printed to stdout as JSON; logs go to stderr.
"""
import argparse
import asyncio
import dataclasses
import json
import sys
from typing import Any, Callable, List, Optional

from play_scraper.domain.errors import ScraperError
from play_scraper.domain.value_objects import Category, Collection, ReviewSortOrder
from play_scraper.infrastructure.config import (
    ScraperConfig,
    AVAILABLE_RETRY_POLICIES,
    AVAILABLE_THROTTLES,
)
from play_scraper.infrastructure.logging.scraper_logger import (
    LogLevel,
    ScraperLogger,
    configure_logging,
    create_scraper_logger,
)
from play_scraper.scraper import (
    DEFAULT_LIST_LIMIT,
    DEFAULT_REVIEW_LIMIT,
    PlayStoreScraper,
)

SORT_ORDERS = {
    "most_helpful": ReviewSortOrder.MOST_HELPFUL,
    "newest": ReviewSortOrder.NEWEST,
    "rating": ReviewSortOrder.RATING,
}

COLLECTIONS = {collection.name.lower(): collection for collection in Collection}


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the scraper CLI."""
    parser = argparse.ArgumentParser(
        prog="play-scraper",
        description="Google Play Store Scraper - Fetch app details, listings and reviews",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s details com.example.app
  %(prog)s search "note taking" --limit 20
  %(prog)s category PRODUCTIVITY --collection top_paid
  %(prog)s reviews com.example.app --sort rating --limit 50
  %(prog)s --retry-policy aggressive --throttle fixed developer "Example Inc"
        """,
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--lang",
        type=str,
        help="Language code (default: from config)",
    )

    parser.add_argument(
        "--country",
        type=str,
        help="Country code (default: from config)",
    )

    parser.add_argument(
        "--retry-policy",
        type=str,
        choices=AVAILABLE_RETRY_POLICIES,
        help=f"Retry preset: {', '.join(AVAILABLE_RETRY_POLICIES)}",
    )

    parser.add_argument(
        "--throttle",
        type=str,
        choices=AVAILABLE_THROTTLES,
        help=f"Request pacing: {', '.join(AVAILABLE_THROTTLES)}",
    )

    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Disable the in-memory cache",
    )

    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit logs as JSON lines",
    )

    parser.add_argument(
        "--log-file",
        type=str,
        help="Also write JSON logs (DEBUG and up) to this file",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    details_parser = subparsers.add_parser("details", help="Get app details")
    details_parser.add_argument("app_id", help="Package name, e.g. com.example.app")

    developer_parser = subparsers.add_parser("developer", help="List a developer's apps")
    developer_parser.add_argument("developer_id", help="Developer id or name")
    _add_limit_argument(developer_parser, DEFAULT_LIST_LIMIT)

    similar_parser = subparsers.add_parser("similar", help="List similar apps")
    similar_parser.add_argument("app_id", help="Package name")
    _add_limit_argument(similar_parser, DEFAULT_LIST_LIMIT)

    category_parser = subparsers.add_parser("category", help="List a category chart")
    category_parser.add_argument(
        "category",
        type=str.upper,
        choices=[category.id for category in Category],
        metavar="CATEGORY",
        help="Category id, e.g. GAME_PUZZLE or PRODUCTIVITY",
    )
    category_parser.add_argument(
        "--collection",
        type=str,
        choices=sorted(COLLECTIONS),
        default="top_free",
        help="Chart to list (default: top_free)",
    )
    _add_limit_argument(category_parser, DEFAULT_LIST_LIMIT)

    search_parser = subparsers.add_parser("search", help="Search apps")
    search_parser.add_argument("query", help="Search terms")
    _add_limit_argument(search_parser, DEFAULT_LIST_LIMIT)

    permissions_parser = subparsers.add_parser("permissions", help="List data-safety entries")
    permissions_parser.add_argument("app_id", help="Package name")

    reviews_parser = subparsers.add_parser("reviews", help="Get app reviews")
    reviews_parser.add_argument("app_id", help="Package name")
    reviews_parser.add_argument(
        "--sort",
        type=str,
        choices=sorted(SORT_ORDERS),
        default="newest",
        help="Sort order (default: newest)",
    )
    reviews_parser.add_argument(
        "--stream",
        action="store_true",
        help="Print one JSON review per line as they are read",
    )
    _add_limit_argument(reviews_parser, DEFAULT_REVIEW_LIMIT)

    subparsers.add_parser("config", help="Show the effective configuration")

    return parser


def _add_limit_argument(parser: argparse.ArgumentParser, default: int) -> None:
    parser.add_argument(
        "--limit",
        type=int,
        default=default,
        help=f"Maximum results (default: {default})",
    )


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = create_parser()
    return parser.parse_args(args)


def build_config(args: argparse.Namespace, base: Optional[ScraperConfig] = None) -> ScraperConfig:
    """Apply command-line overrides on top of the environment config."""
    config = base or ScraperConfig.from_env()
    overrides = {}
    if args.lang:
        overrides["language"] = args.lang
    if args.country:
        overrides["country"] = args.country
    if args.retry_policy:
        overrides["retry_policy"] = args.retry_policy
    if args.throttle:
        overrides["throttle"] = args.throttle
    if args.no_cache:
        overrides["enable_cache"] = False
    if args.verbose:
        overrides["log_level"] = LogLevel.DEBUG.name
    return dataclasses.replace(config, **overrides)


def to_json(value: Any, **kwargs) -> str:
    """Serialize records (dataclasses, lists of them) to JSON."""
    if isinstance(value, list):
        value = [dataclasses.asdict(item) for item in value]
    elif dataclasses.is_dataclass(value):
        value = dataclasses.asdict(value)
    return json.dumps(value, default=str, ensure_ascii=False, **kwargs)


async def run_details(args, scraper: PlayStoreScraper, logger: ScraperLogger) -> Any:
    return await scraper.get_app_details(args.app_id)


async def run_developer(args, scraper: PlayStoreScraper, logger: ScraperLogger) -> Any:
    return await scraper.get_developer_apps(args.developer_id, limit=args.limit)


async def run_similar(args, scraper: PlayStoreScraper, logger: ScraperLogger) -> Any:
    return await scraper.get_similar_apps(args.app_id, limit=args.limit)


async def run_category(args, scraper: PlayStoreScraper, logger: ScraperLogger) -> Any:
    return await scraper.get_category_apps(
        Category(args.category),
        COLLECTIONS[args.collection],
        limit=args.limit,
    )


async def run_search(args, scraper: PlayStoreScraper, logger: ScraperLogger) -> Any:
    return await scraper.search_apps(args.query, limit=args.limit)


async def run_permissions(args, scraper: PlayStoreScraper, logger: ScraperLogger) -> Any:
    return await scraper.get_app_permissions(args.app_id)


async def run_reviews(args, scraper: PlayStoreScraper, logger: ScraperLogger) -> Any:
    sort_order = SORT_ORDERS[args.sort]
    if not args.stream:
        return await scraper.get_app_reviews(args.app_id, sort_order, limit=args.limit)

    count = 0
    async for review in scraper.iter_app_reviews(args.app_id, sort_order, limit=args.limit):
        print(to_json(review))
        count += 1
    logger.info(f"Streamed {count} reviews", app_id=args.app_id)
    return None


COMMAND_HANDLERS = {
    "details": run_details,
    "developer": run_developer,
    "similar": run_similar,
    "category": run_category,
    "search": run_search,
    "permissions": run_permissions,
    "reviews": run_reviews,
}


async def main_async(
    args: Optional[List[str]] = None,
    scraper_factory: Callable[[ScraperConfig], PlayStoreScraper] = PlayStoreScraper,
) -> int:
    """Async main entry point."""
    parsed_args = parse_args(args)

    if not parsed_args.command:
        create_parser().print_help()
        return 0

    config = build_config(parsed_args)
    level = LogLevel.from_name(config.log_level)
    configure_logging(
        level=level,
        json_output=parsed_args.json_logs,
        log_file=parsed_args.log_file,
    )
    logger = create_scraper_logger("cli")

    if parsed_args.command == "config":
        print(json.dumps(config.to_dict(), indent=2))
        return 0

    handler = COMMAND_HANDLERS[parsed_args.command]

    try:
        async with scraper_factory(config) as scraper:
            with logger.timed_operation(parsed_args.command) as op_logger:
                result = await handler(parsed_args, scraper, op_logger)
    except ScraperError as e:
        logger.error(f"{e.kind.value} error: {e}", error_kind=e.kind.value)
        return 1
    except ValueError as e:
        logger.error(f"Invalid input: {e}")
        return 1

    if result is not None:
        print(to_json(result, indent=2))
    return 0


def main(args: Optional[List[str]] = None) -> int:
    """Synchronous main entry point."""
    return asyncio.run(main_async(args))


if __name__ == "__main__":
    sys.exit(main())
