"""
App Details Parser Adapter

Builds AppDetails from a detail page. Field positions come from the
app-details EntitySpec; this module only applies the per-field policies:
defaults, composite fields and derived fields.
"""
import logging
from datetime import date, datetime, timezone
from typing import Any, Mapping, Optional

from play_scraper.domain.entities import AppDetails, RatingHistogram, details_url
from play_scraper.domain.errors import ParseError
from play_scraper.infrastructure.specs.specs_repository import SpecsRepository
from .script_data_parser import ScriptDataParser
from .spec_mapper import MappedRecord, SpecDrivenMapper

logger = logging.getLogger(__name__)

HISTOGRAM_FIELDS = (
    "histogram.one_star",
    "histogram.two_star",
    "histogram.three_star",
    "histogram.four_star",
    "histogram.five_star",
)

FREE_PRICE_TEXT = "Free"


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def parse_epoch_seconds(value: Optional[int]) -> Optional[datetime]:
    if value is None:
        return None
    try:
        return datetime.fromtimestamp(value, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


class AppDetailsParser:
    """
    Parser for app detail pages.

    Usage:
        parser = AppDetailsParser()
        details = parser.parse("com.example.app", html)
    """

    def __init__(
        self,
        specs_repository: Optional[SpecsRepository] = None,
        script_parser: Optional[ScriptDataParser] = None,
        mapper: Optional[SpecDrivenMapper] = None,
    ):
        self._specs = specs_repository or SpecsRepository()
        self._script_parser = script_parser or ScriptDataParser()
        self._mapper = mapper or SpecDrivenMapper()

    def parse(self, app_id: str, html: str, strict: bool = False) -> AppDetails:
        """
        Parse a detail page.

        Args:
            app_id: Package name the page was requested for
            html: Raw page markup
            strict: Raise ParseError when the details block is absent
                instead of returning a defaulted record

        Raises:
            ParseError: Only in strict mode
        """
        data_sources = self._script_parser.extract(html)
        spec = self._specs.get_app_details_spec()
        if strict and spec.data_source not in data_sources:
            raise ParseError(
                f"Details block {spec.data_source} not found for {app_id}",
                html_sample=html,
            )
        return self.parse_data(app_id, data_sources)

    def parse_data(self, app_id: str, data_sources: Mapping[str, Any]) -> AppDetails:
        """Build AppDetails from already decoded data blocks."""
        spec = self._specs.get_app_details_spec()
        record = self._mapper.map(spec, data_sources)

        if record.missing:
            logger.debug(
                f"{app_id}: {len(record.missing)} of {len(spec.fields)} fields unresolved"
            )

        score = record["score"]
        price = record["price"]
        is_free = self._is_free(record)

        return AppDetails(
            app_id=app_id,
            url=details_url(app_id),
            title=record["title"],
            description_html=record["description_html"],
            summary=record["summary"],
            installs=record["installs"],
            min_installs=record["min_installs"],
            max_installs=record["max_installs"],
            score=score,
            score_text=str(score) if score is not None else None,
            ratings=record["ratings"],
            reviews=record["reviews"],
            histogram=self._histogram(record),
            price=price,
            price_text=FREE_PRICE_TEXT if is_free else record["price_text"],
            currency=record["currency"],
            is_free=is_free,
            offers_iap=record.has("iap_range"),
            iap_range=record["iap_range"],
            icon_url=record["icon_url"],
            header_image=record["header_image"],
            screenshots=record["screenshots"],
            video=record["video"],
            video_image=record["video_image"],
            developer=record["developer"],
            developer_id=record["developer_id"],
            developer_email=record["developer_email"],
            developer_website=record["developer_website"],
            developer_address=record["developer_address"],
            genre=record["genre"],
            genre_id=record["genre_id"],
            family_genre=record["family_genre"],
            family_genre_id=record["family_genre_id"],
            app_size=record["app_size"],
            android_version=record["android_version"],
            content_rating=record["content_rating"],
            content_rating_description=record["content_rating_description"],
            ad_supported=record["ad_supported"],
            contains_ads=record["contains_ads"],
            release_date=parse_iso_date(record["release_date"]),
            last_update=parse_epoch_seconds(record["last_update"]),
            current_version=record["current_version"],
            recent_changes=record["recent_changes"],
            privacy_policy=record["privacy_policy"],
            similar_apps=record["similar_apps"],
            missing_fields=tuple(sorted(record.missing)),
        )

    @staticmethod
    def _histogram(record: MappedRecord) -> Optional[RatingHistogram]:
        # All five buckets or nothing
        if not all(record.has(name) for name in HISTOGRAM_FIELDS):
            return None
        one, two, three, four, five = (record[name] for name in HISTOGRAM_FIELDS)
        return RatingHistogram(
            one_star=one,
            two_star=two,
            three_star=three,
            four_star=four,
            five_star=five,
        )

    @staticmethod
    def _is_free(record: MappedRecord) -> bool:
        # An explicit flag wins; otherwise no price (or zero) means free
        if record.has("is_free"):
            return record["is_free"]
        price = record["price"]
        return price is None or price == 0
