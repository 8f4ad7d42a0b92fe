"""
Apps List Parser Adapter

Parses app listings: developer pages, similar apps, category charts and
search results all share the same item layout.
"""
import logging
from typing import Any, List, Mapping, Optional

from play_scraper.domain.entities import App, details_url
from play_scraper.infrastructure.specs.entity_specs import EntitySpec
from play_scraper.infrastructure.specs.specs_repository import SpecsRepository
from .script_data_parser import ScriptDataParser
from .spec_mapper import MappedRecord, SpecDrivenMapper

logger = logging.getLogger(__name__)


class AppsListParser:
    """Parser for pages that list apps."""

    def __init__(
        self,
        specs_repository: Optional[SpecsRepository] = None,
        script_parser: Optional[ScriptDataParser] = None,
        mapper: Optional[SpecDrivenMapper] = None,
    ):
        self._specs = specs_repository or SpecsRepository()
        self._script_parser = script_parser or ScriptDataParser()
        self._mapper = mapper or SpecDrivenMapper()

    def parse(self, html: str, spec: Optional[EntitySpec] = None) -> List[App]:
        """
        Parse a listing page.

        Args:
            html: Raw page markup
            spec: Collection spec to apply (default: developer/category listing)

        Returns:
            Apps in page order; empty if the listing is absent
        """
        spec = spec or self._specs.get_app_list_spec()
        return self.parse_data(self._script_parser.extract(html), spec)

    def parse_search_results(self, html: str) -> List[App]:
        return self.parse(html, self._specs.get_search_result_spec())

    def parse_similar_apps(self, html: str) -> List[App]:
        return self.parse(html, self._specs.get_similar_apps_spec())

    def parse_data(self, data_sources: Mapping[str, Any], spec: EntitySpec) -> List[App]:
        apps = []
        for record in self._mapper.map_items(spec, data_sources):
            app = self._to_app(record)
            if app is not None:
                apps.append(app)
        return apps

    @staticmethod
    def _to_app(record: MappedRecord) -> Optional[App]:
        # Items without id and title are layout fragments, not apps
        if not record.has("app_id") or not record.has("title"):
            return None

        app_id = record["app_id"]
        score = record["score"]
        price = record["price"]

        return App(
            app_id=app_id,
            title=record["title"],
            summary=record["summary"],
            developer=record["developer"],
            icon_url=record["icon_url"],
            url=details_url(app_id),
            score=score,
            score_text=str(score) if score is not None else None,
            price=price,
            price_text=record["price_text"],
            currency=record["currency"],
            is_free=price is None or price == 0.0,
        )
