"""
App Reviews Parser Adapter

Parses the review listing of an app page.
"""
from typing import Any, List, Mapping, Optional

from play_scraper.domain.entities import AppReview, review_url
from play_scraper.infrastructure.specs.specs_repository import SpecsRepository
from .app_details_parser import parse_epoch_seconds
from .script_data_parser import ScriptDataParser
from .spec_mapper import MappedRecord, SpecDrivenMapper

REQUIRED_FIELDS = ("review_id", "user_name", "timestamp", "score")


class AppReviewsParser:
    """Parser for review listings."""

    def __init__(
        self,
        specs_repository: Optional[SpecsRepository] = None,
        script_parser: Optional[ScriptDataParser] = None,
        mapper: Optional[SpecDrivenMapper] = None,
    ):
        self._specs = specs_repository or SpecsRepository()
        self._script_parser = script_parser or ScriptDataParser()
        self._mapper = mapper or SpecDrivenMapper()

    def parse(self, html: str) -> List[AppReview]:
        return self.parse_data(self._script_parser.extract(html))

    def parse_data(self, data_sources: Mapping[str, Any]) -> List[AppReview]:
        spec = self._specs.get_app_review_spec()
        reviews = []
        for record in self._mapper.map_items(spec, data_sources):
            review = self._to_review(record)
            if review is not None:
                reviews.append(review)
        return reviews

    @staticmethod
    def _to_review(record: MappedRecord) -> Optional[AppReview]:
        if not all(record.has(name) for name in REQUIRED_FIELDS):
            return None

        date = parse_epoch_seconds(record["timestamp"])
        if date is None:
            return None

        review_id = record["review_id"]
        score = int(record["score"])

        return AppReview(
            review_id=review_id,
            url=review_url(review_id),
            user_name=record["user_name"],
            user_image=record["user_image"],
            date=date,
            score=score,
            score_text=str(score),
            title=record["title"],
            text=record["text"],
            reply_date=parse_epoch_seconds(record["reply_timestamp"]),
            reply_text=record["reply_text"],
            version=record["version"],
            thumbs_up_count=record["thumbs_up_count"],
            criteria_id=record["criteria_id"],
        )
