"""
Permissions Parser Adapter

Parses the data-safety page of an app into Permission entries.
"""
from typing import Any, List, Mapping, Optional

from play_scraper.domain.entities import Permission
from play_scraper.infrastructure.specs.specs_repository import SpecsRepository
from .script_data_parser import ScriptDataParser
from .spec_mapper import SpecDrivenMapper


class PermissionsParser:
    """Parser for data-safety pages."""

    def __init__(
        self,
        specs_repository: Optional[SpecsRepository] = None,
        script_parser: Optional[ScriptDataParser] = None,
        mapper: Optional[SpecDrivenMapper] = None,
    ):
        self._specs = specs_repository or SpecsRepository()
        self._script_parser = script_parser or ScriptDataParser()
        self._mapper = mapper or SpecDrivenMapper()

    def parse(self, html: str) -> List[Permission]:
        return self.parse_data(self._script_parser.extract(html))

    def parse_data(self, data_sources: Mapping[str, Any]) -> List[Permission]:
        spec = self._specs.get_permission_spec()
        return [
            Permission(type=record["type"], description=record["description"])
            for record in self._mapper.map_items(spec, data_sources)
            if record.has("type")
        ]
