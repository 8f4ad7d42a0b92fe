"""
Page parsing adapters.

Provides:
- Positional JSON access (json_path)
- Embedded data block extraction
- EntitySpec-driven field mapping
- Per-entity parsers
"""
from .script_data_parser import ScriptDataParser
from .spec_mapper import MappedRecord, SpecDrivenMapper
from .app_details_parser import AppDetailsParser
from .apps_list_parser import AppsListParser
from .app_reviews_parser import AppReviewsParser
from .permissions_parser import PermissionsParser

__all__ = [
    "ScriptDataParser",
    "MappedRecord",
    "SpecDrivenMapper",
    "AppDetailsParser",
    "AppsListParser",
    "AppReviewsParser",
    "PermissionsParser",
]
