"""
Spec-Driven Mapper

Turns decoded data blocks into field values by walking the paths declared in
an EntitySpec. Extraction is best-effort: an unresolved or wrongly typed
field takes its declared default and is reported in `missing`, it never
raises.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterator, Mapping

from play_scraper.infrastructure.specs.entity_specs import (
    EntitySpec,
    FieldKind,
    FieldSpec,
)
from . import json_path

logger = logging.getLogger(__name__)

_ACCESSORS = {
    FieldKind.STRING: json_path.as_string,
    FieldKind.INTEGER: json_path.as_int,
    FieldKind.FLOAT: json_path.as_float,
    FieldKind.BOOLEAN: json_path.as_bool,
    FieldKind.ARRAY: json_path.as_array,
}


@dataclass(frozen=True)
class MappedRecord:
    """Field values extracted for one record."""
    values: Dict[str, Any] = field(default_factory=dict)
    resolved: FrozenSet[str] = frozenset()
    missing: FrozenSet[str] = frozenset()

    def __getitem__(self, name: str) -> Any:
        return self.values[name]

    def get(self, name: str, default: Any = None) -> Any:
        return self.values.get(name, default)

    def has(self, name: str) -> bool:
        """True if the field resolved on the page."""
        return name in self.resolved


def extract_field(spec: FieldSpec, root: Any) -> Any:
    """
    Resolve a single field against `root` (its path's data-source payload,
    or a collection element).

    Returns:
        The typed value, or None when absent or wrongly typed
    """
    elements = spec.path.relative
    if spec.kind is FieldKind.STRING_LIST:
        array = json_path.as_array(root, elements)
        if array is None:
            return None
        strings = (json_path.as_string(item, spec.element_path) for item in array)
        return tuple(s for s in strings if s is not None)
    return _ACCESSORS[spec.kind](root, elements)


class SpecDrivenMapper:
    """
    Maps data-source blocks to field values for an EntitySpec.

    Stateless; one instance can be shared by every parser.
    """

    def map(self, spec: EntitySpec, data_sources: Mapping[str, Any]) -> MappedRecord:
        """
        Map a page entity.

        Each field is resolved against the block its path names. A block
        that is not on the page behaves like an empty object.
        """
        if spec.data_source not in data_sources:
            logger.warning(
                f"Data source {spec.data_source} for '{spec.name}' not found on page"
            )

        values: Dict[str, Any] = {}
        resolved = set()
        for field_spec in spec.fields:
            root = data_sources.get(field_spec.path.data_source, {})
            value = extract_field(field_spec, root)
            if value is None:
                values[field_spec.name] = field_spec.default
            else:
                values[field_spec.name] = value
                resolved.add(field_spec.name)

        return self._record(spec, values, resolved)

    def map_items(
        self, spec: EntitySpec, data_sources: Mapping[str, Any]
    ) -> Iterator[MappedRecord]:
        """
        Map every element of a collection entity.

        Yields nothing when the collection is absent.
        """
        if spec.items is None:
            raise ValueError(f"Spec '{spec.name}' is not a collection spec")

        root = data_sources.get(spec.data_source, {})
        elements = json_path.as_array(root, spec.items.relative)
        if elements is None:
            logger.debug(f"No items for '{spec.name}' at {spec.items}")
            return

        for element in elements:
            yield self.map_element(spec, element)

    def map_element(self, spec: EntitySpec, element: Any) -> MappedRecord:
        values: Dict[str, Any] = {}
        resolved = set()
        for field_spec in spec.fields:
            value = extract_field(field_spec, element)
            if value is None:
                values[field_spec.name] = field_spec.default
            else:
                values[field_spec.name] = value
                resolved.add(field_spec.name)
        return self._record(spec, values, resolved)

    @staticmethod
    def _record(spec: EntitySpec, values: Dict[str, Any], resolved: set) -> MappedRecord:
        return MappedRecord(
            values=values,
            resolved=frozenset(resolved),
            missing=frozenset(spec.field_names) - frozenset(resolved),
        )
