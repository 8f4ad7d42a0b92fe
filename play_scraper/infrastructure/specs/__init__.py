"""
Declarative page specifications.

Provides:
- PathSpec and its Index/Key elements
- FieldSpec / EntitySpec
- SpecsRepository with the current store layout
"""
from .path_spec import Index, Key, PathSpec, path
from .entity_specs import EntitySpec, FieldKind, FieldSpec
from .specs_repository import SpecsRepository

__all__ = [
    "Index",
    "Key",
    "PathSpec",
    "path",
    "EntitySpec",
    "FieldKind",
    "FieldSpec",
    "SpecsRepository",
]
