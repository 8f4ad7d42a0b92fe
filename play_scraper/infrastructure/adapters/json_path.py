"""
Positional JSON Access

Schema-free traversal of decoded JSON (the None/bool/int/float/str/list/dict
values produced by `json.loads`) by an ordered path of indices and keys.

Nothing here raises: a path that does not fit the data resolves to MISSING,
and the typed accessors return None.
"""
from typing import Any, Iterable, List, Optional

from play_scraper.infrastructure.specs.path_spec import Index, Key, to_element


class _Missing:
    """Marker for a path that does not exist in the data."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


def resolve(root: Any, elements: Iterable) -> Any:
    """
    Walk `root` along `elements`.

    Args:
        root: Decoded JSON value.
        elements: PathElement instances, or plain str keys / int indices.

    Returns:
        The value at the end of the path (None for an explicit JSON null),
        or MISSING if any step does not fit.
    """
    current = root
    for raw in elements:
        try:
            element = to_element(raw)
        except ValueError:
            return MISSING

        if isinstance(element, Key) and isinstance(current, dict):
            if element.value not in current:
                return MISSING
            current = current[element.value]
        elif isinstance(element, Index) and isinstance(current, list):
            if element.value >= len(current):
                return MISSING
            current = current[element.value]
        else:
            return MISSING
    return current


def is_missing(value: Any) -> bool:
    return value is MISSING


def as_string(root: Any, elements: Iterable) -> Optional[str]:
    value = resolve(root, elements)
    return value if isinstance(value, str) else None


def as_int(root: Any, elements: Iterable) -> Optional[int]:
    """Integer at path. Whole floats are accepted, booleans are not."""
    value = resolve(root, elements)
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def as_float(root: Any, elements: Iterable) -> Optional[float]:
    value = resolve(root, elements)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    return None


def as_bool(root: Any, elements: Iterable) -> Optional[bool]:
    value = resolve(root, elements)
    return value if isinstance(value, bool) else None


def as_array(root: Any, elements: Iterable) -> Optional[List[Any]]:
    value = resolve(root, elements)
    return value if isinstance(value, list) else None
