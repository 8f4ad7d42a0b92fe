"""
Path Specifications

Positional addresses into the JSON payloads embedded in store pages.

    path("ds:5", 1, 2, 0, 0)  ->  $['ds:5'][1][2][0][0]

The first element always names the data source; the rest are applied to
that data source's payload.
"""
from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class Index:
    """Array index path element."""
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"Index must be an int, got: {type(self.value).__name__}")
        if self.value < 0:
            raise ValueError(f"Index must be non-negative, got: {self.value}")


@dataclass(frozen=True)
class Key:
    """Object key path element."""
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise ValueError(f"Key must be a str, got: {type(self.value).__name__}")


PathElement = Union[Index, Key]


def to_element(raw) -> PathElement:
    """Coerce an int/str (or an existing element) into a PathElement."""
    if isinstance(raw, (Index, Key)):
        return raw
    if isinstance(raw, str):
        return Key(raw)
    if isinstance(raw, int) and not isinstance(raw, bool):
        return Index(raw)
    raise ValueError(
        f"Path element must be str or int, got: {type(raw).__name__}"
    )


@dataclass(frozen=True)
class PathSpec:
    """
    Ordered, non-empty path starting with the data-source key.

    Immutable and reusable across any number of extractions.
    """
    elements: Tuple[PathElement, ...]

    def __post_init__(self):
        elements = tuple(to_element(e) for e in self.elements)
        if not elements:
            raise ValueError("PathSpec cannot be empty")
        if not isinstance(elements[0], Key):
            raise ValueError("PathSpec must start with a data-source key")
        object.__setattr__(self, "elements", elements)

    @property
    def data_source(self) -> str:
        return self.elements[0].value

    @property
    def relative(self) -> Tuple[PathElement, ...]:
        """Elements after the data-source key."""
        return self.elements[1:]

    def rebase(self, data_source: str) -> "PathSpec":
        """Same relative path against another data source."""
        return PathSpec((Key(data_source),) + self.relative)

    def to_json_path(self) -> str:
        parts = []
        for element in self.elements:
            if isinstance(element, Index):
                parts.append(f"[{element.value}]")
            else:
                parts.append(f"['{element.value}']")
        return "$" + "".join(parts)

    def __str__(self) -> str:
        return self.to_json_path()


def path(*elements) -> PathSpec:
    """Build a PathSpec: path("ds:5", 1, 2, 0, 0)."""
    return PathSpec(tuple(elements))
