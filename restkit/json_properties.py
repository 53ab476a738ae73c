"""Options that control how objects are written to and read from JSON."""

from __future__ import annotations

from collections.abc import Collection, Iterable
from dataclasses import dataclass, field
from typing import NamedTuple, Optional

from .errors import ConstraintException

DEFAULT_MAX_MEMORY_CONSUMPTION = 1024 * 1024
_MAX_MEMORY_LIMIT = 0xFFFFFFFF


class FieldNameEntry(NamedTuple):
    """One pair of an attribute name and the JSON name it maps to."""

    native_name: str
    json_name: str


class JsonFieldMapping:
    """Mapping between attribute names and JSON property names.

    Names without an entry map to themselves. When several entries match,
    the first one wins.
    """

    def __init__(self, entries: Iterable[tuple[str, str]] = ()) -> None:
        self.entries: list[FieldNameEntry] = [
            FieldNameEntry(native, json_name) for native, json_name in entries
        ]

    def to_json_name(self, name: str) -> str:
        """Return the JSON name for the attribute ``name``."""
        return next(
            (entry.json_name for entry in self.entries if entry.native_name == name),
            name,
        )

    def to_native_name(self, name: str) -> str:
        """Return the attribute name for the JSON property ``name``."""
        return next(
            (entry.native_name for entry in self.entries if entry.json_name == name),
            name,
        )

    def __repr__(self) -> str:
        pairs = ", ".join(f"({e.native_name!r}, {e.json_name!r})" for e in self.entries)
        return f"JsonFieldMapping([{pairs}])"


@dataclass
class SerializeProperties:
    """Settings shared by the JSON serializer and deserializer.

    ``max_memory_consumption`` is a budget in bytes for data read from JSON;
    it must fit in an unsigned 32-bit value.
    """

    ignore_empty_fields: bool = True
    ignore_unknown_properties: bool = True
    max_memory_consumption: int = DEFAULT_MAX_MEMORY_CONSUMPTION
    excluded_names: Optional[Collection[str]] = None
    name_mapping: Optional[JsonFieldMapping] = field(default=None)

    def __post_init__(self) -> None:
        self.set_max_memory_consumption(self.max_memory_consumption)

    def is_excluded(self, name: str) -> bool:
        """Return True if ``name`` is among the excluded names."""
        return self.excluded_names is not None and name in self.excluded_names

    def map_name_to_json(self, name: str) -> str:
        """Return the JSON name for ``name``, applying the mapping if any."""
        if self.name_mapping is None:
            return name
        return self.name_mapping.to_json_name(name)

    def set_max_memory_consumption(self, value: int) -> None:
        """Set the memory budget, rejecting values outside 0..0xffffffff."""
        if value < 0 or value > _MAX_MEMORY_LIMIT:
            raise ConstraintException("Memory contraint value is out of limit")
        self.max_memory_consumption = int(value)