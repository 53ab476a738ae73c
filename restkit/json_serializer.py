"""Writing dataclass instances, containers and scalars as compact JSON."""

from __future__ import annotations

import dataclasses
import json
from collections import deque
from collections.abc import Callable
from enum import Enum
from typing import Any, Optional, TextIO

from .errors import RestcError
from .json_properties import SerializeProperties

_SEQUENCE_TYPES = (list, tuple, deque)


def _is_struct(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def is_empty_field(value: Any) -> bool:
    """Return True if ``value`` counts as empty and may be left out.

    Numbers equal to zero (and ``False``), empty strings and empty sequences
    are empty. Mappings and objects never are.
    """
    if isinstance(value, (bool, int, float)):
        return value == 0
    if isinstance(value, (str, *_SEQUENCE_TYPES)):
        return len(value) == 0
    return False


def _serialize_struct(obj: Any, properties: SerializeProperties) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for member in dataclasses.fields(obj):
        name = member.name
        value = getattr(obj, name)
        if properties.ignore_empty_fields and is_empty_field(value):
            continue
        if properties.is_excluded(name):
            continue
        result[properties.map_name_to_json(name)] = to_json_value(value, properties)
    return result


def _serialize_map(obj: dict, properties: SerializeProperties) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in obj.items():
        if not isinstance(key, str):
            raise TypeError(f"Map keys must be strings, not {type(key).__name__}")
        result[key] = to_json_value(value, properties)
    return result


def to_json_value(obj: Any, properties: Optional[SerializeProperties] = None) -> Any:
    """Convert ``obj`` to plain JSON-compatible Python values.

    Dataclass instances become objects with their fields in declaration
    order, honouring the empty-field, exclusion and name-mapping settings of
    ``properties``. Sequences become arrays and string-keyed mappings become
    objects.
    """
    if properties is None:
        properties = SerializeProperties()
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj
    if isinstance(obj, Enum):
        return to_json_value(obj.value, properties)
    if _is_struct(obj):
        return _serialize_struct(obj, properties)
    if isinstance(obj, dict):
        return _serialize_map(obj, properties)
    if isinstance(obj, _SEQUENCE_TYPES):
        return [to_json_value(item, properties) for item in obj]
    raise TypeError(f"Cannot serialize object of type {type(obj).__name__} to JSON")


def _dumps(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def to_json(obj: Any, properties: Optional[SerializeProperties] = None) -> str:
    """Return ``obj`` serialized as a compact JSON string."""
    return _dumps(to_json_value(obj, properties))


def serialize_to_json(
    obj: Any, stream: TextIO, properties: Optional[SerializeProperties] = None
) -> None:
    """Write ``obj`` as compact JSON to the text stream ``stream``."""
    stream.write(to_json(obj, properties))


class _State(Enum):
    PRE = "pre"
    ITERATING = "iterating"
    DONE = "done"


class JsonInserter:
    """Write one object, or a JSON list of objects, through ``write``.

    With ``is_list`` false only a single object may be added. The list is
    closed by :meth:`done`, which also runs when used as a context manager.
    """

    def __init__(
        self,
        write: Callable[[str], Any],
        is_list: bool = False,
        properties: Optional[SerializeProperties] = None,
    ) -> None:
        self._write = write
        self.is_list = is_list
        self.properties = properties if properties is not None else SerializeProperties()
        self._state = _State.PRE
        self._count = 0

    def add(self, value: Any) -> None:
        """Serialize one object to the output."""
        if self._state is _State.DONE:
            raise RestcError("Object is DONE. Cannot Add more data.")
        if not self.is_list and self._count > 0:
            raise RestcError("Only one object can be added when not writing a list.")
        text = to_json(value, self.properties)
        if self._state is _State.PRE:
            if self.is_list:
                self._write("[")
            self._state = _State.ITERATING
        elif self.is_list:
            self._write(",")
        self._write(text)
        self._count += 1

    def done(self) -> None:
        """Mark the serialization as complete, closing the list if one was opened."""
        if self._state is _State.ITERATING and self.is_list:
            self._write("]")
        self._state = _State.DONE

    def __enter__(self) -> "JsonInserter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.done()