from __future__ import annotations

import dataclasses
from collections.abc import Collection, Mapping, Sequence
from dataclasses import dataclass
from typing import Protocol, Union, runtime_checkable

from pydantic import BaseModel

from .record import Record

# Text-like values are scalars even though they are sequences.
_TEXT_TYPES = (str, bytes, bytearray)


@runtime_checkable
class FieldReadable(Protocol):
    # Capability for named-field reads; Records implement it natively.
    def has_field(self, name: str) -> bool:
        """Return True when the named field can be read."""
        raise NotImplementedError("FieldReadable is a protocol; use a concrete reader.")

    def read_field(self, name: str) -> object:
        """Return the value of a readable field (may be None)."""
        raise NotImplementedError("FieldReadable is a protocol; use a concrete reader.")


@dataclass(frozen=True, slots=True)
class ScalarValue:
    value: object


@dataclass(frozen=True, slots=True)
class ListValue:
    items: tuple[object, ...]


@dataclass(frozen=True, slots=True)
class RecordValue:
    record: Record


@dataclass(frozen=True, slots=True)
class MapValue:
    mapping: Mapping[object, object]


@dataclass(frozen=True, slots=True)
class ObjectValue:
    target: object


PayloadValue = Union[ScalarValue, ListValue, RecordValue, MapValue, ObjectValue]


def classify(value: object) -> PayloadValue:
    # Order matters: Record is a Mapping, and str/bytes are Sequences.
    if isinstance(value, Record):
        return RecordValue(value)
    if isinstance(value, Mapping):
        return MapValue(value)
    if isinstance(value, _TEXT_TYPES):
        return ScalarValue(value)
    if isinstance(value, Sequence):
        return ListValue(tuple(value))
    if value is None or isinstance(value, (int, float, complex)):
        return ScalarValue(value)
    return ObjectValue(value)


def is_collection(value: object) -> bool:
    # Collections fan out into one increment per element; mappings and text do not.
    if isinstance(value, (_TEXT_TYPES, Mapping)):
        return False
    return isinstance(value, Collection)


@dataclass(frozen=True, slots=True)
class MappingFields:
    # FieldReadable over a generic mapping: a key is readable when present.
    mapping: Mapping[object, object]

    def has_field(self, name: str) -> bool:
        return name in self.mapping

    def read_field(self, name: str) -> object:
        return self.mapping[name]


@dataclass(frozen=True, slots=True)
class AttributeFields:
    """FieldReadable over an arbitrary object.

    Readable fields are dataclass fields, pydantic model fields, or public
    attributes and properties that are not callables. Only a single field name is
    read; nested paths are never walked through opaque objects.
    """

    target: object

    def has_field(self, name: str) -> bool:
        if not name or name.startswith("_"):
            return False
        target = self.target
        if dataclasses.is_dataclass(target) and not isinstance(target, type):
            if name in {f.name for f in dataclasses.fields(target)}:
                return True
        if isinstance(target, BaseModel) and name in type(target).model_fields:
            return True
        try:
            value = getattr(target, name)
        except AttributeError:
            return False
        return not callable(value)

    def read_field(self, name: str) -> object:
        return getattr(self.target, name)


def field_reader(value: object) -> FieldReadable:
    # Objects that already implement the capability are used as-is.
    if isinstance(value, Record):
        return value
    if isinstance(value, Mapping):
        return MappingFields(value)
    if isinstance(value, FieldReadable):
        return value
    return AttributeFields(value)


def text_form(value: object) -> str:
    # Booleans render as JSON spells them so counter keys match other JSON-fed writers.
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
