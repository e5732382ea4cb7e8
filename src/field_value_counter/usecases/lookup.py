from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union

from field_value_counter.domain.field_path import FieldPath
from field_value_counter.domain.payload import ListValue, MapValue, RecordValue, classify, field_reader
from field_value_counter.domain.reasons import ReasonCode


@dataclass(frozen=True, slots=True)
class Found:
    value: object


@dataclass(frozen=True, slots=True)
class Missing:
    # Why nothing was counted, plus where: the field/path and the value it was looked up in.
    reason: ReasonCode
    field: str
    container: object


Lookup = Union[Found, Missing]


def lookup_field(payload: object, field_name: str) -> Lookup:
    """Single-level lookup for generic mappings and plain objects.

    The whole field name is one key here, dots included.
    """
    reader = field_reader(payload)
    if not reader.has_field(field_name):
        return Missing(ReasonCode.MISSING_FIELD, field_name, payload)
    value = reader.read_field(field_name)
    if value is None:
        return Missing(ReasonCode.NULL_VALUE, field_name, payload)
    return Found(value)


def resolve_path(value: object, path: FieldPath) -> Iterator[Lookup]:
    """Walk path through Records, mappings and lists.

    Lists are flattened: every item is matched against the same remaining path.
    Yields one Found per matched leaf and one Missing per subtree that dead-ends,
    in document order. A list that yields no Found at all, empty lists included,
    is itself reported as a Missing.
    """
    shape = classify(value)
    if isinstance(shape, ListValue):
        matched = False
        for item in shape.items:
            for outcome in resolve_path(item, path):
                matched = matched or isinstance(outcome, Found)
                yield outcome
        if not matched:
            yield Missing(ReasonCode.VALUE_NOT_FOUND, str(path), value)
        return

    key = path.head
    result: object = None
    if isinstance(shape, RecordValue):
        if shape.record.has_field(key):
            result = shape.record.read_field(key)
    elif isinstance(shape, MapValue):
        result = shape.mapping.get(key)

    if result is None:
        yield Missing(ReasonCode.VALUE_NOT_FOUND, str(path), value)
        return
    if path.is_last:
        yield Found(result)
        return
    yield from resolve_path(result, path.tail())
