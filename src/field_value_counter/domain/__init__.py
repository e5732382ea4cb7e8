from .errors import DecodeError, TransformationError
from .field_path import FieldPath
from .messages import CounterIncrement, FieldValueCounter, Message
from .payload import (
    FieldReadable,
    ListValue,
    MapValue,
    ObjectValue,
    PayloadValue,
    RecordValue,
    ScalarValue,
    classify,
    field_reader,
    is_collection,
    text_form,
)
from .reasons import ReasonCode
from .record import Record

# Public domain exports keep imports explicit across layers.
__all__ = [
    "CounterIncrement",
    "DecodeError",
    "FieldPath",
    "FieldReadable",
    "FieldValueCounter",
    "ListValue",
    "MapValue",
    "Message",
    "ObjectValue",
    "PayloadValue",
    "ReasonCode",
    "Record",
    "RecordValue",
    "ScalarValue",
    "TransformationError",
    "classify",
    "field_reader",
    "is_collection",
    "text_form",
]
