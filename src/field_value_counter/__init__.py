from .domain import CounterIncrement, FieldPath, Message, Record, TransformationError
from .usecases import FieldValueCounterSink

__all__ = ["CounterIncrement", "FieldPath", "FieldValueCounterSink", "Message", "Record", "TransformationError"]
