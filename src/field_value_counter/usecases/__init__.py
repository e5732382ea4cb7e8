from .counter_sink import FieldValueCounterSink
from .lookup import Found, Lookup, Missing, lookup_field, resolve_path

__all__ = ["FieldValueCounterSink", "Found", "Lookup", "Missing", "lookup_field", "resolve_path"]
