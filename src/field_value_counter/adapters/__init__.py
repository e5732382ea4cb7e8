from .counter_store import InMemoryFieldValueCounterStore
from .input_source import FileInputSource
from .json_decoder import JsonRecordDecoder
from .log_sink import JsonlLogSink, NullLogSink, StdoutLogSink
from .name_expression import LiteralName, TemplateNameExpression
from .output_sink import FileOutputSink

# Adapter exports are used by composition code and tests.
__all__ = [
    "FileInputSource",
    "FileOutputSink",
    "InMemoryFieldValueCounterStore",
    "JsonRecordDecoder",
    "JsonlLogSink",
    "LiteralName",
    "NullLogSink",
    "StdoutLogSink",
    "TemplateNameExpression",
]
