from .counter_writer import FieldValueCounterReader, FieldValueCounterWriter
from .decoder import PayloadDecoder
from .input_source import InputSource
from .log_sink import LogSink
from .name_expression import NameExpression
from .output_sink import OutputSink

# Public port exports keep wiring explicit at composition time.
__all__ = [
    "FieldValueCounterReader",
    "FieldValueCounterWriter",
    "InputSource",
    "LogSink",
    "NameExpression",
    "OutputSink",
    "PayloadDecoder",
]
