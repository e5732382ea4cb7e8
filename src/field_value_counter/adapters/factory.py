from __future__ import annotations

from pathlib import Path

from field_value_counter.adapters.log_sink import JsonlLogSink, NullLogSink, StdoutLogSink
from field_value_counter.adapters.name_expression import LiteralName, TemplateNameExpression
from field_value_counter.adapters.output_sink import FileOutputSink
from field_value_counter.ports.log_sink import LogSink
from field_value_counter.ports.name_expression import NameExpression
from field_value_counter.usecases.config_models import CounterConfig, LoggingConfig, OutputConfig


def name_expression(config: CounterConfig) -> NameExpression:
    # Expression when configured, otherwise the literal counter name.
    source = config.computed_name_expression
    if source is not None:
        return TemplateNameExpression(source)
    return LiteralName(config.name)


def log_sink(config: LoggingConfig) -> LogSink:
    if config.sink == "none":
        return NullLogSink()
    if config.sink == "jsonl":
        assert config.path is not None
        return JsonlLogSink(Path(config.path), min_level=config.level)
    return StdoutLogSink(min_level=config.level)


def output_sink(config: OutputConfig) -> FileOutputSink:
    return FileOutputSink(path=Path(config.file_path), atomic_replace=config.atomic_replace)
