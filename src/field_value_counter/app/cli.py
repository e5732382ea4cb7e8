from __future__ import annotations

import argparse
import json
from collections.abc import Sequence
from pathlib import Path

from field_value_counter.adapters import factory
from field_value_counter.adapters.input_source import FileInputSource
from field_value_counter.config.loader import load_config
from field_value_counter.kernel.composition_root import build_runtime
from field_value_counter.observability.logging import LogMessage
from field_value_counter.ports.counter_writer import FieldValueCounterReader
from field_value_counter.ports.output_sink import OutputSink
from field_value_counter.usecases.config_models import AppConfig, CounterConfig, OutputConfig

# Thin shell around the composition root; counting logic lives in usecases.


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Count payload field values from an NDJSON message stream")
    parser.add_argument("--config", required=True, help="Path to YAML config")
    parser.add_argument("--input", required=True, help="Path to input NDJSON file (one message per line)")
    parser.add_argument("--output", help="Override counter report path")
    parser.add_argument("--field-name", help="Override counter.field_name")
    parser.add_argument("--name", help="Override counter.name (clears any name expression)")
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        help="Override logging.level",
    )
    return parser


def parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    # Parse CLI arguments; caller passes argv for testability.
    return build_parser().parse_args(argv)


def apply_counter_overrides(config: AppConfig, args: argparse.Namespace) -> None:
    # CLI overrides take precedence over config; the section is re-validated.
    if args.field_name is None and args.name is None:
        return
    data = config.counter.model_dump()
    if args.field_name is not None:
        data["field_name"] = args.field_name
    if args.name is not None:
        data["name"] = args.name
        data["name_expression"] = None
    config.counter = CounterConfig.model_validate(data)


def apply_output_override(config: AppConfig, args: argparse.Namespace) -> None:
    if args.output is None:
        return
    if config.output is None:
        config.output = OutputConfig(file_path=args.output)
    else:
        config.output.file_path = args.output


def apply_logging_override(config: AppConfig, args: argparse.Namespace) -> None:
    if args.log_level is not None:
        config.logging.level = args.log_level


def write_report(reader: FieldValueCounterReader, sink: OutputSink) -> int:
    # One JSON line per counter, names in sorted order.
    written = 0
    for name in reader.list_names():
        counter = reader.find(name)
        if counter is None:
            continue
        sink.write_line(
            json.dumps({"name": counter.name, "values": dict(counter.values)}, separators=(",", ":"), ensure_ascii=False)
        )
        written += 1
    sink.close()
    return written


def run(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    config = load_config(Path(args.config))
    apply_counter_overrides(config, args)
    apply_output_override(config, args)
    apply_logging_override(config, args)

    runtime = build_runtime(config=config)
    try:
        stats = runtime.runner.run(FileInputSource(Path(args.input)).read())
        runtime.log_sink.emit(
            LogMessage(
                level="info",
                message="Run finished",
                fields={"delivered": stats.delivered, "failed": stats.failed},
            )
        )
        if config.output is not None:
            write_report(runtime.store, factory.output_sink(config.output))
    finally:
        close = getattr(runtime.log_sink, "close", None)
        if callable(close):
            close()
    return 0
