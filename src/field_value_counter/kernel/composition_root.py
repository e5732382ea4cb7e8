from __future__ import annotations

from dataclasses import dataclass

from field_value_counter.adapters import factory
from field_value_counter.adapters.counter_store import InMemoryFieldValueCounterStore
from field_value_counter.adapters.json_decoder import JsonRecordDecoder
from field_value_counter.domain.errors import TransformationError
from field_value_counter.domain.messages import Message
from field_value_counter.kernel.runner import Runner
from field_value_counter.observability.logging import LogMessage
from field_value_counter.ports.log_sink import LogSink
from field_value_counter.usecases.config_models import AppConfig
from field_value_counter.usecases.counter_sink import FieldValueCounterSink


@dataclass(frozen=True, slots=True)
class AppRuntime:
    # Small bundle of what a run needs: the runner plus the stores it writes to.
    runner: Runner
    sink: FieldValueCounterSink
    store: InMemoryFieldValueCounterStore
    log_sink: LogSink


def build_runtime(
    *,
    config: AppConfig,
    store: InMemoryFieldValueCounterStore | None = None,
    log_sink: LogSink | None = None,
) -> AppRuntime:
    # Composition root wires adapters from config into the sink and runner.
    counter_store = store if store is not None else InMemoryFieldValueCounterStore()
    logs = log_sink if log_sink is not None else factory.log_sink(config.logging)
    sink = FieldValueCounterSink(
        field_name=config.counter.field_name,
        name_expression=factory.name_expression(config.counter),
        counter_writer=counter_store,
        decoder=JsonRecordDecoder(),
        log_sink=logs,
    )

    def _report_failure(message: Message, exc: TransformationError) -> None:
        logs.emit(
            LogMessage(
                level="error",
                message="Failed to transform message payload",
                fields={"error": str(exc.cause), "headers": dict(message.headers)},
            )
        )

    runner = Runner(handler=sink, on_error=_report_failure)
    return AppRuntime(runner=runner, sink=sink, store=counter_store, log_sink=logs)
