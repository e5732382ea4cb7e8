from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from field_value_counter.adapters.json_decoder import JsonRecordDecoder
from field_value_counter.adapters.log_sink import NullLogSink
from field_value_counter.domain.errors import TransformationError
from field_value_counter.domain.field_path import FieldPath
from field_value_counter.domain.messages import CounterIncrement, Message
from field_value_counter.domain.payload import is_collection, text_form
from field_value_counter.domain.reasons import ReasonCode
from field_value_counter.domain.record import Record
from field_value_counter.observability.logging import LogMessage
from field_value_counter.ports.counter_writer import FieldValueCounterWriter
from field_value_counter.ports.decoder import PayloadDecoder
from field_value_counter.ports.log_sink import LogSink
from field_value_counter.ports.name_expression import NameExpression
from field_value_counter.usecases.lookup import Found, Lookup, Missing, lookup_field, resolve_path

# Lookup misses are absorbed here and only surface as log lines.
_MISS_LEVELS: dict[ReasonCode, str] = {
    ReasonCode.MISSING_FIELD: "error",
    ReasonCode.NULL_VALUE: "info",
    ReasonCode.VALUE_NOT_FOUND: "info",
}

_PREVIEW_LIMIT = 256


@dataclass(frozen=True, slots=True)
class FieldValueCounterSink:
    """Counts occurrences of a payload field's values in a named counter.

    Decoded payloads (Records) are walked along the dot-delimited field path,
    flattening lists on the way. Generic mappings and plain objects get a
    single-level lookup of the whole field name. Every resolved scalar, or every
    element of a resolved collection, becomes one ``increment(name, text, 1.0)``
    where text is ``str(value)``, except booleans which render as ``true``/``false``.

    Instances hold only read-only configuration and collaborators, so one sink
    may serve concurrent deliveries.
    """

    field_name: str
    name_expression: NameExpression
    counter_writer: FieldValueCounterWriter
    decoder: PayloadDecoder = field(default_factory=JsonRecordDecoder)
    log_sink: LogSink = field(default_factory=NullLogSink)
    amount: float = 1.0

    def __post_init__(self) -> None:
        # Fail at wiring time rather than on the first message.
        FieldPath.parse(self.field_name)

    def handle(self, message: Message) -> None:
        payload = self._decode(message)
        counter_name = self.compute_counter_name(message)
        if isinstance(payload, Record):
            path = FieldPath.parse(self.field_name)
            outcomes = resolve_path(payload, path)
        else:
            outcomes = iter([lookup_field(payload, self.field_name)])
        self._apply(counter_name, outcomes)

    def compute_counter_name(self, message: Message) -> str:
        # Evaluation errors propagate to the caller untouched.
        return str(self.name_expression.evaluate(message))

    def process_value(self, counter_name: str, value: object) -> None:
        # One writer call per element; no batching, no deduplication.
        elements = list(value) if is_collection(value) else [value]  # type: ignore[call-overload]
        for element in elements:
            if element is None:
                # Null elements are logged and never counted.
                self._log_miss(counter_name, Missing(ReasonCode.NULL_VALUE, self.field_name, value))
                continue
            increment = CounterIncrement(counter_name, text_form(element), self.amount)
            self.counter_writer.increment(increment.counter_name, increment.value, increment.amount)

    def _decode(self, message: Message) -> object:
        payload = message.payload
        if not isinstance(payload, (bytes, bytearray)):
            return payload
        try:
            text = bytes(payload).decode("utf-8")
            return self.decoder.decode(text)
        except Exception as exc:
            raise TransformationError(message, exc) from exc

    def _apply(self, counter_name: str, outcomes: Iterator[Lookup]) -> None:
        for outcome in outcomes:
            if isinstance(outcome, Found):
                self.process_value(counter_name, outcome.value)
            else:
                self._log_miss(counter_name, outcome)

    def _log_miss(self, counter_name: str, miss: Missing) -> None:
        if miss.reason is ReasonCode.MISSING_FIELD:
            text = f"The property '{miss.field}' is not available in the payload"
        elif miss.reason is ReasonCode.NULL_VALUE:
            text = f"The value for the property '{miss.field}' is null. Ignored"
        else:
            text = f"No value found for the path '{miss.field}'. Ignored"
        self.log_sink.emit(
            LogMessage(
                level=_MISS_LEVELS[miss.reason],
                message=text,
                fields={
                    "reason": miss.reason.value,
                    "field": miss.field,
                    "counter": counter_name,
                    "payload": _preview(miss.container),
                },
            )
        )


def _preview(value: object) -> str:
    # Keep log lines bounded for large payloads.
    text = str(value)
    if len(text) > _PREVIEW_LIMIT:
        return text[:_PREVIEW_LIMIT] + "...(truncated)"
    return text
