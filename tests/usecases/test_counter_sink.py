from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import pytest

from field_value_counter.adapters.counter_store import InMemoryFieldValueCounterStore
from field_value_counter.adapters.name_expression import LiteralName, TemplateNameExpression
from field_value_counter.domain.errors import DecodeError, TransformationError
from field_value_counter.domain.messages import Message
from field_value_counter.domain.record import Record
from field_value_counter.observability.logging import LogMessage
from field_value_counter.usecases.counter_sink import FieldValueCounterSink


class _RecordingWriter:
    # Captures increments in call order.
    def __init__(self) -> None:
        self.calls: list[tuple[str, str, float]] = []

    def increment(self, name: str, value: str, amount: float) -> None:
        self.calls.append((name, value, amount))

    def decrement(self, name: str, value: str, amount: float) -> None:
        raise AssertionError("sink must never decrement")

    def reset(self, name: str, value: str) -> None:
        raise AssertionError("sink must never reset")


class _RecordingLogs:
    def __init__(self) -> None:
        self.messages: list[LogMessage] = []

    def emit(self, message: LogMessage) -> None:
        self.messages.append(message)


@dataclass
class _Car:
    color: str | None
    doors: int = 4


def _sink(field_name: str, name: str = "colors") -> tuple[FieldValueCounterSink, _RecordingWriter, _RecordingLogs]:
    writer = _RecordingWriter()
    logs = _RecordingLogs()
    sink = FieldValueCounterSink(
        field_name=field_name,
        name_expression=LiteralName(name),
        counter_writer=writer,
        log_sink=logs,
    )
    return sink, writer, logs


def _bytes(payload: object) -> Message:
    return Message(payload=json.dumps(payload).encode("utf-8"))


def test_top_level_scalar_from_bytes_counts_once() -> None:
    sink, writer, logs = _sink("color")
    sink.handle(_bytes({"color": "red", "size": 10}))
    assert writer.calls == [("colors", "red", 1.0)]
    assert logs.messages == []


def test_generic_map_payload_counts_once() -> None:
    sink, writer, _ = _sink("color")
    sink.handle(Message(payload={"color": "red", "size": 10}))
    assert writer.calls == [("colors", "red", 1.0)]


def test_numeric_values_use_their_text_form() -> None:
    sink, writer, _ = _sink("size", name="sizes")
    sink.handle(_bytes({"size": 10}))
    sink.handle(_bytes({"size": 2.5}))
    assert writer.calls == [("sizes", "10", 1.0), ("sizes", "2.5", 1.0)]


def test_list_of_scalars_counts_each_element_without_dedup() -> None:
    sink, writer, _ = _sink("tags", name="tags")
    sink.handle(_bytes({"tags": ["a", "b", "a"]}))
    assert writer.calls == [("tags", "a", 1.0), ("tags", "b", 1.0), ("tags", "a", 1.0)]


def test_list_in_map_payload_counts_each_element() -> None:
    sink, writer, _ = _sink("tags", name="tags")
    sink.handle(Message(payload={"tags": ("x", "y")}))
    assert writer.calls == [("tags", "x", 1.0), ("tags", "y", 1.0)]


def test_list_on_the_path_is_flattened() -> None:
    sink, writer, _ = _sink("items.price", name="prices")
    sink.handle(_bytes({"items": [{"price": 5}, {"price": 7}]}))
    assert writer.calls == [("prices", "5", 1.0), ("prices", "7", 1.0)]


def test_multi_segment_path_resolves_nested_records() -> None:
    sink, writer, _ = _sink("a.b.c", name="deep")
    sink.handle(_bytes({"a": {"b": {"c": "hit"}}}))
    assert writer.calls == [("deep", "hit", 1.0)]


def test_missing_intermediate_segment_counts_nothing() -> None:
    sink, writer, logs = _sink("a.b.c", name="deep")
    sink.handle(_bytes({"a": {"x": {"c": "hit"}}}))
    assert writer.calls == []
    assert len(logs.messages) == 1
    assert logs.messages[0].level == "info"
    assert logs.messages[0].fields["reason"] == "VALUE_NOT_FOUND"


def test_null_field_in_record_logs_info_and_counts_nothing() -> None:
    sink, writer, logs = _sink("color")
    sink.handle(_bytes({"color": None}))
    assert writer.calls == []
    assert [m.level for m in logs.messages] == ["info"]


def test_null_field_in_map_logs_info_and_counts_nothing() -> None:
    sink, writer, logs = _sink("color")
    sink.handle(Message(payload={"color": None}))
    assert writer.calls == []
    assert len(logs.messages) == 1
    assert logs.messages[0].level == "info"
    assert logs.messages[0].fields["reason"] == "NULL_VALUE"


def test_missing_key_in_map_logs_error_and_counts_nothing() -> None:
    sink, writer, logs = _sink("color")
    sink.handle(Message(payload={"size": 10}))
    assert writer.calls == []
    assert len(logs.messages) == 1
    message = logs.messages[0]
    assert message.level == "error"
    assert message.fields["reason"] == "MISSING_FIELD"
    assert message.fields["counter"] == "colors"
    assert "color" in message.message


def test_map_payload_is_not_path_split() -> None:
    # Generic mappings get a single-level lookup even when the field name has dots.
    sink, writer, logs = _sink("a.b")
    sink.handle(Message(payload={"a": {"b": "nested"}, "a.b": "flat"}))
    assert writer.calls == [("colors", "flat", 1.0)]

    sink.handle(Message(payload={"a": {"b": "nested"}}))
    assert writer.calls == [("colors", "flat", 1.0)]
    assert logs.messages[-1].level == "error"


def test_object_payload_reads_property() -> None:
    sink, writer, _ = _sink("color")
    sink.handle(Message(payload=_Car("blue")))
    assert writer.calls == [("colors", "blue", 1.0)]


def test_object_payload_without_property_logs_error() -> None:
    sink, writer, logs = _sink("wheels")
    sink.handle(Message(payload=_Car("blue")))
    assert writer.calls == []
    assert logs.messages[0].level == "error"


def test_object_payload_null_property_logs_info() -> None:
    sink, writer, logs = _sink("color")
    sink.handle(Message(payload=_Car(None)))
    assert writer.calls == []
    assert logs.messages[0].level == "info"


def test_already_decoded_record_payload_walks_path() -> None:
    sink, writer, _ = _sink("a.b")
    sink.handle(Message(payload=Record({"a": Record({"b": "x"})})))
    assert writer.calls == [("colors", "x", 1.0)]


def test_malformed_bytes_raise_transformation_error() -> None:
    sink, writer, _ = _sink("color")
    message = Message(payload=b"{not json")
    with pytest.raises(TransformationError) as info:
        sink.handle(message)
    assert info.value.source_message is message
    assert isinstance(info.value.cause, DecodeError)
    assert writer.calls == []


def test_invalid_utf8_raises_transformation_error() -> None:
    sink, writer, _ = _sink("color")
    with pytest.raises(TransformationError) as info:
        sink.handle(Message(payload=b"\xff\xfe"))
    assert isinstance(info.value.cause, UnicodeDecodeError)
    assert writer.calls == []


def test_counter_name_comes_from_expression() -> None:
    writer = _RecordingWriter()
    sink = FieldValueCounterSink(
        field_name="color",
        name_expression=TemplateNameExpression("{{ headers.topic }}"),
        counter_writer=writer,
    )
    sink.handle(Message(payload=b'{"color": "red"}', headers={"topic": "paint"}))
    assert writer.calls == [("paint", "red", 1.0)]


def test_expression_failure_propagates() -> None:
    class _Broken:
        def evaluate(self, message: Message) -> str:
            raise RuntimeError("bad expression")

    writer = _RecordingWriter()
    sink = FieldValueCounterSink(field_name="color", name_expression=_Broken(), counter_writer=writer)
    with pytest.raises(RuntimeError, match="bad expression"):
        sink.handle(Message(payload=b'{"color": "red"}'))
    assert writer.calls == []


def test_decode_failure_wins_over_expression_failure() -> None:
    # Decoding runs before the counter name is computed.
    writer = _RecordingWriter()
    sink = FieldValueCounterSink(
        field_name="color",
        name_expression=TemplateNameExpression("{{ headers.topic }}"),
        counter_writer=writer,
    )
    with pytest.raises(TransformationError):
        sink.handle(Message(payload=b"nope"))


def test_mapping_value_counts_as_one_text_form() -> None:
    sink, writer, _ = _sink("tags", name="tags")
    sink.process_value("tags", {"k": "v"})
    assert writer.calls == [("tags", "{'k': 'v'}", 1.0)]


def test_null_elements_in_list_are_logged_not_counted() -> None:
    sink, writer, logs = _sink("tags", name="tags")
    sink.handle(_bytes({"tags": ["a", None, 3]}))
    assert writer.calls == [("tags", "a", 1.0), ("tags", "3", 1.0)]
    assert len(logs.messages) == 1
    assert logs.messages[0].level == "info"
    assert logs.messages[0].fields["reason"] == "NULL_VALUE"
    assert logs.messages[0].fields["field"] == "tags"


def test_booleans_count_as_json_literals() -> None:
    sink, writer, _ = _sink("flag", name="flags")
    sink.handle(_bytes({"flag": True}))
    sink.handle(_bytes({"flag": False}))
    sink.handle(Message(payload={"flag": [True, 1]}))
    assert writer.calls == [
        ("flags", "true", 1.0),
        ("flags", "false", 1.0),
        ("flags", "true", 1.0),
        ("flags", "1", 1.0),
    ]


def test_empty_list_on_the_path_logs_a_miss() -> None:
    sink, writer, logs = _sink("items.price", name="prices")
    sink.handle(_bytes({"items": []}))
    assert writer.calls == []
    assert len(logs.messages) == 1
    assert logs.messages[0].level == "info"
    assert logs.messages[0].fields["reason"] == "VALUE_NOT_FOUND"
    assert logs.messages[0].fields["field"] == "price"


def test_list_without_any_match_logs_each_item_and_the_list() -> None:
    sink, writer, logs = _sink("items.price", name="prices")
    sink.handle(_bytes({"items": [{"name": "x"}]}))
    assert writer.calls == []
    assert [m.fields["reason"] for m in logs.messages] == ["VALUE_NOT_FOUND", "VALUE_NOT_FOUND"]


def test_partially_matching_list_logs_only_dead_ends() -> None:
    sink, writer, logs = _sink("items.price", name="prices")
    sink.handle(_bytes({"items": [{"price": 5}, {"name": "x"}]}))
    assert writer.calls == [("prices", "5", 1.0)]
    assert len(logs.messages) == 1


def test_invalid_field_name_fails_at_construction() -> None:
    with pytest.raises(ValueError):
        _sink(" . ")


def test_handle_does_not_mutate_payload() -> None:
    sink, _, _ = _sink("items.price")
    payload = {"items": [{"price": 5}]}
    record = Record({"items": [Record({"price": 5})]})
    sink.handle(Message(payload=payload))
    sink.handle(Message(payload=record))
    assert payload == {"items": [{"price": 5}]}
    assert record == Record({"items": [Record({"price": 5})]})


def test_concurrent_deliveries_share_one_sink() -> None:
    store = InMemoryFieldValueCounterStore()
    sink = FieldValueCounterSink(field_name="color", name_expression=LiteralName("colors"), counter_writer=store)
    messages = [_bytes({"color": "red" if i % 2 else "blue"}) for i in range(200)]
    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(sink.handle, messages))
    counter = store.find("colors")
    assert counter is not None
    assert counter.values == {"red": 100.0, "blue": 100.0}
