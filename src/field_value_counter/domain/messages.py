from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class Message:
    # Inbound envelope: raw bytes or an already structured payload plus transport headers.
    payload: object
    headers: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.payload is None:
            raise ValueError("Message.payload must not be None")
        # Headers are read-only once the message is built.
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))


@dataclass(frozen=True, slots=True)
class CounterIncrement:
    # Unit of work sent to the counter writer.
    counter_name: str
    value: str
    amount: float = 1.0


@dataclass(frozen=True, slots=True)
class FieldValueCounter:
    # Read view of one named counter: value -> accumulated score.
    name: str
    values: Mapping[str, float]
