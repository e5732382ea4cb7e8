from __future__ import annotations

import threading
from dataclasses import dataclass, field

from field_value_counter.domain.messages import FieldValueCounter
from field_value_counter.ports.counter_writer import FieldValueCounterReader, FieldValueCounterWriter


@dataclass
class InMemoryFieldValueCounterStore(FieldValueCounterWriter, FieldValueCounterReader):
    # Reference store for local runs and tests; a Redis-backed store would sit behind the same ports.
    # A lock keeps concurrent handlers from losing increments.
    _counters: dict[str, dict[str, float]] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def increment(self, name: str, value: str, amount: float) -> None:
        with self._lock:
            values = self._counters.setdefault(name, {})
            values[value] = values.get(value, 0.0) + amount

    def decrement(self, name: str, value: str, amount: float) -> None:
        self.increment(name, value, -amount)

    def reset(self, name: str, value: str) -> None:
        with self._lock:
            values = self._counters.get(name)
            if values is not None:
                values.pop(value, None)

    def find(self, name: str) -> FieldValueCounter | None:
        with self._lock:
            values = self._counters.get(name)
            if values is None:
                return None
            return FieldValueCounter(name=name, values=dict(values))

    def list_names(self) -> list[str]:
        with self._lock:
            return sorted(self._counters)
