from __future__ import annotations

from typing import Protocol, runtime_checkable

from field_value_counter.domain.messages import FieldValueCounter


# Counter storage is external; these ports isolate it from the sink.
@runtime_checkable
class FieldValueCounterWriter(Protocol):
    def increment(self, name: str, value: str, amount: float) -> None:
        """Add amount to the score of value in the named counter."""
        raise NotImplementedError("FieldValueCounterWriter is a port; use a concrete adapter.")

    def decrement(self, name: str, value: str, amount: float) -> None:
        """Subtract amount from the score of value in the named counter."""
        raise NotImplementedError("FieldValueCounterWriter is a port; use a concrete adapter.")

    def reset(self, name: str, value: str) -> None:
        """Drop value from the named counter."""
        raise NotImplementedError("FieldValueCounterWriter is a port; use a concrete adapter.")


@runtime_checkable
class FieldValueCounterReader(Protocol):
    def find(self, name: str) -> FieldValueCounter | None:
        """Return a snapshot of the named counter, or None when it was never written."""
        raise NotImplementedError("FieldValueCounterReader is a port; use a concrete adapter.")

    def list_names(self) -> list[str]:
        """Return counter names in sorted order."""
        raise NotImplementedError("FieldValueCounterReader is a port; use a concrete adapter.")
