from __future__ import annotations

from typing import Protocol, runtime_checkable

from field_value_counter.domain.messages import Message


# NameExpression computes the counter name from an inbound message.
@runtime_checkable
class NameExpression(Protocol):
    def evaluate(self, message: Message) -> str:
        """Return the counter name for message."""
        raise NotImplementedError("NameExpression is a port; use a concrete adapter.")
