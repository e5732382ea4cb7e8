from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable

from field_value_counter.domain.messages import Message


# InputSource stands in for the bound input channel.
@runtime_checkable
class InputSource(Protocol):
    def read(self) -> Iterable[Message]:
        """Yield inbound messages in delivery order."""
        raise NotImplementedError("InputSource is a port; use a concrete adapter.")
