from __future__ import annotations

from typing import Protocol, runtime_checkable


# PayloadDecoder turns structured text into Records, lists and scalars.
@runtime_checkable
class PayloadDecoder(Protocol):
    def decode(self, text: str) -> object:
        """Parse text; raise DecodeError on malformed input."""
        raise NotImplementedError("PayloadDecoder is a port; use a concrete adapter.")
