from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .messages import Message


class DecodeError(ValueError):
    # Raised by payload decoders on malformed structured text.
    pass


class TransformationError(RuntimeError):
    # Raised when an inbound payload cannot be turned into a structured value.
    # Carries the original message so the transport can report or dead-letter it.
    def __init__(self, message: Message, cause: Exception) -> None:
        super().__init__(f"Failed to transform message payload: {cause}")
        self.source_message = message
        self.cause = cause
