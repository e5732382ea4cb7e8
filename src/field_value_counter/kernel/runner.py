from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Protocol

from field_value_counter.domain.errors import TransformationError
from field_value_counter.domain.messages import Message


class MessageHandler(Protocol):
    def handle(self, message: Message) -> None:
        raise NotImplementedError("MessageHandler is a protocol; use a concrete handler.")


@dataclass(frozen=True, slots=True)
class RunStats:
    delivered: int
    failed: int


@dataclass(frozen=True, slots=True)
class Runner:
    # Runner plays the binder's role: delivers each message to the handler in order.
    handler: MessageHandler
    on_error: Callable[[Message, TransformationError], None] | None = None

    def run(self, inputs: Iterable[Message]) -> RunStats:
        delivered = 0
        failed = 0
        for message in inputs:
            delivered += 1
            try:
                self.handler.handle(message)
            except TransformationError as exc:
                # Without an error callback the failure goes to the caller, as with no error channel.
                if self.on_error is None:
                    raise
                failed += 1
                self.on_error(message, exc)
        return RunStats(delivered=delivered, failed=failed)
