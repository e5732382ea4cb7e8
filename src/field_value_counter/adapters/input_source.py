from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from field_value_counter.domain.messages import Message
from field_value_counter.ports.input_source import InputSource


@dataclass(frozen=True, slots=True)
class FileInputSource(InputSource):
    # NDJSON file adapter: each non-blank line becomes a Message with a raw bytes payload.
    path: Path
    headers: dict[str, object] | None = None

    def read(self) -> Iterable[Message]:
        # Binary mode so decoding stays the sink's job, as with a real binder.
        with self.path.open("rb") as handle:
            for idx, line in enumerate(handle, start=1):
                payload = line.rstrip(b"\r\n")
                if not payload.strip():
                    continue
                headers: dict[str, object] = dict(self.headers or {})
                headers.update({"line_no": idx, "source": str(self.path)})
                yield Message(payload=payload, headers=headers)
