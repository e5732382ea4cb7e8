from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import TextIO

from field_value_counter.observability.logging import LogMessage, level_enabled, log_to_dict
from field_value_counter.ports.log_sink import LogSink


class StdoutLogSink(LogSink):
    # One compact JSON object per line on stdout (or any text stream).
    def __init__(self, min_level: str = "info", stream: TextIO | None = None) -> None:
        self._min_level = min_level
        self._stream = stream

    def emit(self, message: LogMessage) -> None:
        if not level_enabled(message.level, self._min_level):
            return
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(_encode(message) + "\n")


class JsonlLogSink(LogSink):
    # File-backed structured log sink; appends and flushes per message.
    def __init__(self, path: Path, min_level: str = "info") -> None:
        self._min_level = min_level
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._file: TextIO | None = self._path.open("a", encoding="utf-8")

    def emit(self, message: LogMessage) -> None:
        if self._file is None or not level_enabled(message.level, self._min_level):
            return
        self._file.write(_encode(message) + "\n")
        self._file.flush()

    def close(self) -> None:
        if self._file is None:
            return
        self._file.close()
        self._file = None


class NullLogSink(LogSink):
    def emit(self, message: LogMessage) -> None:
        return None


def _encode(message: LogMessage) -> str:
    # default=str keeps odd payload previews serializable.
    return json.dumps(log_to_dict(message), separators=(",", ":"), ensure_ascii=False, default=str)
