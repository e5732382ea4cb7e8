from __future__ import annotations

import json

from field_value_counter.domain.errors import DecodeError
from field_value_counter.domain.record import Record
from field_value_counter.ports.decoder import PayloadDecoder


class JsonRecordDecoder(PayloadDecoder):
    # JSON objects become Records (nested too); arrays stay lists; scalars pass through.
    def decode(self, text: str) -> object:
        try:
            return json.loads(text, object_pairs_hook=Record)
        except json.JSONDecodeError as exc:
            raise DecodeError(f"Malformed JSON payload: {exc.msg} (line {exc.lineno}, column {exc.colno})") from exc
