from __future__ import annotations

from enum import Enum


# Reasons a resolved field contributes nothing; they are logged, never raised.
class ReasonCode(str, Enum):
    MISSING_FIELD = "MISSING_FIELD"
    NULL_VALUE = "NULL_VALUE"
    VALUE_NOT_FOUND = "VALUE_NOT_FOUND"
