from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from field_value_counter.usecases.config_models import AppConfig


# ConfigError is raised for invalid configuration (fail fast at startup).
class ConfigError(ValueError):
    pass


_TOP_LEVEL_KEYS = {"version", "counter", "output", "logging"}


def load_config(path: Path) -> AppConfig:
    # YAML loader producing a validated AppConfig.
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config is not valid YAML: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError("Config root must be a mapping")

    _validate_top_level(raw)
    try:
        return AppConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


def _validate_top_level(raw: dict[str, Any]) -> None:
    # Unknown keys are reported before model validation for a clearer message.
    unknown = set(raw.keys()) - _TOP_LEVEL_KEYS
    if unknown:
        raise ConfigError(f"Unknown top-level keys: {sorted(unknown)}")

    if "version" not in raw or "counter" not in raw:
        raise ConfigError("Missing required top-level keys: version, counter")

    counter = raw.get("counter")
    if not isinstance(counter, dict) or not ("field_name" in counter or "fieldName" in counter):
        raise ConfigError("counter.field_name is required")
