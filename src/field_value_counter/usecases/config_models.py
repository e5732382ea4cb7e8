from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from field_value_counter.domain.field_path import FieldPath

# Config models map YAML sections to typed structures.


class CounterConfig(BaseModel):
    # Counter section: what to extract and how to name the counter.
    model_config = ConfigDict(extra="forbid")
    field_name: str = Field(validation_alias=AliasChoices("field_name", "fieldName"))
    name: str = "field-value-counter"
    name_expression: str | None = Field(
        default=None,
        validation_alias=AliasChoices("name_expression", "nameExpression"),
    )

    @field_validator("field_name")
    @classmethod
    def _require_segment(cls, value: str) -> str:
        # At least one non-blank segment; a dotless field name is a one-segment path.
        FieldPath.parse(value)
        return value

    @field_validator("name")
    @classmethod
    def _require_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("counter.name must not be blank")
        return value

    @property
    def computed_name_expression(self) -> str | None:
        # The expression wins over the literal name when both are set.
        if self.name_expression is not None and self.name_expression.strip():
            return self.name_expression
        return None


class OutputConfig(BaseModel):
    # Optional counter report written after a run.
    model_config = ConfigDict(extra="forbid")
    file_path: str = Field(validation_alias=AliasChoices("file_path", "file"))
    atomic_replace: bool = False


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    sink: Literal["stdout", "jsonl", "none"] = "stdout"
    path: str | None = None
    level: Literal["debug", "info", "warning", "error"] = "info"

    @model_validator(mode="after")
    def _require_path(self) -> LoggingConfig:
        # For jsonl sink, a path is required to avoid silent defaults.
        if self.sink == "jsonl" and not self.path:
            raise ValueError("logging.path is required when sink is 'jsonl'")
        return self


class AppConfig(BaseModel):
    # AppConfig is the top-level typed view of configuration.
    model_config = ConfigDict(extra="forbid")
    version: int
    counter: CounterConfig
    output: OutputConfig | None = None
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
