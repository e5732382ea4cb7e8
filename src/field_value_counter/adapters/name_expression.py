from __future__ import annotations

from dataclasses import dataclass, field

from jinja2 import StrictUndefined, Template
from jinja2.sandbox import SandboxedEnvironment

from field_value_counter.domain.messages import Message
from field_value_counter.ports.name_expression import NameExpression


@dataclass(frozen=True, slots=True)
class LiteralName(NameExpression):
    # Fixed counter name; used when no expression is configured.
    name: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("LiteralName.name must be a non-empty string")

    def evaluate(self, message: Message) -> str:
        return self.name


_ENVIRONMENT = SandboxedEnvironment(undefined=StrictUndefined, autoescape=False)


@dataclass(frozen=True, slots=True)
class TemplateNameExpression(NameExpression):
    """Counter name rendered from a Jinja2 template.

    The template sees ``headers``, ``payload`` and ``message``. Rendering runs in
    a sandbox with strict undefined handling, so referencing a missing header
    raises instead of producing an empty name.
    """

    source: str
    _template: Template = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.source or not self.source.strip():
            raise ValueError("TemplateNameExpression.source must be a non-empty string")
        # Compiled once; rendering never mutates the template.
        object.__setattr__(self, "_template", _ENVIRONMENT.from_string(self.source))

    def evaluate(self, message: Message) -> str:
        rendered = self._template.render(
            headers=message.headers,
            payload=message.payload,
            message=message,
        )
        return str(rendered).strip()
