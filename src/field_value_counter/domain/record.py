from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping


class Record(Mapping[str, object]):
    """Immutable structured record produced by payload decoding.

    Field order follows the decoded document. Nested objects are Records and
    arrays are lists, so a decoded document is a tree of Records, lists and
    scalars.
    """

    __slots__ = ("_fields",)

    def __init__(self, fields: Mapping[str, object] | Iterable[tuple[str, object]] = ()) -> None:
        items = fields.items() if isinstance(fields, Mapping) else fields
        self._fields: dict[str, object] = {}
        for name, value in items:
            if not isinstance(name, str):
                raise TypeError(f"Record field names must be strings: {name!r}")
            self._fields[name] = value

    def __getitem__(self, name: str) -> object:
        return self._fields[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(self._fields)

    # FieldReadable capability.
    def has_field(self, name: str) -> bool:
        return name in self._fields

    def read_field(self, name: str) -> object:
        return self._fields[name]

    def __repr__(self) -> str:
        body = ", ".join(f"{name}={value!r}" for name, value in self._fields.items())
        return f"Record({body})"

    def __str__(self) -> str:
        body = ", ".join(f"{name}={value}" for name, value in self._fields.items())
        return "{" + body + "}"
