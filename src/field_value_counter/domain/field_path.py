from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FieldPath:
    """Dot-delimited path into a structured payload.

    Segments are stripped and empty segments are dropped, so ``"a..b"`` and
    ``" a . b "`` both parse to ``("a", "b")``. A path always has at least one
    segment.
    """

    segments: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.segments:
            raise ValueError("FieldPath must have at least one segment")
        for segment in self.segments:
            if not isinstance(segment, str) or not segment:
                raise ValueError("FieldPath segments must be non-empty strings")

    @classmethod
    def parse(cls, text: str) -> FieldPath:
        tokens = tuple(token.strip() for token in text.split("."))
        return cls(segments=tuple(token for token in tokens if token))

    @property
    def head(self) -> str:
        return self.segments[0]

    @property
    def is_last(self) -> bool:
        return len(self.segments) == 1

    def tail(self) -> FieldPath:
        # Callers check is_last first; a one-segment path has no tail.
        return FieldPath(segments=self.segments[1:])

    def __str__(self) -> str:
        return ".".join(self.segments)
