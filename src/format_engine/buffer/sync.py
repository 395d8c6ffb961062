"""Boundary types exchanged with the host that owns the real buffer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Protocol, Tuple

from .snapshot import BufferSnapshot, split_lines
from .state import Position, Selection


@dataclass(frozen=True, slots=True)
class HostBuffer:
    """Copy of the host's buffer: complete text, its lines and selections."""

    text: str
    lines: Tuple[str, ...]
    selections: Tuple[Selection, ...] = ()
    attributes: dict[str, str] = field(default_factory=dict, compare=False)

    @classmethod
    def from_text(
        cls,
        text: str,
        selections: Iterable[Selection] = (),
        *,
        attributes: Optional[dict[str, str]] = None,
    ) -> "HostBuffer":
        return cls(
            text=text,
            lines=split_lines(text),
            selections=tuple(selections),
            attributes=dict(attributes or {}),
        )

    def snapshot(self) -> BufferSnapshot:
        return BufferSnapshot(text=self.text, lines=tuple(self.lines))

    def with_content(self, text: str, selections: Iterable[Selection]) -> "HostBuffer":
        return HostBuffer.from_text(text, selections, attributes=self.attributes)


class BufferSync(Protocol):
    """How a host hands its buffer to the engine and takes the result back."""

    def pull_buffer(self) -> HostBuffer:
        """Return a copy of the buffer and selections the user is editing."""
        ...

    def install(self, buffer: HostBuffer) -> None:
        """Replace the host's text and selections in one step."""
        ...


class BufferValidationError(RuntimeError):
    """Raised when a host supplies a position outside its own buffer."""

    def __init__(self, message: str, *, position: Position | None = None) -> None:
        super().__init__(message)
        self.position = position


__all__ = ["BufferSync", "BufferValidationError", "HostBuffer"]
