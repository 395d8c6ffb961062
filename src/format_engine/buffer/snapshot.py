"""Immutable buffer snapshots handed between the host and the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from .offsets import OffsetIndex


def split_lines(text: str) -> Tuple[str, ...]:
    """Split ``text`` into lines that keep their terminators.

    Only ``"\\n"`` ends a line, so ``"\\r\\n"`` stays attached to its line and
    ``"".join(split_lines(text)) == text`` always holds. A buffer that ends
    with a newline has no trailing empty entry.
    """

    if not text:
        return ()
    lines = text.split("\n")
    result = [line + "\n" for line in lines[:-1]]
    if lines[-1]:
        result.append(lines[-1])
    return tuple(result)


@dataclass(frozen=True, slots=True)
class BufferSnapshot:
    """Text paired 1:1 with the lines (and offset index) derived from it."""

    text: str
    lines: Tuple[str, ...]
    _index: OffsetIndex | None = field(default=None, compare=False, repr=False)

    @classmethod
    def from_text(cls, text: str) -> "BufferSnapshot":
        return cls(text=text, lines=split_lines(text))

    @property
    def index(self) -> OffsetIndex:
        """Offset index for this snapshot, built on first access."""

        if self._index is None:
            object.__setattr__(self, "_index", OffsetIndex.build(self.lines))
        assert self._index is not None
        return self._index


__all__ = ["BufferSnapshot", "split_lines"]
