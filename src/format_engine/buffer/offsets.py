"""Mapping between absolute offsets and line/column positions."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence, Tuple

from .state import Position


@dataclass(frozen=True, slots=True)
class LineOffset:
    """Half-open span ``[offset, offset + length)`` covered by one line."""

    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length


class OffsetIndex:
    """Line table for one buffer snapshot.

    Lines are expected to keep their terminators, so consecutive entries are
    contiguous and together cover the whole buffer. Lookups use binary search
    over the line starts.

    The end of the buffer (``offset == total_length``) belongs to no line.
    It resolves to ``(line_count, 0)`` when the buffer ends with a newline,
    i.e. the empty line an editor shows after it, and to the end of the last
    line otherwise. An empty buffer resolves it to ``(0, 0)``.
    """

    __slots__ = ("_entries", "_starts", "_total", "_trailing_newline")

    def __init__(self, entries: Sequence[LineOffset], *, trailing_newline: bool) -> None:
        self._entries: Tuple[LineOffset, ...] = tuple(entries)
        self._starts: Tuple[int, ...] = tuple(entry.offset for entry in self._entries)
        self._total = self._entries[-1].end if self._entries else 0
        self._trailing_newline = trailing_newline

    @classmethod
    def build(cls, lines: Iterable[str]) -> "OffsetIndex":
        entries: list[LineOffset] = []
        offset = 0
        last = ""
        for line in lines:
            entries.append(LineOffset(offset, len(line)))
            offset += len(line)
            last = line
        return cls(entries, trailing_newline=last.endswith("\n"))

    @property
    def total_length(self) -> int:
        return self._total

    @property
    def line_count(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LineOffset]:
        return iter(self._entries)

    def __getitem__(self, line: int) -> LineOffset:
        return self._entries[line]

    def line_of(self, offset: int) -> int:
        self._check_offset(offset)
        if offset == self._total:
            return self._end_of_buffer()[0]
        return bisect_right(self._starts, offset) - 1

    def column_of(self, offset: int) -> int:
        return offset - self._line_start(self.line_of(offset))

    def position_of(self, offset: int) -> Position:
        line = self.line_of(offset)
        return Position(line, offset - self._line_start(line))

    def offset_of(self, line: int, column: int) -> int:
        return self._line_start(line) + column

    def offset_of_position(self, position: Position) -> int:
        return self.offset_of(position.line, position.column)

    def contains_position(self, line: int, column: int) -> bool:
        if line < 0 or column < 0:
            return False
        if line < len(self._entries):
            return column <= self._entries[line].length
        return line == self._end_of_buffer()[0] and column == 0

    def _line_start(self, line: int) -> int:
        if line == len(self._entries):
            return self._total
        return self._entries[line].offset

    def _end_of_buffer(self) -> Tuple[int, int]:
        if not self._entries:
            return (0, 0)
        if self._trailing_newline:
            return (len(self._entries), 0)
        last = len(self._entries) - 1
        return (last, self._entries[last].length)

    def _check_offset(self, offset: int) -> None:
        if offset < 0 or offset > self._total:
            raise IndexError(
                f"Offset {offset} outside buffer of length {self._total}"
            )

    def __repr__(self) -> str:
        return f"OffsetIndex(lines={len(self._entries)}, total_length={self._total})"


__all__ = ["LineOffset", "OffsetIndex"]
