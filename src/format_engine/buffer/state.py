"""Positions and selections expressed in line/column space."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """0-based ``(line, column)`` pair inside one buffer snapshot."""

    line: int
    column: int

    def __post_init__(self) -> None:
        if self.line < 0 or self.column < 0:
            raise ValueError(f"Position must be non-negative, got {self.as_tuple()}")

    def as_tuple(self) -> Tuple[int, int]:
        return (self.line, self.column)


@dataclass(frozen=True, slots=True)
class Selection:
    """Highlighted span or, when ``start == end``, a cursor."""

    start: Position
    end: Position

    @classmethod
    def from_coordinates(
        cls, start_line: int, start_column: int, end_line: int, end_column: int
    ) -> "Selection":
        return cls(Position(start_line, start_column), Position(end_line, end_column))

    @classmethod
    def cursor(cls, line: int, column: int) -> "Selection":
        position = Position(line, column)
        return cls(position, position)

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    @property
    def is_reversed(self) -> bool:
        return self.end < self.start

    def normalized(self) -> "Selection":
        if self.is_reversed:
            return Selection(self.end, self.start)
        return self


__all__ = ["Position", "Selection"]
