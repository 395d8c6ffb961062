"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .offsets import OffsetIndex
from .state import Position, Selection
from .sync import BufferValidationError


def ensure_position(index: OffsetIndex, position: Position) -> Position:
    if position.line >= index.line_count and not index.contains_position(
        position.line, 0
    ):
        raise BufferValidationError("Line out of range", position=position)
    if not index.contains_position(position.line, position.column):
        raise BufferValidationError("Column out of range", position=position)
    return position


def ensure_selection(index: OffsetIndex, selection: Selection) -> Selection:
    ensure_position(index, selection.start)
    ensure_position(index, selection.end)
    return selection


__all__ = ["ensure_position", "ensure_selection"]
