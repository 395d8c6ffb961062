"""Buffer snapshots, line/offset mapping and host boundary types."""

from .offsets import LineOffset, OffsetIndex
from .snapshot import BufferSnapshot, split_lines
from .state import Position, Selection
from .sync import BufferSync, BufferValidationError, HostBuffer
from .validation import ensure_position, ensure_selection

__all__ = [
    "BufferSnapshot",
    "BufferSync",
    "BufferValidationError",
    "HostBuffer",
    "LineOffset",
    "OffsetIndex",
    "Position",
    "Selection",
    "ensure_position",
    "ensure_selection",
    "split_lines",
]
