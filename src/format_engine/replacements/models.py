"""Value types describing edits over one buffer snapshot."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Range:
    """Half-open span ``[offset, offset + length)`` of a buffer."""

    offset: int
    length: int

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise ValueError("offset cannot be negative")
        if self.length < 0:
            raise ValueError("length cannot be negative")

    @property
    def end(self) -> int:
        return self.offset + self.length

    def intersects(self, offset: int, end: int) -> bool:
        """True when ``[offset, end)`` shares a character with this range.

        An empty range acts as a single point.
        """

        if self.length == 0:
            return offset <= self.offset < end
        return offset < self.end and self.offset < end


@dataclass(frozen=True, slots=True)
class Replacement:
    """Remove ``length`` characters at ``offset`` and insert ``text``."""

    offset: int
    length: int
    text: str = ""

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise ValueError("offset cannot be negative")
        if self.length < 0:
            raise ValueError("length cannot be negative")

    @property
    def end(self) -> int:
        return self.offset + self.length

    @property
    def delta(self) -> int:
        return len(self.text) - self.length

    @property
    def is_insertion(self) -> bool:
        return self.length == 0

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.offset, self.length)

    def conflicts_with(self, other: "Replacement") -> bool:
        if self.is_insertion and other.is_insertion:
            return self.offset == other.offset
        if self.is_insertion:
            return other.offset < self.offset < other.end
        if other.is_insertion:
            return self.offset < other.offset < self.end
        return self.offset < other.end and other.offset < self.end

    def describe(self) -> str:
        return f"[{self.offset}, {self.end}) -> {self.text!r}"


__all__ = ["Range", "Replacement"]
