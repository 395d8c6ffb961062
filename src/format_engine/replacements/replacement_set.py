"""Ordered, non-overlapping replacements and the offset shifts they cause."""

from __future__ import annotations

from bisect import bisect_left
from typing import Iterable, Iterator, List

from .models import Replacement


class ReplacementError(RuntimeError):
    """Base class for replacement sets that cannot be built or applied."""


class ReplacementConflictError(ReplacementError):
    """Raised when a replacement overlaps one already in the set."""

    def __init__(self, replacement: Replacement, existing: Replacement) -> None:
        super().__init__(
            f"Replacement {replacement.describe()} conflicts with {existing.describe()}"
        )
        self.replacement = replacement
        self.existing = existing


class CompositionError(ReplacementError):
    """Raised when the replacements cannot be applied to a buffer."""

    def __init__(self, message: str, *, replacement: Replacement | None = None) -> None:
        super().__init__(message)
        self.replacement = replacement


class ReplacementSet:
    """Replacements over a single buffer, kept sorted by offset.

    Removed ranges never overlap. A pure insertion may sit on either edge of
    a removal but two insertions at the same offset conflict. Once built, the
    set only grows through ``add``/``merge``; it is meant to be composed once.
    """

    __slots__ = ("_items", "_keys")

    def __init__(self, replacements: Iterable[Replacement] = ()) -> None:
        self._items: List[Replacement] = []
        self._keys: List[tuple[int, int]] = []
        for replacement in replacements:
            self.add(replacement)

    def add(self, replacement: Replacement) -> None:
        key = replacement.sort_key
        position = bisect_left(self._keys, key)
        if position > 0 and self._items[position - 1].conflicts_with(replacement):
            raise ReplacementConflictError(replacement, self._items[position - 1])
        if position < len(self._items) and self._items[position].conflicts_with(
            replacement
        ):
            raise ReplacementConflictError(replacement, self._items[position])
        self._items.insert(position, replacement)
        self._keys.insert(position, key)

    def merge(self, other: Iterable[Replacement]) -> None:
        """Add every replacement from ``other``; on conflict nothing is added."""

        staged = self.copy()
        for replacement in other:
            staged.add(replacement)
        self._items = staged._items
        self._keys = staged._keys

    def copy(self) -> "ReplacementSet":
        clone = ReplacementSet()
        clone._items = list(self._items)
        clone._keys = list(self._keys)
        return clone

    def is_empty(self) -> bool:
        return not self._items

    @property
    def total_delta(self) -> int:
        return sum(replacement.delta for replacement in self._items)

    def compose(self, buffer: str) -> str:
        pieces: List[str] = []
        cursor = 0
        for replacement in self._items:
            if replacement.offset < cursor:
                raise CompositionError(
                    "Replacements are out of order", replacement=replacement
                )
            if replacement.end > len(buffer):
                raise CompositionError(
                    f"Replacement {replacement.describe()} exceeds buffer "
                    f"of length {len(buffer)}",
                    replacement=replacement,
                )
            pieces.append(buffer[cursor : replacement.offset])
            pieces.append(replacement.text)
            cursor = replacement.end
        pieces.append(buffer[cursor:])
        return "".join(pieces)

    def translate(self, offset: int) -> int:
        """Map an offset of the original buffer into the composed buffer.

        Replacements ending at or before ``offset`` shift it by their length
        change. An offset inside a removed range keeps its distance from the
        range start, clamped to the length of the new text.
        """

        shift = 0
        for replacement in self._items:
            if replacement.end <= offset:
                shift += replacement.delta
                continue
            if replacement.offset < offset:
                inside = min(offset - replacement.offset, len(replacement.text))
                return replacement.offset + shift + inside
            break
        return offset + shift

    def __iter__(self) -> Iterator[Replacement]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ReplacementSet):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"ReplacementSet({self._items!r})"


__all__ = [
    "CompositionError",
    "ReplacementConflictError",
    "ReplacementError",
    "ReplacementSet",
]
