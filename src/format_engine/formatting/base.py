"""Formatter protocol the session drives."""

from __future__ import annotations

from typing import Protocol, Sequence

from format_engine.replacements import Range, ReplacementSet
from format_engine.styles import StyleConfig


class Formatter(Protocol):
    """Computes replacements; never edits the buffer itself."""

    def reformat(
        self, style: StyleConfig, text: str, ranges: Sequence[Range]
    ) -> ReplacementSet:
        """Whitespace and layout edits for the code inside ``ranges``."""
        ...

    def sort_declarations(
        self,
        style: StyleConfig,
        text: str,
        ranges: Sequence[Range],
        filename_hint: str,
    ) -> ReplacementSet:
        """Reordering edits (e.g. include sorting), computed on the same text."""
        ...


__all__ = ["Formatter"]
