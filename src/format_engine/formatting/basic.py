"""Reference formatter bundled with the engine."""

from __future__ import annotations

from typing import Optional, Sequence

from format_engine.replacements import Range, ReplacementSet
from format_engine.runtime.telemetry import phase
from format_engine.styles import StyleConfig

from .includes import include_replacements
from .spacing import whitespace_replacements


class BasicFormatter:
    """Whitespace normalisation plus include sorting for C-family sources."""

    def __init__(self, *, logger_name: Optional[str] = None) -> None:
        self._logger_name = logger_name

    def reformat(
        self, style: StyleConfig, text: str, ranges: Sequence[Range]
    ) -> ReplacementSet:
        with phase(
            "formatting",
            "reformat",
            logger_name=self._logger_name,
            style=style.name,
            ranges=len(ranges),
        ) as handle:
            replacements = whitespace_replacements(style, text, ranges)
            handle.annotate("replacements", len(replacements))
            return replacements

    def sort_declarations(
        self,
        style: StyleConfig,
        text: str,
        ranges: Sequence[Range],
        filename_hint: str,
    ) -> ReplacementSet:
        with phase(
            "formatting",
            "sort_includes",
            logger_name=self._logger_name,
            style=style.name,
            filename=filename_hint,
        ) as handle:
            replacements = include_replacements(style, text, ranges, filename_hint)
            handle.annotate("replacements", len(replacements))
            return replacements


__all__ = ["BasicFormatter"]
