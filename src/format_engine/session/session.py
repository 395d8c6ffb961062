"""Orchestrates one reformat cycle from style lookup to installed selections."""

from __future__ import annotations

from typing import List, Optional

from format_engine.buffer import BufferSnapshot, BufferSync, HostBuffer, Selection
from format_engine.formatting import BasicFormatter, Formatter
from format_engine.replacements import (
    CompositionError,
    Range,
    ReplacementConflictError,
    ReplacementSet,
)
from format_engine.runtime.telemetry import Event, phase, record_event
from format_engine.selections import SelectionRemapper
from format_engine.styles import (
    DefaultStyleProvider,
    StyleConfig,
    StyleProvider,
    StyleUnavailableError,
)

from .config import FormatConfig
from .result import FormatResult, FormatStatus, SessionState

COMPOSITION_FAILED_MESSAGE = "Failed to apply formatting replacements."


class FormatSession:
    """Runs the format cycle for one host buffer at a time.

    ``format`` is pure: it takes a ``HostBuffer`` copy and returns a
    ``FormatResult``. ``run`` wraps it for a ``BufferSync`` host and installs
    the new text and selections only when the whole cycle succeeded.
    """

    def __init__(
        self,
        config: Optional[FormatConfig] = None,
        *,
        style_provider: Optional[StyleProvider] = None,
        formatter: Optional[Formatter] = None,
        remapper: Optional[SelectionRemapper] = None,
        logger_name: Optional[str] = None,
    ) -> None:
        self.config = config or FormatConfig()
        self.style_provider = style_provider or DefaultStyleProvider(
            logger_name=logger_name
        )
        self.formatter = formatter or BasicFormatter(logger_name=logger_name)
        self.remapper = remapper or SelectionRemapper(logger_name=logger_name)
        self._logger_name = logger_name
        self._state = SessionState.IDLE
        self.history: List[SessionState] = [SessionState.IDLE]

    @property
    def state(self) -> SessionState:
        return self._state

    def run(self, host: BufferSync) -> FormatResult:
        buffer = host.pull_buffer()
        result = self.format(buffer)
        if result.changed:
            host.install(buffer.with_content(result.text, result.selections))
        return result

    def format(self, buffer: HostBuffer) -> FormatResult:
        self._state = SessionState.IDLE
        self.history = [SessionState.IDLE]
        style_name = self.config.style

        with phase(
            "session",
            "format",
            logger_name=self._logger_name,
            style=style_name,
            length=len(buffer.text),
        ):
            try:
                style = self._resolve_style(style_name)
            except StyleUnavailableError as exc:
                return self._fail(
                    buffer, FormatStatus.STYLE_UNAVAILABLE, str(exc), exc.reason
                )

            try:
                replacements = self._compute_replacements(style, buffer.text)
            except ReplacementConflictError as exc:
                return self._fail(
                    buffer,
                    FormatStatus.COMPOSITION_FAILED,
                    COMPOSITION_FAILED_MESSAGE,
                    str(exc),
                )

            if replacements.is_empty():
                self._transition(SessionState.DONE)
                record_event(
                    Event.FORMAT_NO_CHANGE,
                    logger_name=self._logger_name,
                    style=style_name,
                )
                return FormatResult(
                    status=FormatStatus.NO_CHANGE_NEEDED,
                    message=f"Style {style_name} already OK",
                    text=buffer.text,
                    selections=tuple(buffer.selections),
                    style=style_name,
                )

            try:
                new_text = self._compose(replacements, buffer.text)
            except CompositionError as exc:
                return self._fail(
                    buffer,
                    FormatStatus.COMPOSITION_FAILED,
                    COMPOSITION_FAILED_MESSAGE,
                    str(exc),
                )

            selections = self._remap(buffer, replacements, new_text)
            self._transition(SessionState.DONE)
            record_event(
                Event.FORMAT_DONE,
                logger_name=self._logger_name,
                style=style_name,
                replacements=len(replacements),
                selections=selections,
            )
            return FormatResult(
                status=FormatStatus.FORMATTED,
                message=f"Formatted with style {style_name}",
                text=new_text,
                selections=selections,
                style=style_name,
                replacement_count=len(replacements),
            )

    def _resolve_style(self, name: str) -> StyleConfig:
        style = self.style_provider.resolve(name)
        self._transition(SessionState.STYLE_RESOLVED)
        return style

    def _compute_replacements(self, style: StyleConfig, text: str) -> ReplacementSet:
        ranges = [Range(0, len(text))]
        with phase("session", "reformat", logger_name=self._logger_name) as handle:
            replacements = self.formatter.reformat(style, text, ranges)
            if style.sorts_includes:
                ordering = self.formatter.sort_declarations(
                    style, text, ranges, self.config.filename_hint
                )
                handle.annotate("ordering", len(ordering))
                replacements.merge(ordering)
        self._transition(SessionState.FORMATTED)
        return replacements

    def _compose(self, replacements: ReplacementSet, text: str) -> str:
        with phase("session", "compose", logger_name=self._logger_name) as handle:
            new_text = replacements.compose(text)
            handle.annotate("delta", len(new_text) - len(text))
        self._transition(SessionState.COMPOSED)
        return new_text

    def _remap(
        self, buffer: HostBuffer, replacements: ReplacementSet, new_text: str
    ) -> tuple[Selection, ...]:
        old_index = buffer.snapshot().index
        new_index = BufferSnapshot.from_text(new_text).index
        with phase(
            "session",
            "remap",
            logger_name=self._logger_name,
            selections=len(buffer.selections),
        ) as handle:
            outcome = self.remapper.remap_all(
                buffer.selections, old_index, replacements, new_index
            )
            handle.annotate("dropped", outcome.dropped)
        selections = outcome.selections
        if outcome.exhausted:
            record_event(
                Event.SELECTION_FALLBACK,
                logger_name=self._logger_name,
                dropped=len(outcome.dropped),
            )
            selections = (Selection.cursor(0, 0),)
        self._transition(SessionState.SELECTIONS_REMAPPED)
        return selections

    def _fail(
        self,
        buffer: HostBuffer,
        status: FormatStatus,
        message: str,
        reason: Optional[str],
    ) -> FormatResult:
        self._transition(SessionState.FAILED)
        record_event(
            Event.FORMAT_FAILED,
            level="warning",
            logger_name=self._logger_name,
            status=status,
            reason=reason or message,
        )
        return FormatResult(
            status=status,
            message=message,
            text=buffer.text,
            selections=tuple(buffer.selections),
            style=self.config.style,
            reason=reason,
        )

    def _transition(self, state: SessionState) -> None:
        self._state = state
        self.history.append(state)


__all__ = ["COMPOSITION_FAILED_MESSAGE", "FormatSession"]
