"""Textual-facing adapter: copies editor state in, runs a session, copies it out."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Sequence, Tuple

from format_engine.buffer import HostBuffer, Position, Selection
from format_engine.session import FormatResult, FormatSession

Location = Tuple[int, int]


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def selection_from_textual(start: Location, end: Location) -> Selection:
    return Selection(Position(*start), Position(*end))


def selection_to_textual(selection: Selection) -> Tuple[Location, Location]:
    return selection.start.as_tuple(), selection.end.as_tuple()


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks the adapter uses to push results back into widgets."""

    update_buffer: Callable[[HostBuffer], None]
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualFormatAdapter:
    """Bridges a Textual editor widget and a ``FormatSession``.

    Textual selections keep the anchor in ``start`` and the cursor in
    ``end``, so a backwards selection is flipped before remapping and flipped
    back afterwards.
    """

    def __init__(self, session: FormatSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks

    def format_buffer(
        self, text: str, selections: Iterable[Selection] = ()
    ) -> FormatResult:
        originals = tuple(selections)
        reversed_flags = [selection.is_reversed for selection in originals]
        buffer = HostBuffer.from_text(
            text, (selection.normalized() for selection in originals)
        )
        self._log("format ->", style=self.session.config.style, selections=len(originals))

        result = self.session.format(buffer)

        self._log(
            "result <-",
            status=result.status.value,
            message=result.message,
            replacements=result.replacement_count,
        )
        self.hooks.update_status(result.message)
        if result.changed:
            restored = _restore_direction(result.selections, reversed_flags)
            self.hooks.update_buffer(buffer.with_content(result.text, restored))
        return result

    def _log(self, prefix: str, **fields: object) -> None:
        parts = [prefix]
        parts.extend(f"{key}={value!r}" for key, value in fields.items())
        self.hooks.log(" ".join(parts))

    def state_metadata(self) -> Dict[str, object]:
        return {
            "state": self.session.state.value,
            "style": self.session.config.style,
            "history": [state.value for state in self.session.history],
        }


def _restore_direction(
    selections: Sequence[Selection], reversed_flags: Sequence[bool]
) -> Tuple[Selection, ...]:
    if len(selections) != len(reversed_flags):
        return tuple(selections)
    return tuple(
        Selection(selection.end, selection.start) if flipped else selection
        for selection, flipped in zip(selections, reversed_flags)
    )


__all__ = [
    "TextualFormatAdapter",
    "TextualUIHooks",
    "selection_from_textual",
    "selection_to_textual",
]
