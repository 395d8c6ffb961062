"""Carry selections across a composed replacement set."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from format_engine.buffer import (
    BufferValidationError,
    OffsetIndex,
    Selection,
    ensure_selection,
)
from format_engine.replacements import ReplacementSet
from format_engine.runtime.telemetry import Event, record_event


@dataclass(frozen=True, slots=True)
class RemapOutcome:
    """Selections that survived remapping plus the ones the host got wrong."""

    selections: tuple[Selection, ...]
    dropped: tuple[Selection, ...] = ()

    @property
    def exhausted(self) -> bool:
        return not self.selections


class SelectionRemapper:
    """Moves line/column selections from one snapshot to the next.

    Each endpoint goes old position -> old offset -> translated offset ->
    new position. ``ReplacementSet.translate`` never decreases, so an ordered
    selection stays ordered and a cursor stays a cursor.
    """

    def __init__(self, *, logger_name: Optional[str] = None) -> None:
        self._logger_name = logger_name

    def remap(
        self,
        selection: Selection,
        old_index: OffsetIndex,
        replacements: ReplacementSet,
        new_index: OffsetIndex,
    ) -> Selection:
        ensure_selection(old_index, selection)
        start = old_index.offset_of_position(selection.start)
        end = old_index.offset_of_position(selection.end)
        new_start = replacements.translate(start)
        new_end = replacements.translate(end)
        return Selection(new_index.position_of(new_start), new_index.position_of(new_end))

    def remap_all(
        self,
        selections: Iterable[Selection],
        old_index: OffsetIndex,
        replacements: ReplacementSet,
        new_index: OffsetIndex,
    ) -> RemapOutcome:
        remapped: list[Selection] = []
        dropped: list[Selection] = []
        for selection in selections:
            try:
                remapped.append(
                    self.remap(selection, old_index, replacements, new_index)
                )
            except BufferValidationError as exc:
                dropped.append(selection)
                record_event(
                    Event.SELECTION_DROPPED,
                    level="warning",
                    logger_name=self._logger_name,
                    selection=selection,
                    reason=exc,
                )
        return RemapOutcome(selections=tuple(remapped), dropped=tuple(dropped))


__all__ = ["RemapOutcome", "SelectionRemapper"]
