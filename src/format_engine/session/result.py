"""Session states and the single result every format call returns."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from format_engine.buffer import Selection


class SessionState(str, Enum):
    IDLE = "idle"
    STYLE_RESOLVED = "style_resolved"
    FORMATTED = "formatted"
    COMPOSED = "composed"
    SELECTIONS_REMAPPED = "selections_remapped"
    DONE = "done"
    FAILED = "failed"


class FormatStatus(str, Enum):
    FORMATTED = "formatted"
    NO_CHANGE_NEEDED = "no_change_needed"
    STYLE_UNAVAILABLE = "style_unavailable"
    COMPOSITION_FAILED = "composition_failed"


@dataclass(frozen=True, slots=True)
class FormatResult:
    """Outcome of one format cycle.

    ``text`` and ``selections`` are what the host should show afterwards: the
    new values on ``FORMATTED``, the untouched originals otherwise.
    """

    status: FormatStatus
    message: str
    text: str
    selections: tuple[Selection, ...]
    style: str
    replacement_count: int = 0
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status in (FormatStatus.FORMATTED, FormatStatus.NO_CHANGE_NEEDED)

    @property
    def changed(self) -> bool:
        return self.status is FormatStatus.FORMATTED


__all__ = ["FormatResult", "FormatStatus", "SessionState"]
