"""Format sessions: style lookup, replacement composition, selection recovery."""

from .config import FormatConfig
from .result import FormatResult, FormatStatus, SessionState
from .session import COMPOSITION_FAILED_MESSAGE, FormatSession

__all__ = [
    "COMPOSITION_FAILED_MESSAGE",
    "FormatConfig",
    "FormatResult",
    "FormatSession",
    "FormatStatus",
    "SessionState",
]
