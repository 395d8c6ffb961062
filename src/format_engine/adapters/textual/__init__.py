"""Textual host adapter."""

from .controller import (
    TextualFormatAdapter,
    TextualUIHooks,
    selection_from_textual,
    selection_to_textual,
)

__all__ = [
    "TextualFormatAdapter",
    "TextualUIHooks",
    "selection_from_textual",
    "selection_to_textual",
]
