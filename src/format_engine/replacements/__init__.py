"""Replacement sets: composing edits and shifting offsets across them."""

from .models import Range, Replacement
from .replacement_set import (
    CompositionError,
    ReplacementConflictError,
    ReplacementError,
    ReplacementSet,
)

__all__ = [
    "CompositionError",
    "Range",
    "Replacement",
    "ReplacementConflictError",
    "ReplacementError",
    "ReplacementSet",
]
