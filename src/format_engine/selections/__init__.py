"""Selection remapping across reformatting edits."""

from .remapper import RemapOutcome, SelectionRemapper

__all__ = ["RemapOutcome", "SelectionRemapper"]
