"""Formatter protocol and the bundled reference formatter."""

from .base import Formatter
from .basic import BasicFormatter
from .includes import include_replacements
from .spacing import whitespace_replacements

__all__ = [
    "BasicFormatter",
    "Formatter",
    "include_replacements",
    "whitespace_replacements",
]
