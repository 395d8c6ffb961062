"""Resolved style configuration consumed by formatters."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class SortIncludes(str, Enum):
    """How include directives are ordered inside a block."""

    NEVER = "Never"
    CASE_SENSITIVE = "CaseSensitive"
    CASE_INSENSITIVE = "CaseInsensitive"


@dataclass(frozen=True, slots=True)
class StyleConfig:
    """Formatting rules for one resolved style.

    Option names follow the ``.clang-format`` keys they are read from; keys
    this engine does not act on are preserved in ``extras``.
    """

    name: str
    based_on: str = "llvm"
    indent_width: int = 2
    use_tab: bool = False
    sort_includes: SortIncludes = SortIncludes.CASE_SENSITIVE
    max_empty_lines_to_keep: int = 1
    space_before_assignment_operators: bool = True
    disable_format: bool = False
    extras: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("style name cannot be empty")
        if self.indent_width < 0:
            raise ValueError("indent_width cannot be negative")
        if self.max_empty_lines_to_keep < 0:
            raise ValueError("max_empty_lines_to_keep cannot be negative")
        object.__setattr__(self, "extras", MappingProxyType(dict(self.extras)))

    @property
    def sorts_includes(self) -> bool:
        return self.sort_includes is not SortIncludes.NEVER

    def derive(self, **changes: Any) -> "StyleConfig":
        return replace(self, **changes)


__all__ = ["SortIncludes", "StyleConfig"]
