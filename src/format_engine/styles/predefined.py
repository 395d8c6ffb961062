"""Built-in baseline styles."""

from __future__ import annotations

from typing import Dict, Optional

from .models import SortIncludes, StyleConfig


def _style(name: str, **options: object) -> StyleConfig:
    return StyleConfig(name=name, based_on=name, **options)  # type: ignore[arg-type]


PREDEFINED_STYLES: Dict[str, StyleConfig] = {
    "llvm": _style("llvm"),
    "google": _style("google"),
    "chromium": _style("chromium"),
    "mozilla": _style("mozilla"),
    "webkit": _style("webkit", indent_width=4),
    "gnu": _style("gnu"),
    "microsoft": _style("microsoft", indent_width=4),
    "none": _style(
        "none", disable_format=True, sort_includes=SortIncludes.NEVER
    ),
}

DEFAULT_STYLE = "llvm"


def get_predefined_style(name: str) -> Optional[StyleConfig]:
    """Look up a predefined style; names are case-insensitive."""

    return PREDEFINED_STYLES.get(name.strip().lower())


def predefined_style_names() -> tuple[str, ...]:
    return tuple(PREDEFINED_STYLES)


__all__ = [
    "DEFAULT_STYLE",
    "PREDEFINED_STYLES",
    "get_predefined_style",
    "predefined_style_names",
]
