"""Parse ``.clang-format`` style documents into ``StyleConfig`` values."""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional

import yaml

from .models import SortIncludes, StyleConfig
from .predefined import get_predefined_style

CPP_LANGUAGES = {"Cpp", "ObjC"}

_USE_TAB_VALUES = {
    "Never": False,
    "ForIndentation": True,
    "ForContinuationAndIndentation": True,
    "AlignWithSpaces": True,
    "Always": True,
}


class StyleParseError(ValueError):
    """Raised when a style document is not valid configuration."""

    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


def _expect_bool(key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise StyleParseError(f"{key} must be true or false", key=key)
    return value


def _expect_count(key: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise StyleParseError(f"{key} must be a non-negative integer", key=key)
    return value


def _parse_use_tab(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value in _USE_TAB_VALUES:
        return _USE_TAB_VALUES[value]
    raise StyleParseError(f"Unsupported {key} value {value!r}", key=key)


def _parse_sort_includes(key: str, value: Any) -> SortIncludes:
    if isinstance(value, bool):
        return SortIncludes.CASE_SENSITIVE if value else SortIncludes.NEVER
    if isinstance(value, str):
        for option in SortIncludes:
            if option.value == value:
                return option
    raise StyleParseError(f"Unsupported {key} value {value!r}", key=key)


_OPTIONS: Dict[str, tuple[str, Callable[[str, Any], Any]]] = {
    "IndentWidth": ("indent_width", _expect_count),
    "UseTab": ("use_tab", _parse_use_tab),
    "SortIncludes": ("sort_includes", _parse_sort_includes),
    "MaxEmptyLinesToKeep": ("max_empty_lines_to_keep", _expect_count),
    "SpaceBeforeAssignmentOperators": (
        "space_before_assignment_operators",
        _expect_bool,
    ),
    "DisableFormat": ("disable_format", _expect_bool),
}


def _decode(data: bytes | str) -> str:
    if isinstance(data, str):
        return data
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise StyleParseError(f"Style document is not UTF-8: {exc}") from exc


def _select_section(documents: list[Any]) -> Optional[Mapping[str, Any]]:
    """Pick the section that applies to C-family sources.

    A document may hold several ``---`` separated sections; one without a
    ``Language`` key applies to every language unless a C-family section is
    also present.
    """

    fallback: Optional[Mapping[str, Any]] = None
    for document in documents:
        if document is None:
            continue
        if not isinstance(document, dict):
            raise StyleParseError("Style document must be a mapping of options")
        language = document.get("Language")
        if language is None:
            if fallback is None:
                fallback = document
        elif language in CPP_LANGUAGES:
            return document
    return fallback


def parse_configuration(
    data: bytes | str, *, base: StyleConfig, name: str = "custom"
) -> StyleConfig:
    """Apply the options in ``data`` on top of ``base``.

    ``BasedOnStyle`` swaps the starting point for another predefined style
    before the remaining options are applied.
    """

    text = _decode(data)
    if not text.strip():
        return base.derive(name=name)
    try:
        documents = list(yaml.safe_load_all(text))
    except yaml.YAMLError as exc:
        raise StyleParseError(f"Invalid style document: {exc}") from exc

    section = _select_section(documents)
    if section is None:
        raise StyleParseError("Style document has no section for C-family sources")

    style = base
    based_on = section.get("BasedOnStyle")
    if based_on is not None:
        if not isinstance(based_on, str):
            raise StyleParseError("BasedOnStyle must be a style name", key="BasedOnStyle")
        predefined = get_predefined_style(based_on)
        if predefined is None:
            raise StyleParseError(
                f"Unknown BasedOnStyle {based_on!r}", key="BasedOnStyle"
            )
        style = predefined

    changes: Dict[str, Any] = {"name": name, "based_on": style.based_on}
    extras: Dict[str, Any] = {}
    for key, value in section.items():
        if key in ("BasedOnStyle", "Language"):
            continue
        option = _OPTIONS.get(str(key))
        if option is None:
            extras[str(key)] = value
            continue
        field_name, convert = option
        changes[field_name] = convert(str(key), value)
    changes["extras"] = extras
    return style.derive(**changes)


__all__ = ["StyleParseError", "parse_configuration"]
