"""Include ordering pass."""

from __future__ import annotations

import re
from pathlib import PurePosixPath
from typing import List, Sequence

from format_engine.replacements import Range, Replacement, ReplacementSet
from format_engine.styles import SortIncludes, StyleConfig

from .scanner import SourceLine, scan_lines

INCLUDE_RE = re.compile(r"^\s*#\s*(?:include|import)\s*([<\"])([^>\"]*)[>\"]")


def _stem(path: str) -> str:
    name = PurePosixPath(path).name
    return name.split(".", 1)[0]


def _sortable(line: SourceLine) -> bool:
    # A line that leaves a block comment open must keep its place.
    return (
        not line.starts_in_comment
        and not line.ends_in_comment
        and INCLUDE_RE.match(line.content) is not None
    )


def _include_blocks(lines: Sequence[SourceLine]) -> List[List[SourceLine]]:
    blocks: List[List[SourceLine]] = []
    current: List[SourceLine] = []
    for line in lines:
        if _sortable(line):
            current.append(line)
            continue
        if current:
            blocks.append(current)
            current = []
    if current:
        blocks.append(current)
    return blocks


def _sort_key(line: SourceLine, style: StyleConfig, main_stem: str) -> tuple:
    match = INCLUDE_RE.match(line.content)
    assert match is not None
    delimiter, path = match.group(1), match.group(2)
    if delimiter == '"' and main_stem and _stem(path) == main_stem:
        category = 0
    elif delimiter == '"':
        category = 1
    else:
        category = 2
    if style.sort_includes is SortIncludes.CASE_INSENSITIVE:
        return (category, path.lower(), path)
    return (category, path)


def _sorted_block(
    block: Sequence[SourceLine], style: StyleConfig, main_stem: str
) -> str:
    ordered = sorted(block, key=lambda line: _sort_key(line, style, main_stem))
    seen: set[str] = set()
    unique: List[str] = []
    for line in ordered:
        directive = line.content.strip()
        if directive not in seen:
            seen.add(directive)
            unique.append(line.content)
    terminators = [line.terminator for line in block]
    terminators = terminators[: len(unique) - 1] + [terminators[-1]]
    return "".join(content + end for content, end in zip(unique, terminators))


def include_replacements(
    style: StyleConfig,
    text: str,
    ranges: Sequence[Range],
    filename_hint: str,
) -> ReplacementSet:
    """Sort each contiguous block of include directives touched by ``ranges``.

    Quoted includes come before angled ones; a quoted include whose stem
    matches ``filename_hint`` (the main header) comes first. Duplicate
    directives are dropped.
    """

    result = ReplacementSet()
    if not style.sorts_includes:
        return result

    main_stem = _stem(filename_hint) if filename_hint else ""
    for block in _include_blocks(list(scan_lines(text))):
        start, end = block[0].offset, block[-1].end
        if not any(r.intersects(start, end) for r in ranges):
            continue
        updated = _sorted_block(block, style, main_stem)
        if updated != text[start:end]:
            result.add(Replacement(start, end - start, updated))
    return result


__all__ = ["INCLUDE_RE", "include_replacements"]
