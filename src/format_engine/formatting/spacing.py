"""Whitespace pass: indentation, trailing blanks, operator spacing, empty lines."""

from __future__ import annotations

import re
from typing import Dict, Iterable, Iterator, List, Sequence, Set

from format_engine.replacements import Range, Replacement, ReplacementSet
from format_engine.styles import StyleConfig

from .scanner import SourceLine, scan_lines

_OPERATOR_CHARS = "-+*/%&|^!=<>"
OPERATOR_RE = re.compile(f"[{re.escape(_OPERATOR_CHARS)}]+")

# Longest first; a run of operator characters is split greedily.
_TOKENS = sorted(
    {
        "<<=", ">>=", "<=>", "->*",
        "==", "!=", "<=", ">=", "&&", "||", "++", "--", "<<", ">>", "->",
        "+=", "-=", "*=", "/=", "%=", "&=", "|=", "^=",
        "=", "<", ">", "+", "-", "*", "/", "%", "&", "|", "^", "!",
    },
    key=len,
    reverse=True,
)
# Assignment, compound assignment and comparison operators get spaces.
SPACED_OPERATORS = frozenset(
    {"=", "+=", "-=", "*=", "/=", "%=", "&=", "|=", "^=", "<<=", ">>=",
     "==", "!=", "<=", ">="}
)

_OPEN = "[(,{;"
_CLOSE = "])},;"
_BLANKS = " \t"


def _touched(line: SourceLine, ranges: Sequence[Range]) -> bool:
    return any(r.intersects(line.offset, line.end) for r in ranges)


def _removed_blank_lines(
    lines: Sequence[SourceLine], style: StyleConfig, ranges: Sequence[Range]
) -> tuple[List[Replacement], Set[int]]:
    """Drop blank lines beyond ``max_empty_lines_to_keep`` in each run."""

    replacements: List[Replacement] = []
    removed: Set[int] = set()
    run: List[SourceLine] = []

    def flush() -> None:
        extra = run[style.max_empty_lines_to_keep :]
        if extra and any(_touched(line, ranges) for line in extra):
            start, end = extra[0].offset, extra[-1].end
            replacements.append(Replacement(start, end - start, ""))
            removed.update(line.number for line in extra)
        run.clear()

    for line in lines:
        if line.is_blank and not line.starts_in_comment:
            run.append(line)
        else:
            flush()
    flush()
    return replacements, removed


def _operator_tokens(masked: str, end: int) -> Iterator[tuple[int, int, str]]:
    for run in OPERATOR_RE.finditer(masked, 0, end):
        index = run.start()
        while index < run.end():
            token = next(t for t in _TOKENS if masked.startswith(t, index, run.end()))
            yield index, index + len(token), token
            index += len(token)


def _operator_gaps(line: SourceLine, style: StyleConfig) -> Dict[tuple[int, int], str]:
    masked = line.masked
    code_end = len(line.content.rstrip(_BLANKS))
    gaps: Dict[tuple[int, int], str] = {}
    for start, end, token in _operator_tokens(masked, code_end):
        if token not in SPACED_OPERATORS:
            continue
        before = start
        while before > 0 and masked[before - 1] in _BLANKS:
            before -= 1
        after = end
        while after < code_end and masked[after] in _BLANKS:
            after += 1
        if before == 0 or after >= code_end:
            continue  # operator starts or ends a wrapped line
        if masked[before - 1] in _OPEN or masked[after] in _CLOSE:
            continue
        if masked[:before].endswith("operator"):
            continue
        # Never glue two operators together.
        spaced = (
            style.space_before_assignment_operators
            or masked[before - 1] in _OPERATOR_CHARS
        )
        gaps.setdefault((before, start), " " if spaced else "")
        gaps[(end, after)] = " "
    return gaps


def _line_replacements(line: SourceLine, style: StyleConfig) -> Iterable[Replacement]:
    content = line.content
    if line.is_blank:
        if content:
            yield Replacement(line.offset, len(content), "")
        return

    leading = content[: len(content) - len(content.lstrip(_BLANKS))]
    if not style.use_tab and "\t" in leading and not line.starts_in_comment:
        yield Replacement(
            line.offset, len(leading), leading.expandtabs(style.indent_width)
        )

    for (start, end), wanted in sorted(_operator_gaps(line, style).items()):
        if content[start:end] != wanted:
            yield Replacement(line.offset + start, end - start, wanted)

    code_end = len(content.rstrip(_BLANKS))
    if code_end < len(content):
        yield Replacement(line.offset + code_end, len(content) - code_end, "")


def whitespace_replacements(
    style: StyleConfig, text: str, ranges: Sequence[Range]
) -> ReplacementSet:
    """Minimal whitespace edits for the lines touched by ``ranges``.

    Preprocessor directives are left to the include pass.
    """

    result = ReplacementSet()
    if style.disable_format:
        return result

    lines = list(scan_lines(text))
    removals, removed = _removed_blank_lines(lines, style, ranges)
    for replacement in removals:
        result.add(replacement)

    for line in lines:
        if line.number in removed or line.is_directive:
            continue
        if not _touched(line, ranges):
            continue
        for replacement in _line_replacements(line, style):
            result.add(replacement)
    return result


__all__ = ["OPERATOR_RE", "whitespace_replacements"]
