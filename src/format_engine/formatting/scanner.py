"""Line scanner that hides literals and comments from the formatting passes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from format_engine.buffer import split_lines

MASK = "\x00"


@dataclass(frozen=True, slots=True)
class SourceLine:
    """One line of the buffer with its literals and comments masked out."""

    number: int
    offset: int
    content: str
    terminator: str
    masked: str
    starts_in_comment: bool
    ends_in_comment: bool
    is_directive: bool

    @property
    def end(self) -> int:
        return self.offset + len(self.content) + len(self.terminator)

    @property
    def is_blank(self) -> bool:
        return not self.content.strip(" \t")


def _split_terminator(line: str) -> tuple[str, str]:
    if line.endswith("\r\n"):
        return line[:-2], "\r\n"
    if line.endswith("\n"):
        return line[:-1], "\n"
    return line, ""


def mask_line(content: str, in_comment: bool) -> tuple[str, bool]:
    """Replace comment and literal characters with ``MASK``.

    Returns the masked text and whether a block comment is still open at the
    end of the line.
    """

    out: list[str] = []
    index = 0
    length = len(content)
    while index < length:
        pair = content[index : index + 2]
        if in_comment:
            if pair == "*/":
                out.append(MASK * 2)
                index += 2
                in_comment = False
            else:
                out.append(MASK)
                index += 1
        elif pair == "//":
            out.append(MASK * (length - index))
            break
        elif pair == "/*":
            out.append(MASK * 2)
            index += 2
            in_comment = True
        elif content[index] in "\"'":
            quote = content[index]
            stop = index + 1
            while stop < length and content[stop] != quote:
                stop += 2 if content[stop] == "\\" else 1
            stop = min(stop + 1, length)
            out.append(MASK * (stop - index))
            index = stop
        else:
            out.append(content[index])
            index += 1
    return "".join(out), in_comment


def scan_lines(text: str) -> Iterator[SourceLine]:
    in_comment = False
    in_directive = False
    offset = 0
    for number, line in enumerate(split_lines(text)):
        content, terminator = _split_terminator(line)
        starts_in_comment = in_comment
        directive = in_directive or (
            not starts_in_comment and content.lstrip(" \t").startswith("#")
        )
        masked, in_comment = mask_line(content, in_comment)
        in_directive = directive and content.endswith("\\")
        yield SourceLine(
            number=number,
            offset=offset,
            content=content,
            terminator=terminator,
            masked=masked,
            starts_in_comment=starts_in_comment,
            ends_in_comment=in_comment,
            is_directive=directive,
        )
        offset += len(line)


__all__ = ["MASK", "SourceLine", "mask_line", "scan_lines"]
