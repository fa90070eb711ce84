"""Locate the front-matter block at the start of a document."""

from __future__ import annotations

import re
from dataclasses import dataclass

from frontmatterpy.text import TextRange, slice_text_range

_MARKER_RE = re.compile(r"---[ \t]*(?=\r\n|\n|\r|\Z)")
_BOM = "\ufeff"


@dataclass(frozen=True, slots=True)
class FrontMatterBlock:
    """`---` delimited block; `end_marker` is None when the block is unterminated."""

    start_marker: TextRange
    content_range: TextRange
    end_marker: TextRange | None

    @property
    def terminated(self) -> bool:
        return self.end_marker is not None

    @property
    def range(self) -> TextRange:
        end = self.end_marker if self.end_marker is not None else self.content_range
        return self.start_marker.cover(end)

    def content(self, text: str) -> str:
        return slice_text_range(text, self.content_range)


def find_front_matter(text: str) -> FrontMatterBlock | None:
    offset = 1 if text.startswith(_BOM) else 0
    start = _MARKER_RE.match(text, offset)
    if start is None:
        return None

    start_marker = TextRange(start.start(), start.end())
    content_start = _next_line_start(text, start.end())
    if content_start is None:
        return FrontMatterBlock(start_marker, TextRange.empty(len(text)), None)

    position = content_start
    while True:
        end = _MARKER_RE.match(text, position)
        if end is not None:
            return FrontMatterBlock(
                start_marker,
                TextRange(content_start, position),
                TextRange(end.start(), end.end()),
            )
        next_line = _next_line_start(text, position)
        if next_line is None:
            return FrontMatterBlock(start_marker, TextRange(content_start, len(text)), None)
        position = next_line


def _next_line_start(text: str, position: int) -> int | None:
    for index in range(position, len(text)):
        ch = text[index]
        if ch == "\n":
            return index + 1
        if ch == "\r":
            if index + 1 < len(text) and text[index + 1] == "\n":
                return index + 2
            return index + 1
    return None
