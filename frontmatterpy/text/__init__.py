"""Text offsets and ranges."""

from frontmatterpy.text.text import (
    LineIndex,
    LinePosition,
    TextRange,
    cover_ranges,
    slice_text_range,
)

__all__ = [
    "LineIndex",
    "LinePosition",
    "TextRange",
    "cover_ranges",
    "slice_text_range",
]
