from bisect import bisect_right
from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class TextRange:
    """
    Half-open range [start, end) of character offsets in a document.

    Invariant:
    - 0 <= start <= end

    Offsets are absolute document positions, so ranges produced while
    lexing a front-matter window can be reported without translation.
    """

    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.end < 0:
            raise ValueError("TextRange positions cannot be negative")
        if self.start > self.end:
            raise ValueError("TextRange invariant violated: start > end")

    @staticmethod
    def empty(offset: int) -> "TextRange":
        """Create an empty TextRange at the given offset."""
        return TextRange(offset, offset)

    def as_tuple(self) -> tuple[int, int]:
        return (self.start, self.end)

    def cover(self, other: "TextRange") -> "TextRange":
        """Get the minimal range that covers both this range and another range."""
        return TextRange(min(self.start, other.start), max(self.end, other.end))

    def __repr__(self) -> str:
        return f"TextRange({self.start}, {self.end})"


def cover_ranges(first: TextRange, *rest: TextRange) -> TextRange:
    """Minimal range covering all given ranges."""
    result = first
    for other in rest:
        result = result.cover(other)
    return result


def slice_text_range(source: str, range: TextRange) -> str:
    """Get the substring of the source text covered by the given TextRange.

    Coord system matches python string indices so we can just do this.
    """
    return source[range.start : range.end]


@dataclass(frozen=True, slots=True)
class LinePosition:
    """Zero-based line/column pair."""

    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line + 1}:{self.column + 1}"


class LineIndex:
    """Offset to line/column lookup for a fixed source text."""

    def __init__(self, source: str) -> None:
        starts = [0]
        for index, ch in enumerate(source):
            if ch == "\n":
                starts.append(index + 1)
        self._line_starts = tuple(starts)
        self._length = len(source)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def position(self, offset: int) -> LinePosition:
        if offset < 0 or offset > self._length:
            raise ValueError(f"Offset {offset} is outside of the source text")
        line = bisect_right(self._line_starts, offset) - 1
        return LinePosition(line, offset - self._line_starts[line])

    def range_positions(self, range: TextRange) -> tuple[LinePosition, LinePosition]:
        return (self.position(range.start), self.position(range.end))
