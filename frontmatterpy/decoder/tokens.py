"""Structured tokens produced by the structural decoder."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import assert_never

from frontmatterpy.text import TextRange


class TriviaKind(StrEnum):
    """Non-semantic tokens passed through without diagnostic weight."""

    WHITESPACE = "whitespace"
    NEWLINE = "newline"
    COMMENT = "comment"


class OtherValueKind(StrEnum):
    BOOLEAN = "boolean"
    NUMBER = "number"
    NULL = "null"


@dataclass(frozen=True, slots=True)
class TriviaToken:
    kind: TriviaKind
    range: TextRange
    raw: str


@dataclass(frozen=True, slots=True)
class RecordName:
    range: TextRange
    text: str


@dataclass(frozen=True, slots=True)
class StringValue:
    """Quoted or bare string.

    `raw` is the source text including quotes; `text` is the unquoted,
    unescaped content.
    """

    range: TextRange
    raw: str
    text: str
    quote: str | None = None

    @property
    def is_quoted(self) -> bool:
        return self.quote is not None


@dataclass(frozen=True, slots=True)
class OtherValue:
    """Scalar that is not string-shaped (booleans, numbers, null)."""

    range: TextRange
    raw: str
    value_kind: OtherValueKind


@dataclass(frozen=True, slots=True)
class ArrayValue:
    range: TextRange
    raw: str
    items: tuple[ValueToken, ...]


@dataclass(frozen=True, slots=True)
class Record:
    range: TextRange
    raw: str
    name: RecordName
    value: ValueToken


type ValueToken = StringValue | ArrayValue | OtherValue
type StructuredToken = Record | StringValue | ArrayValue | OtherValue | TriviaToken


def value_kind_name(value: ValueToken) -> str:
    """Human readable name of a value's shape."""
    match value:
        case StringValue():
            return "string"
        case ArrayValue():
            return "array"
        case OtherValue(value_kind=kind):
            return str(kind)
        case _:
            assert_never(value)
