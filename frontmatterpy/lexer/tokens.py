"""Lexer tokens."""

from dataclasses import dataclass
from enum import IntEnum

from frontmatterpy.text import TextRange


class TokenKind(IntEnum):
    # -------------------------
    # Trivia tokens
    # -------------------------
    WHITESPACE = 10
    NEWLINE = 11

    # -------------------------
    # Text
    # -------------------------
    WORD = 20  # run of characters without special meaning

    # -------------------------
    # Punctuation
    # -------------------------
    COLON = 40  # :
    COMMA = 41  # ,
    HASH = 42  # #
    QUOTE = 43  # '
    DOUBLE_QUOTE = 44  # "

    LBRACKET = 60  # [
    RBRACKET = 61  # ]

    @property
    def is_trivia(self) -> bool:
        return self in (TokenKind.WHITESPACE, TokenKind.NEWLINE)

    @property
    def is_quote(self) -> bool:
        return self in (TokenKind.QUOTE, TokenKind.DOUBLE_QUOTE)


@dataclass(frozen=True, slots=True)
class Token:
    """A single primitive token with its literal text."""

    kind: TokenKind
    range: TextRange
    text: str

    def __str__(self) -> str:
        return f"{self.kind.name}({self.text!r}){self.range.as_tuple()}"
