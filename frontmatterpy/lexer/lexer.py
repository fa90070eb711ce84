"""Lexer."""

from frontmatterpy.lexer.tokens import Token, TokenKind
from frontmatterpy.text import TextRange

_PUNCTUATION: dict[str, TokenKind] = {
    ":": TokenKind.COLON,
    ",": TokenKind.COMMA,
    "#": TokenKind.HASH,
    "'": TokenKind.QUOTE,
    '"': TokenKind.DOUBLE_QUOTE,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
}

_WORD_BREAKS = frozenset(" \t\r\n") | frozenset(_PUNCTUATION)


class Lexer:
    """Lossless lexer over a window of a document.

    Token ranges are absolute offsets into `source`, so a lexer started at the
    front-matter content offset yields ranges that point into the document.
    """

    def __init__(self, source: str, *, start: int = 0, end: int | None = None) -> None:
        stop = len(source) if end is None else end
        if start < 0 or stop > len(source) or start > stop:
            raise ValueError(f"Invalid lexer window [{start}, {stop}) for text of length {len(source)}")
        self._source = source
        self._position = start
        self._end = stop

    @property
    def source(self) -> str:
        """Original source text."""
        return self._source

    @property
    def position(self) -> int:
        return self._position

    @property
    def is_eof(self) -> bool:
        return self._position >= self._end

    def next_token(self) -> Token | None:
        if self.is_eof:
            return None
        start = self._position
        kind = self._lex_token()
        return Token(kind, TextRange(start, self._position), self._source[start : self._position])

    def lex(self) -> list[Token]:
        tokens: list[Token] = []
        while (token := self.next_token()) is not None:
            tokens.append(token)
        return tokens

    def _lex_token(self) -> TokenKind:
        ch = self._current_char()

        if ch == "\r" or ch == "\n":
            self._consume_newline()
            return TokenKind.NEWLINE

        if ch == " " or ch == "\t":
            self._consume_whitespaces()
            return TokenKind.WHITESPACE

        punctuation = _PUNCTUATION.get(ch)
        if punctuation is not None:
            self._advance(1)
            return punctuation

        self._advance(1)
        while not self.is_eof and self._current_char() not in _WORD_BREAKS:
            self._advance(1)
        return TokenKind.WORD

    def _consume_whitespaces(self) -> None:
        while not self.is_eof:
            ch = self._current_char()
            if ch == " " or ch == "\t":
                self._advance(1)
                continue
            break

    def _consume_newline(self) -> None:
        if self._current_char() == "\r" and self._peek_char() == "\n":
            self._advance(2)
        else:
            self._advance(1)

    def _current_char(self) -> str:
        if self.is_eof:
            return "\0"
        return self._source[self._position]

    def _peek_char(self, ahead: int = 1) -> str:
        index = self._position + ahead
        if index >= self._end:
            return "\0"
        return self._source[index]

    def _advance(self, steps: int) -> None:
        self._position += steps


def dump_tokens(tokens: list[Token]) -> None:
    """Print token list with kind, range and text for debugging."""
    for i, tok in enumerate(tokens):
        print(f"{i:03d} {tok.kind.name:<14} range={tok.range.as_tuple()} text={tok.text!r}")
