"""Structural decoder grouping primitive tokens into records and values."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from frontmatterpy.decoder.tokens import (
    ArrayValue,
    OtherValue,
    OtherValueKind,
    Record,
    RecordName,
    StringValue,
    StructuredToken,
    TriviaKind,
    TriviaToken,
    ValueToken,
)
from frontmatterpy.diagnostics import (
    DECODER_EXPECTED_VALUE,
    DECODER_UNEXPECTED_TRAILING_TEXT,
    DECODER_UNTERMINATED_ARRAY,
    DECODER_UNTERMINATED_STRING,
    Diagnostic,
    DiagnosticSpec,
    diagnostic_from_spec,
)
from frontmatterpy.lexer import Token, TokenKind
from frontmatterpy.stream import ChunkedEmitter, TokenSink
from frontmatterpy.text import TextRange

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"[-+]?(?:\d[\d_]*(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?|0x[0-9a-fA-F]+|0o[0-7]+")
_BOOLEANS = frozenset({"true", "false"})
_NULLS = frozenset({"null", "~"})
_DOUBLE_QUOTE_ESCAPE_RE = re.compile(r'\\(["\\])')


class DecoderError(Exception):
    """Recoverable failure while structuring the token stream."""

    def __init__(self, spec: DiagnosticSpec, range: TextRange, detail: str | None = None) -> None:
        self.spec = spec
        self.range = range
        self.detail = detail
        super().__init__(spec.message if detail is None else f"{spec.message} {detail}")

    def to_diagnostic(self) -> Diagnostic:
        return diagnostic_from_spec(self.spec, self.range, self.detail)


class _NeedMoreTokens(Exception):
    pass


class _ArraySplit(Exception):
    """An unindented record line was reached inside an unterminated array."""

    def __init__(self, error: DecoderError) -> None:
        super().__init__(str(error))
        self.error = error


type _DecodeEvent = StructuredToken | DecoderError


class _LineDecoder:
    """Decode one logical line (a record, possibly with a multi-line array)."""

    def __init__(self, tokens: Sequence[Token], *, final: bool) -> None:
        self._tokens = tokens
        self._final = final
        self._pos = 0
        self._events: list[_DecodeEvent] = []

    def decode_line(self) -> tuple[list[_DecodeEvent], int]:
        if not self._final and not any(t.kind == TokenKind.NEWLINE for t in self._tokens):
            raise _NeedMoreTokens()

        self._inline_trivia()
        if not self._at_line_end() and not self._at_comment():
            try:
                self._events.append(self._entry())
            except _ArraySplit as split:
                self._events.append(split.error)
                return self._events, self._pos
            except DecoderError as error:
                self._events.append(error)
                self._skip_to_line_end()
            self._inline_trivia()
            self._trailing_text()

        if self._at_comment():
            self._comment()
        if self._at(TokenKind.NEWLINE):
            self._trivia(TriviaKind.NEWLINE)
        return self._events, self._pos

    # --- Entries ---

    def _entry(self) -> StructuredToken:
        if not self._is_record_start(self._pos):
            return self._value(in_array=False)

        start = self._pos
        name_token = self._bump()
        self._skip(TokenKind.WHITESPACE)
        colon = self._bump()
        self._skip(TokenKind.WHITESPACE)

        value: ValueToken
        if self._at_line_end() or self._at_comment():
            value = OtherValue(TextRange.empty(colon.range.end), "", OtherValueKind.NULL)
            end = colon.range.end
        else:
            value = self._value(in_array=False)
            end = value.range.end

        return Record(
            range=TextRange(name_token.range.start, end),
            raw=self._join(start, self._pos).rstrip(" \t"),
            name=RecordName(name_token.range, name_token.text),
            value=value,
        )

    def _is_record_start(self, index: int) -> bool:
        if index >= len(self._tokens) or self._tokens[index].kind != TokenKind.WORD:
            return False
        index += 1
        if index < len(self._tokens) and self._tokens[index].kind == TokenKind.WHITESPACE:
            index += 1
        return index < len(self._tokens) and self._tokens[index].kind == TokenKind.COLON

    def _trailing_text(self) -> None:
        if self._at_line_end() or self._at_comment():
            return
        start = self._pos
        end = start
        while not self._at_line_end() and not self._at_comment():
            token = self._bump()
            if not token.kind.is_trivia:
                end = self._pos
        self._pos = end
        range = TextRange(self._tokens[start].range.start, self._tokens[end - 1].range.end)
        self._events.append(
            DecoderError(DECODER_UNEXPECTED_TRAILING_TEXT, range, f"Got `{self._join(start, end)}`.")
        )
        self._inline_trivia()

    # --- Values ---

    def _value(self, *, in_array: bool) -> ValueToken:
        token = self._current()
        if token.kind == TokenKind.LBRACKET:
            return self._array()
        if token.kind.is_quote:
            return self._string()
        return self._scalar(in_array=in_array)

    def _array(self) -> ArrayValue:
        start = self._pos
        open_bracket = self._bump()
        items: list[ValueToken] = []
        expect_item = True

        while True:
            self._array_trivia(open_bracket)
            if self._is_eof():
                if not self._final:
                    raise _NeedMoreTokens()
                last = self._tokens[-1]
                raise DecoderError(DECODER_UNTERMINATED_ARRAY, TextRange(open_bracket.range.start, last.range.end))

            token = self._current()
            if token.kind == TokenKind.RBRACKET:
                self._bump()
                break

            if token.kind == TokenKind.COMMA:
                if expect_item:
                    self._events.append(DecoderError(DECODER_EXPECTED_VALUE, token.range, "Missing array item before `,`."))
                self._bump()
                expect_item = True
                continue

            if not expect_item:
                self._events.append(
                    DecoderError(DECODER_UNEXPECTED_TRAILING_TEXT, token.range, "Expected `,` between array items.")
                )

            try:
                items.append(self._value(in_array=True))
            except DecoderError as error:
                self._events.append(error)
            expect_item = False

        end = self._pos
        return ArrayValue(
            range=TextRange(open_bracket.range.start, self._tokens[end - 1].range.end),
            raw=self._join(start, end),
            items=tuple(items),
        )

    def _array_trivia(self, open_bracket: Token) -> None:
        while not self._is_eof():
            token = self._current()
            if token.kind == TokenKind.NEWLINE:
                self._bump()
                if self._is_record_start(self._pos):
                    last = self._tokens[self._pos - 1]
                    raise _ArraySplit(
                        DecoderError(
                            DECODER_UNTERMINATED_ARRAY,
                            TextRange(open_bracket.range.start, last.range.start),
                        )
                    )
                continue
            if token.kind == TokenKind.WHITESPACE:
                self._bump()
                continue
            if self._at_comment():
                while not self._is_eof() and not self._at(TokenKind.NEWLINE):
                    self._bump()
                continue
            return

    def _string(self) -> StringValue:
        start = self._pos
        open_quote = self._bump()
        inner: list[str] = []

        while True:
            if self._is_eof() or self._at(TokenKind.NEWLINE):
                end = self._tokens[self._pos - 1].range.end
                raise DecoderError(DECODER_UNTERMINATED_STRING, TextRange(open_quote.range.start, end))
            token = self._bump()
            if token.kind != open_quote.kind:
                inner.append(token.text)
                continue
            if open_quote.kind == TokenKind.DOUBLE_QUOTE and _ends_with_escape("".join(inner)):
                inner.append(token.text)
                continue
            if open_quote.kind == TokenKind.QUOTE and self._at(TokenKind.QUOTE):
                # '' is an escaped single quote
                inner.append(token.text)
                self._bump()
                continue
            break

        content = "".join(inner)
        if open_quote.kind == TokenKind.DOUBLE_QUOTE:
            text = _DOUBLE_QUOTE_ESCAPE_RE.sub(r"\1", content)
        else:
            text = content
        return StringValue(
            range=TextRange(open_quote.range.start, self._tokens[self._pos - 1].range.end),
            raw=self._join(start, self._pos),
            text=text,
            quote=open_quote.text,
        )

    def _scalar(self, *, in_array: bool) -> ValueToken:
        start = self._pos
        end = start
        while not self._at_line_end() and not self._at_comment():
            token = self._current()
            if in_array and token.kind in (TokenKind.COMMA, TokenKind.RBRACKET):
                break
            self._bump()
            if not token.kind.is_trivia:
                end = self._pos
        self._pos = end

        raw = self._join(start, end)
        range = TextRange(self._tokens[start].range.start, self._tokens[end - 1].range.end)
        return _classify_scalar(raw, range)

    # --- Trivia ---

    def _inline_trivia(self) -> None:
        if self._at(TokenKind.WHITESPACE):
            self._trivia(TriviaKind.WHITESPACE)

    def _trivia(self, kind: TriviaKind) -> None:
        token = self._bump()
        self._events.append(TriviaToken(kind, token.range, token.text))

    def _comment(self) -> None:
        start = self._pos
        while not self._at_line_end():
            self._bump()
        range = TextRange(self._tokens[start].range.start, self._tokens[self._pos - 1].range.end)
        self._events.append(TriviaToken(TriviaKind.COMMENT, range, self._join(start, self._pos)))

    def _skip_to_line_end(self) -> None:
        while not self._at_line_end():
            self._bump()

    def _skip(self, kind: TokenKind) -> None:
        while self._at(kind):
            self._bump()

    # --- Cursor ---

    def _current(self) -> Token:
        return self._tokens[self._pos]

    def _bump(self) -> Token:
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def _is_eof(self) -> bool:
        return self._pos >= len(self._tokens)

    def _at(self, kind: TokenKind) -> bool:
        return not self._is_eof() and self._tokens[self._pos].kind == kind

    def _at_line_end(self) -> bool:
        return self._is_eof() or self._at(TokenKind.NEWLINE)

    def _at_comment(self) -> bool:
        # `#` only starts a comment at line start or after whitespace.
        if not self._at(TokenKind.HASH):
            return False
        return self._pos == 0 or self._tokens[self._pos - 1].kind.is_trivia

    def _join(self, start: int, end: int) -> str:
        return "".join(token.text for token in self._tokens[start:end])


def _ends_with_escape(text: str) -> bool:
    count = len(text) - len(text.rstrip("\\"))
    return count % 2 == 1


def _classify_scalar(raw: str, range: TextRange) -> ValueToken:
    lowered = raw.lower()
    if lowered in _BOOLEANS:
        return OtherValue(range, raw, OtherValueKind.BOOLEAN)
    if lowered in _NULLS:
        return OtherValue(range, raw, OtherValueKind.NULL)
    if _NUMBER_RE.fullmatch(raw):
        return OtherValue(range, raw, OtherValueKind.NUMBER)
    return StringValue(range, raw, raw)


class StructuralDecoder:
    """Turn a primitive token stream into a stream of structured tokens.

    Binds itself as the sink of a `ChunkedEmitter[Token]`, buffers tokens per
    logical line and decodes each completed line synchronously. Decode
    failures are reported through `on_error` and decoding continues with the
    next line, so `on_end` still follows.
    """

    def __init__(self, stream: ChunkedEmitter[Token]) -> None:
        self._stream = stream
        self._sink: TokenSink[StructuredToken] | None = None
        self._buffer: list[Token] = []
        self._ended = False
        self._destroyed = False
        stream.bind(self)

    @property
    def stream(self) -> ChunkedEmitter[Token]:
        return self._stream

    @property
    def ended(self) -> bool:
        return self._ended

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def bind(self, sink: TokenSink[StructuredToken]) -> None:
        if self._sink is not None:
            raise RuntimeError("Decoder already has a sink bound.")
        self._sink = sink

    def start(self) -> None:
        if self._sink is None:
            raise RuntimeError("Cannot start a decoder without a bound sink.")
        self._stream.start()

    def pause(self) -> None:
        self._stream.pause()

    def resume(self) -> None:
        self._stream.resume()

    def destroy(self) -> None:
        if self._destroyed:
            return
        self._destroyed = True
        self._buffer.clear()
        self._stream.destroy()

    # --- TokenSink[Token] ---

    def on_data(self, item: Token) -> None:
        if self._destroyed:
            return
        self._buffer.append(item)
        if item.kind == TokenKind.NEWLINE:
            self._drain(final=False)

    def on_error(self, error: Exception) -> None:
        if self._destroyed:
            return
        assert self._sink is not None
        self._sink.on_error(error)

    def on_end(self) -> None:
        if self._destroyed or self._ended:
            return
        self._drain(final=True)
        if self._destroyed:
            return
        self._ended = True
        assert self._sink is not None
        self._sink.on_end()

    def _drain(self, *, final: bool) -> None:
        assert self._sink is not None
        while self._buffer and not self._destroyed:
            try:
                events, consumed = _LineDecoder(self._buffer, final=final).decode_line()
            except _NeedMoreTokens:
                return
            del self._buffer[:consumed]
            for event in events:
                if self._destroyed:
                    return
                if isinstance(event, DecoderError):
                    logger.debug("Decoder error at %s: %s", event.range, event)
                    self._sink.on_error(event)
                else:
                    self._sink.on_data(event)


def decode_tokens(tokens: Sequence[Token]) -> tuple[list[StructuredToken], list[DecoderError]]:
    """Decode a complete token sequence synchronously."""
    buffer = list(tokens)
    structured: list[StructuredToken] = []
    errors: list[DecoderError] = []
    while buffer:
        events, consumed = _LineDecoder(buffer, final=True).decode_line()
        del buffer[:consumed]
        for event in events:
            if isinstance(event, DecoderError):
                errors.append(event)
            else:
                structured.append(event)
    return structured, errors
