"""Front-matter header aggregator.

Owns the chunked emitter and structural decoder for one metadata block,
classifies every structured token as known, unknown or duplicate, runs the
matching record rule and accumulates diagnostics until the decoder ends.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from enum import StrEnum
from types import TracebackType
from typing import assert_never

from frontmatterpy.decoder import (
    ArrayValue,
    DecoderError,
    OtherValue,
    Record,
    StringValue,
    StructuralDecoder,
    StructuredToken,
    TriviaToken,
)
from frontmatterpy.diagnostics import (
    HEADER_DECODER_ERROR,
    HEADER_DUPLICATE_RECORD,
    HEADER_UNEXPECTED_TOKEN,
    HEADER_UNKNOWN_RECORD,
    Diagnostic,
    diagnostic_from_spec,
    has_errors,
)
from frontmatterpy.header.options import DecoderErrorPolicy, HeaderOptions
from frontmatterpy.lexer import Token
from frontmatterpy.schema import RecordValidationResult
from frontmatterpy.stream import ChunkedEmitter
from frontmatterpy.text import TextRange, cover_ranges

logger = logging.getLogger(__name__)


class HeaderState(StrEnum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    SETTLED = "settled"


class FrontMatterHeader:
    """Incrementally validated metadata block.

    Does no work until `start()`. Settles exactly once, when the decoder
    signals end-of-stream; reads are stable afterwards. `close()` releases the
    emitter and decoder; closing before settlement leaves `settled` pending.
    """

    def __init__(
        self,
        tokens: Sequence[Token],
        *,
        content_range: TextRange | None = None,
        options: HeaderOptions | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._options = options if options is not None else HeaderOptions()
        self._content_range = content_range if content_range is not None else _covering_range(tokens)
        self._loop = loop
        self._emitter: ChunkedEmitter[Token] = ChunkedEmitter(
            tokens,
            batch_size=self._options.batch_size,
            interval=self._options.tick_interval,
            loop=loop,
        )
        self._decoder = StructuralDecoder(self._emitter)
        self._decoder.bind(self)

        self._records: list[tuple[str, RecordValidationResult]] = []
        self._seen_names: set[str] = set()
        self._issues: list[Diagnostic] = []
        self._state = HeaderState.NOT_STARTED
        self._settled: asyncio.Future[None] | None = None
        self._closed = False

    @property
    def options(self) -> HeaderOptions:
        return self._options

    @property
    def content_range(self) -> TextRange:
        return self._content_range

    @property
    def state(self) -> HeaderState:
        return self._state

    @property
    def is_settled(self) -> bool:
        return self._state == HeaderState.SETTLED

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def records(self) -> tuple[tuple[str, RecordValidationResult], ...]:
        return tuple(self._records)

    @property
    def seen_names(self) -> frozenset[str]:
        return frozenset(self._seen_names)

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        """Per-record diagnostics in record order, followed by header-level issues."""
        result: list[Diagnostic] = []
        for _, record in self._records:
            result.extend(record.diagnostics)
        result.extend(self._issues)
        return tuple(result)

    @property
    def valid(self) -> bool:
        return not has_errors(self.diagnostics)

    @property
    def settled(self) -> asyncio.Future[None]:
        if self._settled is None:
            raise RuntimeError("Header has not been started.")
        return self._settled

    async def wait_settled(self) -> None:
        await self.settled

    def values(self, key: str) -> tuple[str, ...]:
        """Accepted values of a validated record, empty if it was never seen."""
        for name, record in self._records:
            if name == key:
                return record.accepted_values
        return ()

    def start(self) -> "FrontMatterHeader":
        if self._state != HeaderState.NOT_STARTED:
            return self
        if self._closed:
            raise RuntimeError("Cannot start a closed header.")

        loop = self._loop if self._loop is not None else asyncio.get_running_loop()
        self._settled = loop.create_future()
        self._state = HeaderState.RUNNING
        logger.debug("Header started over %d tokens", len(self._emitter.tokens))
        self._decoder.start()
        return self

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._decoder.destroy()
        if self._state == HeaderState.RUNNING:
            logger.debug("Header closed before settlement")

    def __enter__(self) -> "FrontMatterHeader":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # --- TokenSink[StructuredToken] ---

    def on_data(self, item: StructuredToken) -> None:
        if self._state != HeaderState.RUNNING:
            return

        match item:
            case TriviaToken():
                return
            case Record():
                self._on_record(item)
            case StringValue() | ArrayValue() | OtherValue():
                self._issues.append(
                    diagnostic_from_spec(HEADER_UNEXPECTED_TOKEN, item.range, f"Got `{item.raw}`.")
                )
            case _:
                assert_never(item)

    def on_error(self, error: Exception) -> None:
        if self._state != HeaderState.RUNNING:
            return

        logger.warning("Front matter decoder error: %s", error)
        if self._options.decoder_errors == DecoderErrorPolicy.LOG:
            return

        if isinstance(error, DecoderError):
            self._issues.append(error.to_diagnostic())
        else:
            self._issues.append(diagnostic_from_spec(HEADER_DECODER_ERROR, self._content_range, str(error)))

    def on_end(self) -> None:
        if self._state != HeaderState.RUNNING:
            return
        self._state = HeaderState.SETTLED
        if self._settled is not None and not self._settled.done():
            self._settled.set_result(None)
        logger.debug(
            "Header settled with %d records and %d diagnostics",
            len(self._records),
            len(self.diagnostics),
        )

    def _on_record(self, record: Record) -> None:
        name = record.name.text

        if name in self._seen_names:
            self._issues.append(
                diagnostic_from_spec(
                    HEADER_DUPLICATE_RECORD,
                    record.range,
                    f"Record `{name}` is already defined.",
                )
            )
            return

        rule = self._options.schema.rule_for(name)
        if rule is None:
            known = ", ".join(f"`{key}`" for key in self._options.schema.keys)
            self._issues.append(
                diagnostic_from_spec(
                    HEADER_UNKNOWN_RECORD,
                    record.range,
                    f"Record `{name}` is not recognized.",
                    hint=f"Known records: {known}." if known else None,
                )
            )
            return

        self._seen_names.add(name)
        self._records.append((name, rule.validate(record.name, record.value)))


def _covering_range(tokens: Sequence[Token]) -> TextRange:
    if not tokens:
        return TextRange.empty(0)
    return cover_ranges(*(token.range for token in tokens))
