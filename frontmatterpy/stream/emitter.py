"""Chunked, pausable delivery of a finite token sequence."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Final

from frontmatterpy.stream.sink import TokenSink

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE: Final[int] = 10
"""Tokens delivered per scheduler tick."""

DEFAULT_TICK_INTERVAL: Final[float] = 0.0
"""Delay in seconds between two ticks."""


class ChunkedEmitter[T]:
    """Deliver an immutable token snapshot to a sink in batches on the event loop.

    Each tick of the asyncio loop delivers up to `batch_size` tokens, so a long
    token sequence never runs as one unbroken synchronous block. The tick after
    the last batch signals end-of-stream and stops scheduling.
    """

    def __init__(
        self,
        tokens: Sequence[T],
        *,
        batch_size: int = DEFAULT_BATCH_SIZE,
        interval: float = DEFAULT_TICK_INTERVAL,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        if batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {batch_size}")
        if interval < 0:
            raise ValueError(f"interval cannot be negative, got {interval}")
        self._tokens: tuple[T, ...] = tuple(tokens)
        self._batch_size = batch_size
        self._interval = interval
        self._loop = loop
        self._sink: TokenSink[T] | None = None
        self._index = 0
        self._handle: asyncio.TimerHandle | None = None
        self._started = False
        self._paused = False
        self._ended = False
        self._destroyed = False

    @property
    def tokens(self) -> tuple[T, ...]:
        return self._tokens

    @property
    def batch_size(self) -> int:
        return self._batch_size

    @property
    def delivered_count(self) -> int:
        return self._index

    @property
    def started(self) -> bool:
        return self._started

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def ended(self) -> bool:
        return self._ended

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def bind(self, sink: TokenSink[T]) -> None:
        if self._sink is not None:
            raise RuntimeError("Emitter already has a sink bound.")
        self._sink = sink

    def start(self) -> None:
        if self._started:
            raise RuntimeError("Tokens are already being sent.")
        if self._sink is None:
            raise RuntimeError("Cannot start an emitter without a bound sink.")
        self._started = True

        if self._destroyed:
            return

        if not self._tokens and not self._paused:
            self._finish()
            return

        self._schedule()

    def pause(self) -> None:
        if self._destroyed or self._paused:
            return
        self._paused = True
        self._cancel_tick()

    def resume(self) -> None:
        if self._destroyed or not self._paused:
            return
        self._paused = False
        if self._started:
            self._schedule()

    def destroy(self) -> None:
        if self._destroyed:
            return
        self._destroyed = True
        self._cancel_tick()
        logger.debug("Emitter destroyed after %d of %d tokens", self._index, len(self._tokens))

    def _schedule(self) -> None:
        if self._handle is not None or self._paused or self._destroyed or self._ended:
            return
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        self._handle = self._loop.call_later(self._interval, self._tick)

    def _cancel_tick(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _tick(self) -> None:
        self._handle = None
        if self._destroyed or self._paused:
            return

        if self._index >= len(self._tokens):
            self._finish()
            return

        self._send_batch()
        self._schedule()

    def _send_batch(self) -> None:
        assert self._sink is not None
        remaining = min(self._batch_size, len(self._tokens) - self._index)
        while remaining > 0:
            # The sink may pause or destroy us from inside on_data.
            if self._paused or self._destroyed:
                return
            token = self._tokens[self._index]
            self._index += 1
            remaining -= 1
            self._sink.on_data(token)

    def _finish(self) -> None:
        assert self._sink is not None
        self._ended = True
        self._cancel_tick()
        self._sink.on_end()
