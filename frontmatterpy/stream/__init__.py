"""Token push streams."""

from frontmatterpy.stream.emitter import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_TICK_INTERVAL,
    ChunkedEmitter,
)
from frontmatterpy.stream.sink import TokenSink

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "DEFAULT_TICK_INTERVAL",
    "ChunkedEmitter",
    "TokenSink",
]
