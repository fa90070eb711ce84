"""Push-stream sink contract shared by the emitter and the decoder."""

from typing import Protocol


class TokenSink[T](Protocol):
    """Receiver of the three stream signals.

    `on_data` is called once per item in stream order, `on_error` for
    recoverable failures reported by the producer, and `on_end` exactly once
    when the producer has nothing more to deliver.
    """

    def on_data(self, item: T) -> None: ...

    def on_error(self, error: Exception) -> None: ...

    def on_end(self) -> None: ...
