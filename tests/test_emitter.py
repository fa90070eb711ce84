import asyncio

import pytest

from frontmatterpy.stream import ChunkedEmitter
from tests._shared_cases import ManualLoop, RecordingSink, wait_for_end

TOKENS = tuple(f"t{i}" for i in range(23))


def _manual_emitter(tokens=TOKENS, batch_size: int = 10, on_item=None):
    loop = ManualLoop()
    sink: RecordingSink[str] = RecordingSink(on_item=on_item)
    emitter = ChunkedEmitter(tokens, batch_size=batch_size, loop=loop)
    emitter.bind(sink)
    return loop, sink, emitter


@pytest.mark.parametrize("batch_size", [1, 10, len(TOKENS) + 5])
def test_emits_every_token_in_order_then_one_end(batch_size: int) -> None:
    async def main() -> RecordingSink[str]:
        sink: RecordingSink[str] = RecordingSink()
        emitter = ChunkedEmitter(TOKENS, batch_size=batch_size)
        emitter.bind(sink)
        emitter.start()
        await wait_for_end(sink)
        # give the loop a chance to misbehave after end
        for _ in range(5):
            await asyncio.sleep(0)
        return sink

    sink = asyncio.run(main())

    assert sink.items == list(TOKENS)
    assert sink.end_count == 1
    assert sink.errors == []


def test_each_tick_delivers_at_most_one_batch() -> None:
    loop, sink, emitter = _manual_emitter(batch_size=10)

    emitter.start()
    assert sink.items == []

    loop.tick()
    assert len(sink.items) == 10
    loop.tick()
    assert len(sink.items) == 20
    loop.tick()
    assert len(sink.items) == 23
    assert sink.end_count == 0

    loop.tick()
    assert sink.end_count == 1
    assert emitter.ended is True
    assert loop.pending == 0


def test_empty_sequence_ends_on_start() -> None:
    loop, sink, emitter = _manual_emitter(tokens=())

    emitter.start()

    assert sink.end_count == 1
    assert sink.items == []
    assert loop.pending == 0


def test_start_twice_is_rejected() -> None:
    _, _, emitter = _manual_emitter()
    emitter.start()

    with pytest.raises(RuntimeError, match="already being sent"):
        emitter.start()


def test_start_without_sink_is_rejected() -> None:
    emitter = ChunkedEmitter(TOKENS, loop=ManualLoop())

    with pytest.raises(RuntimeError):
        emitter.start()


def test_binding_a_second_sink_is_rejected() -> None:
    _, _, emitter = _manual_emitter()

    with pytest.raises(RuntimeError):
        emitter.bind(RecordingSink())


def test_batch_size_must_be_positive() -> None:
    with pytest.raises(ValueError):
        ChunkedEmitter(TOKENS, batch_size=0)


def test_pause_from_data_callback_stops_mid_batch_without_loss() -> None:
    def pause_at_13(sink: RecordingSink[str], item: str) -> None:
        if len(sink.items) == 13:
            emitter.pause()

    loop, sink, emitter = _manual_emitter(batch_size=10, on_item=pause_at_13)
    emitter.start()

    loop.run_until_idle()
    assert sink.items == list(TOKENS[:13])
    assert emitter.paused is True
    assert emitter.delivered_count == 13
    assert loop.pending == 0

    emitter.resume()
    loop.run_until_idle()

    assert sink.items == list(TOKENS)
    assert sink.end_count == 1


def test_no_end_signal_while_paused() -> None:
    loop, sink, emitter = _manual_emitter(tokens=TOKENS[:10], batch_size=10)
    emitter.start()
    loop.tick()
    assert len(sink.items) == 10

    emitter.pause()
    loop.run_until_idle()
    assert sink.end_count == 0

    emitter.resume()
    loop.run_until_idle()
    assert sink.end_count == 1


def test_pause_before_start_defers_delivery() -> None:
    loop, sink, emitter = _manual_emitter(tokens=())
    emitter.pause()
    emitter.start()
    assert sink.end_count == 0

    emitter.resume()
    loop.run_until_idle()
    assert sink.end_count == 1


def test_pause_resume_in_real_loop_delivers_remaining_tokens() -> None:
    async def main() -> RecordingSink[str]:
        def pause_at_7(sink: RecordingSink[str], item: str) -> None:
            if len(sink.items) == 7:
                emitter.pause()

        sink: RecordingSink[str] = RecordingSink(on_item=pause_at_7)
        emitter = ChunkedEmitter(TOKENS, batch_size=3)
        emitter.bind(sink)
        emitter.start()

        for _ in range(20):
            await asyncio.sleep(0)
        assert len(sink.items) == 7
        assert sink.end_count == 0

        emitter.resume()
        await wait_for_end(sink)
        return sink

    sink = asyncio.run(main())

    assert sink.items == list(TOKENS)
    assert sink.end_count == 1


def test_destroy_stops_all_further_signals_and_is_idempotent() -> None:
    def destroy_at_7(sink: RecordingSink[str], item: str) -> None:
        if len(sink.items) == 7:
            emitter.destroy()

    loop, sink, emitter = _manual_emitter(batch_size=5, on_item=destroy_at_7)
    emitter.start()

    loop.run_until_idle()
    emitter.destroy()
    emitter.destroy()
    emitter.resume()
    loop.run_until_idle()

    assert sink.items == list(TOKENS[:7])
    assert sink.end_count == 0
    assert emitter.destroyed is True
    assert loop.pending == 0


def test_destroy_between_ticks_cancels_scheduled_tick() -> None:
    loop, sink, emitter = _manual_emitter(batch_size=10)
    emitter.start()
    loop.tick()
    assert loop.pending == 1

    emitter.destroy()

    assert loop.pending == 0
    assert loop.run_until_idle() == 0
    assert len(sink.items) == 10
    assert sink.end_count == 0


def test_destroy_before_start_emits_nothing() -> None:
    loop, sink, emitter = _manual_emitter()
    emitter.destroy()
    emitter.start()

    loop.run_until_idle()

    assert sink.items == []
    assert sink.end_count == 0
