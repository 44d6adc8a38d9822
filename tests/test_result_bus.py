# tests/test_result_bus.py
import asyncio

import pytest

from navkit.shared.core.envelopes import ResultKind, create_selection_envelope
from navkit.shared.core.result_bus import ResultBus


class Recorder:
    def __init__(self):
        self.received = []

    async def __call__(self, envelope):
        self.received.append(envelope)


@pytest.mark.asyncio
async def test_publish_fans_out_to_every_subscriber(bus):
    first, second = Recorder(), Recorder()
    await bus.subscribe(first)
    await bus.subscribe(second)
    envelope = create_selection_envelope(ResultKind.ISSUE_SELECTED, "abc")

    await bus.publish(envelope)
    assert await bus.wait_until_idle()

    assert first.received == [envelope]
    assert second.received == [envelope]


@pytest.mark.asyncio
async def test_subscribing_twice_delivers_once(bus):
    recorder = Recorder()
    await bus.subscribe(recorder)
    await bus.subscribe(recorder)

    await bus.publish(create_selection_envelope(ResultKind.ISSUE_SELECTED, "abc"))
    await bus.wait_until_idle()

    assert bus.subscriber_count == 1
    assert len(recorder.received) == 1


@pytest.mark.asyncio
async def test_unsubscribed_handler_receives_nothing(bus):
    recorder = Recorder()
    await bus.subscribe(recorder)
    await bus.unsubscribe(recorder)

    await bus.publish(create_selection_envelope(ResultKind.ISSUE_SELECTED, "abc"))
    await bus.wait_until_idle()

    assert recorder.received == []


@pytest.mark.asyncio
async def test_failing_handler_does_not_stop_others(bus, caplog):
    async def broken(envelope):
        raise RuntimeError("boom")

    recorder = Recorder()
    await bus.subscribe(broken)
    await bus.subscribe(recorder)

    await bus.publish(create_selection_envelope(ResultKind.ISSUE_SELECTED, "abc"))
    await bus.wait_until_idle()

    assert len(recorder.received) == 1
    assert "ResultBus handler error" in caplog.text


@pytest.mark.asyncio
async def test_publish_without_subscribers_is_harmless(bus):
    await bus.publish(create_selection_envelope(ResultKind.ISSUE_SELECTED, "abc"))

    assert await bus.wait_until_idle()


@pytest.mark.asyncio
async def test_wait_until_idle_follows_chained_publishes():
    bus = ResultBus()
    recorder = Recorder()

    async def relay(envelope):
        if envelope.kind is ResultKind.BARCODE_SCAN_COMPLETE:
            await bus.publish(create_selection_envelope(ResultKind.ISSUE_SELECTED, envelope.payload))

    await bus.subscribe(relay)
    await bus.subscribe(recorder)

    await bus.publish(create_selection_envelope(ResultKind.BARCODE_SCAN_COMPLETE, "123"))
    await bus.wait_until_idle()

    assert [e.kind for e in recorder.received] == [
        ResultKind.BARCODE_SCAN_COMPLETE,
        ResultKind.ISSUE_SELECTED,
    ]


def test_clear_removes_subscribers():
    bus = ResultBus()
    bus._subscribers.append(Recorder())

    bus.clear()

    assert bus.subscriber_count == 0


@pytest.mark.asyncio
async def test_publish_stamps_increasing_sequence(bus):
    recorder = Recorder()
    await bus.subscribe(recorder)
    assert bus.sequence == 0

    first = await bus.publish(create_selection_envelope(ResultKind.ISSUE_SELECTED, "a"))
    second = await bus.publish(create_selection_envelope(ResultKind.ISSUE_SELECTED, "b"))
    await bus.wait_until_idle()

    assert (first.seq, second.seq) == (1, 2)
    assert bus.sequence == 2
    assert [e.seq for e in recorder.received] == [1, 2]


@pytest.mark.asyncio
async def test_publish_stamps_even_without_subscribers(bus):
    envelope = await bus.publish(create_selection_envelope(ResultKind.ISSUE_SELECTED, "a"))

    assert envelope.seq == bus.sequence == 1


@pytest.mark.asyncio
async def test_wait_until_idle_times_out(bus):
    release = asyncio.Event()

    async def slow(envelope):
        await release.wait()

    await bus.subscribe(slow)
    await bus.publish(create_selection_envelope(ResultKind.ISSUE_SELECTED, "abc"))

    assert not await bus.wait_until_idle(timeout=0.01)

    release.set()
    assert await bus.wait_until_idle()
