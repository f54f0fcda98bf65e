"""Tests for the debate event stream."""

import asyncio

import pytest

from modules.debates.event_stream import EventStream
from modules.debates.exceptions import DebateStreamError, StreamClosedError
from modules.debates.models import AgentResponse, RoundCompleted
from providers.base import ProviderId


async def collect(stream: EventStream) -> list:
    return [event async for event in stream.subscribe()]


class TestEventStream:
    @pytest.mark.asyncio
    async def test_delivers_in_push_order_then_ends(self):
        stream = EventStream()
        events = [RoundCompleted(round_number=i) for i in range(3)]
        for event in events:
            stream.push(event)
        stream.complete()

        assert await collect(stream) == events
        assert stream.closed is True
        assert stream.error is None

    @pytest.mark.asyncio
    async def test_fail_delivers_earlier_events_then_raises(self):
        stream = EventStream()
        event = AgentResponse(model=ProviderId.OPENAI, text="hi")
        stream.push(event)
        stream.fail("arbiter down")

        received = []
        with pytest.raises(DebateStreamError, match="arbiter down"):
            async for item in stream.subscribe():
                received.append(item)

        assert received == [event]
        assert stream.error == "arbiter down"

    @pytest.mark.asyncio
    async def test_fail_with_exception_uses_its_message(self):
        stream = EventStream()
        stream.fail(RuntimeError("kaput"))
        assert stream.error == "kaput"

    @pytest.mark.asyncio
    async def test_fail_with_empty_exception_uses_type_name(self):
        stream = EventStream()
        stream.fail(TimeoutError())
        assert stream.error == "TimeoutError"

    @pytest.mark.asyncio
    async def test_consumer_waits_for_producer(self):
        """Subscriber should receive events pushed after it started waiting."""
        stream = EventStream()
        consumer = asyncio.create_task(collect(stream))
        await asyncio.sleep(0)

        stream.push(RoundCompleted(round_number=0))
        await asyncio.sleep(0)
        stream.complete()

        assert await consumer == [RoundCompleted(round_number=0)]

    def test_push_after_close_raises(self):
        stream = EventStream()
        stream.complete()
        with pytest.raises(StreamClosedError):
            stream.push(RoundCompleted(round_number=0))

    def test_close_twice_raises(self):
        stream = EventStream()
        stream.fail("x")
        with pytest.raises(StreamClosedError):
            stream.complete()
        with pytest.raises(StreamClosedError):
            stream.fail("y")

    @pytest.mark.asyncio
    async def test_second_subscriber_rejected(self):
        stream = EventStream()
        stream.complete()
        await collect(stream)

        with pytest.raises(StreamClosedError, match="already has a subscriber"):
            await collect(stream)
