"""
Single-producer, single-consumer channel for debate events.

The orchestrator's session task pushes events; the HTTP layer subscribes
once and forwards them as SSE frames. The queue is unbounded: the
producer never waits on the consumer.
"""

import asyncio
from dataclasses import dataclass
from typing import AsyncIterator, Optional, Union

from .exceptions import DebateStreamError, StreamClosedError
from .models import DebateEvent


@dataclass(frozen=True)
class _Completed:
    pass


@dataclass(frozen=True)
class _Failed:
    message: str


_Item = Union[DebateEvent, _Completed, _Failed]


class EventStream:
    """Ordered live delivery of one session's events."""

    def __init__(self) -> None:
        self._queue: asyncio.Queue[_Item] = asyncio.Queue()
        self._closed = False
        self._subscribed = False
        self._error: Optional[str] = None

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def error(self) -> Optional[str]:
        """Failure message, if the stream was closed with fail()."""
        return self._error

    def push(self, event: DebateEvent) -> None:
        if self._closed:
            raise StreamClosedError()
        self._queue.put_nowait(event)

    def complete(self) -> None:
        """Close the stream with a normal end-of-stream signal."""
        if self._closed:
            raise StreamClosedError()
        self._closed = True
        self._queue.put_nowait(_Completed())

    def fail(self, error: Union[str, BaseException]) -> None:
        """Close the stream with an error signal."""
        if self._closed:
            raise StreamClosedError()
        self._closed = True
        self._error = str(error) or type(error).__name__
        self._queue.put_nowait(_Failed(self._error))

    async def subscribe(self) -> AsyncIterator[DebateEvent]:
        """
        Yield events in push order until the stream closes.

        Returns normally after complete(). After fail(), every event pushed
        before the failure is delivered, then DebateStreamError is raised.

        Raises:
            StreamClosedError: If the stream already has a subscriber
            DebateStreamError: If the producer failed
        """
        if self._subscribed:
            raise StreamClosedError("Event stream already has a subscriber")
        self._subscribed = True

        while True:
            item = await self._queue.get()
            if isinstance(item, _Completed):
                return
            if isinstance(item, _Failed):
                raise DebateStreamError(item.message)
            yield item
