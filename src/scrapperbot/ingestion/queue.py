"""Bounded FIFO between the socket reader and the state processor."""

from __future__ import annotations

import asyncio

from scrapperbot._constants import DEFAULT_QUEUE_CAPACITY
from scrapperbot.exceptions import ScrapperStateError
from scrapperbot.state.events import InboundEvent

_CLOSED = object()


class EventQueue:
    """Ordered, bounded event channel with backpressure and end-of-stream.

    ``put`` waits while ``capacity`` events are pending; nothing is ever
    dropped, since a lost update would desynchronize the replica. ``close``
    enqueues an end-of-stream marker without waiting for room, so the
    reader can always shut down; the consumer drains every event queued
    before it and then receives ``None``.
    """

    def __init__(self, capacity: int = DEFAULT_QUEUE_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = capacity
        # The bound is enforced by the semaphore so the end marker can bypass it.
        self._items: asyncio.Queue[InboundEvent | object] = asyncio.Queue()
        self._slots = asyncio.Semaphore(capacity)
        self._closed = False

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def closed(self) -> bool:
        return self._closed

    def qsize(self) -> int:
        return self._items.qsize()

    async def put(self, event: InboundEvent) -> None:
        if self._closed:
            raise ScrapperStateError("event queue is closed")
        await self._slots.acquire()
        if self._closed:
            self._slots.release()
            raise ScrapperStateError("event queue is closed")
        self._items.put_nowait(event)

    def close(self) -> None:
        """Mark end of stream. Idempotent."""
        if self._closed:
            return
        self._closed = True
        self._items.put_nowait(_CLOSED)

    async def get(self) -> InboundEvent | None:
        """Next event in arrival order, or ``None`` once the stream has ended."""
        item = await self._items.get()
        if item is _CLOSED:
            # Leave the marker in place so repeated calls keep returning None.
            self._items.put_nowait(_CLOSED)
            return None
        self._slots.release()
        assert isinstance(item, InboundEvent)  # noqa: S101
        return item
