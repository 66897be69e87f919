"""State-processing task: drain the event queue into the state store."""

from __future__ import annotations

import logging
from collections.abc import Callable

from scrapperbot.exceptions import ScrapperDecodeError, ScrapperStartupError
from scrapperbot.ingestion.decode import decode_line
from scrapperbot.ingestion.queue import EventQueue
from scrapperbot.models.messages import BotMessage, MessageType, ReadyMessage, UnknownMessage
from scrapperbot.state.events import InboundEvent
from scrapperbot.state.store import GameStateStore

_logger = logging.getLogger(__name__)


class StateProcessor:
    """Single consumer of the :class:`EventQueue`.

    Events are applied strictly in arrival order. ``on_ready`` is invoked
    exactly once, after the ``READY`` roster is committed to the store, and
    is where the session spawns its strategy task.
    """

    def __init__(
        self,
        queue: EventQueue,
        store: GameStateStore,
        *,
        on_ready: Callable[[], None] | None = None,
    ) -> None:
        self._queue = queue
        self._store = store
        self._on_ready = on_ready
        self._ready = False
        self.processed = 0
        self.skipped = 0

    @property
    def is_ready(self) -> bool:
        return self._ready

    async def run(self) -> None:
        """Process events until the queue is closed and drained.

        Only a malformed ``READY`` message escapes, as
        :class:`ScrapperStartupError`.
        """
        while True:
            event = await self._queue.get()
            if event is None:
                _logger.debug("Event queue drained (processed=%d skipped=%d)", self.processed, self.skipped)
                return
            self.handle(event)

    def handle(self, event: InboundEvent) -> None:
        if event.error is not None:
            self.skipped += 1
            _logger.warning("Error reading from connection: %s", event.error)
            return

        try:
            message = decode_line(event.line)
        except ScrapperDecodeError as exc:
            # Only the announcement that starts the session is fatal.
            if exc.message_type == MessageType.READY and not self._ready:
                raise ScrapperStartupError(f"Cannot start session: {exc}") from exc
            self.skipped += 1
            _logger.warning("Discarding message: %s", exc)
            return

        self.processed += 1
        if isinstance(message, ReadyMessage):
            self._handle_ready(message)
        elif isinstance(message, BotMessage):
            self._store.apply(message)
        elif isinstance(message, UnknownMessage):
            _logger.info('Received unknown message type "%s"', message.type)

    def _handle_ready(self, message: ReadyMessage) -> None:
        if self._ready:
            _logger.warning("Ignoring duplicate READY message (PID=%d)", message.pid)
            return
        self._store.load_roster(message.pid, message.bots)
        self._ready = True
        if self._on_ready is not None:
            self._on_ready()
