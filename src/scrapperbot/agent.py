"""Session orchestration for the Scrappers client agent."""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Any

from scrapperbot._transport import GameConnection
from scrapperbot.config import AgentConfig
from scrapperbot.dispatch import CommandDispatcher
from scrapperbot.exceptions import ScrapperConfigError, ScrapperError
from scrapperbot.ingestion.processor import StateProcessor
from scrapperbot.ingestion.queue import EventQueue
from scrapperbot.state.store import GameStateStore
from scrapperbot.strategies import Strategy, StrategyEngine, create_strategy

_logger = logging.getLogger(__name__)


class ScrapperAgent:
    """Async client agent for one Scrappers game session.

    Usage::

        async with ScrapperAgent(config) as agent:
            await agent.run()

    Two tasks run for the life of the session: the socket reader feeding
    the state processor (which runs inside :meth:`run`), and the strategy
    engine, spawned once the ``READY`` roster is in the store.
    """

    def __init__(
        self,
        config: AgentConfig,
        *,
        strategy: Strategy | None = None,
        connection: GameConnection | None = None,
    ) -> None:
        self._config = config
        if strategy is None:
            try:
                strategy = create_strategy(config.strategy, rng=random.Random(config.seed))
            except ValueError as exc:
                raise ScrapperConfigError(str(exc)) from exc
        self._strategy = strategy
        self._external_connection = connection is not None
        self._connection = connection
        self._dispatcher: CommandDispatcher | None = None
        self.store = GameStateStore()
        self._queue = EventQueue(config.queue_capacity)
        self._processor = StateProcessor(self._queue, self.store, on_ready=self._start_strategy)
        self._engine: StrategyEngine | None = None
        self._reader_task: asyncio.Task[None] | None = None
        self._strategy_task: asyncio.Task[None] | None = None
        self._fatal: BaseException | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> ScrapperAgent:
        if self._connection is None:
            self._connection = await GameConnection.open(self._config.host, self._config.port)
        self._dispatcher = CommandDispatcher(self._connection.writer, endpoint=self._connection.endpoint)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.stop()
        await self._join_tasks()
        if not self._external_connection and self._connection is not None:
            await self._connection.close()
        self._connection = None
        self._dispatcher = None

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    @property
    def strategy(self) -> Strategy:
        return self._strategy

    @property
    def strategy_started(self) -> bool:
        return self._strategy_task is not None

    def _require_connection(self) -> GameConnection:
        if self._connection is None or self._dispatcher is None:
            raise ScrapperError("Agent not connected. Use 'async with ScrapperAgent(...) as agent:'")
        return self._connection

    async def run(self) -> None:
        """Process the session until the server closes the connection.

        Raises the first fatal error: a malformed ``READY`` message, or a
        transport failure while the strategy was sending commands.
        """
        connection = self._require_connection()
        self._reader_task = asyncio.create_task(self._read_loop(connection), name="scrapperbot-reader")
        try:
            await self._processor.run()
        finally:
            self.stop()
            await self._join_tasks()
            _logger.info(
                "Session ended: processed=%d skipped=%d sent=%d",
                self._processor.processed,
                self._processor.skipped,
                self._dispatcher.sent if self._dispatcher is not None else 0,
            )
        if self._fatal is not None:
            raise self._fatal

    def stop(self) -> None:
        """Tear the session down.

        Wakes the strategy out of its sleep, stops the socket reader and
        closes the event queue; the processor applies what is already
        queued and returns.
        """
        if self._engine is not None:
            self._engine.stop()
        if self._reader_task is not None and not self._reader_task.done():
            self._reader_task.cancel()
        self._queue.close()

    async def _read_loop(self, connection: GameConnection) -> None:
        try:
            await connection.read_into(self._queue)
        finally:
            self._queue.close()

    def _start_strategy(self) -> None:
        if self._strategy_task is not None:
            return
        assert self._dispatcher is not None  # noqa: S101
        self._engine = StrategyEngine(self._strategy, self.store, self._dispatcher)
        self._strategy_task = asyncio.create_task(self._engine.run(), name="scrapperbot-strategy")
        self._strategy_task.add_done_callback(self._on_strategy_done)

    def _on_strategy_done(self, task: asyncio.Task[None]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is None:
            return
        _logger.error("Strategy %s failed: %s", self._strategy.name, exc)
        if self._fatal is None:
            self._fatal = exc
        self.stop()

    async def _join_tasks(self) -> None:
        tasks = [task for task in (self._reader_task, self._strategy_task) if task is not None]
        if not tasks:
            return
        results = await asyncio.gather(*tasks, return_exceptions=True)
        for result in results:
            if isinstance(result, Exception) and self._fatal is None:
                self._fatal = result
