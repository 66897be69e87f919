"""TCP transport with newline-delimited JSON framing."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Protocol

from scrapperbot.exceptions import ScrapperConnectionError
from scrapperbot.ingestion.queue import EventQueue
from scrapperbot.state.events import InboundEvent

_logger = logging.getLogger(__name__)

#: StreamReader line limit; a READY roster is one (long) line.
_LINE_LIMIT = 1 << 20


class LineWriter(Protocol):
    """Structural writer interface used by the dispatcher.

    ``asyncio.StreamWriter`` satisfies it; tests pass in-memory doubles.
    """

    def write(self, data: bytes) -> None: ...

    async def drain(self) -> None: ...


class GameConnection:
    """One long-lived stream connection to the game server."""

    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        *,
        endpoint: str = "",
    ) -> None:
        self._reader = reader
        self._writer = writer
        self.endpoint = endpoint

    @classmethod
    async def open(cls, host: str, port: int) -> GameConnection:
        endpoint = f"{host}:{port}"
        _logger.debug("Connecting to %s", endpoint)
        try:
            reader, writer = await asyncio.open_connection(host, port, limit=_LINE_LIMIT)
        except OSError as exc:
            raise ScrapperConnectionError(f"Failed to connect to game at {endpoint}: {exc}", endpoint=endpoint) from exc
        _logger.info("Connected to game at %s", endpoint)
        return cls(reader, writer, endpoint=endpoint)

    @property
    def writer(self) -> LineWriter:
        return self._writer

    async def read_into(self, queue: EventQueue) -> None:
        """Push one event per received line until the server closes the connection.

        Oversized lines are reported as error events and reading goes on;
        a reset connection is reported once and ends the stream.
        """
        while True:
            try:
                raw = await self._reader.readline()
            except ValueError as exc:
                await queue.put(InboundEvent(error=exc))
                continue
            except OSError as exc:
                await queue.put(InboundEvent(error=exc))
                _logger.info("Connection to %s lost", self.endpoint)
                return
            if not raw:
                _logger.info("Game over (connection closed).")
                return
            if not raw.strip():
                continue
            await queue.put(InboundEvent(line=raw.decode("utf-8", errors="replace")))

    async def close(self) -> None:
        if self._writer.is_closing():
            return
        self._writer.close()
        with contextlib.suppress(OSError):
            await self._writer.wait_closed()
