"""Single-writer command sink for the outbound connection."""

from __future__ import annotations

import asyncio
import logging

from scrapperbot._transport import LineWriter
from scrapperbot.exceptions import ScrapperTransportError
from scrapperbot.models.commands import Command, encode_command

_logger = logging.getLogger(__name__)


class CommandDispatcher:
    """Serialize commands onto the outbound connection.

    Writes are serialized with an ``asyncio.Lock`` so concurrent senders
    never interleave partial lines. A failed write is fatal: the game does
    not acknowledge commands, so there is nothing to resend and the
    connection is considered unusable.
    """

    def __init__(self, writer: LineWriter, *, endpoint: str = "") -> None:
        self._writer = writer
        self._endpoint = endpoint
        self._lock = asyncio.Lock()
        self.sent = 0

    async def send(self, command: Command) -> None:
        data = encode_command(command)
        async with self._lock:
            try:
                self._writer.write(data)
                await self._writer.drain()
            except (OSError, RuntimeError) as exc:
                raise ScrapperTransportError(
                    f"Failed to send {command.cmd} command: {exc}",
                    endpoint=self._endpoint,
                ) from exc
            self.sent += 1
        _logger.debug("Sent %s", data.rstrip())
