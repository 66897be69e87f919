from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

import pytest

from scrapperbot.agent import ScrapperAgent
from scrapperbot.config import AgentConfig
from scrapperbot.exceptions import ScrapperConnectionError, ScrapperStartupError
from scrapperbot.models.unit import UnitId

Handler = Callable[[asyncio.StreamReader, asyncio.StreamWriter], Awaitable[None]]


def _line(payload: dict[str, Any]) -> bytes:
    return json.dumps(payload).encode() + b"\n"


def _bot(pid: int, bid: int, x: int = 0, y: int = 0, health: int = 12) -> dict[str, Any]:
    return {"PID": pid, "BID": bid, "X": x, "Y": y, "Health": health}


@asynccontextmanager
async def _fake_game(handler: Handler) -> AsyncIterator[int]:
    server = await asyncio.start_server(handler, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    try:
        yield port
    finally:
        server.close()
        await server.wait_closed()


@pytest.mark.asyncio
async def test_session_applies_kill_and_strategy_finishes() -> None:
    received: list[dict[str, Any]] = []

    async def handler(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        writer.write(_line({"Type": "READY", "PID": 1, "Bots": [_bot(1, 1), _bot(2, 1, x=100)]}))
        writer.write(_line({"Type": "WELCOME"}))
        await writer.drain()
        # Wait for the first command so the strategy is known to be running.
        received.append(json.loads(await reader.readline()))
        writer.write(_line({"Type": "BOT", **_bot(2, 1, x=100, health=0), "Fired": False}))
        await writer.drain()
        await asyncio.sleep(0.4)
        writer.close()

    async with _fake_game(handler) as port:
        config = AgentConfig(host="127.0.0.1", port=port, strategy="column")
        async with ScrapperAgent(config) as agent:
            await asyncio.wait_for(agent.run(), timeout=5.0)

        assert agent.strategy_started
        assert len(agent.store) == 1
        assert [unit.unit_id for unit in agent.store.units_owned_by_me()] == [UnitId(1, 1)]
        assert agent.store.units_not_owned_by_me() == []
        assert received[0] == {"Cmd": "TARGET", "BID": 1, "TPID": 2, "TBID": 1}


@pytest.mark.asyncio
async def test_malformed_ready_ends_session_with_startup_error() -> None:
    async def handler(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        writer.write(_line({"Type": "READY", "PID": "me", "Bots": []}))
        await writer.drain()
        await reader.read()
        writer.close()

    async with _fake_game(handler) as port:
        config = AgentConfig(host="127.0.0.1", port=port)
        with pytest.raises(ScrapperStartupError):
            async with ScrapperAgent(config) as agent:
                await asyncio.wait_for(agent.run(), timeout=5.0)

    assert not agent.strategy_started


@pytest.mark.asyncio
async def test_connection_closed_before_ready_ends_cleanly() -> None:
    async def handler(_reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        writer.write(b"not json\n")
        await writer.drain()
        writer.close()

    async with _fake_game(handler) as port:
        async with ScrapperAgent(AgentConfig(host="127.0.0.1", port=port)) as agent:
            await asyncio.wait_for(agent.run(), timeout=5.0)

    assert not agent.strategy_started
    assert len(agent.store) == 0


@pytest.mark.asyncio
async def test_unreachable_server_raises_connection_error() -> None:
    server = await asyncio.start_server(lambda _r, _w: None, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    server.close()
    await server.wait_closed()

    with pytest.raises(ScrapperConnectionError):
        async with ScrapperAgent(AgentConfig(host="127.0.0.1", port=port)):
            pass
