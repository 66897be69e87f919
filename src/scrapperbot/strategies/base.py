"""Strategy interface and the engine loop that drives it."""

from __future__ import annotations

import asyncio
import logging
import random
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import ClassVar, TypeVar

from scrapperbot.dispatch import CommandDispatcher
from scrapperbot.models.commands import Command
from scrapperbot.state.store import GameStateStore, Snapshot

_logger = logging.getLogger(__name__)

_REGISTRY: dict[str, type[Strategy]] = {}

TStrategy = TypeVar("TStrategy", bound="type[Strategy]")


def register_strategy(cls: TStrategy) -> TStrategy:
    """Class decorator adding a strategy to the name registry."""
    name = cls.name
    if name in _REGISTRY and _REGISTRY[name] is not cls:
        raise ValueError(f"strategy name {name!r} already registered by {_REGISTRY[name].__name__}")
    _REGISTRY[name] = cls
    return cls


def available_strategies() -> list[str]:
    return sorted(_REGISTRY)


def create_strategy(name: str, *, rng: random.Random | None = None) -> Strategy:
    try:
        cls = _REGISTRY[name]
    except KeyError:
        raise ValueError(f"unknown strategy {name!r}") from None
    return cls(rng=rng)


class StrategyContext:
    """Capabilities handed to a strategy: read the store, emit commands, wait."""

    def __init__(
        self,
        store: GameStateStore,
        dispatcher: CommandDispatcher,
        stop_event: asyncio.Event,
    ) -> None:
        self.store = store
        self._dispatcher = dispatcher
        self._stop_event = stop_event

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    async def send(self, command: Command) -> None:
        await self._dispatcher.send(command)

    async def send_all(self, commands: Iterable[Command]) -> None:
        for command in commands:
            await self._dispatcher.send(command)

    async def sleep(self, seconds: float) -> bool:
        """Wait *seconds*; return ``True`` early if the engine was stopped."""
        if self._stop_event.is_set():
            return True
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=seconds)
        except TimeoutError:
            return False
        return True


class Strategy(ABC):
    """A tactical policy over owned and opposing units.

    Subclasses set ``name`` and ``tick_interval`` and implement
    :meth:`decide`. :meth:`opening` runs once before the first tick;
    :meth:`step` sends one tick's commands and may be overridden when a
    tick needs pacing of its own.
    """

    name: ClassVar[str]
    tick_interval: ClassVar[float] = 0.1

    def __init__(self, *, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    async def opening(self, ctx: StrategyContext) -> None:
        return None

    async def step(self, ctx: StrategyContext, snapshot: Snapshot) -> None:
        await ctx.send_all(self.decide(snapshot))

    @abstractmethod
    def decide(self, snapshot: Snapshot) -> list[Command]:
        """Commands for one tick, in owned-unit order."""


class StrategyEngine:
    """Runs one strategy for the life of a session.

    Each tick takes a single store snapshot, ends the engine when no
    opposing units remain, lets the strategy emit its commands, then sleeps
    the strategy's tick interval. :meth:`stop` interrupts the sleep.
    """

    def __init__(
        self,
        strategy: Strategy,
        store: GameStateStore,
        dispatcher: CommandDispatcher,
    ) -> None:
        self.strategy = strategy
        self._stop_event = asyncio.Event()
        self._ctx = StrategyContext(store, dispatcher, self._stop_event)
        self._store = store
        self.ticks = 0

    def stop(self) -> None:
        self._stop_event.set()

    async def run(self) -> None:
        name = self.strategy.name
        _logger.info("Strategy %s started", name)
        await self.strategy.opening(self._ctx)
        while not self._ctx.stopped:
            snapshot = self._store.snapshot()
            if not snapshot.theirs:
                _logger.info("No opposing units left; strategy %s finished after %d ticks", name, self.ticks)
                return
            await self.strategy.step(self._ctx, snapshot)
            self.ticks += 1
            if await self._ctx.sleep(self.strategy.tick_interval):
                break
        _logger.info("Strategy %s stopped after %d ticks", name, self.ticks)
