"""Reckless abandon: scatter, then focus fire on the weakest enemy.

- For three seconds every bot runs flat out toward a random heading with
  a sliver of shield.
- Afterwards power is split between speed and firepower.
- Every 250 ms the whole swarm closes to one body length of the enemy
  with the lowest health and targets it; ties go to the one closest to
  the swarm's centre.
"""

from __future__ import annotations

import math
import random

from scrapperbot.geometry import centroid, nearest, offset, point_of
from scrapperbot.models.commands import Command, follow, move, power, target
from scrapperbot.models.unit import Unit
from scrapperbot.state.store import Snapshot
from scrapperbot.strategies.base import Strategy, StrategyContext, register_strategy

SCATTER_SECONDS = 3.0
SCATTER_DISTANCE = 999
#: Delay between bots on the first volley, so shots do not all land on one tick.
FIRST_VOLLEY_STAGGER = 0.1


def weakest_target(snapshot: Snapshot) -> Unit | None:
    """Opposing unit with the lowest health.

    Among several at that health, the one nearest the centroid of our
    units wins, and the first of those on an exact distance tie.
    """
    theirs = snapshot.theirs
    if not theirs:
        return None
    low_health = min(unit.health for unit in theirs)
    weakest = [unit for unit in theirs if unit.health == low_health]
    if len(weakest) == 1 or not snapshot.mine:
        return weakest[0]
    swarm_center = centroid(point_of(unit) for unit in snapshot.mine)
    return nearest(swarm_center, weakest)


@register_strategy
class RushFocusFire(Strategy):
    name = "rush"
    tick_interval = 0.25

    def __init__(self, *, rng: random.Random | None = None) -> None:
        super().__init__(rng=rng)
        self._first_volley_sent = False

    async def opening(self, ctx: StrategyContext) -> None:
        for unit in ctx.store.units_owned_by_me():
            await ctx.send(power(unit, 0, 11, 1))
            heading = 2.0 * math.pi * self.rng.random()
            x, y = offset(point_of(unit), heading, SCATTER_DISTANCE)
            await ctx.send(move(unit, x, y))

        if await ctx.sleep(SCATTER_SECONDS):
            return

        for unit in ctx.store.units_owned_by_me():
            await ctx.send(power(unit, 6, 6, 0))

    def _orders(self, snapshot: Snapshot) -> list[list[Command]]:
        chosen = weakest_target(snapshot)
        if chosen is None:
            return []
        return [[follow(unit, chosen), target(unit, chosen)] for unit in snapshot.mine]

    def decide(self, snapshot: Snapshot) -> list[Command]:
        return [command for orders in self._orders(snapshot) for command in orders]

    async def step(self, ctx: StrategyContext, snapshot: Snapshot) -> None:
        if self._first_volley_sent:
            await super().step(ctx, snapshot)
            return
        self._first_volley_sent = True
        for orders in self._orders(snapshot):
            await ctx.send_all(orders)
            if await ctx.sleep(FIRST_VOLLEY_STAGGER):
                return
