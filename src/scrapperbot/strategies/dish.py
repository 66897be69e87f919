"""Death star: a satellite dish pointed at the enemy swarm.

- Bots line up shoulder to shoulder on an arc around the enemy centroid,
  twenty body lengths out, pivoting on the middle bot.
- Everyone focuses fire on the enemy closest to the pivot.
- Bots far from their slot divert power to movement; bots in their slot
  switch to firepower and shields.
"""

from __future__ import annotations

import math

from scrapperbot._constants import BOT_DIAMETER
from scrapperbot.geometry import Point, bearing, centroid, distance, nearest, offset, point_of
from scrapperbot.models.commands import Command, move, power, target
from scrapperbot.state.store import Snapshot
from scrapperbot.strategies.base import Strategy, register_strategy

KEEP_DISTANCE = BOT_DIAMETER * 20
HURRY_DISTANCE = BOT_DIAMETER * 3
FIRE_DISTANCE = BOT_DIAMETER / 2


def angular_step(keep_distance: float, diameter: float = BOT_DIAMETER) -> float:
    """Angle between adjacent slots so bots sit one diameter apart on the arc."""
    circumference = 2 * math.pi * keep_distance
    segments = circumference / diameter
    return (2 * math.pi) / segments


def slot_angles(base_angle: float, count: int, pivot_index: int, step: float) -> list[float]:
    return [base_angle + step * (index - pivot_index) for index in range(count)]


def formation_slots(
    center: Point,
    pivot: Point,
    count: int,
    pivot_index: int,
    keep_distance: float = KEEP_DISTANCE,
) -> list[tuple[int, int]]:
    """Slot positions for *count* bots, the pivot keeping its current bearing."""
    step = angular_step(keep_distance)
    angles = slot_angles(bearing(center, pivot), count, pivot_index, step)
    return [offset(center, angle, keep_distance) for angle in angles]


@register_strategy
class DishFormation(Strategy):
    name = "dish"
    tick_interval = 0.1

    def decide(self, snapshot: Snapshot) -> list[Command]:
        mine = snapshot.mine
        if not mine or not snapshot.theirs:
            return []

        center = centroid(point_of(unit) for unit in snapshot.theirs)
        pivot_index = len(mine) // 2
        pivot = mine[pivot_index]
        enemy = nearest(point_of(pivot), snapshot.theirs)
        assert enemy is not None  # noqa: S101
        slots = formation_slots(center, point_of(pivot), len(mine), pivot_index)

        commands: list[Command] = []
        for unit, (x, y) in zip(mine, slots, strict=True):
            commands.append(move(unit, x, y))
            commands.append(target(unit, enemy))

            # Between the two thresholds the previous allocation is kept.
            gap = distance((x, y), point_of(unit))
            if gap > HURRY_DISTANCE:
                commands.append(power(unit, 0, 7, 5))
            elif gap <= FIRE_DISTANCE:
                commands.append(power(unit, 5, 2, 5))
        return commands
