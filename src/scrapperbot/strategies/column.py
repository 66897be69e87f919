"""Danger noodle: a single-file column led by a heavy hitter.

The first bot targets the closest enemy, puts most of its power into
firepower and circles that enemy at a standoff distance. Every other bot
follows the one ahead of it one body length back with shields high. When
the lead bot dies the next in line takes over.
"""

from __future__ import annotations

import math

from scrapperbot._constants import BOT_DIAMETER, MAX_POWER
from scrapperbot.geometry import bearing, nearest, offset, point_of
from scrapperbot.models.commands import Command, follow, move, power, target
from scrapperbot.models.unit import Unit
from scrapperbot.state.store import Snapshot
from scrapperbot.strategies.base import Strategy, register_strategy

MOVE_POWER = 4
STANDOFF_RADIUS = BOT_DIAMETER * 3
ORBIT_STEP = math.radians(10)


def orbit_point(lead: Unit, enemy: Unit) -> tuple[int, int]:
    """Point on the standoff circle around *enemy*, 10 degrees past *lead*."""
    angle = bearing(point_of(enemy), point_of(lead)) + ORBIT_STEP
    return offset(point_of(enemy), angle, STANDOFF_RADIUS)


@register_strategy
class ColumnFormation(Strategy):
    name = "column"
    tick_interval = 0.1

    def decide(self, snapshot: Snapshot) -> list[Command]:
        commands: list[Command] = []
        mine = snapshot.mine
        for index, unit in enumerate(mine):
            if index > 0:
                commands.append(follow(unit, mine[index - 1], BOT_DIAMETER))
                commands.append(power(unit, 0, MOVE_POWER, MAX_POWER - MOVE_POWER))
                continue

            enemy = nearest(point_of(unit), snapshot.theirs)
            if enemy is None:
                continue
            commands.append(target(unit, enemy))
            commands.append(power(unit, MAX_POWER - MOVE_POWER, MOVE_POWER, 0))
            x, y = orbit_point(unit, enemy)
            commands.append(move(unit, x, y))
        return commands
