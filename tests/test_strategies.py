from __future__ import annotations

import math

import pytest

from scrapperbot.geometry import distance
from scrapperbot.models.commands import MoveCommand, PowerCommand, TargetCommand
from scrapperbot.models.unit import Unit
from scrapperbot.state.store import Snapshot
from scrapperbot.strategies import (
    ColumnFormation,
    DishFormation,
    RushFocusFire,
    available_strategies,
    create_strategy,
)
from scrapperbot.strategies.column import STANDOFF_RADIUS
from scrapperbot.strategies.dish import KEEP_DISTANCE, angular_step, formation_slots, slot_angles
from scrapperbot.strategies.rush import weakest_target


def _unit(pid: int, bid: int, x: int = 0, y: int = 0, health: int = 12) -> Unit:
    return Unit(pid=pid, bid=bid, x=x, y=y, health=health)


def _snapshot(mine: list[Unit], theirs: list[Unit]) -> Snapshot:
    return Snapshot(mine=tuple(mine), theirs=tuple(theirs))


# ------------------------------------------------------------------
# Registry
# ------------------------------------------------------------------


def test_builtin_strategies_are_registered() -> None:
    assert {"rush", "column", "dish"} <= set(available_strategies())
    assert isinstance(create_strategy("rush"), RushFocusFire)
    assert isinstance(create_strategy("column"), ColumnFormation)
    assert isinstance(create_strategy("dish"), DishFormation)
    with pytest.raises(ValueError):
        create_strategy("turtle")


# ------------------------------------------------------------------
# Rush: focus fire on the weakest enemy
# ------------------------------------------------------------------


def test_rush_tie_break_prefers_weak_enemy_nearest_swarm_center() -> None:
    theirs = [
        _unit(2, 1, 10, 0, health=3),
        _unit(2, 2, 1, 0, health=5),
        _unit(2, 3, 0, 4, health=3),
        _unit(2, 4, 4, 0, health=3),
    ]
    snapshot = _snapshot([_unit(1, 1, -5, 0), _unit(1, 2, 5, 0)], theirs)

    chosen = weakest_target(snapshot)

    assert chosen is theirs[2]


def test_rush_single_weakest_enemy_ignores_distance() -> None:
    theirs = [_unit(2, 1, 1, 0, health=8), _unit(2, 2, 900, 900, health=2)]

    assert weakest_target(_snapshot([_unit(1, 1)], theirs)) is theirs[1]


def test_rush_everyone_closes_in_on_and_targets_the_chosen_enemy() -> None:
    enemy = _unit(2, 5, 300, 120, health=1)
    snapshot = _snapshot([_unit(1, 1), _unit(1, 2, 50, 50)], [enemy, _unit(2, 6, 0, 10)])

    commands = RushFocusFire().decide(snapshot)

    assert commands == [
        MoveCommand(bid=1, x=245, y=98),
        TargetCommand(bid=1, tpid=2, tbid=5),
        MoveCommand(bid=2, x=243, y=104),
        TargetCommand(bid=2, tpid=2, tbid=5),
    ]


def test_rush_stops_one_body_diameter_short_of_the_target() -> None:
    snapshot = _snapshot([_unit(1, 1, 0, 0)], [_unit(2, 1, 300, 0)])

    move_order = RushFocusFire().decide(snapshot)[0]

    assert move_order == MoveCommand(bid=1, x=240, y=0)


# ------------------------------------------------------------------
# Column formation
# ------------------------------------------------------------------


def test_column_lead_targets_nearest_and_circles_it() -> None:
    lead = _unit(1, 1, 0, 0)
    near = _unit(2, 1, 300, 0)
    snapshot = _snapshot([lead], [_unit(2, 2, 1000, 0), near, _unit(2, 3, 0, 300)])

    commands = ColumnFormation().decide(snapshot)

    assert commands[0] == TargetCommand(bid=1, tpid=2, tbid=1)
    assert commands[1] == PowerCommand(bid=1, fire=8, move=4, shield=0)
    orbit = commands[2]
    assert isinstance(orbit, MoveCommand)
    assert distance((300, 0), (orbit.x, orbit.y)) == pytest.approx(STANDOFF_RADIUS, abs=1.5)
    expected_angle = math.pi + math.radians(10)
    assert math.atan2(orbit.y, orbit.x - 300) == pytest.approx(expected_angle - 2 * math.pi, abs=0.01)


def test_column_followers_trail_one_diameter_behind_unit_ahead() -> None:
    leader = _unit(1, 1, 0, 0)
    follower = _unit(1, 2, 0, -200)
    tail = _unit(1, 3, 100, -200)
    snapshot = _snapshot([leader, follower, tail], [_unit(2, 1, 500, 500)])

    commands = ColumnFormation().decide(snapshot)

    follower_orders = [c for c in commands if c.bid == 2]
    assert follower_orders == [
        MoveCommand(bid=2, x=0, y=-60),
        PowerCommand(bid=2, fire=0, move=4, shield=8),
    ]
    tail_move = next(c for c in commands if c.bid == 3 and isinstance(c, MoveCommand))
    assert (tail_move.x, tail_move.y) == (60, -200)


# ------------------------------------------------------------------
# Dish formation
# ------------------------------------------------------------------


def test_dish_angular_step_is_diameter_over_distance() -> None:
    step = angular_step(KEEP_DISTANCE)
    angles = slot_angles(0.3, 5, 2, step)

    assert step == pytest.approx(60 / KEEP_DISTANCE)
    assert angles[2] == pytest.approx(0.3)
    for left, right in zip(angles, angles[1:]):
        assert right - left == pytest.approx(60 / KEEP_DISTANCE)


def test_dish_slots_sit_on_the_arc_around_pivot_bearing() -> None:
    slots = formation_slots((0, 0), (2000, 0), count=3, pivot_index=1)

    assert slots[1] == (1200, 0)
    for slot in slots:
        assert distance((0, 0), slot) == pytest.approx(KEEP_DISTANCE, abs=1.5)
    assert slots[0][1] < 0 < slots[2][1]
    assert distance(slots[0], slots[1]) == pytest.approx(60, abs=1.5)


@pytest.mark.parametrize(
    ("position", "expected_power"),
    [
        ((1200, 0), PowerCommand(bid=1, fire=5, move=2, shield=5)),
        ((2000, 0), PowerCommand(bid=1, fire=0, move=7, shield=5)),
        ((1300, 0), None),
        ((1230, 0), PowerCommand(bid=1, fire=5, move=2, shield=5)),
        ((1231, 0), None),
        ((1380, 0), None),
        ((1381, 0), PowerCommand(bid=1, fire=0, move=7, shield=5)),
    ],
)
def test_dish_power_depends_on_distance_to_slot(
    position: tuple[int, int], expected_power: PowerCommand | None
) -> None:
    snapshot = _snapshot([_unit(1, 1, *position)], [_unit(2, 1, -10, 0), _unit(2, 2, 10, 0)])

    commands = DishFormation().decide(snapshot)

    assert commands[0] == MoveCommand(bid=1, x=1200, y=0)
    assert commands[1] == TargetCommand(bid=1, tpid=2, tbid=2)
    powers = [c for c in commands if isinstance(c, PowerCommand)]
    assert powers == ([] if expected_power is None else [expected_power])


def test_dish_everyone_targets_enemy_nearest_pivot() -> None:
    mine = [_unit(1, 1, 0, 1000), _unit(1, 2, 0, 1500), _unit(1, 3, 0, 2000)]
    theirs = [_unit(2, 1, 0, 100), _unit(2, 2, 0, 1400), _unit(2, 3, 0, 0)]

    commands = DishFormation().decide(_snapshot(mine, theirs))

    targets = [c for c in commands if isinstance(c, TargetCommand)]
    assert len(targets) == 3
    assert {(c.tpid, c.tbid) for c in targets} == {(2, 2)}
