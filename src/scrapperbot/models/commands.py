"""Outbound commands and their encoder.

Commands are fire-and-forget: the game never acknowledges them. Builders
take the acting :class:`Unit` so a command can only be addressed to a bot
the replica knows about.
"""

from __future__ import annotations

import enum
from typing import Literal

from pydantic import Field

from scrapperbot._constants import BOT_DIAMETER, MAX_POWER
from scrapperbot.geometry import bearing, offset, point_of
from scrapperbot.models._base import ScrapperBaseModel
from scrapperbot.models.unit import Unit


class CommandType(enum.StrEnum):
    """``Cmd`` discriminant values understood by the game."""

    MOVE = "MOVE"
    TARGET = "TARGET"
    POWER = "POWER"


class MoveCommand(ScrapperBaseModel):
    """Drive a bot toward a point."""

    cmd: Literal[CommandType.MOVE] = Field(default=CommandType.MOVE, alias="Cmd")
    bid: int = Field(alias="BID")
    x: int = Field(alias="X")
    y: int = Field(alias="Y")


class TargetCommand(ScrapperBaseModel):
    """Point a bot's weapon at another bot."""

    cmd: Literal[CommandType.TARGET] = Field(default=CommandType.TARGET, alias="Cmd")
    bid: int = Field(alias="BID")
    tpid: int = Field(alias="TPID")
    tbid: int = Field(alias="TBID")


class PowerCommand(ScrapperBaseModel):
    """Split a bot's power between firepower, movement and shield."""

    cmd: Literal[CommandType.POWER] = Field(default=CommandType.POWER, alias="Cmd")
    bid: int = Field(alias="BID")
    fire: int = Field(alias="FPow", ge=0, le=MAX_POWER)
    move: int = Field(alias="MPow", ge=0, le=MAX_POWER)
    shield: int = Field(alias="SPow", ge=0, le=MAX_POWER)


Command = MoveCommand | TargetCommand | PowerCommand


def move(unit: Unit, x: int, y: int) -> MoveCommand:
    return MoveCommand(bid=unit.bid, x=x, y=y)


def follow(unit: Unit, leader: Unit, spacing: float = BOT_DIAMETER) -> MoveCommand:
    """Move *unit* to a point *spacing* away from *leader*.

    The point lies on the line from the leader toward the follower's
    current position, so a follower trails without ramming. A spacing of
    zero drives straight onto the leader.
    """
    if spacing <= 0:
        return move(unit, leader.x, leader.y)
    angle = bearing(point_of(leader), point_of(unit))
    x, y = offset(point_of(leader), angle, spacing)
    return move(unit, x, y)


def target(unit: Unit, enemy: Unit) -> TargetCommand:
    return TargetCommand(bid=unit.bid, tpid=enemy.pid, tbid=enemy.bid)


def power(unit: Unit, fire: int, move: int, shield: int) -> PowerCommand:
    return PowerCommand(bid=unit.bid, fire=fire, move=move, shield=shield)


def encode_command(command: Command) -> bytes:
    """Serialize *command* to one newline-terminated wire line."""
    return command.model_dump_json(by_alias=True).encode("utf-8") + b"\n"
