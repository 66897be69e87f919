"""Inbound game messages.

The game sends one JSON object per line. The ``Type`` field is the
discriminant; only ``READY`` and ``BOT`` carry state the agent consumes.
"""

from __future__ import annotations

import enum
from typing import Any

from pydantic import Field, field_validator

from scrapperbot.models._base import ScrapperBaseModel
from scrapperbot.models.unit import UnitId


class MessageType(enum.StrEnum):
    """Known ``Type`` discriminant values."""

    READY = "READY"
    BOT = "BOT"


class MessageEnvelope(ScrapperBaseModel):
    """Minimal shape shared by every inbound message, used to sniff the type."""

    type: str = Field(alias="Type")


class BotMessage(ScrapperBaseModel):
    """A ``BOT`` update, sent whenever something about a bot changes.

    Only ``pid``, ``bid``, ``x``, ``y`` and ``health`` feed the state
    store; the rest is telemetry kept for diagnostics.
    """

    pid: int = Field(alias="PID")
    bid: int = Field(alias="BID")
    x: int = Field(alias="X")
    y: int = Field(alias="Y")
    health: int = Field(alias="Health")
    fired: bool = Field(default=False, alias="Fired")
    hit_x: int = Field(default=0, alias="HitX")
    hit_y: int = Field(default=0, alias="HitY")
    scrap: int = Field(default=0, alias="Scrap")
    shield: bool = Field(default=False, alias="Shield")

    @property
    def unit_id(self) -> UnitId:
        return UnitId(self.pid, self.bid)

    @property
    def is_dead(self) -> bool:
        return self.health <= 0


class ReadyMessage(ScrapperBaseModel):
    """The session-ready announcement: our player id and the initial roster."""

    pid: int = Field(alias="PID")
    bots: list[BotMessage] = Field(default_factory=list, alias="Bots")

    @field_validator("bots", mode="before")
    @classmethod
    def _null_roster(cls, value: Any) -> Any:
        return [] if value is None else value


class UnknownMessage(ScrapperBaseModel):
    """A message whose discriminant the agent does not understand."""

    type: str
    raw: dict[str, Any] = Field(default_factory=dict)


InboundMessage = ReadyMessage | BotMessage | UnknownMessage
