"""Wire and replica models."""

from scrapperbot.models.commands import (
    Command,
    CommandType,
    MoveCommand,
    PowerCommand,
    TargetCommand,
    encode_command,
    follow,
    move,
    power,
    target,
)
from scrapperbot.models.messages import (
    BotMessage,
    InboundMessage,
    MessageEnvelope,
    MessageType,
    ReadyMessage,
    UnknownMessage,
)
from scrapperbot.models.unit import Unit, UnitId

__all__ = [
    "BotMessage",
    "Command",
    "CommandType",
    "InboundMessage",
    "MessageEnvelope",
    "MessageType",
    "MoveCommand",
    "PowerCommand",
    "ReadyMessage",
    "TargetCommand",
    "Unit",
    "UnitId",
    "UnknownMessage",
    "encode_command",
    "follow",
    "move",
    "power",
    "target",
]
