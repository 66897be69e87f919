"""scrapperbot - Async client agent for the Scrappers arena game."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("scrapperbot")
except PackageNotFoundError:
    __version__ = "0+local"
from scrapperbot.agent import ScrapperAgent
from scrapperbot.config import AgentConfig
from scrapperbot.exceptions import (
    ExitCode,
    ScrapperConfigError,
    ScrapperConnectionError,
    ScrapperDecodeError,
    ScrapperError,
    ScrapperStartupError,
    ScrapperStateError,
    ScrapperTransportError,
)
from scrapperbot.models import (
    BotMessage,
    Command,
    MoveCommand,
    PowerCommand,
    ReadyMessage,
    TargetCommand,
    Unit,
    UnitId,
)
from scrapperbot.state.store import GameStateStore, Snapshot
from scrapperbot.strategies import (
    ColumnFormation,
    DishFormation,
    RushFocusFire,
    Strategy,
    StrategyEngine,
    available_strategies,
)

__all__ = [
    "__version__",
    "AgentConfig",
    "BotMessage",
    "ColumnFormation",
    "Command",
    "DishFormation",
    "ExitCode",
    "GameStateStore",
    "MoveCommand",
    "PowerCommand",
    "ReadyMessage",
    "RushFocusFire",
    "ScrapperAgent",
    "ScrapperConfigError",
    "ScrapperConnectionError",
    "ScrapperDecodeError",
    "ScrapperError",
    "ScrapperStartupError",
    "ScrapperStateError",
    "ScrapperTransportError",
    "Snapshot",
    "Strategy",
    "StrategyEngine",
    "TargetCommand",
    "Unit",
    "UnitId",
    "available_strategies",
]
