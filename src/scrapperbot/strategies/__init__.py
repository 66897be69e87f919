"""Tactical policies.

Importing this package registers the built-in strategies by name.
"""

from scrapperbot.strategies import column, dish, rush  # noqa: F401
from scrapperbot.strategies.base import (
    Strategy,
    StrategyContext,
    StrategyEngine,
    available_strategies,
    create_strategy,
    register_strategy,
)
from scrapperbot.strategies.column import ColumnFormation
from scrapperbot.strategies.dish import DishFormation
from scrapperbot.strategies.rush import RushFocusFire

__all__ = [
    "ColumnFormation",
    "DishFormation",
    "RushFocusFire",
    "Strategy",
    "StrategyContext",
    "StrategyEngine",
    "available_strategies",
    "create_strategy",
    "register_strategy",
]
