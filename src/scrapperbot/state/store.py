"""Lock-guarded in-memory replica of the battlefield.

This is the only component allowed to merge inbound unit updates.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass

from scrapperbot.exceptions import ScrapperStateError
from scrapperbot.models.messages import BotMessage
from scrapperbot.models.unit import Unit, UnitId

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Both ownership partitions, taken under a single lock acquisition."""

    mine: tuple[Unit, ...]
    theirs: tuple[Unit, ...]


class GameStateStore:
    """In-memory store for replicated unit state.

    Deterministic: given the same sequence of upserts, it produces the same
    contents in the same iteration order (first sighting order; updates
    keep their slot).

    One writer (the state processor) and one reader (the strategy engine)
    share an instance. Every mutation and every read holds ``_lock``, and
    reads hand out immutable :class:`Unit` values, so a reader never sees a
    half-applied update.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._units: dict[UnitId, Unit] = {}
        self._player_id: int | None = None

    @property
    def player_id(self) -> int | None:
        with self._lock:
            return self._player_id

    def __len__(self) -> int:
        with self._lock:
            return len(self._units)

    def __contains__(self, unit_id: object) -> bool:
        with self._lock:
            return unit_id in self._units

    def get(self, unit_id: UnitId) -> Unit | None:
        with self._lock:
            return self._units.get(unit_id)

    def _upsert_locked(self, unit_id: UnitId, x: int, y: int, health: int) -> None:
        if health <= 0:
            if self._units.pop(unit_id, None) is not None:
                _logger.debug("Unit %s destroyed", unit_id)
            return
        if unit_id not in self._units:
            _logger.debug("Unit %s sighted at (%d, %d) health=%d", unit_id, x, y, health)
        self._units[unit_id] = Unit(pid=unit_id.pid, bid=unit_id.bid, x=x, y=y, health=health)

    def upsert(self, unit_id: UnitId, x: int, y: int, health: int) -> None:
        """Insert, update or remove one unit.

        ``health <= 0`` removes the unit (no-op when unknown); otherwise the
        stored position and health are replaced, or a new unit is appended.
        """
        with self._lock:
            self._upsert_locked(unit_id, x, y, health)

    def apply(self, message: BotMessage) -> None:
        """Apply a decoded ``BOT`` update."""
        self.upsert(message.unit_id, message.x, message.y, message.health)

    def load_roster(self, player_id: int, bots: Iterable[BotMessage]) -> None:
        """Record our player id and the initial roster in one atomic step.

        Readers see either the empty pre-session store or the complete
        roster with the player id set, never one without the other.
        """
        with self._lock:
            if self._player_id is not None:
                raise ScrapperStateError(f"player id already set to {self._player_id}, refusing {player_id}")
            self._player_id = player_id
            for bot in bots:
                self._upsert_locked(bot.unit_id, bot.x, bot.y, bot.health)
            count = len(self._units)
        _logger.info("Player id is %d; roster holds %d units", player_id, count)

    def _is_mine(self, unit: Unit) -> bool:
        return self._player_id is not None and unit.pid == self._player_id

    def units_owned_by_me(self) -> list[Unit]:
        with self._lock:
            return [unit for unit in self._units.values() if self._is_mine(unit)]

    def units_not_owned_by_me(self) -> list[Unit]:
        with self._lock:
            return [unit for unit in self._units.values() if not self._is_mine(unit)]

    def snapshot(self) -> Snapshot:
        """Return both partitions as of one instant."""
        with self._lock:
            mine: list[Unit] = []
            theirs: list[Unit] = []
            for unit in self._units.values():
                (mine if self._is_mine(unit) else theirs).append(unit)
        return Snapshot(mine=tuple(mine), theirs=tuple(theirs))
