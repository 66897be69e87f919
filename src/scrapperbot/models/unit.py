"""Replicated unit model."""

from __future__ import annotations

from typing import NamedTuple

from pydantic import BaseModel, ConfigDict


class UnitId(NamedTuple):
    """Composite unit identity, unique across the store."""

    pid: int
    bid: int

    def __str__(self) -> str:
        return f"{self.pid}/{self.bid}"


class Unit(BaseModel):
    """Immutable snapshot of one bot as known to the local replica."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    pid: int
    bid: int
    x: int
    y: int
    health: int

    @property
    def unit_id(self) -> UnitId:
        return UnitId(self.pid, self.bid)

    @property
    def position(self) -> tuple[int, int]:
        return (self.x, self.y)
