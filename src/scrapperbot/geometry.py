"""Planar geometry helpers shared by the strategies.

All functions are pure. Points are ``(x, y)`` pairs; anything with ``x``
and ``y`` attributes (a :class:`~scrapperbot.models.unit.Unit`) can be
turned into one with :func:`point_of`.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from typing import Protocol, TypeVar

Point = tuple[float, float]


class Positioned(Protocol):
    @property
    def x(self) -> int: ...

    @property
    def y(self) -> int: ...


TPositioned = TypeVar("TPositioned", bound=Positioned)


def point_of(item: Positioned) -> Point:
    return (item.x, item.y)


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(b[0] - a[0], b[1] - a[1])


def bearing(origin: Point, toward: Point) -> float:
    """Angle in radians of the line from *origin* to *toward*."""
    return math.atan2(toward[1] - origin[1], toward[0] - origin[0])


def offset(origin: Point, angle: float, radius: float) -> tuple[int, int]:
    """Integer point *radius* away from *origin* along *angle*.

    The polar offset is truncated toward zero before it is added, so the
    result matches the server's integer grid.
    """
    return (
        int(math.cos(angle) * radius) + int(origin[0]),
        int(math.sin(angle) * radius) + int(origin[1]),
    )


def centroid(points: Iterable[Point]) -> Point:
    """Mean position of *points*; raises ``ValueError`` when empty."""
    total_x = 0.0
    total_y = 0.0
    count = 0
    for x, y in points:
        total_x += x
        total_y += y
        count += 1
    if count == 0:
        raise ValueError("centroid of an empty point set")
    return (total_x / count, total_y / count)


def nearest(origin: Point, candidates: Sequence[TPositioned]) -> TPositioned | None:
    """Candidate closest to *origin*; the first one wins on ties."""
    best: TPositioned | None = None
    best_dist = math.inf
    for candidate in candidates:
        dist = distance(origin, point_of(candidate))
        if dist < best_dist:
            best_dist = dist
            best = candidate
    return best
