"""Plane geometry and the walking time model."""
from __future__ import annotations

import math
from typing import NamedTuple, Optional

from teleport_router.core.config import WalkCosts


DEFAULT_COSTS = WalkCosts()


class Point3(NamedTuple):
    """HUD plane position: x/z horizontal, y is world elevation."""

    x: float
    y: float
    z: float


def planar_dist2(a: Point3, b: Point3) -> float:
    dx = a.x - b.x
    dz = a.z - b.z
    return dx * dx + dz * dz


def planar_distance(a: Point3, b: Point3) -> float:
    return math.sqrt(planar_dist2(a, b))


def walk_time(a: Point3, b: Point3, costs: Optional[WalkCosts] = None) -> float:
    """Return walking time in seconds from a to b.

    Horizontal travel costs ``seconds_per_unit`` per plane unit. Climbing costs
    ``ascend_seconds`` per ``vertical_unit`` and descending costs
    ``descend_seconds`` per ``vertical_unit``, so the result is not symmetric.
    """
    if costs is None:
        costs = DEFAULT_COSTS
    horiz = math.hypot(a.x - b.x, a.z - b.z)
    dy = b.y - a.y
    t = horiz * costs.seconds_per_unit
    if dy > 0:
        t += (dy / costs.vertical_unit) * costs.ascend_seconds
    else:
        t += (abs(dy) / costs.vertical_unit) * costs.descend_seconds
    return t
