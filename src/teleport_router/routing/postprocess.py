"""Path cleanup and route summaries."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from shapely.geometry import LineString, Point, mapping

from teleport_router.core.config import WalkCosts
from teleport_router.core.geometry import Point3, planar_distance, walk_time
from teleport_router.core.transform import HudFrame
from teleport_router.graph.graph import RouteGraph


FALLBACK_HOP_DISTANCE = 1.5


@dataclass
class RouteResult:
    """Ordered HUD waypoints with one teleport flag per leg."""

    waypoints: List[Point3]
    teleport_flags: List[bool]
    walk_seconds: float = 0.0
    teleport_hops: int = 0
    total_seconds: float = 0.0
    direct: bool = False
    warnings: List[str] = field(default_factory=list)

    @property
    def total_minutes(self) -> float:
        return self.total_seconds / 60.0

    @property
    def walk_minutes(self) -> float:
        return self.walk_seconds / 60.0

    def to_world(self, frame: HudFrame) -> List[Point3]:
        return [frame.hud_to_world(p) for p in self.waypoints]

    def to_feature(self, frame: Optional[HudFrame] = None) -> dict:
        """GeoJSON Feature of the route on the (x, z) plane."""
        points = self.to_world(frame) if frame is not None else list(self.waypoints)
        coords = [(p.x, p.z, p.y) for p in points]
        if len(coords) == 1:
            geom = Point(coords[0])
        else:
            geom = LineString(coords)
        return {
            "type": "Feature",
            "properties": {
                "teleport_flags": list(self.teleport_flags),
                "teleport_hops": self.teleport_hops,
                "walk_seconds": self.walk_seconds,
                "total_seconds": self.total_seconds,
                "direct": self.direct,
            },
            "geometry": mapping(geom),
        }


def direct_route(goal: Point3, warnings: Optional[List[str]] = None) -> RouteResult:
    """Single-waypoint route straight to the goal."""
    return RouteResult(
        waypoints=[goal],
        teleport_flags=[],
        direct=True,
        warnings=list(warnings or []),
    )


def clean_path(graph: RouteGraph, path: Sequence[int]) -> List[int]:
    """Drop interior walk-only points that sit on teleporters.

    An interior node is kept when the leg before or after it is a teleport,
    or when no teleport edge touches it anywhere in the graph. The first and
    last nodes are always kept.
    """
    out: List[int] = []
    last = len(path) - 1
    for i, cur in enumerate(path):
        if i == 0 or i == last:
            out.append(cur)
            continue
        prev_is_tl = graph.is_teleport(path[i - 1], cur)
        next_is_tl = graph.is_teleport(cur, path[i + 1])
        if prev_is_tl or next_is_tl:
            out.append(cur)
        elif not graph.has_teleport_incident(cur):
            out.append(cur)
    return out


def summarize_path(
    graph: RouteGraph,
    path: Sequence[int],
    costs: Optional[WalkCosts] = None,
    fallback_hop_distance: float = FALLBACK_HOP_DISTANCE,
) -> RouteResult:
    """Build waypoints, teleport flags and time estimates for a node path."""
    waypoints = [graph.nodes[i] for i in path]
    flags: List[bool] = []
    walk_sec = 0.0
    hops = 0
    for a, b in zip(path, path[1:]):
        is_tl = graph.is_teleport(a, b)
        flags.append(is_tl)
        if is_tl:
            hops += 1
            continue
        weight = graph.edge_weight(a, b)
        if weight is None:
            # cleaned paths can join nodes that share no edge
            weight = walk_time(graph.nodes[a], graph.nodes[b], costs)
        walk_sec += weight

    if len(flags) != max(0, len(waypoints) - 1):
        flags = hop_flags_by_distance(waypoints, fallback_hop_distance)

    return RouteResult(
        waypoints=waypoints,
        teleport_flags=flags,
        walk_seconds=walk_sec,
        teleport_hops=hops,
        total_seconds=walk_sec + hops * graph.teleport_weight,
    )


def hop_flags_by_distance(waypoints: Sequence[Point3], max_distance: float) -> List[bool]:
    return [planar_distance(a, b) <= max_distance for a, b in zip(waypoints, waypoints[1:])]
