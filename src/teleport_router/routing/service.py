"""Route requests: dataset -> graph -> shortest path -> cleaned route."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Optional

from teleport_router.core.config import RouterConfig
from teleport_router.core.errors import DataUnavailableError, SchemaInvalidError
from teleport_router.core.geometry import Point3, planar_distance
from teleport_router.core.transform import HudFrame, MapTransform
from teleport_router.data.dataset import FeatureProvider
from teleport_router.graph.graph import RouteGraph
from teleport_router.graph.ingest import build_base_graph
from teleport_router.graph.spatial import connect_all_walk, connect_node_walk
from teleport_router.routing.dijkstra import shortest_path
from teleport_router.routing.postprocess import (
    RouteResult,
    clean_path,
    direct_route,
    summarize_path,
)

logger = logging.getLogger(__name__)


@dataclass
class RouteOutcome:
    """Result of one route request.

    ``route`` is what the consumer should follow. It is None only when the
    dataset could not be used; ``found`` is False whenever no graph route was
    computed, including the direct fallbacks for unreachable or degenerate
    paths.
    """

    found: bool
    route: Optional[RouteResult] = None
    reason_code: Optional[str] = None
    message: str = ""
    stats: dict = field(default_factory=dict)

    @property
    def warnings(self) -> list[str]:
        return list(self.route.warnings) if self.route is not None else [self.message]


@dataclass
class RouteService:
    config: RouterConfig
    provider: FeatureProvider

    @property
    def frame(self) -> HudFrame:
        return HudFrame.from_config(self.config.frame)

    def load_base_graph(self) -> RouteGraph:
        """Fetch features and build the teleporter graph; data errors propagate."""
        features = self.provider.get_features()
        return build_base_graph(
            features,
            MapTransform.from_config(self.config.transform),
            teleport_weight=self.config.teleport.weight,
        )

    def build_request_graph(self, base: RouteGraph, agent: Point3, goal: Point3) -> tuple[RouteGraph, int, int]:
        """Copy ``base``, add the walk mesh plus agent and goal nodes."""
        walk = self.config.walk
        graph = base.copy()
        connect_all_walk(graph, walk.radius, walk.costs)
        start_id = graph.add_node(agent)
        connect_node_walk(graph, start_id, walk.radius, walk.costs)
        goal_id = graph.add_node(goal)
        connect_node_walk(graph, goal_id, walk.radius, walk.costs)
        return graph, start_id, goal_id

    def find_route_world(self, x: float, y: float, z: float, goal_x: float, goal_z: float) -> RouteOutcome:
        """Agent position in world coordinates, goal in HUD coordinates."""
        return self.find_route(self.frame.world_to_hud(x, y, z), goal_x, goal_z)

    def find_route(self, agent: Point3, goal_x: float, goal_z: float) -> RouteOutcome:
        """Plan from ``agent`` (HUD) to the HUD point (goal_x, goal_z)."""
        t_start = time.perf_counter()
        goal = Point3(float(goal_x), agent.y, float(goal_z))

        if planar_distance(agent, goal) <= self.config.walk.direct_threshold:
            logger.info("[ROUTE] destination close, going direct")
            return RouteOutcome(found=True, route=direct_route(goal), message="destination close, going direct")

        try:
            base = self.load_base_graph()
        except (DataUnavailableError, SchemaInvalidError) as exc:
            logger.warning("[ROUTE] failed to load teleporter data: %s", exc)
            return RouteOutcome(found=False, route=None, reason_code=exc.reason_code, message=str(exc))

        graph, start_id, goal_id = self.build_request_graph(base, agent, goal)
        stats = {
            "teleporters": base.node_count,
            "teleport_links": base.teleport_count,
            "nodes": graph.node_count,
            "edges": graph.edge_count,
            "walk_radius": self.config.walk.radius,
        }
        logger.info(
            "[ROUTE] start=%s goal=%s; TL=%d, edges=%d, walkR=%.0f",
            _fmt(agent),
            _fmt(goal),
            base.node_count,
            graph.edge_count,
            self.config.walk.radius,
        )

        found = shortest_path(graph, start_id, goal_id)
        if found is None or len(found.nodes) < 2:
            msg = "route not found, going direct"
            logger.warning("[ROUTE] %s", msg)
            return RouteOutcome(
                found=False,
                route=direct_route(goal, [msg]),
                reason_code="unreachable",
                message=msg,
                stats=stats,
            )

        path = clean_path(graph, found.nodes)
        if len(path) < 2:
            msg = "route degenerated after teleport cleanup, going direct"
            logger.warning("[ROUTE] %s", msg)
            return RouteOutcome(
                found=False,
                route=direct_route(goal, [msg]),
                reason_code="degenerate_route",
                message=msg,
                stats=stats,
            )

        route = summarize_path(
            graph,
            path,
            self.config.walk.costs,
            self.config.teleport.fallback_hop_distance,
        )
        stats["explored"] = found.explored
        stats["path_cost"] = found.cost
        stats["elapsed_ms"] = (time.perf_counter() - t_start) * 1000.0
        message = (
            f"ETA {route.total_minutes:.1f} min "
            f"({route.teleport_hops} TL, {route.walk_minutes:.1f} min walking)"
        )
        logger.info("[ROUTE] %s", message)
        return RouteOutcome(found=True, route=route, message=message, stats=stats)


def _fmt(p: Point3) -> str:
    return f"{p.x:.0f} {p.y:.0f} {p.z:.0f}"
