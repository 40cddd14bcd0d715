"""Shortest-path search and route post-processing."""

from teleport_router.routing.dijkstra import ShortestPath, shortest_path  # noqa: F401
from teleport_router.routing.postprocess import (  # noqa: F401
    RouteResult,
    clean_path,
    direct_route,
    summarize_path,
)
from teleport_router.routing.service import RouteOutcome, RouteService  # noqa: F401
