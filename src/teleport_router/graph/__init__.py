"""Routing graph construction helpers."""

from teleport_router.graph.graph import RouteGraph  # noqa: F401
from teleport_router.graph.ingest import build_base_graph  # noqa: F401
from teleport_router.graph.spatial import (  # noqa: F401
    SpatialGrid,
    connect_all_walk,
    connect_node_walk,
)
