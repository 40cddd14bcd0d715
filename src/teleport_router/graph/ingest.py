"""Build the base teleporter graph from parsed line features."""
from __future__ import annotations

import logging
from typing import Sequence, Tuple

from teleport_router.core.geometry import Point3
from teleport_router.core.transform import MapTransform
from teleport_router.data.features import LineFeature
from teleport_router.graph.graph import DEFAULT_TELEPORT_WEIGHT, RouteGraph

logger = logging.getLogger(__name__)

SNAP = 1.0


def snap_key(point: Point3, snap: float = SNAP) -> Tuple[int, int]:
    return (int(round(point.x / snap)), int(round(point.z / snap)))


class NodeIndex:
    """Deduplicate graph nodes by their snapped plane position."""

    def __init__(self, graph: RouteGraph, snap: float = SNAP) -> None:
        self.graph = graph
        self.snap = snap
        self._index: dict[Tuple[int, int], int] = {}

    def __len__(self) -> int:
        return len(self._index)

    def get_or_add(self, point: Point3) -> int:
        key = snap_key(point, self.snap)
        node_id = self._index.get(key)
        if node_id is None:
            node_id = self.graph.add_node(point)
            self._index[key] = node_id
        return node_id


def build_base_graph(
    features: Sequence[LineFeature],
    transform: MapTransform,
    teleport_weight: float = DEFAULT_TELEPORT_WEIGHT,
) -> RouteGraph:
    """Create one node per distinct teleporter and link each feature's endpoints."""
    graph = RouteGraph(teleport_weight)
    index = NodeIndex(graph)
    collapsed = 0
    for feat in features:
        a = transform.to_point(feat.start_raw[0], feat.start_raw[1], feat.start_elevation)
        b = transform.to_point(feat.end_raw[0], feat.end_raw[1], feat.end_elevation)
        ia = index.get_or_add(a)
        ib = index.get_or_add(b)
        if ia != ib:
            graph.add_teleport_edge(ia, ib)
        else:
            collapsed += 1

    graph.dedupe_edges()
    logger.info(
        "[GRAPH] base graph: %d teleporters, %d links (%d features, %d collapsed)",
        graph.node_count,
        graph.teleport_count,
        len(features),
        collapsed,
    )
    return graph
