"""In-memory routing graph with an explicit teleport edge registry."""
from __future__ import annotations

from typing import Iterator, Optional, Tuple

import numpy as np

from teleport_router.core.geometry import Point3


DEFAULT_TELEPORT_WEIGHT = 3.0


class RouteGraph:
    """Undirected weighted graph over dense integer node ids.

    Every edge is stored in both adjacency lists. Teleport edges are tracked
    in ``teleports`` as ordered pairs in both directions; that set, not the
    edge weight, decides whether an edge is a teleport.
    """

    def __init__(self, teleport_weight: float = DEFAULT_TELEPORT_WEIGHT) -> None:
        if teleport_weight <= 0:
            raise ValueError("teleport weight must be positive")
        self.teleport_weight = float(teleport_weight)
        self.nodes: list[Point3] = []
        self.adjacency: list[list[Tuple[int, float]]] = []
        self.teleports: set[Tuple[int, int]] = set()

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return sum(len(edges) for edges in self.adjacency) // 2

    @property
    def teleport_count(self) -> int:
        return len(self.teleports) // 2

    def add_node(self, point: Point3) -> int:
        idx = len(self.nodes)
        self.nodes.append(Point3(float(point[0]), float(point[1]), float(point[2])))
        self.adjacency.append([])
        return idx

    def add_walk_edge(self, a: int, b: int, weight: float) -> None:
        if a == b:
            return
        if weight < 0:
            raise ValueError(f"negative edge weight {weight} between {a} and {b}")
        self.adjacency[a].append((b, float(weight)))
        self.adjacency[b].append((a, float(weight)))

    def add_teleport_edge(self, a: int, b: int) -> None:
        if a == b:
            return
        self.adjacency[a].append((b, self.teleport_weight))
        self.adjacency[b].append((a, self.teleport_weight))
        self.teleports.add((a, b))
        self.teleports.add((b, a))

    def is_teleport(self, a: int, b: int) -> bool:
        return (a, b) in self.teleports

    def has_teleport_incident(self, node: int) -> bool:
        return any(self.is_teleport(node, to) for to, _ in self.adjacency[node])

    def edge_weight(self, a: int, b: int) -> Optional[float]:
        """Return the smallest weight of an a-b edge, or None if there is none."""
        weights = [w for to, w in self.adjacency[a] if to == b]
        if not weights:
            return None
        return min(weights)

    def neighbors(self, node: int) -> Iterator[Tuple[int, float]]:
        return iter(self.adjacency[node])

    def dedupe_edges(self) -> None:
        """Collapse parallel edges to the minimum weight per neighbour."""
        for a, edges in enumerate(self.adjacency):
            best: dict[int, float] = {}
            for to, w in edges:
                if to not in best or w < best[to]:
                    best[to] = w
            self.adjacency[a] = list(best.items())

    def copy(self) -> "RouteGraph":
        clone = RouteGraph(self.teleport_weight)
        clone.nodes = list(self.nodes)
        clone.adjacency = [list(edges) for edges in self.adjacency]
        clone.teleports = set(self.teleports)
        return clone

    def planar_coords(self) -> np.ndarray:
        """Return an (N, 2) array of node (x, z) positions."""
        if not self.nodes:
            return np.zeros((0, 2), dtype=np.float64)
        return np.array([(p.x, p.z) for p in self.nodes], dtype=np.float64)
