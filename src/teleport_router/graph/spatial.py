"""Uniform grid index for radius-limited neighbour queries on the HUD plane."""
from __future__ import annotations

import logging
import math
from typing import Iterable, Iterator, Optional, Tuple

import numpy as np

from teleport_router.core.config import WalkCosts
from teleport_router.core.geometry import Point3, walk_time
from teleport_router.graph.graph import RouteGraph

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]


def neighbor_cells(cell: Cell) -> Iterator[Cell]:
    cx, cz = cell
    for dx in (-1, 0, 1):
        for dz in (-1, 0, 1):
            yield cx + dx, cz + dz


class SpatialGrid:
    """Bucket node ids into square cells of side ``max(1, radius)``.

    Any two points within ``radius`` of each other lie in the same or in
    adjacent cells, so a query only scans the 3x3 block around the query
    cell and then applies the exact squared-distance test.
    """

    def __init__(self, coords: np.ndarray, radius: float) -> None:
        if radius <= 0:
            raise ValueError("radius must be positive")
        self.coords = np.asarray(coords, dtype=np.float64).reshape(-1, 2)
        self.radius = float(radius)
        self.radius_sq = self.radius * self.radius
        self.cell_size = max(1.0, self.radius)
        self.cells: dict[Cell, np.ndarray] = {}

        if len(self.coords):
            keys = np.floor(self.coords / self.cell_size).astype(np.int64)
            buckets: dict[Cell, list[int]] = {}
            for idx, (cx, cz) in enumerate(keys.tolist()):
                buckets.setdefault((cx, cz), []).append(idx)
            self.cells = {key: np.array(ids, dtype=np.int64) for key, ids in buckets.items()}

    @classmethod
    def from_graph(cls, graph: RouteGraph, radius: float) -> "SpatialGrid":
        return cls(graph.planar_coords(), radius)

    def __len__(self) -> int:
        return len(self.coords)

    def cell_of(self, x: float, z: float) -> Cell:
        return (int(math.floor(x / self.cell_size)), int(math.floor(z / self.cell_size)))

    def _candidates(self, cell: Cell) -> np.ndarray:
        chunks = [self.cells[nb] for nb in neighbor_cells(cell) if nb in self.cells]
        if not chunks:
            return np.zeros(0, dtype=np.int64)
        return np.concatenate(chunks)

    def neighbors(self, x: float, z: float, exclude: Optional[int] = None) -> list[int]:
        """Return ids within ``radius`` of (x, z), sorted ascending."""
        candidates = self._candidates(self.cell_of(x, z))
        if candidates.size == 0:
            return []
        d = self.coords[candidates] - np.array([x, z], dtype=np.float64)
        dist_sq = d[:, 0] * d[:, 0] + d[:, 1] * d[:, 1]
        hits = np.sort(candidates[dist_sq <= self.radius_sq])
        return [int(i) for i in hits if exclude is None or int(i) != exclude]

    def pairs_within(self) -> list[Tuple[int, int]]:
        """Return every unordered pair (a, b), a < b, within ``radius``."""
        pairs: set[Tuple[int, int]] = set()
        for cell, members in self.cells.items():
            candidates = self._candidates(cell)
            if candidates.size == 0:
                continue
            d = self.coords[members][:, None, :] - self.coords[candidates][None, :, :]
            dist_sq = d[..., 0] * d[..., 0] + d[..., 1] * d[..., 1]
            rows, cols = np.nonzero(dist_sq <= self.radius_sq)
            for a, b in zip(members[rows].tolist(), candidates[cols].tolist()):
                if a < b:
                    pairs.add((a, b))
        return sorted(pairs)


def connect_all_walk(
    graph: RouteGraph,
    radius: float,
    costs: Optional[WalkCosts] = None,
) -> int:
    """Add walk edges between every pair of nodes within ``radius``."""
    grid = SpatialGrid.from_graph(graph, radius)
    pairs = grid.pairs_within()
    _add_walk_edges(graph, pairs, costs)
    graph.dedupe_edges()
    logger.info("[GRAPH] walk mesh: %d pairs within radius %.0f", len(pairs), radius)
    return len(pairs)


def connect_node_walk(
    graph: RouteGraph,
    node: int,
    radius: float,
    costs: Optional[WalkCosts] = None,
) -> int:
    """Link ``node`` to every other node within ``radius``; return the link count."""
    grid = SpatialGrid.from_graph(graph, radius)
    p = graph.nodes[node]
    links = 0
    for other in grid.neighbors(p.x, p.z, exclude=node):
        graph.add_walk_edge(node, other, walk_time(p, graph.nodes[other], costs))
        links += 1
    return links


def _add_walk_edges(
    graph: RouteGraph,
    pairs: Iterable[Tuple[int, int]],
    costs: Optional[WalkCosts],
) -> None:
    nodes: list[Point3] = graph.nodes
    for a, b in pairs:
        graph.add_walk_edge(a, b, walk_time(nodes[a], nodes[b], costs))
