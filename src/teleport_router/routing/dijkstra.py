"""Single-source shortest path over a RouteGraph."""
from __future__ import annotations

import heapq
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from teleport_router.graph.graph import RouteGraph


@dataclass
class ShortestPath:
    nodes: List[int]
    cost: float
    explored: int = 0


def shortest_path(graph: RouteGraph, start: int, goal: int) -> Optional[ShortestPath]:
    """Dijkstra from ``start`` to ``goal``; None when the goal is unreachable."""
    node_count = graph.node_count
    if not (0 <= start < node_count) or not (0 <= goal < node_count):
        raise ValueError(f"start/goal out of range for {node_count} nodes")
    if start == goal:
        return ShortestPath(nodes=[start], cost=0.0)

    dist = [math.inf] * node_count
    prev = [-1] * node_count
    dist[start] = 0.0
    explored = 0

    heap: List[Tuple[float, int]] = [(0.0, start)]
    while heap:
        cur_dist, u = heapq.heappop(heap)
        if cur_dist != dist[u]:
            continue
        explored += 1
        if u == goal:
            break
        for v, weight in graph.adjacency[u]:
            if weight < 0:
                raise ValueError(f"negative edge weight {weight} between {u} and {v}")
            nd = cur_dist + weight
            if nd < dist[v]:
                dist[v] = nd
                prev[v] = u
                heapq.heappush(heap, (nd, v))

    if not math.isfinite(dist[goal]):
        return None

    path: List[int] = []
    cur = goal
    while cur != -1:
        path.append(cur)
        cur = prev[cur]
    path.reverse()
    return ShortestPath(nodes=path, cost=dist[goal], explored=explored)
