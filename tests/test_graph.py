from __future__ import annotations

import pytest

from teleport_router.core.geometry import Point3
from teleport_router.core.transform import MapTransform
from teleport_router.data.features import LineFeature
from teleport_router.graph.graph import RouteGraph
from teleport_router.graph.ingest import build_base_graph, snap_key


def _link(a, b, h1=0.0, h2=0.0):
    return LineFeature(start_raw=a, end_raw=b, start_elevation=h1, end_elevation=h2)


def test_endpoints_in_same_snap_cell_share_a_node() -> None:
    features = [
        _link((10.1, 0.0), (500.0, 0.0)),
        _link((10.4, -0.3), (900.0, 0.0)),
    ]
    graph = build_base_graph(features, MapTransform())
    assert graph.node_count == 3
    assert graph.nodes[0] == Point3(10.1, 0.0, -0.0)
    assert graph.is_teleport(0, 1)
    assert graph.is_teleport(0, 2)
    assert not graph.is_teleport(1, 2)


def test_snap_key_rounds_to_whole_units() -> None:
    assert snap_key(Point3(10.49, 5.0, -3.51)) == (10, -4)


def test_collapsed_feature_adds_no_edge() -> None:
    graph = build_base_graph([_link((0.0, 0.0), (0.2, 0.2))], MapTransform())
    assert graph.node_count == 1
    assert graph.edge_count == 0
    assert graph.teleports == set()


def test_duplicate_features_collapse_to_one_edge() -> None:
    features = [_link((0.0, 0.0), (100.0, 0.0)), _link((100.0, 0.0), (0.0, 0.0))]
    graph = build_base_graph(features, MapTransform(), teleport_weight=4.0)
    assert graph.adjacency[0] == [(1, 4.0)]
    assert graph.adjacency[1] == [(0, 4.0)]


def test_elevation_is_attached_to_nodes() -> None:
    graph = build_base_graph([_link((0.0, 0.0), (100.0, 50.0), h1=110.0, h2=92.0)], MapTransform())
    assert graph.nodes[0].y == 110.0
    assert graph.nodes[1] == Point3(100.0, 92.0, -50.0)


def test_teleport_registry_is_symmetric() -> None:
    graph = RouteGraph()
    ids = [graph.add_node(Point3(i * 10.0, 0.0, 0.0)) for i in range(5)]
    graph.add_teleport_edge(ids[0], ids[3])
    graph.add_teleport_edge(ids[4], ids[1])
    graph.add_walk_edge(ids[1], ids[2], 1.2)
    for a, b in graph.teleports:
        assert (b, a) in graph.teleports
    assert graph.teleport_count == 2
    assert not graph.is_teleport(ids[1], ids[2])


def test_teleport_kind_never_inferred_from_weight() -> None:
    graph = RouteGraph(teleport_weight=3.0)
    a = graph.add_node(Point3(0, 0, 0))
    b = graph.add_node(Point3(25, 0, 0))
    graph.add_walk_edge(a, b, 3.0)
    assert graph.edge_weight(a, b) == 3.0
    assert not graph.is_teleport(a, b)
    assert not graph.has_teleport_incident(a)


def test_dedupe_keeps_minimum_weight() -> None:
    graph = RouteGraph()
    a = graph.add_node(Point3(0, 0, 0))
    b = graph.add_node(Point3(100, 0, 0))
    graph.add_walk_edge(a, b, 12.0)
    graph.add_teleport_edge(a, b)
    graph.add_walk_edge(a, b, 7.5)
    graph.dedupe_edges()
    assert graph.adjacency[a] == [(b, 3.0)]
    assert graph.edge_count == 1
    assert graph.is_teleport(b, a)


def test_edge_weight_missing_pair_is_none() -> None:
    graph = RouteGraph()
    a = graph.add_node(Point3(0, 0, 0))
    b = graph.add_node(Point3(1, 0, 0))
    assert graph.edge_weight(a, b) is None


def test_self_loops_ignored_and_negative_weights_rejected() -> None:
    graph = RouteGraph()
    a = graph.add_node(Point3(0, 0, 0))
    b = graph.add_node(Point3(1, 0, 0))
    graph.add_walk_edge(a, a, 1.0)
    graph.add_teleport_edge(b, b)
    assert graph.edge_count == 0
    with pytest.raises(ValueError):
        graph.add_walk_edge(a, b, -1.0)


def test_copy_is_independent() -> None:
    base = build_base_graph([_link((0.0, 0.0), (100.0, 0.0))], MapTransform())
    clone = base.copy()
    c = clone.add_node(Point3(50, 0, 0))
    clone.add_walk_edge(0, c, 6.0)
    clone.add_teleport_edge(1, c)
    assert base.node_count == 2
    assert base.adjacency[0] == [(1, 3.0)]
    assert not base.is_teleport(1, 2)
