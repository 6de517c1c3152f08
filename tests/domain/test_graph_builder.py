import pytest

from dijkstra_map.domain.entities.geography import Node, Way
from dijkstra_map.domain.graph.builder import build_graph, expected_arc_count


def _arcs(graph, u):
    return {(a.target, round(a.weight, 12)) for a in graph.adjacency[u]}


def test_two_way_way_makes_path_graph(square_path_graph):
    g = square_path_graph
    assert _arcs(g, 0) == {(1, 10.0)}
    assert _arcs(g, 1) == {(0, 10.0), (2, 10.0)}
    assert _arcs(g, 2) == {(1, 10.0), (3, 10.0)}
    assert _arcs(g, 3) == {(2, 10.0)}
    assert not g.graph_type.is_directed
    assert not g.graph_type.has_one_way_streets


def test_one_way_way_adds_forward_arc_only(square_nodes):
    g = build_graph(square_nodes, [Way((0, 1), oneway=True)])
    assert [a.target for a in g.adjacency[0]] == [1]
    assert g.adjacency[1] == ()
    assert g.graph_type.is_directed
    assert g.graph_type.has_one_way_streets


def test_reverse_arc_from_a_different_way_is_kept(square_nodes):
    g = build_graph(square_nodes, [Way((0, 1), oneway=True), Way((1, 0), oneway=True)])
    assert [a.target for a in g.adjacency[1]] == [0]


def test_out_of_range_segments_are_skipped_not_fatal(square_nodes):
    g = build_graph(square_nodes, [Way((0, 1, 9, 2)), Way((-1, 3))])
    # 0-1 survives, 1-9 / 9-2 / -1-3 are dropped
    assert g.skipped_segments == 3
    assert _arcs(g, 0) == {(1, 10.0)}
    assert g.adjacency[2] == ()
    assert g.adjacency[3] == ()


def test_parallel_arcs_are_not_deduplicated(square_nodes):
    g = build_graph(square_nodes, [Way((0, 1)), Way((0, 1))])
    assert len(g.adjacency[0]) == 2


def test_coincident_nodes_give_zero_weight():
    nodes = [Node("p", 5.0, 5.0), Node("q", 5.0, 5.0)]
    g = build_graph(nodes, [Way((0, 1))])
    assert g.adjacency[0][0].weight == 0.0


def test_rebuild_is_idempotent(square_nodes):
    ways = [Way((0, 1, 2)), Way((2, 3), oneway=True), Way((3, 0))]
    g1 = build_graph(square_nodes, ways)
    g2 = build_graph(square_nodes, ways)
    for u in range(len(square_nodes)):
        assert set(g1.adjacency[u]) == set(g2.adjacency[u])
    assert g1.graph_type == g2.graph_type


def test_diagonal_weight_is_euclidean(square_nodes):
    g = build_graph(square_nodes, [Way((0, 2))])
    assert g.adjacency[0][0].weight == pytest.approx(200**0.5)


def test_expected_arc_count_counts_one_way_once():
    ways = [Way((0, 1, 2)), Way((2, 3), oneway=True)]
    assert expected_arc_count(ways) == 2 * 2 + 1
