"""Tests for the graph input model."""

import pytest

from algotrace.graph import Edge, Graph, Node


class TestGraphConstruction:
    def test_from_edges_declares_nodes_in_order(self):
        g = Graph.from_edges([("A", "B", 4), ("A", "D", 2), ("B", "C")])
        assert g.node_ids() == ["A", "B", "D", "C"]
        assert g.edge_count() == 3
        assert g.get_edge_between("B", "C").weight == 1

    def test_explicit_isolated_nodes(self):
        g = Graph.from_edges([("A", "B")], nodes=["Z"])
        assert g.has_node("Z")
        assert g.neighbours("Z") == []

    def test_ids_are_strings(self):
        g = Graph.from_edges([(1, 2)])
        assert g.node_ids() == ["1", "2"]

    def test_parallel_edges_keep_distinct_ids(self):
        g = Graph(directed=True)
        first = g.create_edge("A", "B", 1)
        second = g.create_edge("A", "B", 2)
        assert first.id == "A-B"
        assert second.id == "A-B#2"
        assert g.edge_count() == 2

    def test_bad_tuple_raises_value_error(self):
        with pytest.raises(ValueError):
            Graph.from_edges([("A",)])


class TestAdjacency:
    def test_undirected_neighbours_both_ways(self):
        g = Graph.from_edges([("A", "B"), ("A", "C")])
        assert [n for n, _ in g.neighbours("A")] == ["B", "C"]
        assert [n for n, _ in g.neighbours("B")] == ["A"]

    def test_directed_neighbours_one_way(self):
        g = Graph.from_edges([("A", "B")], directed=True)
        assert [n for n, _ in g.neighbours("A")] == ["B"]
        assert g.neighbours("B") == []

    def test_directed_edges_expands_undirected(self):
        g = Graph.from_edges([("A", "B", 3)])
        pairs = [(u, v, w) for u, v, w, _ in g.directed_edges()]
        assert pairs == [("A", "B", 3), ("B", "A", 3)]

    def test_reachable_from(self):
        g = Graph.from_edges([("A", "B"), ("C", "D")])
        assert g.reachable_from("A") == {"A", "B"}


class TestSerialisation:
    def test_dict_round_trip(self):
        g = Graph.from_edges([("A", "B", 4), ("B", "C", 2)], directed=True)
        again = Graph.from_dict(g.to_dict())
        assert again.directed
        assert again.node_ids() == ["A", "B", "C"]
        assert again.get_edge_between("A", "B").weight == 4

    def test_from_dict_accepts_bare_ids_and_tuples(self):
        g = Graph.from_dict({"nodes": ["A", "B", "C"], "edges": [["A", "C", 5]]})
        assert g.node_ids() == ["A", "B", "C"]
        assert g.get_edge_between("C", "A").weight == 5

    def test_adjacency_list_with_weights(self):
        g = Graph.from_adjacency_list("A: B(3) C\nB -> C(2)\n# comment\n")
        assert g.get_edge_between("A", "B").weight == 3
        assert g.get_edge_between("A", "C").weight == 1
        assert g.get_edge_between("B", "C").weight == 2

    def test_adjacency_list_skips_reverse_duplicates(self):
        g = Graph.from_adjacency_list("A: B\nB: A")
        assert g.edge_count() == 1

    def test_adjacency_list_rejects_garbage(self):
        with pytest.raises(ValueError):
            Graph.from_adjacency_list("just words")


class TestNodeAndEdge:
    def test_node_equality_by_id(self):
        assert Node("A", "first") == Node("A", "second")
        assert Node("A").label == "A"

    def test_edge_id_from_endpoints(self):
        edge = Edge("A", "B", weight=2)
        assert edge.to_dict() == {"id": "A-B", "source": "A", "target": "B", "weight": 2, "directed": False}
