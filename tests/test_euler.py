"""
Tests for the Euler trail finder.
"""

import logging
from collections import Counter

import networkx as nx
import pytest

from euler import edges_from_trail, find_trail, is_circuit, is_connected_on_non_isolated, odd_degree_vertices
from graph import Graph

EX1 = [(1, 2), (1, 3), (1, 4), (1, 5), (2, 3), (2, 5), (2, 6), (3, 6), (3, 7), (4, 5), (5, 6), (6, 7)]
EX2 = [(1, 2), (1, 4), (2, 3), (2, 4), (3, 5), (4, 5)]
EX3 = [(1, 2), (1, 3), (1, 4), (1, 5), (2, 3), (2, 5), (3, 6), (4, 5), (4, 6), (5, 6)]


def make_graph(edges):
    g = Graph()
    for e in edges:
        g.add_edge(*e)
    return g


def assert_uses_every_edge_once(g, trail):
    used = Counter(frozenset(e) for e in edges_from_trail(trail))
    expected = Counter(frozenset((u, v)) for u, v, _ in g.edges())
    assert used == expected


def test_example_circuit():
    g = make_graph(EX1)
    trail = find_trail(g)

    assert trail == [1, 2, 3, 6, 2, 5, 4, 1, 3, 7, 6, 5, 1]
    assert len(trail) == 13
    assert is_circuit(trail)
    assert_uses_every_edge_once(g, trail)


def test_example_path():
    g = make_graph(EX2)
    trail = find_trail(g)

    assert odd_degree_vertices(g) == [2, 4]
    assert trail == [2, 1, 4, 5, 3, 2, 4]
    assert trail[0] == 2 and trail[-1] == 4
    assert not is_circuit(trail)
    assert_uses_every_edge_once(g, trail)


def test_example_non_eulerian():
    g = make_graph(EX3)
    assert odd_degree_vertices(g) == [2, 3, 4, 6]
    assert find_trail(g) == []


@pytest.mark.parametrize("edges", [EX1, EX2, EX3])
def test_find_trail_does_not_mutate_input(edges):
    g = make_graph(edges)
    before = g.copy()
    find_trail(g)
    assert g == before
    assert g.edge_count() == len(edges)


def test_start_vertex_independent_of_insertion_order():
    g = make_graph(reversed(EX2))
    assert find_trail(g) == [2, 1, 4, 5, 3, 2, 4]


def test_empty_graph_has_empty_trail():
    assert find_trail(Graph()) == []


def test_edgeless_graph_gives_single_vertex():
    g = Graph()
    g.add_vertex(3)
    g.add_vertex(1)
    assert find_trail(g) == [1]


def test_zero_is_an_ordinary_vertex():
    g = make_graph([(0, 1), (1, 2)])
    trail = find_trail(g)
    assert trail == [0, 1, 2]


def test_string_vertices():
    g = make_graph([("b", "c"), ("c", "a"), ("a", "b")])
    trail = find_trail(g)
    assert trail == ["a", "b", "c", "a"]


def test_long_trail_is_not_limited_by_recursion():
    n = 5000
    g = make_graph([(i, (i + 1) % n) for i in range(n)])
    trail = find_trail(g)
    assert len(trail) == n + 1
    assert is_circuit(trail)


def test_weights_do_not_affect_trail():
    g = make_graph([(1, 2, 10), (2, 3, 1), (3, 1, 5)])
    assert find_trail(g) == [1, 2, 3, 1]


def test_disconnected_graph_gives_incomplete_trail(caplog):
    g = make_graph([(1, 2), (2, 3), (3, 1), (4, 5), (5, 6), (6, 4)])
    assert not is_connected_on_non_isolated(g)

    with caplog.at_level(logging.WARNING):
        trail = find_trail(g)

    assert trail == [1, 2, 3, 1]
    assert len(trail) < g.edge_count() + 1
    assert "Incomplete trail" in caplog.text


def test_connectivity_ignores_isolated_vertices():
    g = make_graph(EX1)
    g.add_vertex(99)
    assert is_connected_on_non_isolated(g)
    assert is_connected_on_non_isolated(Graph())


def test_greedy_can_stop_early_on_connected_graph(caplog):
    # Two triangles sharing vertex 2: the walk closes back to 1 before
    # visiting the 2-4-5 triangle.
    g = make_graph([(1, 2), (1, 3), (2, 3), (2, 4), (2, 5), (4, 5)])
    assert odd_degree_vertices(g) == []
    assert is_connected_on_non_isolated(g)

    with caplog.at_level(logging.WARNING):
        trail = find_trail(g)

    assert trail == [1, 2, 3, 1]
    assert "Incomplete trail" in caplog.text


@pytest.mark.parametrize("seed", range(20))
def test_trail_properties_on_random_graphs(seed):
    G = nx.gnm_random_graph(8, 12, seed=seed)
    g = make_graph(G.edges())
    for v in G.nodes:
        g.add_vertex(v)
    odds = odd_degree_vertices(g)
    trail = find_trail(g)

    if len(odds) not in (0, 2):
        assert trail == []
        return

    assert trail[0] == (odds[0] if odds else g.vertices()[0])
    used = [frozenset(e) for e in edges_from_trail(trail)]
    assert len(used) == len(set(used))
    assert all(g.is_edge(u, v) for u, v in edges_from_trail(trail))

    H = G.subgraph([v for v in G.nodes if G.degree(v) > 0])
    if is_connected_on_non_isolated(g):
        assert nx.has_eulerian_path(H)
    if len(trail) == g.edge_count() + 1:
        assert_uses_every_edge_once(g, trail)
        if odds:
            assert {trail[0], trail[-1]} == set(odds)
        else:
            assert is_circuit(trail)


def test_edges_from_trail():
    assert edges_from_trail([1, 2, 3]) == [(1, 2), (2, 3)]
    assert edges_from_trail([1]) == []
    assert not is_circuit([1])


class LessThanOnly:
    '''Vertex type comparable with `<` and `==` only.'''

    def __init__(self, key):
        self.key = key

    def __lt__(self, other):
        return self.key < other.key

    def __eq__(self, other):
        return isinstance(other, LessThanOnly) and self.key == other.key

    def __hash__(self):
        return hash(self.key)


def test_vertices_need_only_less_than():
    a, b, c = LessThanOnly(1), LessThanOnly(2), LessThanOnly(3)
    g = make_graph([(a, b), (b, c), (c, a)])
    g.add_edge(b, b)

    assert g.edge_count() == 4
    assert find_trail(g) == []

    g.remove_edge(b, b)
    trail = find_trail(g)

    assert trail == [a, b, c, a]
    assert_uses_every_edge_once(g, trail)
