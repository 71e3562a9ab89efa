"""
Unit tests for the Dijkstra engines over both graph representations.
"""

from typing import Dict, List, Optional, Sequence
import math
import random

import pytest

from adjacency_list_graph import Graph
from dijkstra_engine import (
    HeapDijkstraEngine,
    LinearScanDijkstraEngine,
    _SearchEngine,
    dijkstra,
)
from graph import WeightedGraph
from matrix_graph import MatrixGraph
from nodes import Node

ENGINE_TYPES = [LinearScanDijkstraEngine, HeapDijkstraEngine]


def _random_weights(rng: random.Random, size: int, density: float) -> List[List[int]]:
    return [
        [rng.randint(1, 9) if i != j and rng.random() < density else 0 for j in range(size)]
        for i in range(size)
    ]


def _brute_force(weights: Sequence[Sequence[float]], origin: int, destination: int) -> Optional[float]:
    """Cheapest simple path by exhaustive enumeration."""
    best = math.inf

    def walk(node: int, cost: float, seen: set) -> None:
        nonlocal best
        if node == destination:
            best = min(best, cost)
            return
        for nxt, w in enumerate(weights[node]):
            if w > 0 and nxt not in seen:
                seen.add(nxt)
                walk(nxt, cost + w, seen)
                seen.remove(nxt)

    walk(origin, 0.0, {origin})
    return None if best == math.inf else best


def _assert_valid_walk(graph: WeightedGraph, path, origin, destination, distance) -> None:
    assert path[0] == origin
    assert path[-1] == destination
    total = 0.0
    for u, v in zip(path, path[1:]):
        assert v in graph.neighbours(u)
        total += graph.distance_between(u, v)
    assert total == distance


@pytest.mark.parametrize("engine_type", ENGINE_TYPES)
def test_basic_path(engine_type):
    a, b, c = Node("A"), Node("B"), Node("C")
    # A -> B (1), A -> C (4), B -> C (2)
    g = Graph([(a, b, 1.0), (a, c, 4.0), (b, c, 2.0)])

    result = engine_type().shortest_path(g, a, c)

    assert result is not None
    # Shortest A->C is A->B->C with cost 3.0
    assert result.distance == 3.0
    assert result.path == (a, b, c)
    assert result.hops == 2


@pytest.mark.parametrize("engine_type", ENGINE_TYPES)
def test_destination_seen_early_is_not_returned_early(engine_type):
    # The direct edge o -> d is relaxed first, from the origin, but the detour
    # through a is shorter. Returning on first sight of d would report 10.
    g = Graph([("o", "d", 10), ("o", "a", 1), ("a", "d", 1)])
    o, a, d = g.node("o"), g.node("a"), g.node("d")

    result = engine_type().shortest_path(g, o, d)

    assert result is not None
    assert result.distance == 2
    assert result.path == (o, a, d)


@pytest.mark.parametrize("engine_type", ENGINE_TYPES)
def test_destination_relaxed_by_non_minimal_node(engine_type):
    # d is first relaxed via b (total 6) while c, still cheaper, offers 5.
    m = MatrixGraph.from_edges(
        [(0, 1, 1), (0, 2, 2), (1, 3, 5), (2, 3, 3)],
        size=4,
    )

    result = engine_type().shortest_path(m, 0, 3)

    assert result is not None
    assert result.distance == 5
    assert result.path == (0, 2, 3)


@pytest.mark.parametrize("engine_type", ENGINE_TYPES)
def test_unreachable_destination_returns_none(engine_type):
    g = Graph([("A", "B", 2), ("C", "D", 1)])
    m = MatrixGraph([[0, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 1], [0, 0, 0, 0]])
    engine = engine_type()

    assert engine.shortest_path(g, g.node("A"), g.node("D")) is None
    assert engine.shortest_path(m, 0, 3) is None


@pytest.mark.parametrize("engine_type", ENGINE_TYPES)
def test_origin_equals_destination(engine_type):
    g = Graph([("A", "B", 2)])
    a = g.node("A")

    result = engine_type().shortest_path(g, a, a)

    assert result is not None
    assert result.distance == 0.0
    assert result.path == (a,)


@pytest.mark.parametrize("engine_type", ENGINE_TYPES)
def test_unknown_nodes_raise_key_error(engine_type):
    g = Graph([("A", "B", 2)])
    m = MatrixGraph([[0, 1], [0, 0]])
    engine = engine_type()

    with pytest.raises(KeyError):
        engine.shortest_path(g, Node("Z"), g.node("B"))
    with pytest.raises(KeyError):
        engine.shortest_path(g, g.node("A"), Node("Z"))
    with pytest.raises(KeyError):
        engine.shortest_path(m, 0, 5)


@pytest.mark.parametrize("engine_type", ENGINE_TYPES)
def test_repeated_searches_are_identical(engine_type):
    weights = _random_weights(random.Random(3), 12, 0.3)
    g = Graph.from_matrix(weights)
    edges_before = g.edges
    engine = engine_type()

    first = engine.shortest_path(g, g.node(0), g.node(11))
    second = engine.shortest_path(g, g.node(0), g.node(11))

    assert first == second
    assert g.edges == edges_before


def test_counters_reset_between_runs():
    m = MatrixGraph([[0, 1, 0], [0, 0, 1], [0, 0, 0]])
    engine = LinearScanDijkstraEngine()

    engine.shortest_path(m, 0, 2)
    visited = engine.last_nodes_visited
    engine.shortest_path(m, 0, 2)

    assert engine.last_nodes_visited == visited == 3
    assert engine.last_relaxed == 2


@pytest.mark.parametrize("seed", range(8))
def test_matches_exhaustive_search_on_small_graphs(seed):
    rng = random.Random(seed)
    size = rng.randint(2, 7)
    weights = _random_weights(rng, size, 0.4)
    matrix = MatrixGraph(weights)
    objects = Graph.from_matrix(weights)

    for origin in range(size):
        for destination in range(size):
            if origin == destination:
                continue
            expected = _brute_force(weights, origin, destination)
            for engine_type in ENGINE_TYPES:
                on_matrix = engine_type().shortest_path(matrix, origin, destination)
                if expected is None:
                    assert on_matrix is None
                    continue
                assert on_matrix is not None
                assert on_matrix.distance == expected
                _assert_valid_walk(matrix, on_matrix.path, origin, destination, expected)

            # The list graph only contains nodes that appear on an edge.
            o, d = Node(origin), Node(destination)
            if o not in objects or d not in objects:
                continue
            on_objects = dijkstra(objects, o, d)
            if expected is None:
                assert on_objects is None
            else:
                assert on_objects is not None
                assert on_objects.distance == expected
                _assert_valid_walk(objects, on_objects.path, o, d, expected)


@pytest.mark.parametrize("engine_type", ENGINE_TYPES)
def test_all_pairs_agree_between_representations(engine_type):
    weights = _random_weights(random.Random(11), 25, 0.15)
    matrix = MatrixGraph(weights)
    objects = Graph.from_matrix(weights)
    engine = engine_type()

    for origin in range(25):
        if Node(origin) not in objects:
            continue
        matrix_costs: Dict[int, float] = engine.shortest_path_costs(matrix, origin)
        object_costs = engine.shortest_path_costs(objects, Node(origin))
        assert {node.label: cost for node, cost in object_costs.items()} == matrix_costs


def test_graphs_satisfy_weighted_graph_protocol():
    assert isinstance(Graph([("A", "B", 1)]), WeightedGraph)
    assert isinstance(MatrixGraph([[0, 1], [0, 0]]), WeightedGraph)


def test_graph_dijkstra_method_uses_given_engine():
    m = MatrixGraph([[0, 1, 5], [0, 0, 1], [0, 0, 0]])
    engine = HeapDijkstraEngine()

    result = m.dijkstra(0, 2, engine=engine)

    assert result is not None
    assert result.distance == 2
    assert engine.last_nodes_visited == 3


def test_search_engine_without_search_cannot_be_built():
    class Incomplete(_SearchEngine):
        pass

    with pytest.raises(TypeError):
        Incomplete()
