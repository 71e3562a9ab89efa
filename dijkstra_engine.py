"""
Dijkstra engines for any WeightedGraph implementation.

LinearScanDijkstraEngine picks the next node by scanning the unvisited set,
O(V^2) per search, which is fine up to a few thousand nodes.
HeapDijkstraEngine uses Python's heapq instead, O(E log V).

Both order candidates by (distance, hops), so among equal-cost paths the one
with the fewest edges wins and the two engines agree on path length.

All search state (distances, predecessors, unvisited set) is allocated per
call; engines only keep the operation counters of their most recent run.
"""

from abc import abstractmethod
from typing import AbstractSet, Dict, Hashable, List, Optional, Tuple
import heapq
import itertools
import math

from algorithms import DijkstraEngine, ShortestPath
from graph import WeightedGraph

# (settled distances, predecessor map)
SearchState = Tuple[Dict[Hashable, float], Dict[Hashable, Hashable]]


def _require_node(nodes: AbstractSet[Hashable], node: Hashable, role: str) -> None:
    if node not in nodes:
        raise KeyError(f"{role} {node!r} is not a node of the graph")


def _reconstruct(
    previous: Dict[Hashable, Hashable], origin: Hashable, destination: Hashable
) -> Tuple[Hashable, ...]:
    path = [destination]
    current = destination
    while current != origin:
        current = previous[current]
        path.append(current)
    path.reverse()
    return tuple(path)


class _SearchEngine(DijkstraEngine):
    """Shared point-to-point and all-destinations wiring around _search."""

    def shortest_path(
        self, graph: WeightedGraph, origin: Hashable, destination: Hashable
    ) -> Optional[ShortestPath]:
        nodes = graph.nodes()
        _require_node(nodes, origin, "origin")
        _require_node(nodes, destination, "destination")
        settled, previous = self._search(graph, nodes, origin, destination)
        if destination not in settled:
            return None
        return ShortestPath(settled[destination], _reconstruct(previous, origin, destination))

    def shortest_path_costs(
        self, graph: WeightedGraph, origin: Hashable
    ) -> Dict[Hashable, float]:
        nodes = graph.nodes()
        _require_node(nodes, origin, "origin")
        settled, _ = self._search(graph, nodes, origin, None)
        return settled

    @abstractmethod
    def _search(
        self,
        graph: WeightedGraph,
        nodes: AbstractSet[Hashable],
        origin: Hashable,
        destination: Optional[Hashable],
    ) -> SearchState:
        """
        Settle nodes in (distance, hops) order until destination is settled.

        With destination None, runs until every reachable node is settled.
        """
        raise NotImplementedError


class LinearScanDijkstraEngine(_SearchEngine):
    """
    Dijkstra with a linear-scan minimum selection.

    The search returns as soon as the destination is settled (removed from the
    unvisited set as the minimum). With strictly positive weights no later
    node can offer a shorter route, so stopping there is exact.
    """

    def _search(self, graph, nodes, origin, destination):
        self.last_nodes_visited = 0
        self.last_relaxed = 0

        distances: Dict[Hashable, float] = {node: math.inf for node in nodes}
        hops: Dict[Hashable, int] = {node: 0 for node in nodes}
        distances[origin] = 0.0
        previous: Dict[Hashable, Hashable] = {}
        settled: Dict[Hashable, float] = {}
        unvisited = set(nodes)

        def rank(node: Hashable) -> Tuple[float, int]:
            return distances[node], hops[node]

        while unvisited:
            current = min(unvisited, key=rank)
            d_current = distances[current]
            if d_current == math.inf:
                # Everything left is unreachable.
                break
            unvisited.remove(current)
            settled[current] = d_current
            self.last_nodes_visited += 1

            if current == destination:
                break

            h_next = hops[current] + 1
            for neighbour in graph.neighbours(current):
                if neighbour not in unvisited:
                    continue
                alt = d_current + graph.distance_between(current, neighbour)
                if alt < distances[neighbour] or (
                    alt == distances[neighbour] and h_next < hops[neighbour]
                ):
                    distances[neighbour] = alt
                    hops[neighbour] = h_next
                    previous[neighbour] = current
                    self.last_relaxed += 1

        return settled, previous


class HeapDijkstraEngine(_SearchEngine):
    """
    Single-source Dijkstra using a binary heap.

    Complexity:
        O(E log V) over the nodes reachable from the origin.
    """

    def _search(self, graph, nodes, origin, destination):
        self.last_nodes_visited = 0
        self.last_relaxed = 0

        dist: Dict[Hashable, float] = {origin: 0.0}
        hops: Dict[Hashable, int] = {origin: 0}
        prev: Dict[Hashable, Hashable] = {}
        settled: Dict[Hashable, float] = {}
        # Nodes need not be orderable, so a counter breaks remaining ties.
        tie = itertools.count()
        pq: List[Tuple[float, int, int, Hashable]] = [(0.0, 0, next(tie), origin)]

        while pq:
            d_u, h_u, _, u = heapq.heappop(pq)
            # Skip outdated entries
            if u in settled:
                continue
            settled[u] = d_u
            self.last_nodes_visited += 1

            if u == destination:
                break

            for v in graph.neighbours(u):
                if v in settled:
                    continue
                alt = d_u + graph.distance_between(u, v)
                best = dist.get(v, math.inf)
                if alt < best or (alt == best and h_u + 1 < hops[v]):
                    dist[v] = alt
                    hops[v] = h_u + 1
                    prev[v] = u
                    self.last_relaxed += 1
                    heapq.heappush(pq, (alt, h_u + 1, next(tie), v))

        return settled, prev


ENGINES = {
    "linear": LinearScanDijkstraEngine,
    "heap": HeapDijkstraEngine,
}


def dijkstra(
    graph: WeightedGraph,
    origin: Hashable,
    destination: Hashable,
    engine: Optional[DijkstraEngine] = None,
) -> Optional[ShortestPath]:
    """
    Shortest path origin -> destination over graph.

    Uses a fresh LinearScanDijkstraEngine unless an engine is given. Returns
    None when destination cannot be reached.
    """
    if engine is None:
        engine = LinearScanDijkstraEngine()
    return engine.shortest_path(graph, origin, destination)
