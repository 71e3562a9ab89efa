"""
Adjacency-list ("object") graph.

Implements the WeightedGraph contract over Node/Edge value objects. The graph
owns an immutable tuple of edges; nodes are derived from the edges on demand.
"""

from typing import (
    Dict,
    FrozenSet,
    Hashable,
    Iterable,
    List,
    Optional,
    Sequence,
    Tuple,
    Union,
)

import numpy as np

from algorithms import DijkstraEngine, ShortestPath
from dijkstra_engine import dijkstra
from graph import validate_length, weight_table
from nodes import Edge, Node

EdgeLike = Union[Edge, Tuple[object, object, float]]


def _as_node(value: object) -> Node:
    return value if isinstance(value, Node) else Node(value)


def _as_edge(item: EdgeLike) -> Edge:
    if isinstance(item, Edge):
        edge = item
    else:
        source, destination, length = item
        edge = Edge(_as_node(source), _as_node(destination), length)
    length = validate_length(edge.length, edge.source, edge.destination)
    if length != edge.length:
        edge = Edge(edge.source, edge.destination, length)
    return edge


class Graph:
    """
    Directed, weighted graph backed by a list of edges.

    Outgoing edges are grouped per source node once, at construction, so that
    neighbour and weight lookups only touch the edges leaving a node.
    """

    def __init__(self, edges: Iterable[EdgeLike]) -> None:
        self._edges: Tuple[Edge, ...] = tuple(_as_edge(e) for e in edges)

        # source -> (destination -> length); first edge wins on duplicates.
        self._adj: Dict[Node, Dict[Node, float]] = {}
        for edge in self._edges:
            self._adj.setdefault(edge.source, {}).setdefault(edge.destination, edge.length)

    @classmethod
    def from_matrix(
        cls,
        weights: Union[np.ndarray, Sequence[Sequence[float]]],
        labels: Optional[Sequence[Hashable]] = None,
    ) -> "Graph":
        """
        Build the list graph equivalent to a weight matrix.

        Every entry > 0 at (i, j) becomes an edge i -> j. Node labels default
        to the row index.
        """
        table = weight_table(weights)
        size = table.shape[0]
        if labels is not None and len(labels) != size:
            raise ValueError(f"expected {size} labels, got {len(labels)}")

        nodes = [Node(labels[i] if labels is not None else i) for i in range(size)]
        edges: List[Edge] = []
        for i, row in enumerate(table.tolist()):
            source = nodes[i]
            for j, length in enumerate(row):
                if length > 0:
                    edges.append(Edge(source, nodes[j], length))
        return cls(edges)

    @property
    def edges(self) -> Tuple[Edge, ...]:
        return self._edges

    # --- WeightedGraph contract ---------------------------------------------

    def nodes(self) -> FrozenSet[Node]:
        seen = set()
        for edge in self._edges:
            seen.add(edge.source)
            seen.add(edge.destination)
        return frozenset(seen)

    def neighbours(self, node: Node) -> Sequence[Node]:
        return tuple(self._adj.get(node, ()))

    def distance_between(self, source: Node, destination: Node) -> float:
        try:
            return self._adj[source][destination]
        except KeyError:
            raise KeyError(f"no edge {source} -> {destination}") from None

    # --- Convenience ----------------------------------------------------------

    def node(self, label: Hashable) -> Node:
        """Return the node with the given label."""
        candidate = Node(label)
        if candidate not in self:
            raise KeyError(f"no node labelled {label!r}")
        return candidate

    def dijkstra(
        self,
        origin: Node,
        destination: Node,
        engine: Optional[DijkstraEngine] = None,
    ) -> Optional[ShortestPath]:
        """Shortest path origin -> destination, or None if unreachable."""
        return dijkstra(self, origin, destination, engine=engine)

    def __contains__(self, node: object) -> bool:
        if node in self._adj:
            return True
        return any(edge.destination == node for edge in self._edges)

    def __len__(self) -> int:
        return len(self.nodes())

    def __repr__(self) -> str:
        return f"Graph(edges={len(self._edges)})"
