"""
Dense adjacency-matrix graph.

Nodes are the integer indices 0..N-1. An edge i -> j exists iff
weights[i, j] > 0. Trades O(N^2) memory and a one-off O(N^2) neighbour scan
for constant-time neighbour and weight lookups during a search.
"""

from typing import FrozenSet, Iterable, Optional, Sequence, Tuple, Union

import numpy as np

from algorithms import DijkstraEngine, ShortestPath
from dijkstra_engine import dijkstra
from graph import weight_table


class MatrixGraph:
    """Directed, weighted graph backed by an N x N weight matrix."""

    def __init__(self, weights: Union[np.ndarray, Sequence[Sequence[float]]]) -> None:
        table = weight_table(weights)
        table.setflags(write=False)
        self._weights = table
        # Plain nested lists index much faster than numpy scalars in the search loop.
        self._rows = table.tolist()

        # Computed once; never mutated afterwards.
        self._neighbours: Tuple[Tuple[int, ...], ...] = tuple(
            tuple(int(j) for j in np.flatnonzero(row > 0)) for row in table
        )
        self._nodes: FrozenSet[int] = frozenset(range(table.shape[0]))

    @classmethod
    def from_edges(cls, edges: Iterable[Tuple[int, int, float]], size: int) -> "MatrixGraph":
        """Build a size x size matrix graph from (i, j, length) triples."""
        table = np.zeros((size, size), dtype=float)
        for i, j, length in edges:
            if length <= 0:
                raise ValueError(f"edge {i} -> {j} must have a positive length, got {length!r}")
            table[i, j] = length
        return cls(table)

    @property
    def weights(self) -> np.ndarray:
        return self._weights

    # --- WeightedGraph contract ---------------------------------------------

    def nodes(self) -> FrozenSet[int]:
        return self._nodes

    def neighbours(self, node: int) -> Sequence[int]:
        self._require(node)
        return self._neighbours[node]

    def distance_between(self, source: int, destination: int) -> float:
        self._require(source)
        self._require(destination)
        length = self._rows[source][destination]
        if length <= 0:
            raise KeyError(f"no edge {source} -> {destination}")
        return length

    # --- Convenience ----------------------------------------------------------

    def _require(self, node: int) -> None:
        # Negative indices would otherwise wrap around.
        if node not in self._nodes:
            raise KeyError(f"{node!r} is not a node of the graph")

    def dijkstra(
        self,
        origin: int,
        destination: int,
        engine: Optional[DijkstraEngine] = None,
    ) -> Optional[ShortestPath]:
        """Shortest path origin -> destination, or None if unreachable."""
        return dijkstra(self, origin, destination, engine=engine)

    def __contains__(self, node: object) -> bool:
        return node in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"MatrixGraph(size={len(self._nodes)})"
