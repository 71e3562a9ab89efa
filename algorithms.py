"""
Algorithm interfaces for shortest-path search.

Keeps the search algorithms separate from the graph representations they run
against.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Hashable, Optional, Tuple

from graph import WeightedGraph


@dataclass(frozen=True)
class ShortestPath:
    """
    Result of a point-to-point search.

    path starts at the origin and ends at the destination.
    """

    distance: float
    path: Tuple[Hashable, ...]

    @property
    def hops(self) -> int:
        return len(self.path) - 1

    def labels(self) -> Tuple[str, ...]:
        return tuple(str(node) for node in self.path)


class DijkstraEngine(ABC):
    """
    Interface for single-source shortest-path computation.
    """

    last_nodes_visited: int = 0
    last_relaxed: int = 0

    @abstractmethod
    def shortest_path(
        self, graph: WeightedGraph, origin: Hashable, destination: Hashable
    ) -> Optional[ShortestPath]:
        """
        Shortest path origin -> destination.

        Returns:
            ShortestPath, or None when destination is unreachable.
        Raises:
            KeyError if origin or destination is not a node of graph.
        """
        raise NotImplementedError

    @abstractmethod
    def shortest_path_costs(
        self, graph: WeightedGraph, origin: Hashable
    ) -> Dict[Hashable, float]:
        """
        Compute shortest-path costs from origin to all reachable nodes.

        Returns:
            Mapping dest_node -> path_cost(origin -> dest_node).
        """
        raise NotImplementedError
