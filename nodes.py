"""
Node and edge value objects for the adjacency-list graph.

Both are frozen: search state (tentative distance, predecessor) lives in
per-call maps inside the Dijkstra engines, never on the nodes themselves.
"""

from dataclasses import dataclass
from typing import Hashable


@dataclass(frozen=True)
class Node:
    """A graph vertex identified by its label."""

    label: Hashable

    def __str__(self) -> str:
        return str(self.label)


@dataclass(frozen=True)
class Edge:
    """
    Directed edge source -> destination.

    length must be strictly positive; Graph validates this on construction.
    """

    source: Node
    destination: Node
    length: float
