"""
Directed, weighted graph contract shared by both representations.

The Dijkstra engines only ever call these three methods, so any object that
provides them can be searched. Implementations do not inherit from anything.
"""

from typing import AbstractSet, Hashable, Protocol, Sequence, runtime_checkable
import math

import numpy as np


@runtime_checkable
class WeightedGraph(Protocol):
    """Directed, weighted graph over hashable nodes."""

    def nodes(self) -> AbstractSet[Hashable]:
        """Return all distinct nodes in the graph."""
        ...

    def neighbours(self, node: Hashable) -> Sequence[Hashable]:
        """Nodes reachable from node by one outgoing edge."""
        ...

    def distance_between(self, source: Hashable, destination: Hashable) -> float:
        """
        Weight of the edge source -> destination.

        Raises KeyError if there is no such edge.
        """
        ...


def validate_length(length: float, source: object, destination: object) -> float:
    """
    Return length as a float, rejecting anything Dijkstra cannot handle.

    Zero, negative, NaN and infinite lengths all raise ValueError.
    """
    try:
        value = float(length)
    except (TypeError, ValueError) as exc:
        raise ValueError(
            f"edge {source} -> {destination} has non-numeric length {length!r}"
        ) from exc
    if not math.isfinite(value) or value <= 0.0:
        raise ValueError(
            f"edge {source} -> {destination} must have a finite positive length, got {length!r}"
        )
    return value


def weight_table(weights) -> np.ndarray:
    """
    Copy weights into a float N x N array, 0 meaning no edge.

    Non-square input and negative, NaN or infinite entries raise ValueError.
    """
    table = np.array(weights, dtype=float)
    if table.ndim != 2 or table.shape[0] != table.shape[1]:
        raise ValueError(f"weight matrix must be square, got shape {table.shape}")
    if not np.all(np.isfinite(table)):
        raise ValueError("weight matrix contains NaN or infinite entries")
    if np.any(table < 0):
        i, j = np.argwhere(table < 0)[0]
        raise ValueError(f"edge {i} -> {j} has negative length {table[i, j]}")
    return table
