"""
Worked example: a small road network between US cities.

Builds the same directed graph as an adjacency list and as a weight matrix
and prints the shortest route from New York to Los Angeles for both.
"""

from typing import List, Tuple

from adjacency_list_graph import Graph
from matrix_graph import MatrixGraph

USA_CITIES: Tuple[str, ...] = (
    "new_york",
    "brooklyn",
    "queens",
    "chicago",
    "atlanta",
    "denver",
    "san_diego",
    "washington",
    "los_angeles",
)

USA_ROADS: Tuple[Tuple[str, str, float], ...] = (
    ("new_york", "brooklyn", 1),
    ("new_york", "queens", 1),
    ("new_york", "chicago", 2),
    ("queens", "chicago", 1),
    ("brooklyn", "chicago", 1),
    ("brooklyn", "queens", 1),
    ("chicago", "atlanta", 3),
    ("chicago", "denver", 2),
    ("atlanta", "denver", 1),
    ("denver", "san_diego", 3),
    ("denver", "washington", 4),
    ("san_diego", "los_angeles", 4),
    ("washington", "los_angeles", 3),
)


def build_usa_graph() -> Graph:
    return Graph(USA_ROADS)


def build_usa_matrix() -> MatrixGraph:
    """
    Same roads as a matrix; row/column i is USA_CITIES[i].

    Entry (i, j) is the length of the one-way road i -> j, 0 if there is none.
    """
    index = {city: i for i, city in enumerate(USA_CITIES)}
    return MatrixGraph.from_edges(
        ((index[src], index[dst], length) for src, dst, length in USA_ROADS),
        size=len(USA_CITIES),
    )


def main() -> None:
    graph = build_usa_graph()
    result = graph.dijkstra(graph.node("new_york"), graph.node("los_angeles"))
    if result is None:
        print("[usa] object graph: no route")
    else:
        print(f"[usa] object graph: distance={result.distance:g} path={', '.join(result.labels())}")

    matrix = build_usa_matrix()
    result = matrix.dijkstra(USA_CITIES.index("new_york"), USA_CITIES.index("los_angeles"))
    if result is None:
        print("[usa] matrix graph: no route")
    else:
        cities: List[str] = [USA_CITIES[i] for i in result.path]
        print(f"[usa] matrix graph: distance={result.distance:g} path={', '.join(cities)}")


if __name__ == "__main__":
    main()
