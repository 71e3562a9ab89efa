"""
Benchmark the adjacency-list and adjacency-matrix graphs against each other.

Generates a dense random graph, builds both representations from the same
weight table, times construction and search separately for each, then checks
that every run agrees on the shortest distance and the number of nodes in the
path. A disagreement is a correctness bug and aborts the run.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Hashable, List, Optional, Sequence, Tuple
import argparse
import csv
import random
import time

import numpy as np

from adjacency_list_graph import Graph
from algorithms import ShortestPath
from dijkstra_engine import ENGINES
from matrix_graph import MatrixGraph

DEFAULT_CONFIG = Path(__file__).parent / "benchmarks" / "benchmark.yml"


class ResultMismatchError(AssertionError):
    """Two representations disagreed on a shortest path."""


@dataclass(frozen=True)
class BenchmarkConfig:
    seed: Optional[int] = None
    node_count: int = 1000
    edges_per_node: int = 100
    weight_range: Tuple[int, int] = (1, 100)
    # Weight of every cell that did not get a random edge; 0 leaves it empty.
    fallback_weight: float = 999_999
    engines: Sequence[str] = ("linear",)


@dataclass(frozen=True)
class RunTiming:
    representation: str
    engine: str
    build_sec: float
    search_sec: float
    result: Optional[ShortestPath]
    nodes_visited: int
    relaxed: int


@dataclass
class BenchmarkResult:
    config: BenchmarkConfig
    generate_sec: float
    runs: List[RunTiming] = field(default_factory=list)

    @property
    def distance(self) -> Optional[float]:
        first = self.runs[0].result if self.runs else None
        return first.distance if first else None

    @property
    def path_length(self) -> Optional[int]:
        first = self.runs[0].result if self.runs else None
        return len(first.path) if first else None


def load_config(path: Path) -> BenchmarkConfig:
    import yaml  # type: ignore

    data = yaml.safe_load(path.read_text()) or {}
    defaults = BenchmarkConfig()
    low, high = data.get("weight_range", defaults.weight_range)
    seed = data.get("seed", defaults.seed)
    cfg = BenchmarkConfig(
        seed=None if seed is None else int(seed),
        node_count=int(data.get("node_count", defaults.node_count)),
        edges_per_node=int(data.get("edges_per_node", defaults.edges_per_node)),
        weight_range=(int(low), int(high)),
        fallback_weight=float(data.get("fallback_weight", defaults.fallback_weight)),
        engines=list(data.get("engines", defaults.engines)),
    )
    _check_engines(cfg.engines)
    return cfg


def _check_engines(names: Sequence[str]) -> None:
    if not names:
        raise ValueError("at least one engine must be configured")
    unknown = [name for name in names if name not in ENGINES]
    if unknown:
        raise ValueError(f"unknown engine(s) {unknown}; choose from {sorted(ENGINES)}")


def generate_weights(
    node_count: int = 1000,
    edges_per_node: int = 100,
    weight_range: Tuple[int, int] = (1, 100),
    fallback_weight: float = 999_999,
    seed: Optional[int] = None,
) -> np.ndarray:
    """
    Random dense weight table.

    Each node gets exactly edges_per_node outgoing edges to distinct random
    other nodes, with integer weights drawn uniformly from weight_range.
    Every remaining off-diagonal cell gets fallback_weight, so with a positive
    fallback every node can reach every other node. The diagonal is 0.
    """
    low, high = weight_range
    if node_count < 2:
        raise ValueError(f"node_count must be at least 2, got {node_count}")
    if not 0 < edges_per_node < node_count:
        raise ValueError(
            f"edges_per_node must be in [1, {node_count - 1}], got {edges_per_node}"
        )
    if not 0 < low <= high:
        raise ValueError(f"weight_range must be positive and ordered, got {weight_range}")
    if fallback_weight < 0:
        raise ValueError(f"fallback_weight must be >= 0, got {fallback_weight}")

    rng = random.Random(seed)
    table = np.full((node_count, node_count), fallback_weight, dtype=float)
    np.fill_diagonal(table, 0.0)

    nodes = range(node_count)
    for origin in nodes:
        others = [node for node in nodes if node != origin]
        for destination in rng.sample(others, edges_per_node):
            table[origin, destination] = rng.randint(low, high)
    return table


def cross_validate(
    expected: Optional[ShortestPath],
    actual: Optional[ShortestPath],
    expected_name: str = "matrix",
    actual_name: str = "object",
) -> None:
    """Raise ResultMismatchError unless both results agree on distance and path length."""
    if expected is None and actual is None:
        return
    if expected is None or actual is None:
        raise ResultMismatchError(
            f"Reachability differs: {expected_name} found {expected} and {actual_name} found {actual}"
        )
    if expected.distance != actual.distance:
        raise ResultMismatchError(
            f"Results are different: from {expected_name} is {expected.distance} "
            f"and from {actual_name} is {actual.distance}"
        )
    if len(expected.path) != len(actual.path):
        raise ResultMismatchError(
            f"Number of nodes in the path is different: from {expected_name} is "
            f"{len(expected.path)} and from {actual_name} is {len(actual.path)}"
        )


def _timed_search(
    representation: str,
    engine_name: str,
    graph: Graph | MatrixGraph,
    origin: Hashable,
    destination: Hashable,
    build_sec: float,
) -> RunTiming:
    engine = ENGINES[engine_name]()
    start = time.perf_counter()
    result = engine.shortest_path(graph, origin, destination)
    search_sec = time.perf_counter() - start
    return RunTiming(
        representation=representation,
        engine=engine_name,
        build_sec=build_sec,
        search_sec=search_sec,
        result=result,
        nodes_visited=engine.last_nodes_visited,
        relaxed=engine.last_relaxed,
    )


def run_benchmark(config: BenchmarkConfig) -> BenchmarkResult:
    _check_engines(config.engines)
    print(
        f"[bench] building sample set: nodes={config.node_count} "
        f"edges_per_node={config.edges_per_node} seed={config.seed}"
    )
    start = time.perf_counter()
    weights = generate_weights(
        node_count=config.node_count,
        edges_per_node=config.edges_per_node,
        weight_range=config.weight_range,
        fallback_weight=config.fallback_weight,
        seed=config.seed,
    )
    outcome = BenchmarkResult(config=config, generate_sec=time.perf_counter() - start)
    print(f"[bench] finished building sample set in {outcome.generate_sec:.2f}s")

    start = time.perf_counter()
    matrix = MatrixGraph(weights)
    matrix_build = time.perf_counter() - start

    start = time.perf_counter()
    graph = Graph.from_matrix(weights)
    object_build = time.perf_counter() - start

    last = config.node_count - 1
    for engine_name in config.engines:
        outcome.runs.append(_timed_search("matrix", engine_name, matrix, 0, last, matrix_build))
        outcome.runs.append(
            _timed_search(
                "object", engine_name, graph, graph.node(0), graph.node(last), object_build
            )
        )

    for run in outcome.runs:
        print(
            f"[bench] {run.representation:<6} engine={run.engine:<6} "
            f"build={run.build_sec:.3f}s search={run.search_sec:.3f}s "
            f"visited={run.nodes_visited} relaxed={run.relaxed}"
        )

    reference = outcome.runs[0]
    for run in outcome.runs[1:]:
        cross_validate(
            reference.result,
            run.result,
            expected_name=f"{reference.representation}/{reference.engine}",
            actual_name=f"{run.representation}/{run.engine}",
        )

    if outcome.distance is None:
        print("[bench] no path between first and last node")
    else:
        print(f"[bench] shortest distance for benchmark problem: {outcome.distance:g}")
        print(f"[bench] number of nodes in the path: {outcome.path_length}")
    return outcome


def append_runs_csv(path: Path, outcome: BenchmarkResult) -> None:
    """Append one row per timed run to a CSV file, writing the header if new."""
    path.parent.mkdir(parents=True, exist_ok=True)
    write_header = not path.exists()
    with path.open("a", newline="") as f:
        writer = csv.DictWriter(
            f,
            fieldnames=[
                "seed",
                "node_count",
                "edges_per_node",
                "representation",
                "engine",
                "build_sec",
                "search_sec",
                "distance",
                "path_nodes",
                "nodes_visited",
                "relaxed",
            ],
        )
        if write_header:
            writer.writeheader()
        for run in outcome.runs:
            writer.writerow(
                {
                    "seed": outcome.config.seed,
                    "node_count": outcome.config.node_count,
                    "edges_per_node": outcome.config.edges_per_node,
                    "representation": run.representation,
                    "engine": run.engine,
                    "build_sec": run.build_sec,
                    "search_sec": run.search_sec,
                    "distance": run.result.distance if run.result else "",
                    "path_nodes": len(run.result.path) if run.result else "",
                    "nodes_visited": run.nodes_visited,
                    "relaxed": run.relaxed,
                }
            )


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG)
    parser.add_argument("--seed", type=int)
    parser.add_argument("--nodes", type=int)
    parser.add_argument("--edges-per-node", type=int)
    parser.add_argument("--runs-csv", type=Path)
    args = parser.parse_args(argv)

    cfg = load_config(args.config) if args.config.exists() else BenchmarkConfig()
    if args.seed is not None:
        cfg = replace(cfg, seed=args.seed)
    if args.nodes is not None:
        cfg = replace(cfg, node_count=args.nodes)
    if args.edges_per_node is not None:
        cfg = replace(cfg, edges_per_node=args.edges_per_node)

    outcome = run_benchmark(cfg)
    if args.runs_csv:
        append_runs_csv(args.runs_csv, outcome)
        print(f"[bench] wrote runs to {args.runs_csv}")


if __name__ == "__main__":
    main()
