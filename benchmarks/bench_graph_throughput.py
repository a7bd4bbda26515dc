"""Benchmark: RelationGraph write throughput in add/remove pairs per second.

Each iteration inserts a tuple and removes it again, exercising both
adjacency indices and the empty-entry pruning on removal.
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from aumos_rebac.graph.relation_graph import RelationGraph
from aumos_rebac.graph.tuples import RelationTuple

_ITERATIONS: int = 10_000


def bench_graph_write_throughput() -> dict[str, object]:
    """Benchmark RelationGraph.add_relation() + remove_relation() throughput.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, p99_latency_ms, memory_peak_mb.
    """
    graph = RelationGraph(
        RelationTuple(f"user-{i}", "memberOf", f"team-{i % 10}") for i in range(1_000)
    )
    edges = [RelationTuple(f"user-{i % 1_000}", "viewer", f"doc-{i}") for i in range(_ITERATIONS)]

    start = time.perf_counter()
    for edge in edges:
        graph.add_relation(edge)
        graph.remove_relation(edge)
    total = time.perf_counter() - start

    result: dict[str, object] = {
        "operation": "graph_write_throughput",
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(total / _ITERATIONS * 1000, 4),
        "p99_latency_ms": 0.0,
        "memory_peak_mb": 0.0,
    }
    print(
        f"[bench_graph_throughput] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} ops/sec  "
        f"avg {result['avg_latency_ms']:.4f} ms"
    )
    return result


def run_benchmark() -> dict[str, object]:
    """Entry point returning the benchmark result dict."""
    return bench_graph_write_throughput()


if __name__ == "__main__":
    result = run_benchmark()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "throughput_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")
