"""Benchmark: check_relation latency, per-check p50/p99.

Measures the per-call latency of ReBACProtectedResource.check_relation() on
an organisation graph where most grants are two or three hops away, so the
breadth-first search dominates over the direct-edge fast path.
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from aumos_rebac.graph.relation_graph import RelationGraph
from aumos_rebac.graph.tuples import RelationTuple
from aumos_rebac.resource.protected_resource import ReBACProtectedResource

_WARMUP: int = 100
_ITERATIONS: int = 5_000
_TEAMS: int = 20
_USERS_PER_TEAM: int = 25


def _make_graph() -> RelationGraph:
    """Build an org -> team -> user graph with one shared document."""
    relations: list[RelationTuple] = []
    for t in range(_TEAMS):
        team = f"team-{t}"
        relations.append(RelationTuple("manager", "manages", team))
        for u in range(_USERS_PER_TEAM):
            relations.append(RelationTuple(f"user-{t}-{u}", "memberOf", team))
    relations.append(RelationTuple(f"team-{_TEAMS - 1}", "editor", "doc"))
    return RelationGraph(relations)


def bench_check_relation_latency() -> dict[str, object]:
    """Benchmark ReBACProtectedResource.check_relation() per-call latency.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, p99_latency_ms, memory_peak_mb.
    """
    resource = ReBACProtectedResource("doc", _make_graph())
    subjects = [f"user-{_TEAMS - 1}-0", "manager", "user-0-0"]

    for i in range(_WARMUP):
        resource.check_relation(subjects[i % len(subjects)], "write")

    latencies_ms: list[float] = []
    for i in range(_ITERATIONS):
        subject = subjects[i % len(subjects)]
        t0 = time.perf_counter()
        resource.check_relation(subject, "write")
        latencies_ms.append((time.perf_counter() - t0) * 1000)

    sorted_lats = sorted(latencies_ms)
    n = len(sorted_lats)
    total = sum(latencies_ms) / 1000

    result: dict[str, object] = {
        "operation": "check_relation_latency",
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(sum(latencies_ms) / n, 4),
        "p50_latency_ms": round(sorted_lats[n // 2], 4),
        "p99_latency_ms": round(sorted_lats[min(int(n * 0.99), n - 1)], 4),
        "memory_peak_mb": 0.0,
    }
    print(
        f"[bench_check_latency] {result['operation']}: "
        f"p99={result['p99_latency_ms']:.4f}ms  "
        f"mean={result['avg_latency_ms']:.4f}ms"
    )
    return result


def run_benchmark() -> dict[str, object]:
    """Entry point returning the benchmark result dict."""
    return bench_check_relation_latency()


if __name__ == "__main__":
    result = run_benchmark()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "check_latency_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")
