"""Shared bootstrap for aumos-rebac benchmarks."""
from __future__ import annotations

import sys
from pathlib import Path

_REPO_ROOT = Path(__file__).parent.parent
_SRC = _REPO_ROOT / "src"
_BENCHMARKS = _REPO_ROOT / "benchmarks"

for _path in [str(_SRC), str(_BENCHMARKS)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

from aumos_rebac.explorer.results import ExplorationConfig
from aumos_rebac.graph.relation_graph import RelationGraph
from aumos_rebac.graph.tuples import RelationTuple
from aumos_rebac.resource.protected_resource import ReBACProtectedResource

__all__ = [
    "ExplorationConfig",
    "RelationGraph",
    "RelationTuple",
    "ReBACProtectedResource",
]
