"""Relationship path search.

Example
-------
::

    from aumos_rebac.explorer import ExplorationConfig, RelationshipExplorer

    explorer = RelationshipExplorer(graph, ExplorationConfig(max_depth=4))
    result = explorer.find_path_with_any_relation("alice", "doc1", ["editor"])
    print(result.type)
"""
from __future__ import annotations

from aumos_rebac.explorer.explorer import RelationshipExplorer
from aumos_rebac.explorer.results import (
    DEFAULT_MAX_DEPTH,
    ExplorationCancelled,
    ExplorationConfig,
    ExplorationResult,
    MaxDepthExceeded,
    PathFound,
    PathNotFound,
)

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "ExplorationCancelled",
    "ExplorationConfig",
    "ExplorationResult",
    "MaxDepthExceeded",
    "PathFound",
    "PathNotFound",
    "RelationshipExplorer",
]
