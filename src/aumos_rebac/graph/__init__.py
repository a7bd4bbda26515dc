"""Relationship graph: relation vocabulary, tuples, and the adjacency store.

Example
-------
::

    from aumos_rebac.graph import RelationGraph, RelationTuple

    graph = RelationGraph([
        RelationTuple("alice", "memberOf", "team1"),
        RelationTuple("team1", "editor", "doc1"),
    ])
    assert len(graph) == 2
"""
from __future__ import annotations

from aumos_rebac.graph.relation_graph import RelationGraph
from aumos_rebac.graph.tuples import (
    DIRECT_RELATIONS,
    INDIRECT_RELATIONS,
    EntityId,
    RelationPath,
    RelationTuple,
    RelationType,
)

__all__ = [
    "DIRECT_RELATIONS",
    "INDIRECT_RELATIONS",
    "EntityId",
    "RelationGraph",
    "RelationPath",
    "RelationTuple",
    "RelationType",
]
