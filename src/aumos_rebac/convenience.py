"""Convenience API for aumos-rebac: 3-line quickstart.

Example
-------
::

    from aumos_rebac import RelationshipAuthorizer
    authz = RelationshipAuthorizer()
    authz.grant("alice", "editor", "doc1")
    print(authz.check("alice", "write", "doc1").allowed)

"""
from __future__ import annotations

from typing import Any


class RelationshipAuthorizer:
    """Zero-config relationship authorization for the 80% use case.

    Owns a RelationGraph and builds a short-lived ReBACProtectedResource per
    check, using the default permission rules and exploration budget unless
    overridden.

    Parameters
    ----------
    max_depth:
        Hop budget for every check. Default 3.
    relations:
        Optional initial ``(subject, relation, object)`` triples.

    Example
    -------
    ::

        from aumos_rebac import RelationshipAuthorizer
        authz = RelationshipAuthorizer()
        authz.grant("alice", "memberOf", "team1")
        authz.grant("team1", "viewer", "doc1")
        assert authz.check("alice", "read", "doc1")
        assert not authz.check("alice", "write", "doc1")
    """

    def __init__(
        self,
        max_depth: int = 3,
        relations: list[tuple[str, str, str]] | None = None,
    ) -> None:
        from aumos_rebac.explorer.results import ExplorationConfig
        from aumos_rebac.graph.relation_graph import RelationGraph
        from aumos_rebac.graph.tuples import RelationTuple

        self._config = ExplorationConfig(max_depth=max_depth)
        self._graph = RelationGraph(
            RelationTuple(subject, relation, obj)  # type: ignore[arg-type]
            for subject, relation, obj in (relations or [])
        )

    def grant(self, subject: str, relation: str, obj: str) -> None:
        """Add the edge ``subject -[relation]-> obj``."""
        from aumos_rebac.graph.tuples import RelationTuple

        self._graph.add_relation(RelationTuple(subject, relation, obj))  # type: ignore[arg-type]

    def revoke(self, subject: str, relation: str, obj: str) -> None:
        """Remove the edge ``subject -[relation]-> obj`` if present."""
        from aumos_rebac.graph.tuples import RelationTuple

        self._graph.remove_relation(RelationTuple(subject, relation, obj))  # type: ignore[arg-type]

    def check(self, subject: str, action: str, resource_id: str) -> Any:
        """Decide whether ``subject`` may perform ``action`` on ``resource_id``.

        Returns
        -------
        ReBACDecision
            Truthy when granted. ``.type`` is ``"granted"`` or ``"denied"``.
        """
        from aumos_rebac.resource.protected_resource import ReBACProtectedResource

        resource = ReBACProtectedResource(resource_id, self._graph, config=self._config)
        return resource.check_relation(subject, action)  # type: ignore[arg-type]

    @property
    def graph(self) -> Any:
        """The underlying RelationGraph instance."""
        return self._graph

    def __repr__(self) -> str:
        return f"RelationshipAuthorizer(relations={len(self._graph)}, max_depth={self._config.max_depth})"
