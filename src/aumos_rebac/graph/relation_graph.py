"""In-memory relationship graph with forward and reverse adjacency.

The graph stores relation tuples in two indices that are always kept in
agreement:

- forward:  ``subject -> relation -> {objects}``
- reverse:  ``object  -> relation -> {subjects}``

Inner "sets" are plain dicts with ``None`` values so that iteration follows
insertion order. Edge enumeration is therefore deterministic, which the
explorer relies on to break ties between equally short paths.

Writers are serialised with a ``threading.Lock`` held across both index
updates. Readers do not lock; run them against a graph that is not being
mutated, or exchange a :meth:`RelationGraph.copy` snapshot.

Example
-------
::

    graph = RelationGraph()
    graph.add_relation(RelationTuple("alice", "memberOf", "team1"))
    graph.add_relation(RelationTuple("team1", "editor", "doc1"))
    assert graph.has_direct_relation("team1", "editor", "doc1")
    assert [str(t) for t in graph.get_reverse_relations("doc1")] == [
        "team1 -[editor]-> doc1"
    ]
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable, Iterator

from aumos_rebac.graph.tuples import EntityId, RelationTuple, RelationType

logger = logging.getLogger(__name__)

_Adjacency = dict[EntityId, dict[RelationType, dict[EntityId, None]]]


class RelationGraph:
    """Directed, labeled multigraph of :class:`RelationTuple` edges.

    The graph may contain cycles, including self-loops. All operations are
    total: adding an existing tuple, removing an absent one, or clearing an
    empty graph are no-ops rather than errors.
    """

    def __init__(self, relations: Iterable[RelationTuple] | None = None) -> None:
        self._forward: _Adjacency = {}
        self._reverse: _Adjacency = {}
        self._size = 0
        self._lock = threading.Lock()
        if relations is not None:
            self.add_relations(relations)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_relation(self, relation_tuple: RelationTuple) -> None:
        """Insert ``relation_tuple`` into both indices. Idempotent."""
        with self._lock:
            self._insert(relation_tuple)

    def add_relations(self, relations: Iterable[RelationTuple]) -> None:
        """Insert many tuples under a single write lock."""
        with self._lock:
            for relation_tuple in relations:
                self._insert(relation_tuple)

    def remove_relation(self, relation_tuple: RelationTuple) -> None:
        """Delete ``relation_tuple`` from both indices.

        Relation maps and object sets left empty by the removal are dropped.
        """
        with self._lock:
            removed = _discard(
                self._forward,
                relation_tuple.subject,
                relation_tuple.relation,
                relation_tuple.object,
            )
            _discard(
                self._reverse,
                relation_tuple.object,
                relation_tuple.relation,
                relation_tuple.subject,
            )
            if removed:
                self._size -= 1
                logger.debug("Removed relation %s", relation_tuple)

    def clear(self) -> None:
        """Remove every tuple from the graph."""
        with self._lock:
            self._forward.clear()
            self._reverse.clear()
            self._size = 0

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def has_direct_relation(
        self,
        subject: EntityId,
        relation: RelationType | str,
        obj: EntityId,
    ) -> bool:
        """Return True if the edge ``subject -[relation]-> obj`` exists."""
        key = _relation_key(relation)
        if key is None:
            return False
        return obj in self._forward.get(subject, {}).get(key, {})

    def get_relations(
        self,
        subject: EntityId,
        relation: RelationType | str | None = None,
    ) -> list[RelationTuple]:
        """Return outgoing edges of ``subject``, optionally filtered by relation.

        Edges are returned in insertion order.
        """
        return _collect(
            self._forward.get(subject),
            relation,
            lambda rel, other: RelationTuple(subject, rel, other),
        )

    def get_reverse_relations(
        self,
        obj: EntityId,
        relation: RelationType | str | None = None,
    ) -> list[RelationTuple]:
        """Return incoming edges of ``obj``, optionally filtered by relation."""
        return _collect(
            self._reverse.get(obj),
            relation,
            lambda rel, other: RelationTuple(other, rel, obj),
        )

    def entities(self) -> set[EntityId]:
        """Return every entity that appears as a subject or an object."""
        return set(self._forward) | set(self._reverse)

    def copy(self) -> RelationGraph:
        """Return an independent snapshot of this graph.

        Mutating the snapshot never affects the original, so a writer can
        build the next version off to the side and swap references.
        """
        with self._lock:
            return RelationGraph(list(self))

    # ------------------------------------------------------------------
    # Dunder helpers
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return self._size

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, RelationTuple):
            return False
        return self.has_direct_relation(item.subject, item.relation, item.object)

    def __iter__(self) -> Iterator[RelationTuple]:
        for subject, relations in list(self._forward.items()):
            for relation, objects in list(relations.items()):
                for obj in list(objects):
                    yield RelationTuple(subject, relation, obj)

    def __repr__(self) -> str:
        return f"RelationGraph(relations={self._size}, entities={len(self.entities())})"

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _insert(self, relation_tuple: RelationTuple) -> None:
        """Add to both indices. Caller must hold the lock."""
        objects = self._forward.setdefault(relation_tuple.subject, {}).setdefault(
            relation_tuple.relation, {}
        )
        if relation_tuple.object in objects:
            return
        objects[relation_tuple.object] = None
        self._reverse.setdefault(relation_tuple.object, {}).setdefault(
            relation_tuple.relation, {}
        )[relation_tuple.subject] = None
        self._size += 1
        logger.debug("Added relation %s", relation_tuple)


def _discard(
    index: _Adjacency,
    key: EntityId,
    relation: RelationType,
    member: EntityId,
) -> bool:
    """Remove ``member`` from ``index[key][relation]`` and prune empty levels."""
    relations = index.get(key)
    if relations is None:
        return False
    members = relations.get(relation)
    if members is None or member not in members:
        return False
    del members[member]
    if not members:
        del relations[relation]
        if not relations:
            del index[key]
    return True


def _relation_key(relation: RelationType | str) -> RelationType | None:
    """Map a relation label to its enum member, or None if it is unknown."""
    try:
        return RelationType.coerce(relation)
    except ValueError:
        return None


def _collect(
    relations: dict[RelationType, dict[EntityId, None]] | None,
    relation: RelationType | str | None,
    build: Callable[[RelationType, EntityId], RelationTuple],
) -> list[RelationTuple]:
    """Flatten one adjacency row into tuples via ``build(relation, other)``."""
    if not relations:
        return []
    if relation is not None:
        key = _relation_key(relation)
        if key is None:
            return []
        return [build(key, other) for other in relations.get(key, {})]
    return [
        build(rel, other)
        for rel, others in relations.items()
        for other in others
    ]
