"""Breadth-first search for qualifying relationship paths.

RelationshipExplorer holds a reference to a RelationGraph and answers
"is there a path from ``subject`` to ``target`` whose last edge carries one of
these relations?". The search runs in two phases:

1. Direct-edge fast path: one O(1) lookup per acceptable relation, in the
   caller's order. The first hit wins.
2. Breadth-first search over forward adjacency with a visited-node set and a
   hop budget. Because BFS finishes depth *d* before starting *d + 1*, the
   first dequeued item at the budget means every remaining frontier item is
   at or past it, so the whole search stops with ``MaxDepthExceeded``.

The returned path is always a minimum-hop path. Among equally short paths the
one whose edges were inserted first wins.

Example
-------
::

    explorer = RelationshipExplorer(graph, ExplorationConfig(max_depth=3))
    result = explorer.find_path_with_any_relation(
        "alice", "doc1", [RelationType.OWNS, RelationType.EDITOR]
    )
    if isinstance(result, PathFound):
        print(" / ".join(str(edge) for edge in result.path))
"""
from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Callable, Iterable

from aumos_rebac.explorer.results import (
    ExplorationCancelled,
    ExplorationConfig,
    ExplorationResult,
    MaxDepthExceeded,
    PathFound,
    PathNotFound,
)
from aumos_rebac.graph.relation_graph import RelationGraph
from aumos_rebac.graph.tuples import EntityId, RelationPath, RelationTuple, RelationType

logger = logging.getLogger(__name__)

_EdgePredicate = Callable[[RelationTuple], bool]

_DECLARATION_ORDER: list[RelationType] = list(RelationType)


class RelationshipExplorer:
    """Stateless path search over a :class:`RelationGraph`.

    Parameters
    ----------
    graph:
        Graph to search. Held by reference; later mutations are visible to
        subsequent searches.
    config:
        Search budget. Defaults to ``ExplorationConfig()`` (``max_depth=3``).

    Raises
    ------
    TypeError
        If ``graph`` is not a RelationGraph or ``config`` is not an
        ExplorationConfig.
    """

    def __init__(
        self,
        graph: RelationGraph,
        config: ExplorationConfig | None = None,
    ) -> None:
        if not isinstance(graph, RelationGraph):
            raise TypeError(
                f"RelationshipExplorer requires a RelationGraph; got {type(graph).__name__}."
            )
        if config is not None and not isinstance(config, ExplorationConfig):
            raise TypeError(
                f"config must be an ExplorationConfig; got {type(config).__name__}."
            )
        self._graph = graph
        self._config = config or ExplorationConfig()

    @property
    def graph(self) -> RelationGraph:
        """The graph this explorer searches."""
        return self._graph

    @property
    def max_depth(self) -> int:
        """Hop budget applied to every search."""
        return self._config.max_depth

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def find_path_with_any_relation(
        self,
        subject: EntityId,
        target_object: EntityId,
        target_relations: Iterable[RelationType | str],
        cancel_event: threading.Event | None = None,
    ) -> ExplorationResult:
        """Find the shortest path to ``target_object`` ending in an acceptable relation.

        ``subject == target_object`` is not treated as an implicit match; an
        explicit qualifying self-edge is required.

        Parameters
        ----------
        subject:
            Entity the search starts from.
        target_object:
            Entity the path must end at.
        target_relations:
            Relations acceptable on the terminal edge. For an ordered
            sequence, iteration order sets the order of the direct-edge
            checks. A ``set`` or ``frozenset`` has no stable order, so its
            members are checked in :class:`RelationType` declaration order
            (``owns`` before ``editor`` before ``viewer``).
        cancel_event:
            Optional event checked on every dequeue. When set, the search
            raises :class:`ExplorationCancelled`.

        Returns
        -------
        ExplorationResult
        """
        relations = tuple(dict.fromkeys(RelationType.coerce(r) for r in target_relations))
        if isinstance(target_relations, (set, frozenset)):
            relations = tuple(sorted(relations, key=_DECLARATION_ORDER.index))
        if not relations:
            logger.debug(
                "No acceptable relations for %s -> %s; nothing can qualify",
                subject,
                target_object,
            )
            return PathNotFound()

        for relation in relations:
            if self._graph.has_direct_relation(subject, relation, target_object):
                edge = RelationTuple(subject, relation, target_object)
                logger.debug("Direct edge match: %s", edge)
                return PathFound(path=(edge,), matched_relation=relation)

        accepted = frozenset(relations)
        return self._breadth_first(
            subject,
            target_object,
            lambda edge: edge.relation in accepted,
            cancel_event,
        )

    def find_path(
        self,
        subject: EntityId,
        target_object: EntityId,
        cancel_event: threading.Event | None = None,
    ) -> ExplorationResult:
        """Find the shortest path of any relations from ``subject`` to ``target_object``.

        This is a reachability query, not a permission decision: an entity
        is trivially connected to itself and gets an empty path.
        """
        if subject == target_object:
            return PathFound(path=(), matched_relation=None)
        return self._breadth_first(subject, target_object, lambda edge: True, cancel_event)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _breadth_first(
        self,
        subject: EntityId,
        target_object: EntityId,
        qualifies: _EdgePredicate,
        cancel_event: threading.Event | None,
    ) -> ExplorationResult:
        max_depth = self._config.max_depth
        queue: deque[tuple[EntityId, RelationPath, int]] = deque([(subject, (), 0)])
        visited: set[EntityId] = {subject}
        expanded = 0

        while queue:
            if cancel_event is not None and cancel_event.is_set():
                raise ExplorationCancelled(expanded)

            current, path, depth = queue.popleft()
            if depth >= max_depth:
                logger.debug(
                    "Search %s -> %s truncated at depth %d after %d expansions",
                    subject,
                    target_object,
                    max_depth,
                    expanded,
                )
                return MaxDepthExceeded(max_depth=max_depth)

            expanded += 1
            for edge in self._graph.get_relations(current):
                if edge.object == target_object and qualifies(edge):
                    logger.debug(
                        "Path found %s -> %s in %d hops via %s",
                        subject,
                        target_object,
                        depth + 1,
                        edge.relation.value,
                    )
                    return PathFound(path=path + (edge,), matched_relation=edge.relation)
                if edge.object not in visited:
                    visited.add(edge.object)
                    queue.append((edge.object, path + (edge,), depth + 1))

        logger.debug(
            "No path %s -> %s after %d expansions", subject, target_object, expanded
        )
        return PathNotFound()


