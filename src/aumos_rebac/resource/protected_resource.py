"""A single resource guarded by relationship-based access control.

ReBACProtectedResource binds a resource id to a relationship graph, an
ordered permission-rule table and an exploration budget. A check:

1. computes the direct relations whose rule grants the requested action,
2. asks the explorer for the shortest path from the subject to the resource
   ending in one of those relations,
3. maps the search outcome to an :class:`AccessGranted` or
   :class:`AccessDenied` decision.

Every check is an independent traversal. Nothing is cached between calls.

Example
-------
::

    graph = RelationGraph([
        RelationTuple("alice", "memberOf", "team1"),
        RelationTuple("team1", "editor", "doc1"),
    ])
    resource = ReBACProtectedResource("doc1", graph)
    decision = resource.check_relation("alice", "write")
    assert decision.type == "granted"
    assert decision.relation is RelationType.EDITOR
"""
from __future__ import annotations

import logging
import threading
from typing import Sequence

from aumos_rebac.audit.decision_log import DecisionAuditLogger
from aumos_rebac.explorer.explorer import RelationshipExplorer
from aumos_rebac.explorer.results import (
    ExplorationConfig,
    MaxDepthExceeded,
    PathFound,
    PathNotFound,
)
from aumos_rebac.graph.relation_graph import RelationGraph
from aumos_rebac.graph.tuples import EntityId, RelationType
from aumos_rebac.resource.decision import AccessDenied, AccessGranted, ReBACDecision
from aumos_rebac.resource.rules import (
    DEFAULT_PERMISSION_RULES,
    KNOWN_ACTIONS,
    PermissionAction,
    PermissionRule,
    validate_action,
)

logger = logging.getLogger(__name__)


class ReBACProtectedResource:
    """Authorizes actions on one resource by searching the relationship graph.

    Parameters
    ----------
    resource_id:
        Identity of the protected resource; the search target.
    graph:
        Relationship graph, held by reference.
    permission_rules:
        Ordered rule table. Defaults to owns/editor (read+write) and
        viewer (read).
    config:
        Exploration budget. Defaults to ``ExplorationConfig()``.
    audit_logger:
        Optional audit log; every decision is appended to it.

    Raises
    ------
    ValueError
        If ``resource_id`` is empty, a rule is not a PermissionRule, or two
        rules name the same relation.
    TypeError
        If ``graph`` or ``config`` have the wrong type.
    """

    def __init__(
        self,
        resource_id: EntityId,
        graph: RelationGraph,
        permission_rules: Sequence[PermissionRule] | None = None,
        config: ExplorationConfig | None = None,
        audit_logger: DecisionAuditLogger | None = None,
    ) -> None:
        if not isinstance(resource_id, str) or not resource_id:
            raise ValueError(
                f"resource_id must be a non-empty string; got {resource_id!r}."
            )
        rules = tuple(DEFAULT_PERMISSION_RULES if permission_rules is None else permission_rules)
        seen: set[RelationType] = set()
        for index, rule in enumerate(rules):
            if not isinstance(rule, PermissionRule):
                raise ValueError(
                    f"permission_rules[{index}] must be a PermissionRule; got {rule!r}."
                )
            if rule.relation in seen:
                raise ValueError(
                    f"Duplicate permission rule for relation {rule.relation.value!r}."
                )
            seen.add(rule.relation)

        self._resource_id = resource_id
        self._graph = graph
        self._rules = rules
        self._explorer = RelationshipExplorer(graph, config)
        self._audit_logger = audit_logger

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def resource_id(self) -> EntityId:
        return self._resource_id

    @property
    def graph(self) -> RelationGraph:
        return self._graph

    @property
    def permission_rules(self) -> tuple[PermissionRule, ...]:
        return self._rules

    @property
    def max_depth(self) -> int:
        return self._explorer.max_depth

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_required_relations(self, action: PermissionAction) -> frozenset[RelationType]:
        """Return the direct relations whose rule grants ``action``.

        The result is unordered. :meth:`check_relation` tries direct edges
        in rule-table order, which this set does not carry.

        Raises
        ------
        ValueError
            If ``action`` is not a known permission action.
        """
        return frozenset(self._ordered_required_relations(action))

    def check_relation(
        self,
        subject: EntityId,
        action: PermissionAction,
        cancel_event: threading.Event | None = None,
    ) -> ReBACDecision:
        """Decide whether ``subject`` may perform ``action`` on this resource.

        Parameters
        ----------
        subject:
            Entity requesting access.
        action:
            ``"read"`` or ``"write"``.
        cancel_event:
            Optional cancellation signal forwarded to the explorer.

        Returns
        -------
        ReBACDecision
            ``AccessGranted`` with the justifying path, or ``AccessDenied``
            with ``reason`` ``"no-relation"`` or ``"max-depth-exceeded"``.
        """
        required = self._ordered_required_relations(action)
        result = self._explorer.find_path_with_any_relation(
            subject, self._resource_id, required, cancel_event=cancel_event
        )

        decision: ReBACDecision
        if isinstance(result, PathFound):
            if result.matched_relation is None:
                raise TypeError(f"Permission path without a terminal relation: {result!r}")
            decision = AccessGranted(path=result.path, relation=result.matched_relation)
            logger.debug(
                "GRANTED: subject=%s action=%s resource=%s relation=%s hops=%d",
                subject,
                action,
                self._resource_id,
                result.matched_relation.value,
                result.depth,
            )
        elif isinstance(result, MaxDepthExceeded):
            decision = AccessDenied.depth_exceeded(result.max_depth)
            logger.warning(
                "DENIED (max-depth-exceeded): subject=%s action=%s resource=%s max_depth=%d",
                subject,
                action,
                self._resource_id,
                result.max_depth,
            )
        elif isinstance(result, PathNotFound):
            decision = AccessDenied.no_relation(required)
            logger.debug(
                "DENIED (no-relation): subject=%s action=%s resource=%s searched=%s",
                subject,
                action,
                self._resource_id,
                [r.value for r in required],
            )
        else:
            raise TypeError(f"Unexpected exploration result: {result!r}")

        if self._audit_logger is not None:
            self._audit_logger.record(subject, self._resource_id, action, decision)
        return decision

    def explain_access(self, subject: EntityId) -> dict[str, ReBACDecision]:
        """Run :meth:`check_relation` once per known action.

        Returns
        -------
        dict[str, ReBACDecision]
            Mapping of action name to its independent decision.
        """
        return {action: self.check_relation(subject, action) for action in KNOWN_ACTIONS}  # type: ignore[arg-type]

    def __repr__(self) -> str:
        return (
            f"ReBACProtectedResource(resource_id={self._resource_id!r}, "
            f"rules={len(self._rules)}, max_depth={self.max_depth})"
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _ordered_required_relations(self, action: str) -> tuple[RelationType, ...]:
        """Required relations in rule-table order."""
        validate_action(action)
        return tuple(rule.relation for rule in self._rules if rule.permissions.grants(action))
