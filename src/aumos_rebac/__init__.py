"""aumos-rebac: Relationship-based access control over a relation graph.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import aumos_rebac as rebac
>>> rebac.__version__
'0.1.0'
>>> graph = rebac.RelationGraph()
>>> graph.add_relation(rebac.RelationTuple("alice", "memberOf", "team1"))
>>> graph.add_relation(rebac.RelationTuple("team1", "editor", "doc1"))
>>> decision = rebac.ReBACProtectedResource("doc1", graph).check_relation("alice", "write")
>>> decision.type, decision.relation.value
('granted', 'editor')
"""
from __future__ import annotations

__version__: str = "0.1.0"

from aumos_rebac.convenience import RelationshipAuthorizer

# ---------------------------------------------------------------------------
# Graph
# ---------------------------------------------------------------------------
from aumos_rebac.graph.relation_graph import RelationGraph
from aumos_rebac.graph.tuples import (
    DIRECT_RELATIONS,
    INDIRECT_RELATIONS,
    EntityId,
    RelationPath,
    RelationTuple,
    RelationType,
)

# ---------------------------------------------------------------------------
# Explorer
# ---------------------------------------------------------------------------
from aumos_rebac.explorer.explorer import RelationshipExplorer
from aumos_rebac.explorer.results import (
    ExplorationCancelled,
    ExplorationConfig,
    ExplorationResult,
    MaxDepthExceeded,
    PathFound,
    PathNotFound,
)

# ---------------------------------------------------------------------------
# Resource
# ---------------------------------------------------------------------------
from aumos_rebac.resource.decision import AccessDenied, AccessGranted, ReBACDecision
from aumos_rebac.resource.protected_resource import ReBACProtectedResource
from aumos_rebac.resource.rules import (
    DEFAULT_PERMISSION_RULES,
    PermissionAction,
    PermissionBits,
    PermissionRule,
)

# ---------------------------------------------------------------------------
# Config & audit
# ---------------------------------------------------------------------------
from aumos_rebac.audit.decision_log import DecisionAuditLogger
from aumos_rebac.config.loader import ConfigLoader, ReBACConfigError, ReBACSettings

__all__ = [
    "__version__",
    "RelationshipAuthorizer",
    # Graph
    "DIRECT_RELATIONS",
    "INDIRECT_RELATIONS",
    "EntityId",
    "RelationGraph",
    "RelationPath",
    "RelationTuple",
    "RelationType",
    # Explorer
    "ExplorationCancelled",
    "ExplorationConfig",
    "ExplorationResult",
    "MaxDepthExceeded",
    "PathFound",
    "PathNotFound",
    "RelationshipExplorer",
    # Resource
    "AccessDenied",
    "AccessGranted",
    "DEFAULT_PERMISSION_RULES",
    "PermissionAction",
    "PermissionBits",
    "PermissionRule",
    "ReBACDecision",
    "ReBACProtectedResource",
    # Config & audit
    "ConfigLoader",
    "DecisionAuditLogger",
    "ReBACConfigError",
    "ReBACSettings",
]
