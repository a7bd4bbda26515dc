"""Protected resources, permission rules and authorization decisions.

Example
-------
::

    from aumos_rebac.resource import ReBACProtectedResource

    resource = ReBACProtectedResource("doc1", graph)
    decision = resource.check_relation("alice", "read")
    if not decision and decision.is_indeterminate:
        ...  # search was truncated; consider raising max_depth
"""
from __future__ import annotations

from aumos_rebac.resource.decision import (
    AccessDenied,
    AccessGranted,
    DenialReason,
    ReBACDecision,
)
from aumos_rebac.resource.protected_resource import ReBACProtectedResource
from aumos_rebac.resource.rules import (
    DEFAULT_PERMISSION_RULES,
    KNOWN_ACTIONS,
    PermissionAction,
    PermissionBits,
    PermissionRule,
)

__all__ = [
    # Decisions
    "AccessDenied",
    "AccessGranted",
    "DenialReason",
    "ReBACDecision",
    # Rules
    "DEFAULT_PERMISSION_RULES",
    "KNOWN_ACTIONS",
    "PermissionAction",
    "PermissionBits",
    "PermissionRule",
    # Resource
    "ReBACProtectedResource",
]
