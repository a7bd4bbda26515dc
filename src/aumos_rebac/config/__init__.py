"""YAML configuration for graphs, rules and exploration budgets."""
from __future__ import annotations

from aumos_rebac.config.loader import (
    AuditSettings,
    ConfigLoader,
    ExplorationSettings,
    PermissionRuleSettings,
    ReBACConfigError,
    ReBACSettings,
    RelationSettings,
)

__all__ = [
    "AuditSettings",
    "ConfigLoader",
    "ExplorationSettings",
    "PermissionRuleSettings",
    "ReBACConfigError",
    "ReBACSettings",
    "RelationSettings",
]
