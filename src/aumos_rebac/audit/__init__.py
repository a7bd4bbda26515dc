"""Decision audit trail."""
from __future__ import annotations

from aumos_rebac.audit.decision_log import DECISION_EVENT, DecisionAuditLogger

__all__ = ["DECISION_EVENT", "DecisionAuditLogger"]
