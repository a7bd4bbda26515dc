#!/usr/bin/env python3
"""Example: YAML configuration and decision audit

Loads a graph, custom permission rules and an audit log from YAML, then
replays the audit trail.

Usage:
    python examples/02_yaml_config.py

Requirements:
    pip install aumos-rebac
"""
from __future__ import annotations

import tempfile
from pathlib import Path

from aumos_rebac import ConfigLoader, DecisionAuditLogger

_CONFIG_TEMPLATE = """\
version: "1"
exploration:
  max_depth: 3
permission_rules:
  - relation: owns
    permissions: {{read: true, write: true}}
    description: Owners have full access
  - relation: viewer
    permissions: {{read: true}}
    description: Viewers can only read
relations:
  - {{subject: alice, relation: memberOf, object: engineering}}
  - {{subject: engineering, relation: owns, object: design-doc}}
  - {{subject: bob, relation: viewer, object: design-doc}}
  - {{subject: bob, relation: delegatedBy, object: alice}}
audit:
  enabled: true
  log_path: {log_path}
"""


def main() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        log_path = Path(tmp) / "rebac_audit.jsonl"
        config_path = Path(tmp) / "rebac.yaml"
        config_path.write_text(_CONFIG_TEMPLATE.format(log_path=log_path), encoding="utf-8")

        # Step 1: Load and validate
        settings = ConfigLoader().load(config_path)
        print(f"Loaded {len(settings.relations)} relations, max_depth={settings.exploration.max_depth}")

        # Step 2: Build the protected resource and check access
        resource = settings.build_resource("design-doc")
        for subject in ["alice", "bob"]:
            for action, decision in resource.explain_access(subject).items():
                print(f"  {subject:<6} {action:<6} -> {decision.type}")

        # Step 3: Replay the audit trail
        audit = DecisionAuditLogger(log_path)
        print(f"\nAudit log: {audit.count()} decisions")
        for record in audit.query({"type": "granted"}):
            print(f"  {record['subject']} {record['action']} via {record['relation']}")


if __name__ == "__main__":
    main()
