#!/usr/bin/env python3
"""Example: Quickstart: aumos-rebac

Minimal working example: build a relationship graph, protect a document
and check who may read or write it.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install aumos-rebac
"""
from __future__ import annotations

import aumos_rebac as rebac


def main() -> None:
    print(f"aumos-rebac version: {rebac.__version__}")

    # Step 1: Describe who relates to what
    graph = rebac.RelationGraph([
        rebac.RelationTuple("alice", "memberOf", "team1"),
        rebac.RelationTuple("team1", "editor", "doc1"),
        rebac.RelationTuple("bob", "viewer", "doc1"),
        rebac.RelationTuple("manager1", "manages", "team1"),
    ])
    print(f"Graph ready: {graph!r}")

    # Step 2: Protect a resource with the default owns/editor/viewer rules
    resource = rebac.ReBACProtectedResource("doc1", graph)

    # Step 3: Check access
    print("\nAccess checks:")
    for subject, action in [("alice", "write"), ("bob", "read"), ("bob", "write"), ("manager1", "read")]:
        decision = resource.check_relation(subject, action)
        if isinstance(decision, rebac.AccessGranted):
            chain = " / ".join(str(edge) for edge in decision.path)
            print(f"  [GRANTED] {subject} {action}: {chain}")
        else:
            print(f"  [DENIED ] {subject} {action}: {decision.reason}")

    # Step 4: Shrink the budget and see the indeterminate denial
    shallow = rebac.ReBACProtectedResource(
        "doc1", graph, config=rebac.ExplorationConfig(max_depth=1)
    )
    decision = shallow.check_relation("alice", "write")
    print(f"\nWith max_depth=1: {decision.to_dict()}")

    # Step 5: The 3-line convenience API
    authz = rebac.RelationshipAuthorizer()
    authz.grant("carol", "owns", "doc2")
    print(f"\ncarol may write doc2: {bool(authz.check('carol', 'write', 'doc2'))}")


if __name__ == "__main__":
    main()
