"""Authorization decisions returned by a protected resource.

A decision is one of:

- :class:`AccessGranted`: carries the path that justifies the grant
- :class:`AccessDenied` with ``reason="no-relation"``: a definite no, the
  reachable graph was explored within budget
- :class:`AccessDenied` with ``reason="max-depth-exceeded"``: indeterminate,
  the search was truncated by the depth budget

Both denial reasons are kept distinct all the way to the caller.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

from aumos_rebac.graph.tuples import RelationPath, RelationType

DenialReason = Literal["no-relation", "max-depth-exceeded"]


@dataclass(frozen=True)
class AccessGranted:
    """Access is granted.

    Attributes
    ----------
    path:
        Chain of relation tuples from the subject to the resource. The last
        edge carries ``relation``.
    relation:
        The direct relation that granted the action.
    """

    path: RelationPath
    relation: RelationType
    type: Literal["granted"] = "granted"

    @property
    def allowed(self) -> bool:
        return True

    @property
    def is_indeterminate(self) -> bool:
        return False

    def __bool__(self) -> bool:
        """Granted decisions are truthy."""
        return True

    def to_dict(self) -> dict[str, object]:
        """Serialise to a JSON-friendly dict suitable for audit logs."""
        return {
            "type": self.type,
            "relation": self.relation.value,
            "path": [edge.to_dict() for edge in self.path],
        }


@dataclass(frozen=True)
class AccessDenied:
    """Access is denied.

    Attributes
    ----------
    reason:
        ``"no-relation"`` or ``"max-depth-exceeded"``.
    searched_relations:
        Relations that would have granted the action. Set for
        ``"no-relation"``, empty otherwise.
    max_depth:
        Hop budget that truncated the search. Set for
        ``"max-depth-exceeded"``, ``None`` otherwise.
    """

    reason: DenialReason
    searched_relations: tuple[RelationType, ...] = ()
    max_depth: int | None = None
    type: Literal["denied"] = "denied"

    def __post_init__(self) -> None:
        if self.reason == "max-depth-exceeded" and self.max_depth is None:
            raise ValueError("max-depth-exceeded denials must carry max_depth.")
        if self.reason not in ("no-relation", "max-depth-exceeded"):
            raise ValueError(f"Unknown denial reason {self.reason!r}.")

    @classmethod
    def no_relation(cls, searched_relations: tuple[RelationType, ...]) -> AccessDenied:
        return cls(reason="no-relation", searched_relations=tuple(searched_relations))

    @classmethod
    def depth_exceeded(cls, max_depth: int) -> AccessDenied:
        return cls(reason="max-depth-exceeded", max_depth=max_depth)

    @property
    def allowed(self) -> bool:
        return False

    @property
    def is_indeterminate(self) -> bool:
        """True when the search was truncated, so the denial is not proof."""
        return self.reason == "max-depth-exceeded"

    def __bool__(self) -> bool:
        """Denied decisions are falsy."""
        return False

    def to_dict(self) -> dict[str, object]:
        """Serialise to a JSON-friendly dict suitable for audit logs."""
        data: dict[str, object] = {"type": self.type, "reason": self.reason}
        if self.reason == "no-relation":
            data["searched_relations"] = [r.value for r in self.searched_relations]
        else:
            data["max_depth"] = self.max_depth
        return data


ReBACDecision = Union[AccessGranted, AccessDenied]
