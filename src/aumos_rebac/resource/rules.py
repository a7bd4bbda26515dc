"""Permission rules: which direct relations grant which actions.

The rule table is an ordered list. Order never changes *which* relations
are required for an action, but it fixes the order in which the explorer
tries direct edges, and so which relation is reported when a subject holds
several qualifying edges at once.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from aumos_rebac.graph.tuples import RelationType

# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

PermissionAction = Literal["read", "write"]

KNOWN_ACTIONS: tuple[str, ...] = ("read", "write")


def validate_action(action: str) -> str:
    """Return ``action`` unchanged, or raise ValueError if it is unknown."""
    if action not in KNOWN_ACTIONS:
        raise ValueError(
            f"Unknown permission action {action!r}. Known actions: {list(KNOWN_ACTIONS)}."
        )
    return action


# ---------------------------------------------------------------------------
# PermissionBits
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PermissionBits:
    """Read/write permission flags granted by a relation."""

    read: bool = False
    write: bool = False

    def grants(self, action: str) -> bool:
        """Return True if these bits allow ``action``."""
        return bool(getattr(self, validate_action(action)))

    def to_dict(self) -> dict[str, bool]:
        return {"read": self.read, "write": self.write}


# ---------------------------------------------------------------------------
# PermissionRule
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PermissionRule:
    """Maps one direct relation to the permission bits it grants.

    Attributes
    ----------
    relation:
        A direct relation (``owns``, ``editor``, ``viewer``). Raw strings
        are coerced to :class:`RelationType`.
    permissions:
        The actions the relation grants.
    description:
        Human-readable explanation of the rule.
    """

    relation: RelationType
    permissions: PermissionBits = field(default_factory=PermissionBits)
    description: str = ""

    def __post_init__(self) -> None:
        relation = RelationType.coerce(self.relation)
        if not relation.is_direct:
            raise ValueError(
                f"PermissionRule.relation must be a direct relation; "
                f"{relation.value!r} only connects entities."
            )
        if not isinstance(self.permissions, PermissionBits):
            raise ValueError(
                f"PermissionRule.permissions must be PermissionBits; got {self.permissions!r}."
            )
        object.__setattr__(self, "relation", relation)

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> PermissionRule:
        """Build a PermissionRule from a plain dictionary.

        Parameters
        ----------
        data:
            Dictionary with keys ``relation``, ``permissions`` (a mapping of
            action name to bool) and optionally ``description``.

        Returns
        -------
        PermissionRule

        Raises
        ------
        ValueError
            If ``relation`` is missing or unknown, or a permission flag is
            not a boolean.
        """
        relation = str(data.get("relation", ""))
        if not relation:
            raise ValueError("PermissionRule.relation must not be empty.")

        raw_permissions = data.get("permissions", {})
        if not isinstance(raw_permissions, dict):
            raise ValueError(
                f"PermissionRule.permissions must be a mapping; got {raw_permissions!r}."
            )
        flags: dict[str, bool] = {}
        for action, granted in raw_permissions.items():
            validate_action(str(action))
            if not isinstance(granted, bool):
                raise ValueError(
                    f"Permission flag {action!r} must be a boolean; got {granted!r}."
                )
            flags[str(action)] = granted

        return cls(
            relation=RelationType.coerce(relation),
            permissions=PermissionBits(**flags),
            description=str(data.get("description", "")),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "relation": self.relation.value,
            "permissions": self.permissions.to_dict(),
            "description": self.description,
        }


DEFAULT_PERMISSION_RULES: tuple[PermissionRule, ...] = (
    PermissionRule(
        relation=RelationType.OWNS,
        permissions=PermissionBits(read=True, write=True),
        description="Owners have full access",
    ),
    PermissionRule(
        relation=RelationType.EDITOR,
        permissions=PermissionBits(read=True, write=True),
        description="Editors can read and write",
    ),
    PermissionRule(
        relation=RelationType.VIEWER,
        permissions=PermissionBits(read=True, write=False),
        description="Viewers can only read",
    ),
)
