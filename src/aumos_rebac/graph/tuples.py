"""Relation types and relation tuples.

A relation tuple is a directed, labeled edge ``(subject, relation, object)``
in the relationship graph. Relations come from a closed vocabulary split into
two families:

- *indirect* relations connect entities to each other
  (``manages``, ``memberOf``, ``has``, ``delegatedBy``)
- *direct* relations grant permissions on a resource
  (``owns``, ``editor``, ``viewer``)

Example
-------
::

    edge = RelationTuple("alice", "memberOf", "team1")
    assert edge.relation is RelationType.MEMBER_OF
    assert not edge.relation.is_direct
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------

EntityId = str


# ---------------------------------------------------------------------------
# RelationType
# ---------------------------------------------------------------------------


class RelationType(str, Enum):
    """Closed set of relation labels understood by the graph."""

    # Entity-to-entity
    MANAGES = "manages"
    MEMBER_OF = "memberOf"
    HAS = "has"
    DELEGATED_BY = "delegatedBy"

    # Entity-to-resource
    OWNS = "owns"
    EDITOR = "editor"
    VIEWER = "viewer"

    @property
    def is_direct(self) -> bool:
        """Return True if this relation grants permissions on a resource."""
        return self in DIRECT_RELATIONS

    @property
    def is_indirect(self) -> bool:
        """Return True if this relation only connects entities."""
        return self in INDIRECT_RELATIONS

    @classmethod
    def coerce(cls, value: RelationType | str) -> RelationType:
        """Return the member for ``value``, accepting the raw string label.

        Raises
        ------
        ValueError
            If ``value`` is not a known relation label.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            known = ", ".join(member.value for member in cls)
            raise ValueError(
                f"Unknown relation {value!r}. Known relations: {known}."
            ) from None

    def __str__(self) -> str:
        return self.value


INDIRECT_RELATIONS: frozenset[RelationType] = frozenset(
    [
        RelationType.MANAGES,
        RelationType.MEMBER_OF,
        RelationType.HAS,
        RelationType.DELEGATED_BY,
    ]
)

DIRECT_RELATIONS: frozenset[RelationType] = frozenset(
    [
        RelationType.OWNS,
        RelationType.EDITOR,
        RelationType.VIEWER,
    ]
)


# ---------------------------------------------------------------------------
# RelationTuple
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RelationTuple:
    """A directed labeled edge ``subject -[relation]-> object``.

    Tuples compare and hash by value, so a collection of tuples behaves as a
    set: two tuples differing in any field are distinct edges.

    Attributes
    ----------
    subject:
        Entity the edge starts from (user, group, team, org).
    relation:
        Relation label. Raw strings are coerced to :class:`RelationType`.
    object:
        Entity the edge points to (group, team, org, or resource).
    """

    subject: EntityId
    relation: RelationType
    object: EntityId

    def __post_init__(self) -> None:
        if not isinstance(self.subject, str) or not self.subject:
            raise ValueError(
                f"RelationTuple.subject must be a non-empty string; got {self.subject!r}."
            )
        if not isinstance(self.object, str) or not self.object:
            raise ValueError(
                f"RelationTuple.object must be a non-empty string; got {self.object!r}."
            )
        # Frozen dataclass: bypass __setattr__ to store the coerced enum.
        object.__setattr__(self, "relation", RelationType.coerce(self.relation))

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> RelationTuple:
        """Build a tuple from a mapping with ``subject``/``relation``/``object`` keys.

        Raises
        ------
        ValueError
            If a key is missing or a value is invalid.
        """
        missing = [key for key in ("subject", "relation", "object") if key not in data]
        if missing:
            raise ValueError(f"RelationTuple is missing required keys: {missing}.")
        for key in ("subject", "relation", "object"):
            if not isinstance(data[key], str):
                raise ValueError(
                    f"RelationTuple.{key} must be a string; got {data[key]!r}."
                )
        return cls(
            subject=data["subject"],  # type: ignore[arg-type]
            relation=RelationType.coerce(data["relation"]),  # type: ignore[arg-type]
            object=data["object"],  # type: ignore[arg-type]
        )

    def to_dict(self) -> dict[str, str]:
        """Serialise to a plain, JSON-friendly dict."""
        return {
            "subject": self.subject,
            "relation": self.relation.value,
            "object": self.object,
        }

    def __str__(self) -> str:
        return f"{self.subject} -[{self.relation.value}]-> {self.object}"


RelationPath = tuple[RelationTuple, ...]
