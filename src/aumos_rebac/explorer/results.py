"""Exploration configuration and search outcomes.

A search over the relationship graph ends in exactly one of three states:

- :class:`PathFound`: a qualifying path exists; carries the path and the
  relation on its terminal edge
- :class:`PathNotFound`: the reachable graph was fully explored within
  budget and nothing qualifies
- :class:`MaxDepthExceeded`: the search was truncated by the depth budget,
  so the absence of a path is *not* proven
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

from pydantic import BaseModel, Field

from aumos_rebac.graph.tuples import RelationPath, RelationType

DEFAULT_MAX_DEPTH: int = 3


class ExplorationConfig(BaseModel):
    """Search budget for the relationship explorer.

    ``max_depth`` is a hop-count ceiling (edges traversed, not nodes
    visited). It must be at least 1; invalid values fail at construction.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1)


class ExplorationCancelled(RuntimeError):
    """Raised when a caller cancels an in-flight search.

    Attributes
    ----------
    expanded:
        Number of nodes dequeued before the cancellation was observed.
    """

    def __init__(self, expanded: int) -> None:
        self.expanded = expanded
        super().__init__(f"Relationship search cancelled after {expanded} expansions.")


@dataclass(frozen=True)
class PathFound:
    """A qualifying path was found.

    ``matched_relation`` is ``None`` only for the zero-hop result of a pure
    reachability query where subject and target are the same entity.
    """

    path: RelationPath
    matched_relation: RelationType | None
    type: Literal["found"] = "found"

    @property
    def depth(self) -> int:
        """Number of hops in the path."""
        return len(self.path)


@dataclass(frozen=True)
class PathNotFound:
    """The search space was exhausted without a qualifying path."""

    type: Literal["not-found"] = "not-found"


@dataclass(frozen=True)
class MaxDepthExceeded:
    """The search hit its hop budget before exhausting the graph."""

    max_depth: int
    type: Literal["max-depth-exceeded"] = "max-depth-exceeded"


ExplorationResult = Union[PathFound, PathNotFound, MaxDepthExceeded]
