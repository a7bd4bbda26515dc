"""ReBAC configuration loader with Pydantic v2 validation.

Loads and validates a ``rebac.yaml`` file into a typed :class:`ReBACSettings`
object that can build a populated :class:`RelationGraph` and
:class:`ReBACProtectedResource` instances.

Schema
------
::

    version: "1"
    exploration:
      max_depth: 3
    permission_rules:          # optional, defaults apply when omitted
      - relation: owns
        permissions: {read: true, write: true}
        description: Owners have full access
      - relation: viewer
        permissions: {read: true, write: false}
    relations:
      - {subject: alice, relation: memberOf, object: team1}
      - {subject: team1, relation: editor, object: doc1}
    audit:
      enabled: false
      log_path: ./rebac_audit.jsonl

Example
-------
>>> loader = ConfigLoader()
>>> settings = loader.load(Path("rebac.yaml"))
>>> graph = settings.build_graph()
>>> resource = settings.build_resource("doc1", graph)
"""
from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from aumos_rebac.audit.decision_log import DecisionAuditLogger
from aumos_rebac.explorer.results import DEFAULT_MAX_DEPTH, ExplorationConfig
from aumos_rebac.graph.relation_graph import RelationGraph
from aumos_rebac.graph.tuples import RelationTuple, RelationType
from aumos_rebac.resource.protected_resource import ReBACProtectedResource
from aumos_rebac.resource.rules import PermissionBits, PermissionRule

logger = logging.getLogger(__name__)

_SUPPORTED_VERSIONS: frozenset[str] = frozenset(["1", "1.0"])


class ReBACConfigError(ValueError):
    """Raised when a ReBAC config is malformed or invalid.

    Attributes
    ----------
    config_path:
        The path to the config file that caused the error, if known.
    """

    def __init__(self, message: str, config_path: str | None = None) -> None:
        self.config_path = config_path
        prefix = f"[{config_path}] " if config_path else ""
        super().__init__(f"{prefix}{message}")


# ---------------------------------------------------------------------------
# Schema models
# ---------------------------------------------------------------------------


class ExplorationSettings(BaseModel):
    """Search budget section."""

    model_config = {"extra": "forbid"}

    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1)


class PermissionBitsSettings(BaseModel):
    model_config = {"extra": "forbid"}

    read: bool = Field(default=False)
    write: bool = Field(default=False)


class PermissionRuleSettings(BaseModel):
    """One row of the permission-rule table."""

    model_config = {"extra": "forbid"}

    relation: RelationType
    permissions: PermissionBitsSettings = Field(default_factory=PermissionBitsSettings)
    description: str = Field(default="")

    @field_validator("relation")
    @classmethod
    def validate_direct(cls, value: RelationType) -> RelationType:
        if not value.is_direct:
            raise ValueError(
                f"Permission rules must use a direct relation; {value.value!r} only connects entities."
            )
        return value

    def to_rule(self) -> PermissionRule:
        return PermissionRule(
            relation=self.relation,
            permissions=PermissionBits(read=self.permissions.read, write=self.permissions.write),
            description=self.description,
        )


class RelationSettings(BaseModel):
    """One relation tuple (graph edge)."""

    model_config = {"extra": "forbid"}

    subject: str = Field(min_length=1)
    relation: RelationType
    object: str = Field(min_length=1)

    def to_tuple(self) -> RelationTuple:
        return RelationTuple(self.subject, self.relation, self.object)


class AuditSettings(BaseModel):
    """Decision audit log section."""

    model_config = {"extra": "allow"}

    enabled: bool = Field(default=False)
    log_path: Path = Field(default=Path("./rebac_audit.jsonl"))


class ReBACSettings(BaseModel):
    """Top-level ReBAC configuration schema.

    All sections are optional and fall back to sensible defaults. When
    ``permission_rules`` is omitted the built-in owns/editor/viewer table is
    used.
    """

    model_config = {"extra": "allow"}

    version: str = Field(default="1")
    exploration: ExplorationSettings = Field(default_factory=ExplorationSettings)
    permission_rules: list[PermissionRuleSettings] | None = Field(default=None)
    relations: list[RelationSettings] = Field(default_factory=list)
    audit: AuditSettings = Field(default_factory=AuditSettings)

    @field_validator("version", mode="before")
    @classmethod
    def validate_version(cls, value: object) -> str:
        version = str(value)
        if version not in _SUPPORTED_VERSIONS:
            raise ValueError(
                f"Unsupported config version {version!r}. Supported: {sorted(_SUPPORTED_VERSIONS)}."
            )
        return version

    @field_validator("permission_rules")
    @classmethod
    def validate_unique_relations(
        cls, rules: list[PermissionRuleSettings] | None
    ) -> list[PermissionRuleSettings] | None:
        if rules is None:
            return rules
        seen: set[RelationType] = set()
        for rule in rules:
            if rule.relation in seen:
                raise ValueError(f"Duplicate permission rule for relation {rule.relation.value!r}.")
            seen.add(rule.relation)
        return rules

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------

    def exploration_config(self) -> ExplorationConfig:
        return ExplorationConfig(max_depth=self.exploration.max_depth)

    def rules(self) -> list[PermissionRule] | None:
        """Permission rules, or None to use the defaults."""
        if self.permission_rules is None:
            return None
        return [rule.to_rule() for rule in self.permission_rules]

    def build_graph(self) -> RelationGraph:
        """Return a new graph populated with the configured relations."""
        return RelationGraph(relation.to_tuple() for relation in self.relations)

    def build_audit_logger(self) -> DecisionAuditLogger | None:
        if not self.audit.enabled:
            return None
        return DecisionAuditLogger(log_path=self.audit.log_path)

    def build_resource(
        self,
        resource_id: str,
        graph: RelationGraph | None = None,
    ) -> ReBACProtectedResource:
        """Return a protected resource wired with this configuration.

        A fresh graph is built from ``relations`` when ``graph`` is omitted.
        """
        return ReBACProtectedResource(
            resource_id,
            graph if graph is not None else self.build_graph(),
            permission_rules=self.rules(),
            config=self.exploration_config(),
            audit_logger=self.build_audit_logger(),
        )


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------


class ConfigLoader:
    """Loads and validates ReBAC YAML configuration.

    Example
    -------
    >>> loader = ConfigLoader()
    >>> settings = loader.load(Path("rebac.yaml"))
    """

    def load(self, config_path: str | Path) -> ReBACSettings:
        """Load and validate a ReBAC YAML file.

        Raises
        ------
        FileNotFoundError:
            When the config file does not exist.
        ReBACConfigError:
            When the YAML cannot be parsed or fails validation.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"ReBAC config not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ReBACConfigError(f"Failed to parse YAML: {exc}", str(config_path)) from exc

        return self._validate(raw, str(config_path))

    def load_string(self, yaml_content: str, config_path: str | None = None) -> ReBACSettings:
        """Load and validate a YAML string directly."""
        try:
            raw = yaml.safe_load(yaml_content) or {}
        except yaml.YAMLError as exc:
            raise ReBACConfigError(f"Failed to parse YAML string: {exc}", config_path) from exc
        return self._validate(raw, config_path)

    def load_from_dict(
        self,
        config: dict[str, object],
        config_path: str | None = None,
    ) -> ReBACSettings:
        """Validate an already-parsed config dictionary."""
        return self._validate(config, config_path)

    def defaults(self) -> ReBACSettings:
        """Return a default configuration with all defaults applied."""
        return ReBACSettings()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _validate(self, raw: object, config_path: str | None) -> ReBACSettings:
        if not isinstance(raw, dict):
            raise ReBACConfigError("ReBAC config must be a YAML mapping (dict).", config_path)
        try:
            settings = ReBACSettings.model_validate(raw)
        except ValidationError as exc:
            raise ReBACConfigError(f"Invalid configuration: {exc}", config_path) from exc

        logger.info(
            "Loaded ReBAC config from %s: %d relations, %s rules, max_depth=%d",
            config_path or "<dict>",
            len(settings.relations),
            "default" if settings.permission_rules is None else len(settings.permission_rules),
            settings.exploration.max_depth,
        )
        return settings
