"""RoutingConfig: load and query the capability registry and routing tables."""

from __future__ import annotations

import json
import logging
import threading
from importlib import resources
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from agentdeck.registry.models import (
    UNREGISTERED_PRIORITY,
    AgentCapability,
    AgentId,
    Chain,
    GlobPattern,
    KeywordPattern,
    RoutingRule,
)
from agentdeck.registry.validation import (
    ConfigurationError,
    ValidationWarning,
    find_dangling_dependencies,
    find_unreachable_rules,
    validate_acyclic,
    validate_chain_names,
    validate_unique_ids,
)

logger = logging.getLogger(__name__)

BUNDLED_CONFIG = "routing-config.json"


class RoutingConfigFile(BaseModel):
    """On-disk schema of a routing configuration."""

    version: int = 1
    fallback_agent: AgentId = AgentId.GENERAL_PURPOSE
    capabilities: list[AgentCapability] = Field(default_factory=list)
    rules: list[RoutingRule] = Field(default_factory=list)
    chains: list[Chain] = Field(default_factory=list)


class RoutingConfig:
    """Immutable, validated routing configuration."""

    def __init__(
        self,
        capabilities: list[AgentCapability],
        rules: list[RoutingRule],
        chains: list[Chain],
        *,
        version: int = 1,
        fallback_agent: AgentId = AgentId.GENERAL_PURPOSE,
    ) -> None:
        validate_unique_ids(capabilities)
        validate_acyclic(capabilities)
        validate_chain_names(chains)

        self.version = version
        self.fallback_agent = fallback_agent
        self._capabilities = tuple(capabilities)
        self._by_id: dict[str, AgentCapability] = {str(c.id): c for c in capabilities}
        self._rules = tuple(rules)
        self._chains: dict[str, Chain] = {c.name: c for c in chains}
        self.warnings: tuple[ValidationWarning, ...] = tuple(
            find_dangling_dependencies(capabilities) + find_unreachable_rules(rules)
        )
        for warning in self.warnings:
            logger.warning(warning.message)

    @classmethod
    def load(cls) -> RoutingConfig:
        """Load from bundled package data."""
        pkg = resources.files("agentdeck.registry")
        data = json.loads(pkg.joinpath(BUNDLED_CONFIG).read_text(encoding="utf-8"))
        return cls._from_dict(data)

    @classmethod
    def from_json(cls, path: Path) -> RoutingConfig:
        """Load from an explicit file path."""
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigurationError(f"Cannot read routing config {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Malformed routing config {path}: {e}") from e
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: object) -> RoutingConfig:
        try:
            parsed = RoutingConfigFile.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid routing config: {e}") from e
        return cls(
            parsed.capabilities,
            parsed.rules,
            parsed.chains,
            version=parsed.version,
            fallback_agent=parsed.fallback_agent,
        )

    def get(self, agent_id: str) -> AgentCapability | None:
        return self._by_id.get(agent_id)

    def all_capabilities(self) -> list[AgentCapability]:
        return list(self._capabilities)

    def priority_of(self, agent_id: str) -> int:
        cap = self._by_id.get(agent_id)
        return cap.priority if cap else UNREGISTERED_PRIORITY

    def dependencies_of(self, agent_id: str) -> list[str]:
        cap = self._by_id.get(agent_id)
        return [str(d) for d in cap.dependencies] if cap else []

    def keyword_rules(self) -> list[tuple[KeywordPattern, list[AgentId]]]:
        return [(r.pattern, r.agents) for r in self._rules if isinstance(r.pattern, KeywordPattern)]

    def file_rules(self) -> list[tuple[GlobPattern, list[AgentId]]]:
        return [(r.pattern, r.agents) for r in self._rules if isinstance(r.pattern, GlobPattern)]

    def get_chain(self, name: str) -> Chain | None:
        return self._chains.get(name)

    def chain_names(self) -> list[str]:
        return list(self._chains)


_lock = threading.Lock()
_active: RoutingConfig | None = None


def _initial_config() -> RoutingConfig:
    from agentdeck.routing.config import load_routing_settings

    settings = load_routing_settings()
    if settings.rules_path:
        logger.debug(f"Loading routing rules from {settings.rules_path}")
        return RoutingConfig.from_json(Path(settings.rules_path))
    return RoutingConfig.load()


def get_routing_config() -> RoutingConfig:
    """Return the process-wide routing config, loading it on first use."""
    global _active
    config = _active
    if config is not None:
        return config
    with _lock:
        if _active is None:
            _active = _initial_config()
        return _active


def reload_routing_config(path: Path | None = None) -> RoutingConfig:
    """Build and validate a new config, then swap it in.

    On ConfigurationError the previously active config stays in place.
    """
    global _active
    fresh = RoutingConfig.from_json(path) if path is not None else RoutingConfig.load()
    with _lock:
        _active = fresh
    logger.info(f"Routing config reloaded (version {fresh.version})")
    return fresh
