"""Capability registry, routing rule tables and named chains."""

from agentdeck.registry.loader import (
    RoutingConfig,
    get_routing_config,
    reload_routing_config,
)
from agentdeck.registry.models import (
    UNREGISTERED_PRIORITY,
    AgentCapability,
    AgentId,
    Chain,
    ChainPhase,
    ChainRef,
    GlobPattern,
    KeywordPattern,
    RoutingRule,
)
from agentdeck.registry.personas import AgentPersona, discover_personas
from agentdeck.registry.validation import ConfigurationError, ValidationWarning

__all__ = [
    "UNREGISTERED_PRIORITY",
    "AgentCapability",
    "AgentId",
    "AgentPersona",
    "Chain",
    "ChainPhase",
    "ChainRef",
    "ConfigurationError",
    "GlobPattern",
    "KeywordPattern",
    "RoutingConfig",
    "RoutingRule",
    "ValidationWarning",
    "discover_personas",
    "get_routing_config",
    "reload_routing_config",
]
