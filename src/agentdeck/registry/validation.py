"""Load-time validation of the capability registry and routing tables."""

from __future__ import annotations

from collections.abc import Iterable

import networkx as nx

from agentdeck.registry.models import AgentCapability, Chain, RoutingRule


class ConfigurationError(Exception):
    """Raised when routing configuration cannot be used (cycles, bad schema)."""


class ValidationWarning:
    """A non-fatal validation finding."""

    def __init__(self, message: str) -> None:
        self.message = message

    def __repr__(self) -> str:
        return f"ValidationWarning({self.message!r})"


def build_dependency_graph(capabilities: Iterable[AgentCapability]) -> nx.DiGraph:
    """Directed graph with an edge dependency -> dependent for every declared dependency."""
    graph = nx.DiGraph()
    for cap in capabilities:
        graph.add_node(str(cap.id))
        for dep in cap.dependencies:
            graph.add_edge(str(dep), str(cap.id))
    return graph


def validate_acyclic(capabilities: Iterable[AgentCapability]) -> None:
    """Raise ConfigurationError if the dependency graph contains a cycle."""
    graph = build_dependency_graph(capabilities)
    if nx.is_directed_acyclic_graph(graph):
        return
    cycle = nx.find_cycle(graph)
    path = " -> ".join([str(u) for u, _ in cycle] + [str(cycle[0][0])])
    raise ConfigurationError(f"Agent dependency cycle: {path}")


def validate_unique_ids(capabilities: Iterable[AgentCapability]) -> None:
    seen: set[str] = set()
    for cap in capabilities:
        if cap.id in seen:
            raise ConfigurationError(f"Duplicate capability entry for '{cap.id}'")
        seen.add(cap.id)


def validate_chain_names(chains: Iterable[Chain]) -> None:
    seen: set[str] = set()
    for chain in chains:
        if not chain.phases:
            raise ConfigurationError(f"Chain '{chain.name}' has no phases")
        if chain.name in seen:
            raise ConfigurationError(f"Duplicate chain name '{chain.name}'")
        seen.add(chain.name)


def find_dangling_dependencies(
    capabilities: Iterable[AgentCapability],
) -> list[ValidationWarning]:
    """Flag dependencies on agents that have no capability entry of their own."""
    caps = list(capabilities)
    registered = {cap.id for cap in caps}
    warnings: list[ValidationWarning] = []
    for cap in caps:
        for dep in cap.dependencies:
            if dep not in registered:
                warnings.append(
                    ValidationWarning(
                        f"Agent '{cap.id}' depends on '{dep}' which has no capability entry"
                    )
                )
    return warnings


def find_unreachable_rules(rules: Iterable[RoutingRule]) -> list[ValidationWarning]:
    """Flag rules that route to no agents."""
    warnings: list[ValidationWarning] = []
    for rule in rules:
        if not rule.agents:
            label = getattr(rule.pattern, "glob", None) or getattr(rule.pattern, "regex", "")
            warnings.append(ValidationWarning(f"Rule '{label}' routes to no agents"))
    return warnings
