"""Tests for registry load-time validation."""

from __future__ import annotations

import pytest

from agentdeck.registry.models import AgentCapability, AgentId, Chain, RoutingRule
from agentdeck.registry.validation import (
    ConfigurationError,
    build_dependency_graph,
    find_dangling_dependencies,
    find_unreachable_rules,
    validate_acyclic,
    validate_chain_names,
    validate_unique_ids,
)


def _cap(agent: AgentId, priority: int = 1, deps: list[AgentId] | None = None) -> AgentCapability:
    return AgentCapability(id=agent, priority=priority, dependencies=deps or [])


@pytest.mark.unit
def test_dependency_graph_edges_point_to_dependent():
    graph = build_dependency_graph([_cap(AgentId.TESTING, deps=[AgentId.BACKEND])])
    assert graph.has_edge("backend-agent", "testing-agent")


@pytest.mark.unit
def test_acyclic_registry_passes():
    validate_acyclic(
        [
            _cap(AgentId.BACKEND),
            _cap(AgentId.FRONTEND),
            _cap(AgentId.TESTING, deps=[AgentId.FRONTEND, AgentId.BACKEND]),
        ]
    )


@pytest.mark.unit
def test_cycle_is_rejected():
    with pytest.raises(ConfigurationError, match="cycle"):
        validate_acyclic(
            [
                _cap(AgentId.BACKEND, deps=[AgentId.TESTING]),
                _cap(AgentId.TESTING, deps=[AgentId.BACKEND]),
            ]
        )


@pytest.mark.unit
def test_self_dependency_is_a_cycle():
    with pytest.raises(ConfigurationError):
        validate_acyclic([_cap(AgentId.DATA, deps=[AgentId.DATA])])


@pytest.mark.unit
def test_duplicate_capability_ids_rejected():
    with pytest.raises(ConfigurationError, match="backend-agent"):
        validate_unique_ids([_cap(AgentId.BACKEND), _cap(AgentId.BACKEND, priority=2)])


@pytest.mark.unit
def test_chain_without_phases_rejected():
    with pytest.raises(ConfigurationError, match="no phases"):
        validate_chain_names([Chain(name="empty", phases=[])])


@pytest.mark.unit
def test_dangling_dependency_warns():
    warnings = find_dangling_dependencies([_cap(AgentId.MOBILE, deps=[AgentId.BACKEND])])
    assert len(warnings) == 1
    assert "backend-agent" in warnings[0].message
    assert "mobile-agent" in warnings[0].message


@pytest.mark.unit
def test_no_dangling_when_all_registered():
    caps = [_cap(AgentId.BACKEND), _cap(AgentId.MOBILE, deps=[AgentId.BACKEND])]
    assert find_dangling_dependencies(caps) == []


@pytest.mark.unit
def test_empty_rule_warns():
    rule = RoutingRule.model_validate(
        {"pattern": {"kind": "glob", "glob": "**/*.md"}, "agents": []}
    )
    warnings = find_unreachable_rules([rule])
    assert len(warnings) == 1
    assert "**/*.md" in warnings[0].message
