"""Tests for registry pydantic models."""

from __future__ import annotations

import pytest
from pydantic import TypeAdapter, ValidationError

from agentdeck.registry.models import (
    AgentCapability,
    AgentId,
    Chain,
    ChainPhase,
    ChainRef,
    GlobPattern,
    KeywordPattern,
    RoutingRule,
)


@pytest.mark.unit
def test_agent_id_values_are_identifiers():
    assert AgentId.FRONTEND == "frontend-agent"
    assert AgentId.GENERAL_PURPOSE == "general-purpose"
    assert AgentId("testing-agent") is AgentId.TESTING


@pytest.mark.unit
def test_capability_defaults():
    cap = AgentCapability(id=AgentId.DESIGN, priority=1)
    assert cap.dependencies == []
    assert cap.capabilities == []


@pytest.mark.unit
def test_capability_rejects_unknown_agent():
    with pytest.raises(ValidationError):
        AgentCapability.model_validate({"id": "ghost-agent", "priority": 1})


@pytest.mark.unit
def test_capability_is_frozen():
    cap = AgentCapability(id=AgentId.DESIGN, priority=1)
    with pytest.raises(ValidationError):
        cap.priority = 5  # type: ignore[misc]


@pytest.mark.unit
def test_rule_pattern_discriminates_on_kind():
    glob_rule = RoutingRule.model_validate(
        {"pattern": {"kind": "glob", "glob": "**/*.sql"}, "agents": ["data-agent"]}
    )
    keyword_rule = RoutingRule.model_validate(
        {"pattern": {"kind": "keyword", "regex": "deploy"}, "agents": ["devops-agent"]}
    )
    assert isinstance(glob_rule.pattern, GlobPattern)
    assert isinstance(keyword_rule.pattern, KeywordPattern)


@pytest.mark.unit
def test_rule_rejects_chain_pattern():
    with pytest.raises(ValidationError):
        RoutingRule.model_validate(
            {"pattern": {"kind": "chain", "name": "bug-fix"}, "agents": ["testing-agent"]}
        )


@pytest.mark.unit
def test_keyword_pattern_rejects_invalid_regex():
    with pytest.raises(ValidationError):
        KeywordPattern(regex="(unclosed")


@pytest.mark.unit
def test_chain_ref():
    chain = Chain(name="bug-fix", phases=[ChainPhase(agents=[AgentId.TESTING])])
    assert chain.ref() == ChainRef(name="bug-fix")
    assert chain.phases[0].parallel is False


@pytest.mark.unit
def test_chain_ref_round_trips_through_json():
    adapter = TypeAdapter(ChainRef)
    assert adapter.validate_json('{"kind": "chain", "name": "x"}') == ChainRef(name="x")
