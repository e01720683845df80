"""Tests for RoutingConfig loading and the active-config swap."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from agentdeck.registry import loader
from agentdeck.registry.loader import (
    RoutingConfig,
    get_routing_config,
    reload_routing_config,
)
from agentdeck.registry.models import UNREGISTERED_PRIORITY, AgentId
from agentdeck.registry.validation import ConfigurationError
from tests.conftest import capability, write_config

REGISTERED_AGENTS = 8
BUNDLED_CHAINS = {"feature-development", "bug-fix", "security-audit", "performance-optimization"}


@pytest.mark.unit
def test_load_from_package():
    config = RoutingConfig.load()
    assert len(config.all_capabilities()) == REGISTERED_AGENTS
    assert set(config.chain_names()) == BUNDLED_CHAINS
    assert config.fallback_agent == AgentId.GENERAL_PURPOSE
    assert config.version == 1


@pytest.mark.unit
def test_bundled_config_has_no_warnings():
    assert RoutingConfig.load().warnings == ()


@pytest.mark.unit
def test_bundled_rules_split_by_kind():
    config = RoutingConfig.load()
    assert len(config.keyword_rules()) == 16
    assert len(config.file_rules()) == 15
    globs = [p.glob for p, _ in config.file_rules()]
    assert "**/*.tsx" in globs


@pytest.mark.unit
def test_get_known_capability():
    config = RoutingConfig.load()
    testing = config.get("testing-agent")
    assert testing is not None
    assert testing.priority == 3
    assert set(testing.dependencies) == {AgentId.FRONTEND, AgentId.BACKEND}


@pytest.mark.unit
def test_unknown_agent_lookups_do_not_fail():
    config = RoutingConfig.load()
    assert config.get("ghost-agent") is None
    assert config.priority_of("ghost-agent") == UNREGISTERED_PRIORITY
    assert config.dependencies_of("ghost-agent") == []
    # known persona without a capability entry
    assert config.priority_of("payment-agent") == UNREGISTERED_PRIORITY


@pytest.mark.unit
def test_get_chain():
    config = RoutingConfig.load()
    chain = config.get_chain("bug-fix")
    assert chain is not None
    assert [p.parallel for p in chain.phases] == [False, True, False]
    assert config.get_chain("nope") is None


@pytest.mark.unit
def test_from_json(tmp_path: Path):
    path = write_config(
        tmp_path / "rules.json",
        {
            "version": 7,
            "capabilities": [capability("backend-agent", 1)],
            "rules": [
                {"pattern": {"kind": "keyword", "regex": "api"}, "agents": ["backend-agent"]}
            ],
        },
    )
    config = RoutingConfig.from_json(path)
    assert config.version == 7
    assert config.chain_names() == []
    assert len(config.keyword_rules()) == 1


@pytest.mark.unit
def test_from_json_missing_file(tmp_path: Path):
    with pytest.raises(ConfigurationError, match="Cannot read"):
        RoutingConfig.from_json(tmp_path / "missing.json")


@pytest.mark.unit
def test_from_json_malformed(tmp_path: Path):
    path = tmp_path / "rules.json"
    path.write_text("{not json")
    with pytest.raises(ConfigurationError, match="Malformed"):
        RoutingConfig.from_json(path)


@pytest.mark.unit
def test_unknown_agent_in_rule_is_configuration_error(tmp_path: Path):
    path = write_config(
        tmp_path / "rules.json",
        {"rules": [{"pattern": {"kind": "glob", "glob": "*"}, "agents": ["ghost-agent"]}]},
    )
    with pytest.raises(ConfigurationError):
        RoutingConfig.from_json(path)


@pytest.mark.unit
def test_cycle_rejected_at_load(tmp_path: Path):
    path = write_config(
        tmp_path / "rules.json",
        {
            "capabilities": [
                capability("backend-agent", 1, ["testing-agent"]),
                capability("testing-agent", 2, ["backend-agent"]),
            ]
        },
    )
    with pytest.raises(ConfigurationError, match="cycle"):
        RoutingConfig.from_json(path)


@pytest.mark.unit
def test_dangling_dependency_logged(tmp_path: Path, caplog: pytest.LogCaptureFixture):
    path = write_config(
        tmp_path / "rules.json",
        {"capabilities": [capability("mobile-agent", 2, ["backend-agent"])]},
    )
    with caplog.at_level("WARNING"):
        config = RoutingConfig.from_json(path)
    assert len(config.warnings) == 1
    assert "backend-agent" in caplog.text


@pytest.mark.unit
def test_get_routing_config_is_cached():
    first = get_routing_config()
    assert get_routing_config() is first


@pytest.mark.unit
def test_get_routing_config_honours_rules_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    path = write_config(tmp_path / "rules.json", {"version": 3})
    monkeypatch.setenv("AGENTDECK_ROUTING_RULES", str(path))
    assert get_routing_config().version == 3


@pytest.mark.unit
def test_reload_swaps_active_config(tmp_path: Path):
    before = get_routing_config()
    path = write_config(tmp_path / "rules.json", {"version": 2})
    after = reload_routing_config(path)
    assert after is not before
    assert get_routing_config() is after
    assert after.version == 2


@pytest.mark.unit
def test_failed_reload_keeps_previous_config(tmp_path: Path):
    before = get_routing_config()
    path = tmp_path / "rules.json"
    path.write_text(json.dumps({"capabilities": [{"id": "nope", "priority": 1}]}))
    with pytest.raises(ConfigurationError):
        reload_routing_config(path)
    assert loader._active is before
