"""Shared fixtures for agentdeck tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from agentdeck.registry import loader
from agentdeck.registry.loader import RoutingConfig
from agentdeck.routing.router import AgentRouter


@pytest.fixture(autouse=True)
def _isolate_routing(monkeypatch: pytest.MonkeyPatch):
    """No test sees another test's active config or the caller's environment."""
    monkeypatch.setattr(loader, "_active", None)
    for var in ("AGENTDECK_PARALLEL", "AGENTDECK_ROUTING_RULES", "AGENTDECK_PERSONAS_DIR"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def config() -> RoutingConfig:
    return RoutingConfig.load()


@pytest.fixture
def router(config: RoutingConfig) -> AgentRouter:
    return AgentRouter(config)


def capability(agent: str, priority: int, deps: list[str] | None = None) -> dict:
    return {"id": agent, "priority": priority, "dependencies": deps or []}


def make_config(
    capabilities: list[dict],
    rules: list[dict] | None = None,
    chains: list[dict] | None = None,
) -> RoutingConfig:
    """Build a RoutingConfig from plain dicts, validated like a file."""
    return RoutingConfig._from_dict(
        {"capabilities": capabilities, "rules": rules or [], "chains": chains or []}
    )


def write_config(path: Path, data: dict) -> Path:
    path.write_text(json.dumps(data))
    return path
