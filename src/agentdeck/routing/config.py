"""Configuration for task routing."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".agentdeck.json"


def _env_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "yes")


@dataclass
class RoutingSettings:
    prefer_parallel: bool = True
    rules_path: str | None = None
    personas_dir: str = ".claude/agents"

    @classmethod
    def from_env(cls) -> RoutingSettings:
        config = cls()
        _apply_env(config)
        return config

    @classmethod
    def from_file(cls, path: Path) -> RoutingSettings:
        config = cls()

        if path.exists():
            try:
                data = json.loads(path.read_text())
                section = data.get("routing", {})
                if isinstance(section, dict):
                    _apply(config, section)
            except (json.JSONDecodeError, OSError, AttributeError) as e:
                logger.warning(f"Failed to load routing config from {path}: {e}")

        _apply_env(config)
        return config


def _apply(config: RoutingSettings, data: dict[str, object]) -> None:
    if "prefer_parallel" in data and isinstance(data["prefer_parallel"], bool):
        config.prefer_parallel = data["prefer_parallel"]
    if "rules_path" in data and isinstance(data["rules_path"], str):
        config.rules_path = data["rules_path"]
    if "personas_dir" in data and isinstance(data["personas_dir"], str):
        config.personas_dir = data["personas_dir"]


def _apply_env(config: RoutingSettings) -> None:
    if parallel := os.environ.get("AGENTDECK_PARALLEL"):
        config.prefer_parallel = _env_bool(parallel)
    if rules_path := os.environ.get("AGENTDECK_ROUTING_RULES"):
        config.rules_path = rules_path
    if personas_dir := os.environ.get("AGENTDECK_PERSONAS_DIR"):
        config.personas_dir = personas_dir


def load_routing_settings(path: Path | None = None) -> RoutingSettings:
    if path is None:
        path = Path.cwd() / CONFIG_FILENAME
    return RoutingSettings.from_file(path)
