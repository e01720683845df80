"""CLI entry point for agentdeck."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING, cast

from agentdeck import __version__

if TYPE_CHECKING:
    from agentdeck.registry import RoutingConfig


def _active_config() -> RoutingConfig:
    from agentdeck.registry import ConfigurationError, get_routing_config

    try:
        return get_routing_config()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _cmd_route(args: argparse.Namespace) -> None:
    from agentdeck.routing import AgentRouter, RouteContext

    task = cast(str, args.task)
    context = RouteContext(
        files=cast(list[str], args.files or []),
        chain_type=cast(str | None, args.chain),
        parallel=False if args.sequential else None,
    )
    router = AgentRouter(_active_config())
    result = router.route(task, context)
    calls = router.generate_task_calls(result, task)

    if args.json:
        payload = {
            "routing": result.model_dump(mode="json"),
            "task_calls": [c.model_dump(mode="json") for c in calls],
        }
        print(json.dumps(payload, indent=2))
        return

    label = f"chain '{result.chain.name}'" if result.chain else "dynamic"
    print(f"Routing: {label}")
    print(f"Agents:  {', '.join(result.agents)}")
    for i, group in enumerate(result.plan, 1):
        mode = "parallel" if group.parallel else "sequential"
        print(f"  Phase {i} ({mode}): {', '.join(group.agents)}")


def _cmd_detect(args: argparse.Namespace) -> None:
    from agentdeck.bootstrap.detector import analyze_project
    from agentdeck.routing import get_recommended_agents

    root = cast(Path, args.path)
    if not root.is_dir():
        print(f"Error: not a directory: {root}", file=sys.stderr)
        sys.exit(1)

    info = analyze_project(root)
    recommended = get_recommended_agents(info)

    if args.json:
        payload = {
            "project": info.model_dump(mode="json"),
            "recommended_agents": recommended,
        }
        print(json.dumps(payload, indent=2))
        return

    for field in ("type", "frontend", "backend", "mobile", "database", "deployment", "testing"):
        value = getattr(info, field)
        print(f"{field.capitalize() + ':':<12}{value or '-'}")
    features = ", ".join(sorted(info.features)) or "-"
    print(f"{'Features:':<12}{features}")
    print(f"\nRecommended agents: {', '.join(recommended)}")


def _cmd_agents(args: argparse.Namespace) -> None:
    from agentdeck.registry import discover_personas
    from agentdeck.routing import load_routing_settings

    config = _active_config()
    print("Registered agents:")
    for cap in sorted(config.all_capabilities(), key=lambda c: (c.priority, c.id)):
        deps = ", ".join(cap.dependencies) or "-"
        print(f"  {cap.id:<16} priority={cap.priority}  depends on: {deps}")

    personas_dir = cast(Path | None, args.personas_dir)
    if personas_dir is None:
        personas_dir = Path(load_routing_settings().personas_dir)
    personas = discover_personas(personas_dir)
    if personas:
        print(f"\nPersonas in {personas_dir}:")
        for persona in personas:
            print(f"  {persona.id}\t{persona.name}\t{persona.summary or ''}")


def _cmd_chains(_args: argparse.Namespace) -> None:
    config = _active_config()
    for name in config.chain_names():
        chain = config.get_chain(name)
        if chain is None:
            continue
        print(name)
        for i, phase in enumerate(chain.phases, 1):
            mode = "parallel" if phase.parallel else "sequential"
            print(f"  {i}. ({mode}) {', '.join(phase.agents)}")


def _cmd_validate(args: argparse.Namespace) -> None:
    from agentdeck.registry import ConfigurationError, RoutingConfig

    rules = cast(Path | None, args.rules)
    try:
        config = RoutingConfig.from_json(rules) if rules else RoutingConfig.load()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    for warning in config.warnings:
        print(f"Warning: {warning.message}")
    print(
        f"OK: version {config.version}, {len(config.all_capabilities())} capabilities, "
        f"{len(config.chain_names())} chains"
    )


def _configure_logging(verbose: bool) -> None:
    level_name = "DEBUG" if verbose else os.environ.get("AGENTDECK_LOG_LEVEL", "WARNING")
    level = getattr(logging, level_name.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="agentdeck",
        description="Route coding tasks to specialised AI agent personas",
    )
    _ = parser.add_argument(
        "-V", "--version", action="version", version=f"agentdeck {__version__}"
    )
    _ = parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    # route subcommand
    route_p = subparsers.add_parser("route", help="Select and schedule agents for a task")
    _ = route_p.add_argument("task", help="Task description")
    _ = route_p.add_argument(
        "-f",
        "--file",
        action="append",
        dest="files",
        help="File touched by the task (repeatable)",
    )
    _ = route_p.add_argument("--chain", default=None, help="Use a named chain")
    _ = route_p.add_argument(
        "--sequential", action="store_true", help="Mark dynamic phases as sequential"
    )
    _ = route_p.add_argument("--json", action="store_true", help="Emit JSON")

    # detect subcommand
    detect_p = subparsers.add_parser("detect", help="Detect a project's stack")
    _ = detect_p.add_argument("path", nargs="?", type=Path, default=Path("."))
    _ = detect_p.add_argument("--json", action="store_true", help="Emit JSON")

    # agents subcommand
    agents_p = subparsers.add_parser("agents", help="List registered agents and personas")
    _ = agents_p.add_argument(
        "--personas-dir", type=Path, default=None, dest="personas_dir"
    )

    # chains subcommand
    _ = subparsers.add_parser("chains", help="List named chains")

    # validate subcommand
    validate_p = subparsers.add_parser("validate", help="Validate a routing config file")
    _ = validate_p.add_argument("rules", nargs="?", type=Path, default=None)

    args = parser.parse_args()
    _configure_logging(cast(bool, args.verbose))

    dispatch = {
        "route": _cmd_route,
        "detect": _cmd_detect,
        "agents": _cmd_agents,
        "chains": _cmd_chains,
        "validate": _cmd_validate,
    }
    command = cast(str | None, args.command)
    handler = dispatch.get(command) if command is not None else None
    if handler:
        handler(args)
    else:
        parser.print_help()
        sys.exit(1)
