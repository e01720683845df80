"""Group an ordered agent list into dependency-safe execution phases."""

from __future__ import annotations

from collections.abc import Sequence

from agentdeck.registry.loader import RoutingConfig
from agentdeck.routing.models import ExecutionGroup


class _PlanBuilder:
    def __init__(self, agents: list[str], config: RoutingConfig, prefer_parallel: bool) -> None:
        self._selected = set(agents)
        self._config = config
        self._parallel = prefer_parallel
        self.groups: list[ExecutionGroup] = []
        self._group_of: dict[str, int] = {}

    def _deps(self, agent: str) -> list[str]:
        return [d for d in self._config.dependencies_of(agent) if d in self._selected]

    def _unplaced_deps(self, agent: str) -> list[str]:
        return [d for d in self._deps(agent) if d not in self._group_of]

    def _related(self, a: str, b: str) -> bool:
        return b in self._config.dependencies_of(a) or a in self._config.dependencies_of(b)

    def _new_group(self, agents: list[str]) -> None:
        index = len(self.groups)
        self.groups.append(ExecutionGroup(agents=list(agents), parallel=self._parallel))
        for agent in agents:
            self._group_of[agent] = index

    def place(self, agent: str, visiting: frozenset[str] = frozenset()) -> None:
        if agent in self._group_of or agent in visiting:
            return
        visiting = visiting | {agent}

        pending = self._unplaced_deps(agent)
        if pending:
            # Dependencies of the pending dependencies must land before them.
            for dep in pending:
                for inner in self._unplaced_deps(dep):
                    self.place(inner, visiting)
            remaining = [d for d in pending if d not in self._group_of]
            if remaining:
                self._new_group(remaining)

        floor = max((self._group_of[d] for d in self._deps(agent) if d in self._group_of), default=-1)
        for index in range(floor + 1, len(self.groups)):
            group = self.groups[index]
            if not any(self._related(agent, member) for member in group.agents):
                group.agents.append(agent)
                self._group_of[agent] = index
                return
        self._new_group([agent])


def get_execution_plan(
    ordered_agents: Sequence[str],
    config: RoutingConfig,
    prefer_parallel: bool = True,
) -> list[ExecutionGroup]:
    """Pack agents into the earliest phase their dependencies allow.

    Every input agent appears exactly once, and an agent's phase always
    comes after the phases of its selected dependencies.
    """
    agents = list(dict.fromkeys(str(a) for a in ordered_agents))
    builder = _PlanBuilder(agents, config, prefer_parallel)
    for agent in agents:
        builder.place(agent)
    return builder.groups
