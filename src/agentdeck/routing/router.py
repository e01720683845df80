"""Task-to-agent routing: classify a task, order agents, build a plan."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

import networkx as nx

from agentdeck.bootstrap.models import Backend, Deployment, Feature, Mobile, ProjectInfo
from agentdeck.registry.loader import RoutingConfig, get_routing_config
from agentdeck.registry.models import AgentId
from agentdeck.routing.config import load_routing_settings
from agentdeck.routing.matching import match_glob, match_keyword
from agentdeck.routing.models import (
    ExecutionGroup,
    RouteContext,
    RoutingResult,
    RoutingType,
    TaskCall,
)
from agentdeck.routing.planner import get_execution_plan
from agentdeck.routing.task_calls import generate_task_calls

logger = logging.getLogger(__name__)


class AgentRouter:
    """Selects agents for a task and schedules them into phases.

    With no explicit config the router reads the process-wide active config
    on every call, so a reload is picked up by existing routers. The active
    config is loaded on construction, so a ConfigurationError surfaces here
    rather than from ``route``. ``prefer_parallel`` defaults to the
    RoutingSettings value at construction time.
    """

    def __init__(
        self, config: RoutingConfig | None = None, prefer_parallel: bool | None = None
    ) -> None:
        self._config = config
        if config is None:
            get_routing_config()
        if prefer_parallel is None:
            prefer_parallel = load_routing_settings().prefer_parallel
        self.prefer_parallel = prefer_parallel

    @property
    def config(self) -> RoutingConfig:
        return self._config if self._config is not None else get_routing_config()

    def analyze_task(self, task_description: str, files: Iterable[str] = ()) -> list[str]:
        """Agents for a task, dependency-ordered; never empty."""
        config = self.config
        selected: dict[str, None] = {}

        for pattern, agents in config.keyword_rules():
            if match_keyword(task_description, pattern.regex):
                selected.update(dict.fromkeys(str(a) for a in agents))

        for file in files:
            path = file.replace("\\", "/")
            for pattern, agents in config.file_rules():
                if match_glob(path, pattern.glob):
                    selected.update(dict.fromkeys(str(a) for a in agents))

        if not selected:
            logger.debug(f"No routing rule matched, using {config.fallback_agent}")
            return [str(config.fallback_agent)]

        return self.order_agents(selected, config)

    def order_agents(self, agents: Iterable[str], config: RoutingConfig | None = None) -> list[str]:
        """Dependencies first, then priority ascending, then first-seen order."""
        config = config or self.config
        unique = list(dict.fromkeys(str(a) for a in agents))
        position = {agent: i for i, agent in enumerate(unique)}

        graph = nx.DiGraph()
        graph.add_nodes_from(unique)
        for agent in unique:
            for dep in config.dependencies_of(agent):
                if dep in position:
                    graph.add_edge(dep, agent)

        return list(
            nx.lexicographical_topological_sort(
                graph, key=lambda a: (config.priority_of(a), position[a])
            )
        )

    def get_execution_plan(
        self, ordered_agents: Sequence[str], prefer_parallel: bool = True
    ) -> list[ExecutionGroup]:
        return get_execution_plan(ordered_agents, self.config, prefer_parallel)

    def route(self, task_description: str, context: RouteContext | None = None) -> RoutingResult:
        """Explicit chains win; otherwise classify the task and plan dynamically."""
        context = context or RouteContext()
        config = self.config

        if context.chain_type:
            chain = config.get_chain(context.chain_type)
            if chain is not None:
                plan = [
                    ExecutionGroup(agents=[str(a) for a in phase.agents], parallel=phase.parallel)
                    for phase in chain.phases
                ]
                agents = list(dict.fromkeys(a for group in plan for a in group.agents))
                return RoutingResult(
                    type=RoutingType.CHAIN, agents=agents, plan=plan, chain=chain.ref()
                )
            logger.warning(f"Unknown chain '{context.chain_type}', routing dynamically")

        parallel = self.prefer_parallel if context.parallel is None else context.parallel

        agents = self.analyze_task(task_description, context.files)
        plan = get_execution_plan(agents, config, parallel)
        logger.debug(f"Routed to {agents} in {len(plan)} phase(s)")
        return RoutingResult(type=RoutingType.DYNAMIC, agents=agents, plan=plan)

    def generate_task_calls(
        self, routing_result: RoutingResult, task_description: str
    ) -> list[TaskCall]:
        return generate_task_calls(routing_result, task_description)

    def get_recommended_agents(self, project_info: ProjectInfo) -> list[str]:
        return get_recommended_agents(project_info)


_BACKEND_SPECIALISTS = {
    Backend.FIREBASE: AgentId.FIREBASE_BACKEND,
    Backend.AWS: AgentId.AWS_BACKEND,
    Backend.GRAPHQL: AgentId.API_GRAPHQL,
}

_MOBILE_SPECIALISTS = {
    Mobile.FLUTTER: AgentId.FLUTTER,
    Mobile.IOS_NATIVE: AgentId.IOS_SWIFT,
}

_FEATURE_AGENTS = {
    Feature.AUTHENTICATION: AgentId.SECURITY,
    Feature.PAYMENT: AgentId.PAYMENT,
    Feature.REALTIME: AgentId.WEBSOCKET_REALTIME,
    Feature.INTERNATIONALIZATION: AgentId.LOCALIZATION,
}


def get_recommended_agents(project_info: ProjectInfo) -> list[str]:
    """Agents worth installing for a detected stack.

    Deduplicated. The order follows the inclusion rules but callers should
    treat the result as a set.
    """
    agents: list[AgentId] = [AgentId.TESTING, AgentId.SECURITY]

    if project_info.frontend:
        agents += [AgentId.FRONTEND, AgentId.DESIGN]
        if Feature.PWA in project_info.features:
            agents.append(AgentId.PWA_OFFLINE)

    if project_info.backend:
        agents.append(AgentId.BACKEND)
        if specialist := _BACKEND_SPECIALISTS.get(project_info.backend):
            agents.append(specialist)

    if project_info.mobile:
        agents.append(AgentId.MOBILE)
        if specialist := _MOBILE_SPECIALISTS.get(project_info.mobile):
            agents.append(specialist)

    if project_info.database:
        agents += [AgentId.DATA, AgentId.DATABASE_MIGRATION]

    if project_info.deployment:
        agents.append(AgentId.DEVOPS)
        if project_info.deployment == Deployment.DOCKER:
            agents.append(AgentId.DOCKER_CONTAINER)

    for feature, agent in _FEATURE_AGENTS.items():
        if feature in project_info.features:
            agents.append(agent)

    return [str(a) for a in dict.fromkeys(agents)]
