"""Convert a routing result into invocation descriptors for the executor."""

from __future__ import annotations

from agentdeck.registry.models import AgentId
from agentdeck.routing.models import RoutingResult, TaskCall

AGENT_SUFFIX = "-agent"


def normalize_agent_id(agent: str) -> str:
    """``frontend-agent`` -> ``frontend``; the fallback passes through."""
    if agent == AgentId.GENERAL_PURPOSE:
        return str(agent)
    return str(agent).removesuffix(AGENT_SUFFIX)


def generate_task_calls(result: RoutingResult, task_description: str) -> list[TaskCall]:
    calls: list[TaskCall] = []
    for group in result.plan:
        for agent in group.agents:
            calls.append(
                TaskCall(
                    agent_id=normalize_agent_id(agent),
                    description=f"{agent}: {task_description}",
                    prompt=task_description,
                    parallel=group.parallel,
                )
            )
    return calls
