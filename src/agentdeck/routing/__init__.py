"""Task routing: agent selection, execution planning and task calls."""

from agentdeck.routing.config import RoutingSettings, load_routing_settings
from agentdeck.routing.matching import glob_to_regex, match_glob, match_keyword
from agentdeck.routing.models import (
    ExecutionGroup,
    RouteContext,
    RoutingResult,
    RoutingType,
    TaskCall,
)
from agentdeck.routing.planner import get_execution_plan
from agentdeck.routing.router import AgentRouter, get_recommended_agents
from agentdeck.routing.task_calls import generate_task_calls, normalize_agent_id

__all__ = [
    "AgentRouter",
    "ExecutionGroup",
    "RouteContext",
    "RoutingResult",
    "RoutingSettings",
    "RoutingType",
    "TaskCall",
    "generate_task_calls",
    "get_execution_plan",
    "get_recommended_agents",
    "glob_to_regex",
    "load_routing_settings",
    "match_glob",
    "match_keyword",
    "normalize_agent_id",
]
