"""Pydantic models for routing requests, execution plans and task calls."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from agentdeck.registry.models import ChainRef


class RoutingType(StrEnum):
    CHAIN = "chain"
    DYNAMIC = "dynamic"


class ExecutionGroup(BaseModel):
    """One phase of a plan: agents intended to run under one concurrency flag."""

    agents: list[str] = Field(default_factory=list)
    parallel: bool = True


class RouteContext(BaseModel):
    files: list[str] = Field(default_factory=list)
    chain_type: str | None = None
    parallel: bool | None = None  # None -> AgentRouter.prefer_parallel


class RoutingResult(BaseModel):
    type: RoutingType
    agents: list[str]
    plan: list[ExecutionGroup]
    chain: ChainRef | None = None


class TaskCall(BaseModel):
    """Invocation descriptor handed to the external executor."""

    tool: str = "Task"
    agent_id: str
    description: str
    prompt: str
    parallel: bool
