"""Pydantic models for the capability registry, routing rules and chains."""

from __future__ import annotations

import re
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Lowest precedence; used for agents with no capability entry.
UNREGISTERED_PRIORITY = 1_000_000


class AgentId(StrEnum):
    FRONTEND = "frontend-agent"
    BACKEND = "backend-agent"
    MOBILE = "mobile-agent"
    TESTING = "testing-agent"
    SECURITY = "security-agent"
    DEVOPS = "devops-agent"
    DATA = "data-agent"
    DESIGN = "design-agent"
    API_GRAPHQL = "api-graphql-agent"
    DATABASE_MIGRATION = "database-migration-agent"
    DOCKER_CONTAINER = "docker-container-agent"
    IOS_SWIFT = "ios-swift-agent"
    FLUTTER = "flutter-agent"
    MONITORING_OBSERVABILITY = "monitoring-observability-agent"
    ACCESSIBILITY = "accessibility-agent"
    PAYMENT = "payment-agent"
    EMAIL_COMMUNICATION = "email-communication-agent"
    WEBSOCKET_REALTIME = "websocket-realtime-agent"
    SEO_MARKETING = "seo-marketing-agent"
    LOCALIZATION = "localization-agent"
    PWA_OFFLINE = "pwa-offline-agent"
    FIREBASE_BACKEND = "firebase-backend-agent"
    AWS_BACKEND = "aws-backend-agent"
    GENERAL_PURPOSE = "general-purpose"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class AgentCapability(_Frozen):
    """Scheduling metadata for a single agent."""

    id: AgentId
    priority: int
    dependencies: list[AgentId] = Field(default_factory=list)
    capabilities: list[str] = Field(default_factory=list)  # documentation only


class GlobPattern(_Frozen):
    kind: Literal["glob"] = "glob"
    glob: str


class KeywordPattern(_Frozen):
    kind: Literal["keyword"] = "keyword"
    regex: str

    @field_validator("regex")
    @classmethod
    def _compiles(cls, value: str) -> str:
        try:
            re.compile(value, re.IGNORECASE)
        except re.error as e:
            raise ValueError(f"invalid keyword regex {value!r}: {e}") from e
        return value


class ChainRef(_Frozen):
    kind: Literal["chain"] = "chain"
    name: str


RulePattern = Annotated[GlobPattern | KeywordPattern, Field(discriminator="kind")]


class RoutingRule(_Frozen):
    """Associates a file glob or task keyword regex with agents."""

    pattern: RulePattern
    agents: list[AgentId]


class ChainPhase(_Frozen):
    agents: list[AgentId]
    parallel: bool = False


class Chain(_Frozen):
    """Hand-authored fixed plan for a recurring task archetype."""

    name: str
    phases: list[ChainPhase]

    def ref(self) -> ChainRef:
        return ChainRef(name=self.name)
