"""Pydantic models for project stack detection."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class ProjectType(StrEnum):
    NEXTJS_FULLSTACK = "nextjs-fullstack"
    MOBILE_APP = "mobile-app"
    WEB_APP = "web-app"
    API_BACKEND = "api-backend"
    DESKTOP_APP = "desktop-app"
    CLI_TOOL = "cli-tool"
    GO_BACKEND = "go-backend"
    PYTHON_BACKEND = "python-backend"


class Frontend(StrEnum):
    REACT = "react"
    NEXTJS = "nextjs"
    VUE = "vue"
    NUXT = "nuxt"
    ANGULAR = "angular"
    SVELTE = "svelte"
    SVELTEKIT = "sveltekit"


class Backend(StrEnum):
    SUPABASE = "supabase"
    FIREBASE = "firebase"
    AWS = "aws"
    NODE_API = "node-api"
    NESTJS = "nestjs"
    GRAPHQL = "graphql"


class Mobile(StrEnum):
    REACT_NATIVE = "react-native"
    EXPO = "expo"
    FLUTTER = "flutter"
    IOS_NATIVE = "ios-native"
    ANDROID_NATIVE = "android-native"


class Database(StrEnum):
    PRISMA = "prisma"
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    MONGODB = "mongodb"
    SQL = "sql"


class Deployment(StrEnum):
    VERCEL = "vercel"
    NETLIFY = "netlify"
    DOCKER = "docker"
    GITHUB_ACTIONS = "github-actions"


class Testing(StrEnum):
    JEST = "jest"
    VITEST = "vitest"
    MOCHA = "mocha"
    PLAYWRIGHT = "playwright"
    CYPRESS = "cypress"


class Feature(StrEnum):
    AUTHENTICATION = "authentication"
    PAYMENT = "payment"
    REALTIME = "realtime"
    INTERNATIONALIZATION = "internationalization"
    PWA = "pwa"


class ProjectInfo(BaseModel):
    type: ProjectType | None = None
    frontend: Frontend | None = None
    backend: Backend | None = None
    mobile: Mobile | None = None
    database: Database | None = None
    deployment: Deployment | None = None
    testing: Testing | None = None
    features: set[Feature] = Field(default_factory=set)
