"""Stack detection heuristics: which frameworks and services a project uses."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable
from pathlib import Path

from agentdeck.bootstrap.models import (
    Backend,
    Database,
    Deployment,
    Feature,
    Frontend,
    Mobile,
    ProjectInfo,
    ProjectType,
    Testing,
)
from agentdeck.routing.matching import match_glob

logger = logging.getLogger(__name__)

SKIP_DIRS = {
    "node_modules",
    ".git",
    "dist",
    "build",
    "__pycache__",
    ".venv",
    "venv",
    ".tox",
    "coverage",
}
VISIBLE_DOT_DIRS = {".github"}

FEATURE_MARKERS: dict[Feature, tuple[str, ...]] = {
    Feature.AUTHENTICATION: ("**/auth/**", "**/login*", "**/signup*"),
    Feature.PAYMENT: ("**/stripe*", "**/payment*", "**/billing*"),
    Feature.REALTIME: ("**/socket*", "**/websocket*", "**/realtime*"),
    Feature.INTERNATIONALIZATION: ("**/i18n/**", "**/locales/**", "**/translations/**"),
    Feature.PWA: ("manifest.json", "service-worker.js", "sw.js"),
}


def _as_dict(value: object) -> dict[str, object]:
    return value if isinstance(value, dict) else {}


class ProbeFailure(Exception):
    """A detection signal could not be read; treated as "not detected"."""


class ProjectScanner:
    """Read-only view of a project directory shared by all probes."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self._package: dict | None = None  # type: ignore[type-arg]
        self._package_loaded = False
        self._paths: list[str] | None = None

    def exists(self, *parts: str) -> bool:
        return self.root.joinpath(*parts).exists()

    def read_text(self, name: str) -> str:
        try:
            return (self.root / name).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ProbeFailure(f"cannot read {name}: {e}") from e

    def package(self) -> dict | None:  # type: ignore[type-arg]
        """Parsed package.json, or None when it is missing or unusable.

        An unusable file is logged once and then treated as absent, so the
        remaining signals of every probe still run.
        """
        if not self._package_loaded:
            self._package_loaded = True
            if self.exists("package.json"):
                try:
                    data = json.loads(self.read_text("package.json"))
                except (ProbeFailure, json.JSONDecodeError) as e:
                    logger.warning(f"Ignoring malformed package.json in {self.root}: {e}")
                else:
                    if isinstance(data, dict):
                        self._package = data
                    else:
                        logger.warning(f"Ignoring package.json in {self.root}: not an object")
        return self._package

    def dependencies(self, *, dev: bool = True) -> dict[str, object]:
        pkg = self.package() or {}
        deps = dict(_as_dict(pkg.get("dependencies")))
        if dev:
            deps.update(_as_dict(pkg.get("devDependencies")))
        return deps

    def paths(self) -> list[str]:
        """Relative POSIX paths of every file and directory, walked once."""
        if self._paths is None:
            found: list[str] = []
            for dirpath, dirnames, filenames in os.walk(self.root):
                dirnames[:] = sorted(
                    d
                    for d in dirnames
                    if d not in SKIP_DIRS and (not d.startswith(".") or d in VISIBLE_DOT_DIRS)
                )
                rel_dir = Path(dirpath).relative_to(self.root)
                for name in dirnames + sorted(filenames):
                    found.append((rel_dir / name).as_posix())
            self._paths = found
        return self._paths

    def has_any(self, patterns: tuple[str, ...] | list[str]) -> bool:
        return any(match_glob(path, p) for p in patterns for path in self.paths())


def detect_project_type(scanner: ProjectScanner) -> ProjectType | None:
    pkg = scanner.package()
    if pkg is not None:
        deps = _as_dict(pkg.get("dependencies"))
        dev_deps = _as_dict(pkg.get("devDependencies"))
        if "next" in deps or "next" in dev_deps:
            return ProjectType.NEXTJS_FULLSTACK
        if "react" in deps or "react" in dev_deps:
            if "react-native" in deps:
                return ProjectType.MOBILE_APP
            return ProjectType.WEB_APP
        if any(k in deps for k in ("express", "fastify", "@nestjs/core")):
            return ProjectType.API_BACKEND
        if "electron" in deps or "electron" in dev_deps:
            return ProjectType.DESKTOP_APP
        if pkg.get("bin"):
            return ProjectType.CLI_TOOL

    if scanner.exists("go.mod"):
        return ProjectType.GO_BACKEND

    if scanner.exists("requirements.txt"):
        try:
            requirements = scanner.read_text("requirements.txt").lower()
        except ProbeFailure as e:
            logger.warning(f"Skipping requirements.txt in {scanner.root}: {e}")
            requirements = ""
        if "django" in requirements or "flask" in requirements:
            return ProjectType.PYTHON_BACKEND

    return ProjectType.WEB_APP


def detect_frontend(scanner: ProjectScanner) -> Frontend | None:
    if scanner.package() is None:
        return None
    deps = scanner.dependencies()
    if "react" in deps:
        return Frontend.NEXTJS if "next" in deps else Frontend.REACT
    if "vue" in deps:
        return Frontend.NUXT if "nuxt" in deps else Frontend.VUE
    if "@angular/core" in deps:
        return Frontend.ANGULAR
    if "svelte" in deps:
        return Frontend.SVELTEKIT if "@sveltejs/kit" in deps else Frontend.SVELTE
    return None


def detect_backend(scanner: ProjectScanner) -> Backend | None:
    if scanner.has_any(("supabase", "supabase/**", "**/supabase.js", "**/supabase.ts")):
        return Backend.SUPABASE
    if scanner.has_any(("firebase.json", "**/firebase.js", "**/firebase.ts")):
        return Backend.FIREBASE
    if scanner.has_any(("serverless.yml", "sam-template.yml", "**/aws-config.js")):
        return Backend.AWS

    if scanner.package() is None:
        return None
    deps = scanner.dependencies()
    if "express" in deps or "fastify" in deps:
        return Backend.NODE_API
    if "@nestjs/core" in deps:
        return Backend.NESTJS
    if "graphql" in deps:
        return Backend.GRAPHQL
    return None


def detect_mobile(scanner: ProjectScanner) -> Mobile | None:
    mobile: Mobile | None = None
    if scanner.package() is not None:
        deps = scanner.dependencies()
        if "react-native" in deps:
            mobile = Mobile.EXPO if "expo" in deps else Mobile.REACT_NATIVE

    if scanner.exists("pubspec.yaml"):
        mobile = Mobile.FLUTTER
    if scanner.has_any(("*.xcodeproj", "*.xcworkspace")):
        mobile = mobile or Mobile.IOS_NATIVE
    if scanner.exists("build.gradle"):
        mobile = mobile or Mobile.ANDROID_NATIVE
    return mobile


def detect_database(scanner: ProjectScanner) -> Database | None:
    if scanner.exists("prisma", "schema.prisma"):
        return Database.PRISMA
    if not scanner.has_any(("migrations/**", "db/migrate/**")):
        return None
    if scanner.has_any(("**/postgres*", "**/postgresql*")):
        return Database.POSTGRESQL
    if scanner.has_any(("**/mysql*",)):
        return Database.MYSQL
    if scanner.has_any(("**/mongo*",)):
        return Database.MONGODB
    return Database.SQL


def detect_testing(scanner: ProjectScanner) -> Testing | None:
    if scanner.package() is None:
        return None
    deps = scanner.dependencies()
    for name, testing in (
        ("jest", Testing.JEST),
        ("vitest", Testing.VITEST),
        ("mocha", Testing.MOCHA),
        ("@playwright/test", Testing.PLAYWRIGHT),
        ("cypress", Testing.CYPRESS),
    ):
        if name in deps:
            return testing
    return None


def detect_deployment(scanner: ProjectScanner) -> Deployment | None:
    if scanner.exists("vercel.json"):
        return Deployment.VERCEL
    if scanner.exists("netlify.toml"):
        return Deployment.NETLIFY
    if scanner.exists("Dockerfile"):
        return Deployment.DOCKER
    if scanner.has_any((".github/workflows/*.yml",)):
        return Deployment.GITHUB_ACTIONS
    return None


def detect_features(scanner: ProjectScanner) -> set[Feature]:
    return {feature for feature, markers in FEATURE_MARKERS.items() if scanner.has_any(markers)}


_PROBES: list[tuple[str, Callable[[ProjectScanner], object]]] = [
    ("type", detect_project_type),
    ("frontend", detect_frontend),
    ("backend", detect_backend),
    ("mobile", detect_mobile),
    ("database", detect_database),
    ("testing", detect_testing),
    ("deployment", detect_deployment),
    ("features", detect_features),
]


def analyze_project(root: Path) -> ProjectInfo:
    """Probe ``root`` and report its detected stack.

    A probe whose signal cannot be read leaves its field unset.
    """
    scanner = ProjectScanner(root)
    info = ProjectInfo()
    for field, probe in _PROBES:
        try:
            value = probe(scanner)
        except (ProbeFailure, OSError) as e:
            logger.warning(f"Stack probe '{field}' failed for {root}: {e}")
            continue
        setattr(info, field, value)
    return info
