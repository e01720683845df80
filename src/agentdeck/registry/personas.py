"""Discovery of agent persona markdown files."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pydantic import BaseModel

logger = logging.getLogger(__name__)

PERSONA_SUFFIX = "-agent.md"
SUMMARY_LIMIT = 180


class AgentPersona(BaseModel):
    id: str
    name: str
    filename: str
    path: str
    summary: str | None = None


def display_name(filename: str) -> str:
    """``aws-backend-agent.md`` -> ``AWS Backend``."""
    stem = filename.removesuffix(PERSONA_SUFFIX).removesuffix(".md")
    words = [w[:1].upper() + w[1:] for w in stem.split("-")]
    return re.sub(r"\bAws\b", "AWS", " ".join(words))


def extract_summary(markdown: str) -> str | None:
    """First line that is neither blank nor a heading, truncated."""
    for raw in markdown.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if len(line) > SUMMARY_LIMIT:
            return line[: SUMMARY_LIMIT - 3] + "..."
        return line
    return None


def discover_personas(directory: Path) -> list[AgentPersona]:
    """Scan ``directory`` for ``*-agent.md`` persona files, sorted by filename."""
    if not directory.is_dir():
        return []

    personas: list[AgentPersona] = []
    for md_file in sorted(directory.glob(f"*{PERSONA_SUFFIX}")):
        try:
            content = md_file.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning(f"Skipping unreadable persona {md_file}: {e}")
            continue
        personas.append(
            AgentPersona(
                id=md_file.name.removesuffix(".md"),
                name=display_name(md_file.name),
                filename=md_file.name,
                path=str(md_file),
                summary=extract_summary(content),
            )
        )
    return personas
