"""File-glob and task-keyword matching.

Glob grammar:
    ``**``  zero or more path segments (``**/`` may match nothing)
    ``*``   any run of characters within one segment, never ``/``
    ``?``   exactly one character
Everything else is literal and the whole path must match the whole pattern.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache

logger = logging.getLogger(__name__)

# Alternation order matters: "**/" and "**" must be tried before "*".
_WILDCARD = re.compile(r"\*\*/|\*\*|\*|\?")

_TRANSLATIONS = {
    "**/": "(?:.*/)?",
    "**": ".*",
    "*": "[^/]*",
    "?": ".",
}


def glob_to_regex(pattern: str) -> str:
    parts: list[str] = []
    pos = 0
    for match in _WILDCARD.finditer(pattern):
        parts.append(re.escape(pattern[pos : match.start()]))
        parts.append(_TRANSLATIONS[match.group()])
        pos = match.end()
    parts.append(re.escape(pattern[pos:]))
    return "".join(parts)


@lru_cache(maxsize=256)
def _compile_glob(pattern: str) -> re.Pattern[str]:
    return re.compile(glob_to_regex(pattern), re.DOTALL)


@lru_cache(maxsize=256)
def _compile_keyword(regex: str) -> re.Pattern[str] | None:
    try:
        return re.compile(regex, re.IGNORECASE)
    except re.error as e:
        logger.debug(f"Ignoring invalid keyword regex {regex!r}: {e}")
        return None


def match_glob(path: str, pattern: str) -> bool:
    """True if ``path`` matches ``pattern`` in full."""
    return _compile_glob(pattern).fullmatch(path) is not None


def match_keyword(text: str, regex: str) -> bool:
    """Case-insensitive search of ``regex`` anywhere in ``text``."""
    compiled = _compile_keyword(regex)
    if compiled is None:
        return False
    return compiled.search(text) is not None
