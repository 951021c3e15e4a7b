from __future__ import annotations

from functools import lru_cache
import logging
import re
from typing import Optional, Pattern

logger = logging.getLogger(__name__)


def glob_to_regex(pattern: str) -> str:
    """Translate a branch glob into an anchored regular expression.

    ``**`` crosses ``/`` (and swallows one following ``/``), ``*`` and ``?``
    stay inside a single path segment, ``[...]`` is a character class where a
    leading ``!`` or ``^`` negates. An unterminated ``[`` is a literal.
    """
    parts = ["^"]
    i = 0
    n = len(pattern)
    while i < n:
        c = pattern[i]
        if c == "*":
            if i + 1 < n and pattern[i + 1] == "*":
                parts.append(".*")
                i += 2
                if i < n and pattern[i] == "/":
                    i += 1
            else:
                parts.append("[^/]*")
                i += 1
        elif c == "?":
            parts.append("[^/]")
            i += 1
        elif c == "[":
            j = pattern.find("]", i + 1)
            if j == -1:
                parts.append(re.escape(c))
                i += 1
                continue
            content = pattern[i + 1 : j]
            if content and content[0] in "!^":
                parts.append("[^" + content[1:].replace("\\", "\\\\") + "]")
            else:
                parts.append("[" + content.replace("\\", "\\\\") + "]")
            i = j + 1
        else:
            parts.append(re.escape(c))
            i += 1
    parts.append(r"\Z")
    return "".join(parts)


@lru_cache(maxsize=512)
def compile_glob(pattern: str) -> Optional[Pattern[str]]:
    try:
        return re.compile(glob_to_regex(pattern))
    except re.error as e:
        logger.debug(
            "Branch pattern '%s' is not a valid glob (%s), using literal match",
            pattern,
            e,
        )
        return None


def glob_match(pattern: str, candidate: str) -> bool:
    regex = compile_glob(pattern)
    if regex is None:
        return pattern == candidate
    return regex.match(candidate) is not None
