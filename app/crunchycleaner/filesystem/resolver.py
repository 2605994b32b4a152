"""Catalog pattern resolution.

Expands a catalog pattern into the concrete paths that currently exist.
Resolution never raises: a malformed pattern, an unset base directory or
a filesystem race simply yields no matches.
"""

import glob
import logging
import os
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)


def expand_home(pattern: str) -> str:
    """Expand a leading ``~`` shorthand to the invoking user's home directory.

    Args:
        pattern: Pattern that may start with ``~`` or ``~/``.

    Returns:
        The pattern with the home shorthand replaced. Patterns without the
        shorthand (including ``~otheruser/...``) are returned unchanged.

    Raises:
        RuntimeError: If the home directory cannot be determined.
    """
    if pattern == "~":
        return str(Path.home())
    if pattern.startswith(("~/", "~\\")):
        return os.path.join(str(Path.home()), pattern[2:])
    return pattern


def resolve(pattern: str) -> list[str]:
    """Resolve a catalog pattern to existing filesystem paths.

    Wildcards also match hidden entries, so ``~/.cache/*/Cache`` finds
    dot-directories too. Relative patterns are rejected: they come from
    unset environment variables and would otherwise match against the
    current working directory.

    Args:
        pattern: Glob pattern, optionally prefixed with ``~/``.

    Returns:
        Sorted list of matching paths (empty on any error).
    """
    if not pattern or not pattern.strip():
        return []

    try:
        expanded = expand_home(pattern)
        if not os.path.isabs(expanded):
            logger.debug("Ignoring relative pattern: %s", pattern)
            return []
        return sorted(glob.glob(expanded, include_hidden=True))
    except (OSError, RuntimeError, ValueError) as e:
        logger.debug("Cannot resolve pattern %s: %s", pattern, e)
        return []


def resolve_all(patterns: Iterable[str]) -> list[str]:
    """Resolve several patterns, dropping duplicate matches.

    Args:
        patterns: Glob patterns to resolve, in order.

    Returns:
        Matches in pattern order, each path listed once.
    """
    seen: set[str] = set()
    matches: list[str] = []
    for pattern in patterns:
        for path in resolve(pattern):
            if path not in seen:
                seen.add(path)
                matches.append(path)
    return matches
