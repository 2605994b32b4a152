"""Filesystem discovery and cleanup module.

This module provides pattern resolution, cache size estimation, the
path safety checks, and the cleanup executor.
"""

from crunchycleaner.filesystem.models import CleanupReport, OutcomeKind, PathOutcome
from crunchycleaner.filesystem.operator import CacheCleaner
from crunchycleaner.filesystem.protected import (
    MIN_PATH_DEPTH,
    SafetyCheck,
    Verdict,
    check_path,
    is_safe_path,
)
from crunchycleaner.filesystem.resolver import expand_home, resolve, resolve_all
from crunchycleaner.filesystem.scanner import CacheScanner, discover, estimate_size

__all__ = [
    "MIN_PATH_DEPTH",
    "CacheCleaner",
    "CacheScanner",
    "CleanupReport",
    "OutcomeKind",
    "PathOutcome",
    "SafetyCheck",
    "Verdict",
    "check_path",
    "discover",
    "estimate_size",
    "expand_home",
    "is_safe_path",
    "resolve",
    "resolve_all",
]
