"""Safety checks for paths about to be emptied.

A resolved path is either safe to clean or protected. The checks are pure
string operations on the normalized, lower-cased path: root forms, a fixed
per-OS denylist of system directories, everything below the Unix system
trees, other users' home directories, the user's whole home directory, and
a minimum depth below the filesystem root. Any one of them protects the path.
"""

import ntpath
import os
import posixpath
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from crunchycleaner.catalog.targets import OSFamily, detect_os_family

# Minimum number of path components below the filesystem root (or drive).
# Cache targets are always nested inside some application directory.
MIN_PATH_DEPTH = 2

# Exact matches only; subdirectories are judged by the other checks.
UNIX_PROTECTED_PATHS: frozenset[str] = frozenset(
    {
        "/etc",
        "/bin",
        "/sbin",
        "/lib",
        "/lib32",
        "/lib64",
        "/usr",
        "/usr/bin",
        "/usr/sbin",
        "/usr/lib",
        "/usr/lib64",
        "/usr/libexec",
        "/usr/include",
        "/usr/src",
        "/usr/local",
        "/usr/share",
        "/boot",
        "/root",
        "/home",
        "/proc",
        "/sys",
        "/dev",
        "/var",
        "/var/lib",
        "/var/log",
        "/var/cache",
        "/var/tmp",
        "/var/spool",
        "/var/mail",
        "/opt",
        "/srv",
        "/run",
        "/mnt",
        "/media",
        "/snap",
        "/tmp",
    }
)

# Every path below these is protected. Nothing a user cleans lives here.
UNIX_PROTECTED_TREES: frozenset[str] = frozenset(
    {
        "/etc",
        "/boot",
        "/bin",
        "/sbin",
        "/lib",
        "/lib32",
        "/lib64",
        "/usr",
        "/proc",
        "/sys",
        "/dev",
    }
)

# Direct children of these are user home directories.
UNIX_HOME_PARENTS: frozenset[str] = frozenset({"/home", "/users"})

WINDOWS_PROTECTED_PATHS: frozenset[str] = frozenset(
    {
        "c:\\windows",
        "c:\\windows\\system32",
        "c:\\users",
        "c:\\program files",
        "c:\\program files (x86)",
        "c:\\programdata",
    }
)

_WINDOWS_SEPARATORS = re.compile(r"[\\/]+")


class Verdict(str, Enum):
    """Safety classification of a resolved path.

    Attributes:
        SAFE: The path may be cleaned.
        PROTECTED: The path must be skipped and reported.
    """

    SAFE = "safe"
    PROTECTED = "protected"


@dataclass(frozen=True, slots=True)
class SafetyCheck:
    """Outcome of a safety check.

    Attributes:
        path: The path as given to the check.
        verdict: SAFE or PROTECTED.
        reason: Why the path is protected (None when safe).
    """

    path: str
    verdict: Verdict
    reason: str | None = None

    @property
    def is_safe(self) -> bool:
        """Check if the path may be cleaned."""
        return self.verdict == Verdict.SAFE


def check_path(
    path: str,
    *,
    os_family: OSFamily | None = None,
    home: str | None = None,
) -> SafetyCheck:
    """Classify a path as safe to clean or protected.

    Args:
        path: Absolute path to check.
        os_family: Platform rules to apply. Defaults to the running host.
        home: The user's home/profile directory. Defaults to
            ``%USERPROFILE%`` on Windows and ``Path.home()`` elsewhere.

    Returns:
        SafetyCheck with the verdict and, when protected, the reason.
    """
    if os_family is None:
        os_family = detect_os_family()
    windows = os_family == OSFamily.WINDOWS
    flavor = ntpath if windows else posixpath

    if not path or not path.strip():
        return _protected(path, "empty path")
    if not flavor.isabs(path):
        return _protected(path, "not an absolute path")

    normalized = flavor.normpath(path)
    lowered = normalized.lower()

    if _is_root(lowered, windows):
        return _protected(path, "filesystem root")

    denylist = WINDOWS_PROTECTED_PATHS if windows else UNIX_PROTECTED_PATHS
    if lowered in denylist:
        return _protected(path, "system directory")

    if home is None:
        home = _default_home(windows)
    if home and lowered == flavor.normpath(home).lower():
        return _protected(path, "home directory")

    if not windows:
        tree_reason = _unix_tree_reason(lowered)
        if tree_reason is not None:
            return _protected(path, tree_reason)

    if _depth(normalized, windows) < MIN_PATH_DEPTH:
        return _protected(path, "too close to the filesystem root")

    return SafetyCheck(path=path, verdict=Verdict.SAFE)


def is_safe_path(
    path: str,
    *,
    os_family: OSFamily | None = None,
    home: str | None = None,
) -> bool:
    """Check whether a path may be cleaned.

    See :func:`check_path` for the rules and arguments.

    Returns:
        True if the path is safe, False if it is protected.
    """
    return check_path(path, os_family=os_family, home=home).is_safe


def _protected(path: str, reason: str) -> SafetyCheck:
    return SafetyCheck(path=path, verdict=Verdict.PROTECTED, reason=reason)


def _is_root(lowered: str, windows: bool) -> bool:
    if windows:
        # "C:", "C:\" and other bare drive forms
        return lowered in ("\\", "/") or (len(lowered) <= 3 and ":" in lowered)
    # posixpath.normpath keeps a leading "//"
    return lowered.strip("/") == ""


def _unix_tree_reason(lowered: str) -> str | None:
    # posixpath.normpath keeps a leading "//"
    lowered = "/" + lowered.lstrip("/")
    if any(lowered.startswith(tree + "/") for tree in UNIX_PROTECTED_TREES):
        return "inside a system directory"
    parent, _name = posixpath.split(lowered)
    if parent in UNIX_HOME_PARENTS:
        return "another user's home directory"
    return None


def _depth(normalized: str, windows: bool) -> int:
    if windows:
        _drive, rest = ntpath.splitdrive(normalized)
        return len([part for part in _WINDOWS_SEPARATORS.split(rest) if part])
    return len([part for part in normalized.split("/") if part])


def _default_home(windows: bool) -> str:
    if windows:
        return os.environ.get("USERPROFILE", "")
    try:
        return str(Path.home())
    except (RuntimeError, KeyError):
        return ""
