"""Disk space snapshots for the system drive.

Snapshots are taken before and after a cleanup run to show how much space
was reclaimed. They are informational only, so a failed measurement yields
None rather than an error.
"""

import logging
import os
import shutil
from dataclasses import dataclass

from crunchycleaner.catalog.targets import OSFamily, detect_os_family

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DiskSnapshot:
    """Free and total space of the system drive at one point in time.

    Attributes:
        free_bytes: Bytes available to the current user.
        total_bytes: Total size of the drive in bytes.
    """

    free_bytes: int
    total_bytes: int


def system_root(os_family: OSFamily | None = None) -> str:
    """Get the root of the system drive.

    Returns:
        ``%SystemDrive%\\`` on Windows (``C:\\`` if unset), ``/`` elsewhere.
    """
    if os_family is None:
        os_family = detect_os_family()
    if os_family == OSFamily.WINDOWS:
        return os.environ.get("SystemDrive", "C:") + "\\"
    return "/"


def take_snapshot(path: str | None = None) -> DiskSnapshot | None:
    """Measure free and total space of a drive.

    Args:
        path: Any path on the drive to measure. Defaults to the system root.

    Returns:
        DiskSnapshot, or None if the drive cannot be measured.
    """
    target = path or system_root()
    try:
        usage = shutil.disk_usage(target)
    except OSError as e:
        logger.debug("Cannot measure disk usage of %s: %s", target, e)
        return None
    return DiskSnapshot(free_bytes=usage.free, total_bytes=usage.total)


def space_reclaimed(
    before: DiskSnapshot | None,
    after: DiskSnapshot | None,
    *,
    dry_run: bool = False,
) -> int:
    """Compute the space reclaimed between two snapshots.

    A negative delta is measurement noise from other processes writing to
    the drive, so it is clamped to zero. Dry runs always report zero.

    Returns:
        Reclaimed bytes, never negative.
    """
    if dry_run or before is None or after is None:
        return 0
    return max(0, after.free_bytes - before.free_bytes)
