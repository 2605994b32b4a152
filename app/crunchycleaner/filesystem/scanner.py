"""Cache discovery and size estimation.

Filters the catalog down to the entries that have at least one existing
path on this host, and measures how much space those paths take up.
"""

import logging
import os
import stat
from collections.abc import Iterable, Iterator
from pathlib import Path

from crunchycleaner.catalog.models import CatalogEntry, DiscoveredEntry
from crunchycleaner.filesystem.resolver import resolve_all

logger = logging.getLogger(__name__)


def estimate_size(path: str | Path) -> int:
    """Sum the sizes of regular files under a path.

    A regular file contributes its own size. Directories contribute nothing
    directly, and symlinks below the top-level path are not followed.
    Entries that cannot be read count as zero.

    Args:
        path: File or directory to measure.

    Returns:
        Total size in bytes (0 if the path is missing or unreadable).
    """
    try:
        top = os.lstat(path)
    except OSError:
        return 0

    if stat.S_ISREG(top.st_mode):
        return top.st_size

    total = 0
    for root, _dirs, files in os.walk(path):
        for name in files:
            try:
                info = os.lstat(os.path.join(root, name))
            except OSError:
                continue
            if stat.S_ISREG(info.st_mode):
                total += info.st_size
    return total


class CacheScanner:
    """Finds which catalog entries exist on this host.

    Args:
        catalog: Catalog entries to check, in display order.
        measure: If True, compute the size of every matched path.
    """

    def __init__(self, catalog: Iterable[CatalogEntry], *, measure: bool = True) -> None:
        self._catalog = tuple(catalog)
        self._measure = measure

    def scan(self) -> Iterator[DiscoveredEntry]:
        """Yield a discovered entry for each catalog entry with a match.

        An entry is yielded once no matter how many of its patterns match.

        Yields:
            DiscoveredEntry instances in catalog order, all unchecked.
        """
        for entry in self._catalog:
            matches = resolve_all(entry.patterns)
            if not matches:
                continue

            size = sum(estimate_size(m) for m in matches) if self._measure else None
            logger.debug("Found %s (%d path(s))", entry.name, len(matches))

            yield DiscoveredEntry(
                entry=entry,
                size_bytes=size,
                matched_paths=tuple(matches),
            )


def discover(catalog: Iterable[CatalogEntry], *, measure: bool = True) -> list[DiscoveredEntry]:
    """Run a discovery pass over the catalog.

    Args:
        catalog: Catalog entries to check.
        measure: If True, compute display sizes.

    Returns:
        List of discovered entries (possibly empty).
    """
    return list(CacheScanner(catalog, measure=measure).scan())
