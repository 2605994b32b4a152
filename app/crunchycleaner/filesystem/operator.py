"""Cache cleanup executor.

Empties the cache directories of every checked catalog entry. Each entry's
patterns are resolved again at cleanup time, every resolved path passes the
safety check before anything is touched, and failures are isolated per path
so one locked file never stops the rest of the run.
"""

import logging
import os
import shutil
from collections.abc import Callable, Iterable

from crunchycleaner.catalog.models import DiscoveredEntry
from crunchycleaner.catalog.targets import OSFamily
from crunchycleaner.core.disk import DiskSnapshot, take_snapshot
from crunchycleaner.filesystem.models import CleanupReport, OutcomeKind, PathOutcome
from crunchycleaner.filesystem.protected import check_path
from crunchycleaner.filesystem.resolver import resolve_all

logger = logging.getLogger(__name__)


class CacheCleaner:
    """Deletes the contents of selected cache targets.

    Directories are emptied rather than removed, so applications still find
    the cache root they expect. Files matched directly by a pattern (such as
    ``/var/log/*.log``) are deleted.

    Attributes:
        _dry_run: If True, report what would be deleted without deleting.
    """

    def __init__(
        self,
        dry_run: bool = False,
        *,
        disk_probe: Callable[[], DiskSnapshot | None] = take_snapshot,
        os_family: OSFamily | None = None,
        home: str | None = None,
    ) -> None:
        """Initialize the CacheCleaner.

        Args:
            dry_run: If True, report what would be deleted without deleting.
            disk_probe: Callable returning a snapshot of the system drive.
            os_family: Safety rules to apply. Defaults to the running host.
            home: Home directory protected from deletion. Defaults to the
                current user's.
        """
        self._dry_run = dry_run
        self._disk_probe = disk_probe
        self._os_family = os_family
        self._home = home

    @property
    def dry_run(self) -> bool:
        """Check if the cleaner is in dry-run mode."""
        return self._dry_run

    def clean(self, entries: Iterable[DiscoveredEntry]) -> CleanupReport:
        """Clean every checked entry and report the outcome.

        Unchecked entries are ignored. The run always completes a full pass
        over the checked entries; errors are recorded, never raised.

        Args:
            entries: Discovered entries, typically the menu's current list.

        Returns:
            CleanupReport with per-path outcomes and disk snapshots.
        """
        report = CleanupReport(dry_run=self._dry_run)
        if not self._dry_run:
            report.before = self._disk_probe()

        for entry in entries:
            if not entry.checked:
                continue
            report.processed += 1

            for path in resolve_all(entry.patterns):
                report.outcomes.extend(self._clean_path(entry.name, path))

        if not self._dry_run:
            report.after = self._disk_probe()

        return report

    def _clean_path(self, target: str, path: str) -> list[PathOutcome]:
        """Clean one resolved path.

        Args:
            target: Catalog entry name, for reporting.
            path: Resolved path to clean.

        Returns:
            Outcomes for the path (one per failed child, or a single outcome).
        """
        if self._dry_run:
            logger.info("Would empty %s", path)
            return [PathOutcome(target=target, path=path, kind=OutcomeKind.WOULD_DELETE)]

        reason = self._unsafe_reason(path)
        if reason is not None:
            logger.warning("Skipped unsafe path %s (%s)", path, reason)
            return [
                PathOutcome(
                    target=target,
                    path=path,
                    kind=OutcomeKind.SKIPPED_UNSAFE,
                    error=reason,
                )
            ]

        # Follows symlinks: a linked cache directory is emptied through the link
        if os.path.isdir(path):
            return self._empty_directory(target, path)

        try:
            os.unlink(path)
        except FileNotFoundError:
            return [self._missing(target, path)]
        except OSError as e:
            logger.warning("Could not delete file %s: %s", path, e)
            return [PathOutcome(target=target, path=path, kind=OutcomeKind.FAILED, error=str(e))]

        logger.info("Deleted %s", path)
        return [PathOutcome(target=target, path=path, kind=OutcomeKind.DELETED)]

    def _empty_directory(self, target: str, path: str) -> list[PathOutcome]:
        """Remove every child of a directory, keeping the directory itself.

        Args:
            target: Catalog entry name, for reporting.
            path: Directory to empty.

        Returns:
            One FAILED outcome per child that could not be removed, or a
            single DELETED outcome if every child was removed.
        """
        try:
            with os.scandir(path) as it:
                children = list(it)
        except FileNotFoundError:
            return [self._missing(target, path)]
        except OSError as e:
            logger.warning("Could not read directory %s: %s", path, e)
            return [PathOutcome(target=target, path=path, kind=OutcomeKind.FAILED, error=str(e))]

        outcomes: list[PathOutcome] = []
        for child in children:
            try:
                if child.is_dir(follow_symlinks=False):
                    shutil.rmtree(child.path)
                else:
                    os.unlink(child.path)
            except FileNotFoundError:
                # Removed concurrently by another process
                continue
            except OSError as e:
                logger.warning("Skipped %s: %s", child.path, e)
                outcomes.append(
                    PathOutcome(
                        target=target,
                        path=child.path,
                        kind=OutcomeKind.FAILED,
                        error=str(e),
                    )
                )

        if not outcomes:
            logger.info("Emptied %s", path)
            outcomes.append(PathOutcome(target=target, path=path, kind=OutcomeKind.DELETED))
        return outcomes

    def _unsafe_reason(self, path: str) -> str | None:
        """Run the safety check on a path and on its symlink target.

        Returns:
            The reason the path is protected, or None if it is safe.
        """
        check = check_path(path, os_family=self._os_family, home=self._home)
        if not check.is_safe:
            return check.reason

        real = os.path.realpath(path)
        if real != os.path.normpath(path):
            real_check = check_path(real, os_family=self._os_family, home=self._home)
            if not real_check.is_safe:
                return f"links to {real}: {real_check.reason}"

        return None

    @staticmethod
    def _missing(target: str, path: str) -> PathOutcome:
        logger.warning("Path vanished before cleanup: %s", path)
        return PathOutcome(
            target=target,
            path=path,
            kind=OutcomeKind.MISSING,
            error="no longer exists",
        )
