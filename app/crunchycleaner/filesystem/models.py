"""Cleanup result models.

This module defines the per-path outcomes recorded by the cleanup executor
and the report summarizing one cleanup run.
"""

from dataclasses import dataclass, field
from enum import Enum

from crunchycleaner.core.disk import DiskSnapshot, space_reclaimed


class OutcomeKind(str, Enum):
    """What happened to one resolved path during cleanup.

    Attributes:
        WOULD_DELETE: Dry run; the path would have been emptied.
        DELETED: The path (or all of its contents) was removed.
        SKIPPED_UNSAFE: The path failed the safety check and was left alone.
        FAILED: Removing the path or one of its children raised an OS error.
        MISSING: The path disappeared between resolution and deletion.
    """

    WOULD_DELETE = "would_delete"
    DELETED = "deleted"
    SKIPPED_UNSAFE = "skipped_unsafe"
    FAILED = "failed"
    MISSING = "missing"


@dataclass(frozen=True, slots=True)
class PathOutcome:
    """Outcome for a single path.

    Attributes:
        target: Name of the catalog entry the path belongs to.
        path: The resolved path, or the child path for child failures.
        kind: What happened.
        error: OS error message or skip reason (None on success).
    """

    target: str
    path: str
    kind: OutcomeKind
    error: str | None = None


@dataclass(slots=True)
class CleanupReport:
    """Summary of one cleanup run.

    Attributes:
        processed: Number of checked catalog entries processed.
        dry_run: Whether the run was a simulation.
        outcomes: Per-path outcomes in processing order.
        before: Disk snapshot taken before the run (None if unknown).
        after: Disk snapshot taken after the run (None if unknown).
    """

    processed: int = 0
    dry_run: bool = False
    outcomes: list[PathOutcome] = field(default_factory=list)
    before: DiskSnapshot | None = None
    after: DiskSnapshot | None = None

    @property
    def reclaimed_bytes(self) -> int:
        """Disk space reclaimed, clamped to zero (always zero on dry runs)."""
        return space_reclaimed(self.before, self.after, dry_run=self.dry_run)

    @property
    def failures(self) -> list[PathOutcome]:
        """Outcomes where deletion failed."""
        return [o for o in self.outcomes if o.kind == OutcomeKind.FAILED]

    @property
    def skipped(self) -> list[PathOutcome]:
        """Outcomes where the path was protected."""
        return [o for o in self.outcomes if o.kind == OutcomeKind.SKIPPED_UNSAFE]

    def count(self, kind: OutcomeKind) -> int:
        """Count outcomes of a given kind."""
        return sum(1 for o in self.outcomes if o.kind == kind)
