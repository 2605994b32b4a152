"""Catalog domain models.

This module defines the immutable catalog entry describing a named cache
target, and the discovered entry that wraps it with selection state and
a display size once discovery has found it on disk.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """A named cache target with one or more filesystem glob patterns.

    Attributes:
        name: Human-readable target name shown in the menu.
        patterns: Ordered glob patterns. A pattern may start with ``~/``
            for the user's home directory and may contain ``*`` segments.
    """

    name: str
    patterns: tuple[str, ...]

    def __post_init__(self) -> None:
        """Validate catalog entry data after initialization."""
        if not self.name:
            msg = "Catalog entry name cannot be empty"
            raise ValueError(msg)
        if not self.patterns:
            msg = f"Catalog entry '{self.name}' has no patterns"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class DiscoveredEntry:
    """A catalog entry with at least one existing path on this host.

    Instances are immutable; the selection state machine produces updated
    copies when the user toggles an entry.

    Attributes:
        entry: The catalog entry this was discovered from.
        checked: Whether the entry is selected for cleanup.
        size_bytes: Total size of matched paths at discovery time
            (None if not measured). Display only.
        matched_paths: Paths that existed at discovery time. Display only;
            cleanup always resolves the patterns again.
    """

    entry: CatalogEntry
    checked: bool = False
    size_bytes: int | None = None
    matched_paths: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        """Name of the underlying catalog entry."""
        return self.entry.name

    @property
    def patterns(self) -> tuple[str, ...]:
        """Patterns of the underlying catalog entry."""
        return self.entry.patterns
