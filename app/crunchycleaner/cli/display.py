"""Shared Rich display functions for discovery and cleanup results.

Provides the banner, the selection menu renderable, and the tables and
summaries printed by the interactive menu and the ``scan``/``clean``
commands.
"""

from rich.console import Group
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from crunchycleaner import __version__
from crunchycleaner.catalog.models import DiscoveredEntry
from crunchycleaner.core.disk import DiskSnapshot
from crunchycleaner.core.selection import SelectionState
from crunchycleaner.filesystem.models import CleanupReport, OutcomeKind
from crunchycleaner.utils.formatting import (
    console,
    format_size,
    print_info,
    print_success,
    print_warning,
)

MENU_HELP = "Use ↑/↓ or W/S to navigate | [ENTER] to select | [A] all | [C] to clean | [Q] quit"


def format_disk_space(snapshot: DiskSnapshot | None) -> str:
    """Format a disk snapshot as "free / total", or "N/A" if unknown."""
    if snapshot is None:
        return "N/A"
    return f"{format_size(snapshot.free_bytes)} / {format_size(snapshot.total_bytes)}"


def print_banner(snapshot: DiskSnapshot | None) -> None:
    """Print the program header with the system drive's free space."""
    console.rule(f"[bold_header]CrunchyCleaner {__version__}[/]", style="border")
    console.print(f"[muted]Disk-Space:[/] {format_disk_space(snapshot)}")
    console.rule(style="border")


def render_menu(state: SelectionState) -> Group:
    """Build the renderable for the selection menu.

    Each row shows the cursor, a checkbox, the entry name and its size.

    Args:
        state: Current selection state.

    Returns:
        Rich Group with the help line and the entry grid.
    """
    grid = Table.grid(padding=(0, 1))
    grid.add_column(width=4)
    grid.add_column(width=3)
    grid.add_column(min_width=30, no_wrap=True)
    grid.add_column(justify="right")

    for index, entry in enumerate(state.entries):
        cursor = Text("  >_", style="cursor") if index == state.cursor else Text("")
        if entry.checked:
            check = Text.assemble("[", ("X", "checked"), "]")
        else:
            check = Text("[ ]")
        size = Text(f"({format_size(entry.size_bytes)})", style="size")
        grid.add_row(cursor, check, Text(entry.name), size)

    header = Text(f"{MENU_HELP}\nFolders found: [{len(state.entries)}]", style="muted")
    return Group(header, grid)


def create_discovery_table(entries: list[DiscoveredEntry]) -> Table:
    """Create a Rich table listing discovered cache targets.

    Args:
        entries: Discovered entries to display.

    Returns:
        Rich Table with Target, Size, and Paths columns.
    """
    table = Table(
        title="Cache Targets Found",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Target", style="bold", no_wrap=True)
    table.add_column("Size", style="size", justify="right", width=10)
    table.add_column("Paths", style="dim")

    for entry in entries:
        paths = "\n".join(escape(p) for p in entry.matched_paths)
        table.add_row(escape(entry.name), format_size(entry.size_bytes), paths)

    return table


def print_cleanup_report(report: CleanupReport) -> None:
    """Print the summary of a cleanup run.

    Per-path lines have already been logged while the run progressed; this
    prints the closing summary and the reclaimed space.

    Args:
        report: Report returned by the cleanup executor.
    """
    if report.dry_run:
        print_success("Simulation finished. No files were removed.")
        would = report.count(OutcomeKind.WOULD_DELETE)
        print_info(f"Dry-run: {would} path(s) would be emptied.")
    else:
        print_success("Cleaning finished")

    if report.processed == 0:
        console.print("Nothing selected to clean.")

    skipped = len(report.skipped)
    failed = len(report.failures)
    if skipped or failed:
        print_warning(f"{skipped} path(s) skipped as unsafe, {failed} deletion(s) failed")

    label = "NOTHING CLEANED (Dry Run)" if report.dry_run else "Cleaned"
    console.rule(style="border")
    console.print(f" {label}: [success]{format_size(report.reclaimed_bytes)}[/]")
    console.rule(style="border")
