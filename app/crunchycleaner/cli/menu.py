"""Interactive cache selection menu.

Glues the pieces together: discovery behind a spinner, the selection state
machine fed by the key reader, and the cleanup executor on commit.
"""

import logging
from collections.abc import Callable, Sequence
from contextlib import AbstractContextManager

from rich.live import Live

from crunchycleaner.catalog.models import CatalogEntry, DiscoveredEntry
from crunchycleaner.catalog.targets import build_catalog
from crunchycleaner.cli.display import print_banner, print_cleanup_report, render_menu
from crunchycleaner.cli.keyboard import KeyReader
from crunchycleaner.core.disk import take_snapshot
from crunchycleaner.core.selection import Phase, SelectionState, run_session
from crunchycleaner.filesystem.models import CleanupReport
from crunchycleaner.filesystem.operator import CacheCleaner
from crunchycleaner.filesystem.scanner import discover
from crunchycleaner.utils.formatting import console, print_info

logger = logging.getLogger(__name__)


def scan_for_caches(catalog: Sequence[CatalogEntry] | None = None) -> list[DiscoveredEntry]:
    """Run a discovery pass behind a progress spinner.

    The spinner has stopped by the time this returns, so callers may print
    immediately.

    Args:
        catalog: Catalog to scan. Defaults to the host's catalog.

    Returns:
        Discovered entries in catalog order.
    """
    if catalog is None:
        catalog = build_catalog()
    with console.status("Scanning filesystem"):
        return discover(catalog)


def run_cleanup(
    entries: Sequence[DiscoveredEntry],
    *,
    dry_run: bool,
    cleaner: CacheCleaner | None = None,
) -> CleanupReport:
    """Clean the checked entries behind a progress spinner.

    Args:
        entries: Entries to process; only checked ones are cleaned.
        dry_run: If True, only report what would be deleted.
        cleaner: Executor to use. Defaults to a new CacheCleaner.

    Returns:
        The executor's report.
    """
    if cleaner is None:
        cleaner = CacheCleaner(dry_run=dry_run)

    console.print("Cleaning caches started...")
    if dry_run:
        console.print("[warning]NOTE: Dry run active. No files will actually be deleted.[/]")
    else:
        console.print("You use this tool at your own risk!")

    status = "[DRY RUN] Simulating cleanup" if dry_run else "Cleaning selected caches"
    with console.status(status):
        return cleaner.clean(entries)


def run_interactive(
    *,
    dry_run: bool = False,
    catalog: Sequence[CatalogEntry] | None = None,
    reader_factory: Callable[[], AbstractContextManager[KeyReader]] | None = None,
) -> Phase | None:
    """Run the full interactive session.

    Args:
        dry_run: If True, the cleanup only reports what it would delete.
        catalog: Catalog to scan. Defaults to the host's catalog.
        reader_factory: Creates the key reader context. Defaults to KeyReader.

    Returns:
        The terminal phase of the session, or None if nothing was found.

    Raises:
        KeyboardUnavailableError: If the terminal cannot enter raw mode.
    """
    if console.is_terminal:
        console.clear()
    print_banner(take_snapshot())

    entries = scan_for_caches(catalog)
    if not entries:
        print_info("No cache directories found on your system.")
        return None

    if reader_factory is None:
        reader_factory = KeyReader

    state = SelectionState.initial(entries)
    reports: list[CleanupReport] = []

    with reader_factory() as reader:
        with Live(render_menu(state), console=console, auto_refresh=False) as live:

            def redraw(new_state: SelectionState) -> None:
                live.update(render_menu(new_state), refresh=True)

            def commit(selected: Sequence[DiscoveredEntry]) -> None:
                # Stop redrawing before cleanup output starts
                live.stop()
                reports.append(run_cleanup(selected, dry_run=dry_run))

            final = run_session(state, reader.events(), on_commit=commit, on_change=redraw)

    if final.phase == Phase.COMMITTED:
        print_cleanup_report(reports[0])
        _acknowledge("\nPress [ENTER] to exit...")

    return final.phase


def _acknowledge(prompt: str) -> None:
    try:
        console.input(prompt, markup=False)
    except EOFError:
        logger.debug("No input available to acknowledge")
