"""Clean command implementation.

Cleans named cache targets without the interactive menu, for scripts
and scheduled runs.
"""

from dataclasses import replace
from typing import Annotated

import typer

from crunchycleaner.catalog.targets import build_catalog
from crunchycleaner.cli.display import create_discovery_table, print_cleanup_report
from crunchycleaner.cli.menu import run_cleanup, scan_for_caches
from crunchycleaner.utils.formatting import console, print_error, print_info, print_warning

app = typer.Typer(
    help="Clean cache targets by name, without the interactive menu.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def clean_caches(
    ctx: typer.Context,
    targets: Annotated[
        list[str] | None,
        typer.Option(
            "--target",
            "-t",
            help="Cache target to clean (repeatable, case-insensitive).",
        ),
    ] = None,
    all_targets: Annotated[
        bool,
        typer.Option("--all", help="Clean every cache target found."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Clean the named cache targets.

    Examples:
        crunchycleaner clean --target "Pip Cache" --dry-run
        crunchycleaner clean -t "Go Build Cache" -t "NPM Cache" --yes
        crunchycleaner clean --all --yes
    """
    # The global --dry-run flag applies here too
    if ctx.obj and ctx.obj.get("dry_run"):
        dry_run = True

    if not targets and not all_targets:
        print_error("Name at least one --target, or pass --all.")
        raise typer.Exit(code=1)

    wanted: set[str] = set()
    if targets:
        known = {entry.name.lower(): entry.name for entry in build_catalog()}
        unknown = [t for t in targets if t.lower() not in known]
        if unknown:
            print_error(f"Unknown cache target(s): {', '.join(unknown)}")
            raise typer.Exit(code=1)
        wanted = {known[t.lower()] for t in targets}

    found = scan_for_caches()
    selected = [
        replace(entry, checked=True)
        for entry in found
        if all_targets or entry.name in wanted
    ]

    for name in sorted(wanted - {entry.name for entry in selected}):
        print_warning(f"{name} was not found on this system")

    if not selected:
        print_info("Nothing to clean.")
        return

    console.print(create_discovery_table(selected))

    if not dry_run and not yes:
        confirmed = typer.confirm(
            f"\nEmpty {len(selected)} cache target(s)?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    report = run_cleanup(selected, dry_run=dry_run)
    print_cleanup_report(report)
