"""Scan command implementation.

Lists the cache targets found on this system without cleaning anything.
"""

import json
from enum import Enum
from typing import Annotated

import typer

from crunchycleaner.catalog.models import DiscoveredEntry
from crunchycleaner.cli.display import create_discovery_table
from crunchycleaner.cli.menu import scan_for_caches
from crunchycleaner.utils.formatting import console, format_size, print_info

app = typer.Typer(
    help="List cache targets found on this system.",
    invoke_without_command=True,
)


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


@app.callback(invoke_without_command=True)
def scan_caches(
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Scan for known cache directories and show their sizes.

    Examples:
        crunchycleaner scan                 # Show table
        crunchycleaner scan --format json   # Output as JSON
    """
    entries = scan_for_caches()

    if output_format == OutputFormat.JSON:
        _print_json(entries)
        return

    if not entries:
        print_info("No cache directories found on your system.")
        return

    console.print(create_discovery_table(entries))

    total = sum(e.size_bytes or 0 for e in entries)
    console.print(f"\n[dim]Found {len(entries)} cache target(s) ({format_size(total)} total)[/dim]")


def _print_json(entries: list[DiscoveredEntry]) -> None:
    """Display discovered entries as JSON."""
    data = [
        {
            "name": e.name,
            "size_bytes": e.size_bytes,
            "paths": list(e.matched_paths),
            "patterns": list(e.patterns),
        }
        for e in entries
    ]
    console.print_json(json.dumps(data))
