"""Main CLI application entry point.

Defines the Typer application, global options, and the interactive menu
that runs when no subcommand is given.
"""

import signal
from pathlib import Path
from types import FrameType
from typing import Annotated

import typer

from crunchycleaner import __version__
from crunchycleaner.cli.commands import clean, scan
from crunchycleaner.cli.keyboard import KeyboardUnavailableError
from crunchycleaner.cli.menu import run_interactive
from crunchycleaner.cli.terminal import initialize_terminal
from crunchycleaner.utils.formatting import console, print_error
from crunchycleaner.utils.log import configure_logging

# Create main Typer app
app = typer.Typer(
    name="crunchycleaner",
    help="Find and purge application caches interactively.",
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"CrunchyCleaner {__version__}")
        raise typer.Exit()


def _interrupt_on_sigterm(signum: int, frame: FrameType | None) -> None:
    """Turn SIGTERM into KeyboardInterrupt so terminal state is restored."""
    raise KeyboardInterrupt


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Simulation mode: report what would be deleted without deleting.",
        ),
    ] = False,
    no_init: Annotated[
        bool,
        typer.Option(
            "--no-init",
            help="Skip terminal resizing and environment initialization.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
) -> None:
    """CrunchyCleaner - find and purge application caches.

    Without a subcommand, opens the interactive selection menu.
    """
    ctx.ensure_object(dict)
    ctx.obj["dry_run"] = dry_run
    ctx.obj["verbose"] = verbose
    configure_logging(verbose)

    if ctx.invoked_subcommand is not None:
        return

    try:
        Path.home()
    except (RuntimeError, KeyError) as e:
        print_error(f"Cannot determine home directory: {e}")
        raise typer.Exit(code=1) from e

    signal.signal(signal.SIGTERM, _interrupt_on_sigterm)

    try:
        if not no_init:
            initialize_terminal()
        run_interactive(dry_run=dry_run)
    except KeyboardUnavailableError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    except KeyboardInterrupt:
        pass

    console.print("\nExiting CrunchyCleaner. Goodbye!")


# Register commands
app.add_typer(scan.app, name="scan")
app.add_typer(clean.app, name="clean")


if __name__ == "__main__":
    app()
