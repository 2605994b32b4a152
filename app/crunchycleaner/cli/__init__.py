"""CLI package for crunchycleaner.

This package contains the Typer application, the interactive menu,
and all subcommands.
"""

from crunchycleaner.cli.main import app

__all__ = ["app"]
