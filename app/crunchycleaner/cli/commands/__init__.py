"""CLI commands for crunchycleaner.

This package contains the non-interactive subcommand implementations.
"""

from crunchycleaner.cli.commands import clean, scan

__all__ = ["clean", "scan"]
