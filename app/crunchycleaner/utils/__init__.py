"""Utility modules for crunchycleaner.

This module exports commonly used utility functions.
"""

from crunchycleaner.utils.formatting import (
    console,
    err_console,
    format_size,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from crunchycleaner.utils.shell import CommandResult, run_command

__all__ = [
    "CommandResult",
    "console",
    "err_console",
    "format_size",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
]
