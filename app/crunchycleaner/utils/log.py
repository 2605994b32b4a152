"""Logging setup for the CLI.

Library modules only call ``logging.getLogger(__name__)``; the CLI entry
point installs a single Rich handler so cleanup progress lines share the
themed console with the rest of the output.
"""

import logging

from rich.logging import RichHandler

from crunchycleaner.utils.formatting import console

_HANDLER_NAME = "crunchycleaner"


def configure_logging(verbose: bool = False) -> None:
    """Route package log records to the shared Rich console.

    Calling this more than once replaces the previously installed handler
    instead of stacking a second one.

    Args:
        verbose: If True, also show debug records.
    """
    root = logging.getLogger("crunchycleaner")
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)

    handler = RichHandler(
        console=console,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )
    handler.set_name(_HANDLER_NAME)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
