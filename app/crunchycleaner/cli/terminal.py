"""Cosmetic terminal setup shown before the menu.

Everything here degrades gracefully: a failed query is reported as
unknown and never stops the program.
"""

import getpass
import logging
import subprocess

from crunchycleaner import __version__
from crunchycleaner.catalog.targets import OSFamily, detect_os_family
from crunchycleaner.utils.formatting import console
from crunchycleaner.utils.shell import run_command

logger = logging.getLogger(__name__)

# Preferred terminal size for the menu layout
COLS = 62
LINES = 30

_POWERSHELL_SIZE = '$s=$Host.UI.RawUI.WindowSize; Write-Output "$($s.Width) $($s.Height)"'


def current_username() -> str:
    """Get the current user's name without any domain prefix.

    Returns:
        The username, or "unknown" if it cannot be determined.
    """
    try:
        name = getpass.getuser()
    except (KeyError, OSError):
        return "unknown"
    return name.rsplit("\\", 1)[-1]


def detect_terminal_size(os_family: OSFamily | None = None) -> tuple[int, int] | None:
    """Query the terminal size with an external command.

    Args:
        os_family: Platform to query for. Defaults to the running host.

    Returns:
        ``(columns, lines)``, or None if the size could not be read.
    """
    if os_family is None:
        os_family = detect_os_family()

    try:
        if os_family == OSFamily.WINDOWS:
            result = run_command(
                ["powershell", "-NoProfile", "-Command", _POWERSHELL_SIZE], timeout=10.0
            )
            if not result.success:
                return None
            cols, lines = result.stdout.split()[:2]
        else:
            result = run_command(["stty", "size"], timeout=5.0, stdin_tty=True)
            if not result.success:
                return None
            lines, cols = result.stdout.split()[:2]
        return int(cols), int(lines)
    except (FileNotFoundError, OSError, subprocess.SubprocessError, ValueError) as e:
        logger.debug("Cannot detect terminal size: %s", e)
        return None


def initialize_terminal() -> None:
    """Print startup information and ask the terminal for the menu size."""
    console.print(f"Initializing CrunchyCleaner {__version__}...")
    console.print(f"Username: {current_username()}")
    console.set_window_title(f"CrunchyCleaner {__version__}")

    if console.is_terminal:
        # xterm window resize request; ignored by terminals that lack it
        console.file.write(f"\033[8;{LINES};{COLS}t")
        console.file.flush()

    size = detect_terminal_size()
    if size is None:
        console.print("System: Could not detect terminal size.")
    elif size != (COLS, LINES):
        console.print(
            f"System: Terminal size mismatch (Got {size[0]}x{size[1]}, Expected {COLS}x{LINES})"
        )
    else:
        console.print(f"System: Terminal size optimized ({COLS}x{LINES})")
