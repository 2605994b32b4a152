"""Single-key input for the interactive menu.

Puts the terminal into cbreak mode for the lifetime of a ``KeyReader``
context and decodes key presses (including arrow-key escape sequences)
into ``(char, key)`` pairs. Terminal attributes are always restored on
exit, including when the session ends through an interrupt.
"""

from __future__ import annotations

import io
import os
import sys
from collections.abc import Iterator
from dataclasses import dataclass
from types import TracebackType
from typing import TextIO

from crunchycleaner.core.selection import Key, MenuEvent, event_for_key

try:
    import select
    import termios
    import tty

    _HAS_TERMIOS = True
except ImportError:
    _HAS_TERMIOS = False

try:
    import msvcrt

    _HAS_MSVCRT = True
except ImportError:
    _HAS_MSVCRT = False

# Delay allowed between the bytes of one escape sequence
_ESCAPE_TIMEOUT = 0.05

# Unmodified arrow sequences, without the leading escape
_ARROWS: dict[str, Key] = {"[A": Key.UP, "[B": Key.DOWN, "OA": Key.UP, "OB": Key.DOWN}
_WINDOWS_ARROWS: dict[str, Key] = {"H": Key.UP, "P": Key.DOWN}


class KeyboardUnavailableError(RuntimeError):
    """Raised when the terminal cannot be switched to single-key input."""


@dataclass(frozen=True, slots=True)
class KeyPress:
    """A decoded key press.

    Attributes:
        char: Printable character, if the key produced one.
        key: Named key, if the key has a name (arrows, Enter, ...).
    """

    char: str | None
    key: Key | None = None


def decode_key(data: str) -> KeyPress:
    """Decode the characters produced by one key press on a POSIX terminal.

    Args:
        data: Raw characters read for the key press.

    Returns:
        KeyPress describing the key.
    """
    if data in ("\r", "\n"):
        return KeyPress(char=None, key=Key.ENTER)
    if data == " ":
        return KeyPress(char=" ", key=Key.SPACE)
    if data == "\x03":
        return KeyPress(char=None, key=Key.CTRL_C)
    if data == "\x1b":
        return KeyPress(char=None, key=Key.ESCAPE)
    if data.startswith("\x1b"):
        # Modified arrows and other sequences are one ignored key press
        return KeyPress(char=None, key=_ARROWS.get(data[1:]))
    return KeyPress(char=data[:1] or None)


def _read_escape_tail(fd: int) -> bytes:
    """Read the rest of an escape sequence after its ESC byte.

    CSI (``ESC [``) and SS3 (``ESC O``) sequences run through any parameter
    and intermediate bytes (0x20-0x3F) up to and including the final byte,
    so ``ESC [ 1 ; 5 C`` is consumed as a whole. Any other byte after ESC
    ends the sequence, as does a gap longer than the escape timeout.
    """
    introducer = _read_pending(fd)
    if introducer not in (b"[", b"O"):
        return introducer
    tail = introducer
    while True:
        chunk = _read_pending(fd)
        tail += chunk
        if not chunk or not 0x20 <= chunk[0] <= 0x3F:
            return tail


def _read_pending(fd: int) -> bytes:
    if not select.select([fd], [], [], _ESCAPE_TIMEOUT)[0]:
        return b""
    return os.read(fd, 1)


class KeyReader:
    """Context manager reading single key presses from the terminal.

    Example:
        >>> with KeyReader() as reader:
        ...     for event in reader.events():
        ...         print(event)
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        """Initialize the reader.

        Args:
            stream: Terminal input stream. Defaults to ``sys.stdin``.
        """
        self._stream = stream if stream is not None else sys.stdin
        self._fd: int | None = None
        self._saved: list | None = None

    def __enter__(self) -> KeyReader:
        if _HAS_TERMIOS:
            try:
                self._fd = self._stream.fileno()
                self._saved = termios.tcgetattr(self._fd)
                tty.setcbreak(self._fd)
            except (termios.error, OSError, ValueError, io.UnsupportedOperation) as e:
                msg = f"Cannot enable raw keyboard mode: {e}"
                raise KeyboardUnavailableError(msg) from e
        elif not _HAS_MSVCRT:
            msg = "Cannot enable raw keyboard mode: no terminal support on this platform"
            raise KeyboardUnavailableError(msg)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._fd is not None and self._saved is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved)
        self._fd = None
        self._saved = None

    def read_key(self) -> KeyPress:
        """Block until a key is pressed and return it.

        Raises:
            EOFError: If the input stream is closed.
        """
        if _HAS_TERMIOS:
            return decode_key(self._read_posix())
        return self._read_windows()

    def events(self) -> Iterator[MenuEvent | None]:
        """Yield menu events for each key press until input ends.

        A keyboard interrupt while waiting for a key is reported as an
        INTERRUPT event.
        """
        while True:
            try:
                press = self.read_key()
            except KeyboardInterrupt:
                yield MenuEvent.INTERRUPT
                return
            except EOFError:
                return
            yield event_for_key(press.char, press.key)

    def _read_posix(self) -> str:
        if self._fd is None:
            raise KeyboardUnavailableError("Key reader used outside its context")
        first = os.read(self._fd, 1)
        if not first:
            raise EOFError
        data = first
        if first == b"\x1b":
            data += _read_escape_tail(self._fd)
        return data.decode("utf-8", errors="ignore")

    def _read_windows(self) -> KeyPress:
        char = msvcrt.getwch()
        if char in ("\x00", "\xe0"):
            return KeyPress(char=None, key=_WINDOWS_ARROWS.get(msvcrt.getwch()))
        return decode_key(char)
