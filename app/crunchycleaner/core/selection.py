"""Interactive selection state machine.

The menu is modelled as an immutable state plus a pure transition function,
so navigation and selection logic can be tested without a terminal. The
session driver feeds events through the machine and calls the cleanup
callback exactly once when the user commits.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, replace
from enum import Enum

from crunchycleaner.catalog.models import DiscoveredEntry

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    """Lifecycle of a selection session.

    Attributes:
        BROWSING: The menu is open and accepts input.
        COMMITTED: The user asked to clean the checked entries.
        CANCELLED: The user quit without cleaning.
    """

    BROWSING = "browsing"
    COMMITTED = "committed"
    CANCELLED = "cancelled"


class MenuEvent(str, Enum):
    """Input events understood by the selection state machine."""

    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    TOGGLE = "toggle"
    TOGGLE_ALL = "toggle_all"
    COMMIT = "commit"
    INTERRUPT = "interrupt"


class Key(str, Enum):
    """Named (non-character) keys delivered by the key reader."""

    UP = "up"
    DOWN = "down"
    ENTER = "enter"
    SPACE = "space"
    ESCAPE = "escape"
    CTRL_C = "ctrl_c"


_CHAR_EVENTS: dict[str, MenuEvent] = {
    "w": MenuEvent.MOVE_UP,
    "s": MenuEvent.MOVE_DOWN,
    " ": MenuEvent.TOGGLE,
    "a": MenuEvent.TOGGLE_ALL,
    "c": MenuEvent.COMMIT,
    "q": MenuEvent.INTERRUPT,
}

_KEY_EVENTS: dict[Key, MenuEvent] = {
    Key.UP: MenuEvent.MOVE_UP,
    Key.DOWN: MenuEvent.MOVE_DOWN,
    Key.ENTER: MenuEvent.TOGGLE,
    Key.SPACE: MenuEvent.TOGGLE,
    Key.ESCAPE: MenuEvent.INTERRUPT,
    Key.CTRL_C: MenuEvent.INTERRUPT,
}


def event_for_key(char: str | None, key: Key | None) -> MenuEvent | None:
    """Map a key press to a menu event.

    Args:
        char: Printable character typed, if any.
        key: Named key pressed, if any. Takes precedence over ``char``.

    Returns:
        The matching MenuEvent, or None for keys the menu ignores.
    """
    if key is not None and key in _KEY_EVENTS:
        return _KEY_EVENTS[key]
    if char:
        return _CHAR_EVENTS.get(char.lower())
    return None


@dataclass(frozen=True, slots=True)
class SelectionState:
    """Immutable state of the selection menu.

    Attributes:
        entries: Discovered entries with their checked flags.
        cursor: Index of the highlighted entry.
        phase: Current lifecycle phase.
    """

    entries: tuple[DiscoveredEntry, ...]
    cursor: int = 0
    phase: Phase = Phase.BROWSING

    def __post_init__(self) -> None:
        """Validate state data after initialization."""
        if not self.entries:
            msg = "Selection requires at least one entry"
            raise ValueError(msg)
        if not (0 <= self.cursor < len(self.entries)):
            msg = f"Cursor {self.cursor} out of range for {len(self.entries)} entries"
            raise ValueError(msg)

    @classmethod
    def initial(cls, entries: Iterable[DiscoveredEntry]) -> SelectionState:
        """Create the initial state: cursor on the first entry, nothing checked.

        Raises:
            ValueError: If ``entries`` is empty.
        """
        return cls(entries=tuple(replace(e, checked=False) for e in entries))

    @property
    def is_done(self) -> bool:
        """Check if the session has reached a terminal phase."""
        return self.phase != Phase.BROWSING

    @property
    def all_checked(self) -> bool:
        """Check if every entry is checked."""
        return all(e.checked for e in self.entries)

    @property
    def checked_entries(self) -> list[DiscoveredEntry]:
        """Entries currently selected for cleanup."""
        return [e for e in self.entries if e.checked]


def transition(state: SelectionState, event: MenuEvent) -> SelectionState:
    """Apply one event to the selection state.

    Events received after the session has been committed or cancelled are
    ignored.

    Args:
        state: Current state.
        event: Event to apply.

    Returns:
        The next state (``state`` itself when nothing changes).
    """
    if state.is_done:
        return state

    last = len(state.entries) - 1

    if event == MenuEvent.MOVE_UP:
        return replace(state, cursor=max(0, state.cursor - 1))

    if event == MenuEvent.MOVE_DOWN:
        return replace(state, cursor=min(last, state.cursor + 1))

    if event == MenuEvent.TOGGLE:
        entries = list(state.entries)
        current = entries[state.cursor]
        entries[state.cursor] = replace(current, checked=not current.checked)
        return replace(state, entries=tuple(entries))

    if event == MenuEvent.TOGGLE_ALL:
        checked = not state.all_checked
        return replace(state, entries=tuple(replace(e, checked=checked) for e in state.entries))

    if event == MenuEvent.COMMIT:
        return replace(state, phase=Phase.COMMITTED)

    if event == MenuEvent.INTERRUPT:
        return replace(state, phase=Phase.CANCELLED)

    return state


def run_session(
    state: SelectionState,
    events: Iterable[MenuEvent | None],
    on_commit: Callable[[Sequence[DiscoveredEntry]], object],
    on_change: Callable[[SelectionState], object] | None = None,
) -> SelectionState:
    """Drive the state machine from an event source.

    ``None`` events (ignored keys) are skipped. ``on_commit`` receives the
    full entry list; the executor itself filters on the checked flag. If the
    event source runs dry before a terminal phase, the session is cancelled.

    Args:
        state: Initial state.
        events: Event source, typically fed by the key reader.
        on_commit: Called once with the entries when the user commits.
        on_change: Called after each transition that changed the state.

    Returns:
        The terminal state (COMMITTED or CANCELLED).
    """
    for event in events:
        if event is None:
            continue

        new_state = transition(state, event)
        if new_state != state and on_change is not None and not new_state.is_done:
            on_change(new_state)
        state = new_state

        if state.phase == Phase.COMMITTED:
            logger.debug("Committed with %d entries checked", len(state.checked_entries))
            on_commit(state.entries)
            return state
        if state.phase == Phase.CANCELLED:
            return state

    return transition(state, MenuEvent.INTERRUPT)
