"""Two-level keyboard navigation over the visible result tree.

Focus moves between file headings and the matches shown beneath them. The
transition function is pure: it reads the visible files and current focus and
returns a :class:`NavigationOutcome` describing what the session should apply.

Movement is strictly ordinal with no wraparound. ``LEFT`` is the only key that
changes disclosure on its own (it flattens an open heading); ``RIGHT`` opens a
flattened heading before it will step into matches.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .results import (
    VISIBILITY_FLATTENED,
    VISIBILITY_OPEN,
    FileResult,
    Focus,
    MatchRecord,
    shown_match_count,
    shown_matches,
)

KEY_TAB = "TAB"
KEY_UP = "UP"
KEY_DOWN = "DOWN"
KEY_LEFT = "LEFT"
KEY_RIGHT = "RIGHT"
KEY_ENTER = "ENTER"
KEY_SPACE = "SPACE"

MOVE_KEYS = frozenset({KEY_TAB, KEY_UP, KEY_DOWN, KEY_LEFT, KEY_RIGHT})
ACTIVATE_KEYS = frozenset({KEY_ENTER, KEY_SPACE})

_KEY_ALIASES = {
    " ": KEY_SPACE,
    "ENTER_CR": KEY_ENTER,
    "ENTER_LF": KEY_ENTER,
    "ArrowUp": KEY_UP,
    "ArrowDown": KEY_DOWN,
    "ArrowLeft": KEY_LEFT,
    "ArrowRight": KEY_RIGHT,
    "Enter": KEY_ENTER,
    "Tab": KEY_TAB,
}


def normalize_key(key: str) -> str:
    """Map reader and browser-style key names onto navigator key tokens."""
    return _KEY_ALIASES.get(key, key)


def is_navigation_key(key: str) -> bool:
    key = normalize_key(key)
    return key in MOVE_KEYS or key in ACTIVATE_KEYS


@dataclass(frozen=True)
class NavigationOutcome:
    """Effects of one key press.

    ``visibility`` is a ``(file_id, new_visibility)`` request, ``activate`` is
    the file id to show in the editor, and ``jump`` the match to jump to.
    """

    focus: Focus | None
    visibility: tuple[str, str] | None = None
    activate: str | None = None
    jump: MatchRecord | None = None


def clamp_focus(files: Sequence[FileResult], focus: Focus | None) -> Focus | None:
    """Return ``focus`` if it addresses a visible node, else its nearest valid form.

    A match index past the shown matches collapses onto the last shown match
    (or the heading when none are shown). A file index past the end drops
    focus entirely.
    """
    if focus is None or not (0 <= focus.file_index < len(files)):
        return None
    if focus.match_index is None:
        return focus
    count = shown_match_count(files[focus.file_index])
    if count == 0:
        return Focus(focus.file_index)
    if focus.match_index < 0:
        return Focus(focus.file_index)
    if focus.match_index >= count:
        return Focus(focus.file_index, count - 1)
    return focus


def navigate(files: Sequence[FileResult], focus: Focus | None, key: str) -> NavigationOutcome:
    """Compute the next focus and side effects for ``key``.

    With no visible files every key is a no-op. With nothing focused, movement
    keys focus the first heading and activation keys do nothing.
    """
    key = normalize_key(key)
    if not files or (key not in MOVE_KEYS and key not in ACTIVATE_KEYS):
        return NavigationOutcome(focus=focus)

    current = clamp_focus(files, focus)
    if current is None:
        if key in ACTIVATE_KEYS:
            return NavigationOutcome(focus=None)
        return NavigationOutcome(focus=Focus(0))

    file_index = current.file_index
    match_index = current.match_index
    file = files[file_index]
    count = shown_match_count(file)
    last_file = file_index == len(files) - 1

    if key == KEY_TAB:
        return NavigationOutcome(focus=Focus(file_index))

    if key == KEY_UP:
        if match_index is None:
            if file_index == 0:
                return NavigationOutcome(focus=current)
            previous_count = shown_match_count(files[file_index - 1])
            if previous_count > 0:
                return NavigationOutcome(focus=Focus(file_index - 1, previous_count - 1))
            return NavigationOutcome(focus=Focus(file_index - 1))
        if match_index == 0:
            return NavigationOutcome(focus=Focus(file_index))
        return NavigationOutcome(focus=Focus(file_index, match_index - 1))

    if key == KEY_DOWN:
        if match_index is None and count > 0:
            return NavigationOutcome(focus=Focus(file_index, 0))
        if match_index is None or match_index == count - 1:
            if last_file:
                return NavigationOutcome(focus=current)
            return NavigationOutcome(focus=Focus(file_index + 1))
        return NavigationOutcome(focus=Focus(file_index, match_index + 1))

    if key == KEY_LEFT:
        if match_index is not None:
            return NavigationOutcome(focus=Focus(file_index))
        if file.visibility == VISIBILITY_OPEN:
            return NavigationOutcome(focus=current, visibility=(file.file_id, VISIBILITY_FLATTENED))
        return NavigationOutcome(focus=current)

    if key == KEY_RIGHT:
        if file.visibility != VISIBILITY_OPEN:
            return NavigationOutcome(focus=current, visibility=(file.file_id, VISIBILITY_OPEN))
        if match_index is None and count > 0:
            return NavigationOutcome(focus=Focus(file_index, 0))
        return NavigationOutcome(focus=current)

    # ENTER / SPACE
    jump = None
    if match_index is not None:
        jump = shown_matches(file)[match_index]
    return NavigationOutcome(focus=current, activate=file.file_id, jump=jump)
