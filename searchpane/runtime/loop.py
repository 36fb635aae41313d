"""Main interactive event loop for the search pane.

Each iteration resizes panes, repaints when state is dirty, waits for a key
no longer than the pending search deadline, dispatches the key, and polls the
debounce trigger. All state changes happen on this one thread.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass

from ..rendering import ARROW_COLUMN, result_slots
from .app import SearchApp
from .reader import read_key
from .screen import RESULTS_TOP_ROW, ScreenLayout, compose_screen, compute_layout
from .terminal import TerminalController

logger = logging.getLogger(__name__)

QUIT_KEYS = frozenset({"CTRL_C", "CTRL_Q"})
IDLE_POLL_MS = 250


@dataclass(frozen=True)
class PaneClick:
    """Decoded left click inside the results pane."""

    action: str
    file_index: int = -1
    match_index: int | None = None


def decode_results_click(app: SearchApp, layout: ScreenLayout, col: int, row: int) -> PaneClick | None:
    """Map a 1-based terminal click to a results-pane action, if any."""
    x = col - 1
    y = row - 1
    if x >= layout.left_width or y >= layout.status_row:
        return None
    if y < RESULTS_TOP_ROW:
        return PaneClick(action="input")
    if app.session.status_text() is not None:
        return None
    slots = result_slots(app.session.visible_files())
    idx = app.container.scroll_top + (y - RESULTS_TOP_ROW)
    if not (0 <= idx < len(slots)):
        return None
    slot = slots[idx]
    focus = app.session.focus
    focused = focus is not None and focus.file_index == slot.file_index and focus.match_index == slot.match_index
    if focused and x == layout.left_width - 1:
        action = "close_file" if slot.match_index is None else "close_line"
        return PaneClick(action=action, file_index=slot.file_index, match_index=slot.match_index)
    if slot.match_index is None:
        action = "arrow" if x == ARROW_COLUMN else "heading"
        return PaneClick(action=action, file_index=slot.file_index)
    return PaneClick(action="match", file_index=slot.file_index, match_index=slot.match_index)


def apply_results_click(app: SearchApp, click: PaneClick) -> bool:
    session = app.session
    if click.action == "input":
        session.focus_input()
        return True
    if click.action == "heading":
        return session.click_heading(click.file_index)
    if click.action == "arrow":
        return session.click_arrow(click.file_index)
    if click.action == "close_file":
        return session.click_close_file(click.file_index)
    if click.match_index is None:
        return False
    if click.action == "close_line":
        return session.click_close_line(click.file_index, click.match_index)
    return session.click_match(click.file_index, click.match_index)


def _parse_mouse_token(key: str) -> tuple[int, int] | None:
    try:
        _kind, col_s, row_s = key.split(":")
        return int(col_s), int(row_s)
    except ValueError:
        return None


def run_main_loop(app: SearchApp, terminal: TerminalController, stdin_fd: int) -> None:
    """Run the interactive search pane until a quit key is pressed."""
    session = app.session
    last_layout: ScreenLayout | None = None
    try:
        with terminal.raw_mode():
            while True:
                term = shutil.get_terminal_size((80, 24))
                layout = compute_layout(term.columns, term.lines)
                if layout != last_layout:
                    app.resize(layout.results_rows, layout.height - 1)
                    last_layout = layout
                    session.dirty = True

                if session.dirty:
                    session.dirty = False
                    terminal.write("\x1b[H" + "\r\n".join(compose_screen(app, layout)))

                remaining = session.trigger.seconds_until_due()
                timeout_ms = IDLE_POLL_MS if remaining is None else min(IDLE_POLL_MS, int(remaining * 1000) + 1)
                key = read_key(stdin_fd, timeout_ms=timeout_ms)
                if key in QUIT_KEYS:
                    break
                if key.startswith("MOUSE_LEFT_DOWN:"):
                    position = _parse_mouse_token(key)
                    if position is not None:
                        click = decode_results_click(app, layout, *position)
                        if click is not None:
                            apply_results_click(app, click)
                elif key and not key.startswith("MOUSE"):
                    app.handle_key(key)
                if session.poll():
                    session.dirty = True
    finally:
        session.dispose()
        logger.debug("search pane loop exited")
