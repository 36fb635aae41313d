"""Search session controller.

``SearchSession`` owns the pattern, the current result snapshot, and keyboard
focus. It wires the debounce trigger, navigator, visibility controller, jump
coordinator, and viewport sync together, and exposes the surface a renderer
needs: a pattern setter, one key entry point, and per-row click handlers.

Result snapshots are replaced wholesale on every executed search and focus is
cleared at the same time, so indices from an older snapshot can never address
rows of a newer one.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import replace

from .jump import JumpCoordinator
from .navigator import KEY_DOWN, KEY_ENTER, KEY_TAB, navigate, normalize_key
from .rendering import (
    ResultRow,
    build_result_rows,
    locate_focus,
    result_slots,
    status_text,
)
from .results import (
    VISIBILITY_CLOSED,
    VISIBILITY_OPEN,
    FileResult,
    Focus,
    MatchRecord,
    shown_matches,
    visible_files,
)
from .search import search_workspace_content
from .trigger import DEFAULT_SEARCH_DELAY_SECONDS, SearchTrigger
from .ui_theme import UITheme
from .viewport import RowBounds, ScrollContainer, ViewportSync
from .visibility import VisibilityController
from .workspace.editor import TextEditorSurface
from .workspace.store import DocumentStore, WorkspaceFile

logger = logging.getLogger(__name__)

FOCUS_SEARCH_KEY = "CTRL_F"

SearchContentFn = Callable[[str, Mapping[str, WorkspaceFile]], Mapping[str, FileResult]]


class SearchSession:
    """Stateful search pane: pattern input, result snapshot, and focus."""

    def __init__(
        self,
        *,
        store: DocumentStore,
        set_active_file_id: Callable[[str], None],
        get_editor: Callable[[str], TextEditorSurface | None],
        search_content: SearchContentFn = search_workspace_content,
        delay_seconds: float = DEFAULT_SEARCH_DELAY_SECONDS,
        monotonic: Callable[[], float] = time.monotonic,
        scroll_container: ScrollContainer | None = None,
    ) -> None:
        self.store = store
        self.set_active_file_id = set_active_file_id
        self.search_content = search_content
        self.results: dict[str, FileResult] = {}
        self.results_pattern = ""
        self.focus: Focus | None = None
        self.input_focused = True
        self.last_error: str | None = None
        self.dirty = True
        self.trigger = SearchTrigger(self._execute_search, delay_seconds=delay_seconds, monotonic=monotonic)
        self.visibility = VisibilityController(
            write_file_visibility=store.set_file_visibility,
            write_line_visibility=store.set_line_visibility,
        )
        self.jumper = JumpCoordinator(get_editor)
        self.viewport = ViewportSync(self._locate_focus, scroll_container)

    # state views
    @property
    def pattern(self) -> str:
        return self.trigger.pattern

    @property
    def searching(self) -> bool:
        return self.trigger.searching

    def visible_files(self) -> list[FileResult]:
        return visible_files(self.results)

    def status_text(self) -> str | None:
        """Return ``Searching...``/``No Results``/failure text, or ``None`` when rows show."""
        return status_text(self.pattern, self.searching, len(self.visible_files()), self.last_error)

    def result_rows(self, width: int, theme: UITheme | None = None) -> list[ResultRow]:
        return build_result_rows(self.visible_files(), self.focus, self.results_pattern, width, theme)

    # pattern input and search execution
    def on_pattern_change(self, pattern: str) -> None:
        """Record a pattern edit; the search itself runs after the quiet period."""
        self.trigger.on_pattern_change(pattern)
        self.dirty = True

    def poll(self) -> bool:
        """Run the debounced search if its deadline passed; return whether it ran."""
        return self.trigger.poll()

    def run_pending_search(self) -> bool:
        """Run the debounced search immediately if one is waiting."""
        return self.trigger.flush()

    def _execute_search(self, pattern: str) -> None:
        try:
            results = self.search_content(pattern, self.store.corpus())
        except Exception as exc:
            logger.warning("search for %r failed: %s", pattern, exc)
            self.last_error = str(exc) or exc.__class__.__name__
            self.dirty = True
            return
        self.replace_results(results, pattern)

    def replace_results(self, results: Mapping[str, FileResult], pattern: str) -> None:
        """Install a fresh snapshot: every file open, focus cleared, list scrolled to top."""
        self.results = {
            file_id: file if file.visibility == VISIBILITY_OPEN else replace(file, visibility=VISIBILITY_OPEN)
            for file_id, file in results.items()
        }
        self.results_pattern = pattern
        self.focus = None
        self.last_error = None
        self.store.clear_search_state()
        if self.viewport.container is not None:
            self.viewport.container.scroll_top = 0
        self.dirty = True
        logger.debug("search for %r matched %d files", pattern, len(self.results))

    # keyboard
    def focus_input(self) -> None:
        if not self.input_focused:
            self.input_focused = True
            self.dirty = True

    def handle_key(self, key: str) -> bool:
        """Dispatch one key to the pattern input or the result navigator."""
        if key == FOCUS_SEARCH_KEY:
            self.focus_input()
            return True
        if self.input_focused:
            return self._handle_input_key(key)
        if key == "ESC":
            self.focus_input()
            return True
        return self.handle_navigation_key(key)

    def _handle_input_key(self, key: str) -> bool:
        if len(key) == 1 and key.isprintable():
            self.on_pattern_change(self.pattern + key)
            return True
        if key == "BACKSPACE":
            if self.pattern:
                self.on_pattern_change(self.pattern[:-1])
            return True
        if key == "CTRL_U":
            if self.pattern:
                self.on_pattern_change("")
            return True
        normalized = normalize_key(key)
        if normalized == KEY_ENTER:
            self.run_pending_search()
            return True
        if normalized in {KEY_TAB, KEY_DOWN}:
            self.input_focused = False
            if self.focus is None and self.visible_files():
                self._set_focus(Focus(0))
            self.dirty = True
            return True
        return False

    def handle_navigation_key(self, key: str) -> bool:
        """Apply one navigator transition; return whether anything changed."""
        files = self.visible_files()
        if not files:
            return False
        outcome = navigate(files, self.focus, key)
        changed = False
        focus = outcome.focus
        if outcome.visibility is not None:
            file_id, visibility = outcome.visibility
            self.results, focus = self.visibility.set_file_visibility(self.results, focus, file_id, visibility)
            self.dirty = True
            changed = True
        if focus != self.focus:
            self._set_focus(focus)
            changed = True
        if outcome.activate is not None:
            self._activate(outcome.activate, outcome.jump)
            changed = True
        self._sync_viewport()
        return changed

    # pointer
    def click_heading(self, file_index: int) -> bool:
        files = self.visible_files()
        if not (0 <= file_index < len(files)):
            return False
        self.input_focused = False
        self._set_focus(Focus(file_index))
        self._activate(files[file_index].file_id, None)
        return True

    def click_arrow(self, file_index: int) -> bool:
        files = self.visible_files()
        if not (0 <= file_index < len(files)):
            return False
        self.results, self.focus = self.visibility.toggle_file_open(self.results, self.focus, files[file_index].file_id)
        self.dirty = True
        self._sync_viewport()
        return True

    def click_close_file(self, file_index: int) -> bool:
        files = self.visible_files()
        if not (0 <= file_index < len(files)):
            return False
        return self.set_file_visibility(files[file_index].file_id, VISIBILITY_CLOSED)

    def click_match(self, file_index: int, match_index: int) -> bool:
        match = self._shown_match(file_index, match_index)
        if match is None:
            return False
        self.input_focused = False
        self._set_focus(Focus(file_index, match_index))
        self._activate(self.visible_files()[file_index].file_id, match)
        return True

    def click_close_line(self, file_index: int, match_index: int) -> bool:
        match = self._shown_match(file_index, match_index)
        if match is None:
            return False
        return self.set_line_visibility(self.visible_files()[file_index].file_id, match.line)

    # visibility operations
    def set_file_visibility(self, file_id: str, visibility: str) -> bool:
        if file_id not in self.results:
            return False
        self.results, self.focus = self.visibility.set_file_visibility(self.results, self.focus, file_id, visibility)
        self.dirty = True
        self._sync_viewport()
        return True

    def set_line_visibility(self, file_id: str, line: int) -> bool:
        """Hide the match line; raises ``ValueError`` when no such match exists."""
        self.results, self.focus = self.visibility.set_line_visibility(self.results, self.focus, file_id, line)
        self.dirty = True
        self._sync_viewport()
        return True

    # lifecycle
    def dispose(self) -> None:
        """Cancel the pending debounced search; the session stops reacting to edits."""
        self.trigger.dispose()

    # helpers
    def _shown_match(self, file_index: int, match_index: int) -> MatchRecord | None:
        files = self.visible_files()
        if not (0 <= file_index < len(files)):
            return None
        matches = shown_matches(files[file_index])
        if not (0 <= match_index < len(matches)):
            return None
        return matches[match_index]

    def _activate(self, file_id: str, match: MatchRecord | None) -> None:
        self.set_active_file_id(file_id)
        if match is not None:
            self.jumper.jump(file_id, match.line, match.index, len(self.results_pattern))
        self.dirty = True

    def _set_focus(self, focus: Focus | None) -> None:
        if focus == self.focus:
            return
        self.focus = focus
        self.dirty = True
        self._sync_viewport()

    def _locate_focus(self, focus: Focus) -> RowBounds | None:
        return locate_focus(self.visible_files(), focus)

    def _sync_viewport(self) -> None:
        container = self.viewport.container
        if container is None:
            return
        files = self.visible_files()
        container.content_height = len(result_slots(files))
        container.scroll_top = max(0, min(container.scroll_top, container.max_scroll_top()))
        if self.viewport.sync(self.focus):
            self.dirty = True
