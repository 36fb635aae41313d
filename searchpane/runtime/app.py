"""Construction of a complete search pane around one workspace corpus.

Wires the document store, open tabs, editor surfaces, and the search session
the same way for the interactive loop, ``--print`` mode, and tests.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass

from ..highlight import DEFAULT_STYLE
from ..search import search_workspace_content
from ..session import SearchContentFn, SearchSession
from ..trigger import DEFAULT_SEARCH_DELAY_SECONDS
from ..ui_theme import DEFAULT_THEME, UITheme
from ..viewport import ScrollContainer
from ..workspace import DocumentStore, EditorRegistry, TabList, WorkspaceFile


CLOSE_TAB_KEY = "CTRL_W"


@dataclass
class SearchApp:
    store: DocumentStore
    tabs: TabList
    editors: EditorRegistry
    session: SearchSession
    container: ScrollContainer
    theme: UITheme = DEFAULT_THEME
    style: str = DEFAULT_STYLE

    def resize(self, results_rows: int, editor_rows: int) -> None:
        self.container.height = max(1, results_rows)
        self.editors.resize(editor_rows)

    def close_active_tab(self) -> bool:
        """Close the active tab and drop its editor surface."""
        file_id = self.tabs.active_file_id
        if file_id is None:
            return False
        self.tabs.close(file_id)
        self.session.dirty = True
        return True

    def handle_key(self, key: str) -> bool:
        if key == CLOSE_TAB_KEY:
            return self.close_active_tab()
        return self.session.handle_key(key)


def build_search_app(
    corpus: Mapping[str, WorkspaceFile],
    *,
    delay_seconds: float = DEFAULT_SEARCH_DELAY_SECONDS,
    theme: UITheme = DEFAULT_THEME,
    style: str = DEFAULT_STYLE,
    monotonic: Callable[[], float] = time.monotonic,
    search_content: SearchContentFn = search_workspace_content,
    results_rows: int = 20,
    editor_rows: int = 20,
) -> SearchApp:
    """Create a search app whose active-file switches open editor surfaces."""
    store = DocumentStore(files=dict(corpus))
    editors = EditorRegistry(viewport_rows=editor_rows)
    tabs = TabList(
        on_activate=lambda file_id: editors.open(file_id, store.file_text),
        on_close=editors.close,
    )
    container = ScrollContainer(height=max(1, results_rows))
    session = SearchSession(
        store=store,
        set_active_file_id=tabs.set_active_file_id,
        get_editor=editors.get,
        search_content=search_content,
        delay_seconds=delay_seconds,
        monotonic=monotonic,
        scroll_container=container,
    )
    return SearchApp(
        store=store,
        tabs=tabs,
        editors=editors,
        session=session,
        container=container,
        theme=theme,
        style=style,
    )


def replay_keys(app: SearchApp, keys: Iterable[str]) -> None:
    """Feed key tokens to the app in order, running due searches between keys."""
    for key in keys:
        app.handle_key(key)
        app.session.poll()
