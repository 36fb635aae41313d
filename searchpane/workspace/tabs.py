"""Open-tab list and active-file reducer.

Reducer functions are pure and return new ``TabState`` values. ``TabList``
holds the current state and serves as the active-file selector.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class TabState:
    tab_list: tuple[str, ...] = ()
    active_file_id: str | None = None


def set_active_file_id(state: TabState, file_id: str | None) -> TabState:
    return replace(state, active_file_id=file_id)


def open_tab(state: TabState, file_id: str) -> TabState:
    """Activate ``file_id``, appending it to the tab list when missing."""
    if file_id in state.tab_list:
        return replace(state, active_file_id=file_id)
    return TabState(tab_list=(*state.tab_list, file_id), active_file_id=file_id)


def close_tab(state: TabState, file_id: str) -> TabState:
    """Remove ``file_id``; closing the active tab activates its left neighbour.

    Closing the first tab activates the new first tab, and closing the last
    remaining tab clears the active file.
    """
    if file_id not in state.tab_list:
        return state
    idx = state.tab_list.index(file_id)
    tabs = state.tab_list[:idx] + state.tab_list[idx + 1 :]
    active = state.active_file_id
    if active == file_id:
        if tabs:
            active = tabs[idx] if idx == 0 else tabs[idx - 1]
        else:
            active = None
    return TabState(tab_list=tabs, active_file_id=active)


def multi_close_tab(state: TabState, file_ids: Iterable[str]) -> TabState:
    for file_id in file_ids:
        state = close_tab(state, file_id)
    return state


class TabList:
    """Mutable holder for ``TabState`` with optional activate and close callbacks."""

    def __init__(
        self,
        state: TabState | None = None,
        on_activate: Callable[[str], None] | None = None,
        on_close: Callable[[str], None] | None = None,
    ) -> None:
        self.state = state or TabState()
        self.on_activate = on_activate
        self.on_close = on_close

    @property
    def active_file_id(self) -> str | None:
        return self.state.active_file_id

    @property
    def tab_list(self) -> tuple[str, ...]:
        return self.state.tab_list

    def set_active_file_id(self, file_id: str) -> None:
        """Switch the displayed file, opening a tab for it when needed."""
        self.state = open_tab(self.state, file_id)
        if self.on_activate is not None:
            self.on_activate(file_id)

    def close(self, file_id: str) -> None:
        """Close the tab for ``file_id`` and notify ``on_close``; unknown ids are ignored."""
        if file_id not in self.state.tab_list:
            return
        self.state = close_tab(self.state, file_id)
        if self.on_close is not None:
            self.on_close(file_id)
