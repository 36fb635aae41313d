"""Workspace collaborators: document store, editor surfaces, and open tabs."""

from __future__ import annotations

from .editor import EditorRegistry, SelectionRange, TextEditorSurface, source_lines
from .store import DocumentStore, WorkspaceFile
from .tabs import TabList, TabState, close_tab, multi_close_tab, open_tab, set_active_file_id

__all__ = [
    "DocumentStore",
    "EditorRegistry",
    "SelectionRange",
    "TabList",
    "TabState",
    "TextEditorSurface",
    "WorkspaceFile",
    "close_tab",
    "multi_close_tab",
    "open_tab",
    "set_active_file_id",
    "source_lines",
]
