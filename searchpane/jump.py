"""Jump from a search match to its location in an editor surface."""

from __future__ import annotations

import logging
from collections.abc import Callable

from .workspace.editor import SelectionRange, TextEditorSurface, line_start_offsets

logger = logging.getLogger(__name__)


def match_selection(text: str, line: int, column_index: int, pattern_length: int) -> SelectionRange | None:
    """Return the absolute selection covering one match, or ``None`` if out of range."""
    starts = line_start_offsets(text)
    if line < 1 or line > len(starts) or column_index < 0:
        return None
    start = starts[line - 1] + column_index
    return SelectionRange(anchor=start, head=start + max(0, pattern_length))


class JumpCoordinator:
    """Place the selection on a match and scroll it to the viewport centre."""

    def __init__(self, get_editor: Callable[[str], TextEditorSurface | None]) -> None:
        self.get_editor = get_editor

    def jump(self, file_id: str, line: int, column_index: int, pattern_length: int) -> bool:
        """Select the match in ``file_id``'s editor; return whether one was selected.

        A file without a live editor surface, or a line the editor no longer
        has, is skipped silently.
        """
        editor = self.get_editor(file_id)
        if editor is None:
            logger.debug("no editor surface for %s; skipping jump", file_id)
            return False
        selection = match_selection(editor.text, line, column_index, pattern_length)
        if selection is None:
            logger.debug("line %s is outside %s; skipping jump", line, file_id)
            return False
        editor.dispatch_selection(selection.anchor, selection.head, center=True)
        return True
