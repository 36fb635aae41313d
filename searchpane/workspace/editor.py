"""Text editor surfaces and the per-file surface registry.

A surface owns its text, selection, and vertical scroll; callers never reach
into rendering. The registry mirrors an editor cache: surfaces are created on
first open and reused afterwards.
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Callable
from dataclasses import dataclass

DEFAULT_VIEWPORT_ROWS = 20


@dataclass(frozen=True)
class SelectionRange:
    """Contiguous selection between two absolute document offsets."""

    anchor: int
    head: int

    @property
    def start(self) -> int:
        return min(self.anchor, self.head)

    @property
    def end(self) -> int:
        return max(self.anchor, self.head)


def line_start_offsets(text: str) -> list[int]:
    """Return absolute offsets where each line of ``text`` begins."""
    offsets = [0]
    idx = text.find("\n")
    while idx >= 0:
        offsets.append(idx + 1)
        idx = text.find("\n", idx + 1)
    return offsets


def source_lines(text: str) -> list[str]:
    """Split ``text`` on ``\\n`` only, dropping one trailing ``\\r`` per line.

    Line ``n`` of the result begins at ``line_start_offsets(text)[n - 1]``.
    """
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


class TextEditorSurface:
    """Minimal editor surface: text plus selection and a scrolled viewport."""

    def __init__(self, file_id: str, text: str, viewport_rows: int = DEFAULT_VIEWPORT_ROWS) -> None:
        self.file_id = file_id
        self.viewport_rows = max(1, viewport_rows)
        self.selection: SelectionRange | None = None
        self.scroll_top = 0
        self._text = text
        self._line_starts = line_start_offsets(text)

    @property
    def text(self) -> str:
        return self._text

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def line_start(self, line: int) -> int | None:
        """Return absolute offset of 1-based ``line`` or ``None`` when out of range."""
        if line < 1 or line > len(self._line_starts):
            return None
        return self._line_starts[line - 1]

    def position_of(self, offset: int) -> tuple[int, int]:
        """Return 1-based line and 0-based column for an absolute offset."""
        offset = max(0, min(offset, len(self._text)))
        line_idx = bisect_right(self._line_starts, offset) - 1
        return line_idx + 1, offset - self._line_starts[line_idx]

    def max_scroll_top(self) -> int:
        return max(0, self.line_count - self.viewport_rows)

    def dispatch_selection(self, anchor: int, head: int, center: bool = True) -> None:
        """Select ``[anchor, head)`` and scroll it into view.

        With ``center`` the selection line is placed in the middle of the
        viewport; otherwise the viewport only moves when the line is offscreen.
        """
        limit = len(self._text)
        self.selection = SelectionRange(max(0, min(anchor, limit)), max(0, min(head, limit)))
        line, _column = self.position_of(self.selection.start)
        target_row = line - 1
        if center:
            desired = target_row - self.viewport_rows // 2
        elif target_row < self.scroll_top:
            desired = target_row
        elif target_row >= self.scroll_top + self.viewport_rows:
            desired = target_row - self.viewport_rows + 1
        else:
            desired = self.scroll_top
        self.scroll_top = max(0, min(desired, self.max_scroll_top()))


class EditorRegistry:
    """Cache of editor surfaces keyed by file id."""

    def __init__(self, viewport_rows: int = DEFAULT_VIEWPORT_ROWS) -> None:
        self.viewport_rows = viewport_rows
        self._surfaces: dict[str, TextEditorSurface] = {}

    def get(self, file_id: str) -> TextEditorSurface | None:
        return self._surfaces.get(file_id)

    def open(self, file_id: str, load_text: Callable[[str], str | None]) -> TextEditorSurface | None:
        """Return cached surface for ``file_id``, creating it from ``load_text``."""
        surface = self._surfaces.get(file_id)
        if surface is not None:
            return surface
        text = load_text(file_id)
        if text is None:
            return None
        surface = TextEditorSurface(file_id, text, viewport_rows=self.viewport_rows)
        self._surfaces[file_id] = surface
        return surface

    def close(self, file_id: str) -> None:
        self._surfaces.pop(file_id, None)

    def resize(self, viewport_rows: int) -> None:
        self.viewport_rows = max(1, viewport_rows)
        for surface in self._surfaces.values():
            surface.viewport_rows = self.viewport_rows
            surface.scroll_top = min(surface.scroll_top, surface.max_scroll_top())
