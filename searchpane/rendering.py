"""Formatting helpers for the results pane.

Rows are laid out as headings followed by their shown matches. The same
layout backs rendering, pointer hit-testing, and viewport bounds so element
positions never disagree between them.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .ansi import fit_ansi_line
from .highlight import sanitize_terminal_text
from .results import (
    VISIBILITY_OPEN,
    FileResult,
    Focus,
    MatchRecord,
    heading_element_id,
    match_count,
    match_element_id,
    shown_match_count,
    shown_matches,
)
from .ui_theme import DEFAULT_THEME, UITheme
from .viewport import RowBounds

ARROW_OPEN = "▾"
ARROW_FLATTENED = "▸"
CLOSE_MARKER = "x"
FOCUS_MARKER = ">"
ARROW_COLUMN = 1
MATCH_INDENT = "   "
STATUS_SEARCHING = "Searching..."
STATUS_NO_RESULTS = "No Results"


@dataclass(frozen=True)
class ResultSlot:
    """One addressable row: a file heading or a shown match."""

    element_id: str
    file_index: int
    match_index: int | None
    file: FileResult
    match: MatchRecord | None = None


@dataclass(frozen=True)
class ResultRow:
    slot: ResultSlot
    row: int
    text: str


def result_slots(files: Sequence[FileResult]) -> list[ResultSlot]:
    """Return row layout for ``files`` in display order."""
    slots: list[ResultSlot] = []
    for file_index, file in enumerate(files):
        slots.append(ResultSlot(heading_element_id(file), file_index, None, file))
        for match_index, match in enumerate(shown_matches(file)):
            slots.append(ResultSlot(match_element_id(file, match), file_index, match_index, file, match))
    return slots


def locate_focus(files: Sequence[FileResult], focus: Focus | None) -> RowBounds | None:
    """Return the row addressed by ``focus``, or ``None`` when it names no rendered row.

    Rows are matched by slot position; several matches on one line share an
    element id.
    """
    if focus is None:
        return None
    for row, slot in enumerate(result_slots(files)):
        if _is_focused(slot, focus):
            return RowBounds(top=row)
    return None


def _is_focused(slot: ResultSlot, focus: Focus | None) -> bool:
    return focus is not None and focus.file_index == slot.file_index and focus.match_index == slot.match_index


def format_heading(file: FileResult, focused: bool, width: int, theme: UITheme | None = None) -> str:
    """Render a file heading with arrow, name, and count (or close marker)."""
    active = theme or DEFAULT_THEME
    reset = active.reset
    marker = FOCUS_MARKER if focused else " "
    arrow = ARROW_OPEN if file.visibility == VISIBILITY_OPEN else ARROW_FLATTENED
    if focused:
        right_plain = CLOSE_MARKER
        right = f"{active.close_marker}{CLOSE_MARKER}{reset}"
    else:
        right_plain = str(match_count(file))
        right = f"{active.heading_count}{right_plain}{reset}"
    name_room = max(1, width - len(right_plain) - 4)
    name = sanitize_terminal_text(file.name)
    if len(name) > name_room:
        name = "…" + name[-(name_room - 1) :] if name_room > 1 else name[:name_room]
    name_style = active.reverse + active.heading_name if focused else active.heading_name
    left = f"{active.focus_marker}{marker}{reset}{active.heading_arrow}{arrow}{reset} {name_style}{name}{reset}"
    gap = " " * max(1, width - 3 - len(name) - len(right_plain))
    return fit_ansi_line(f"{left}{gap}{right}", width, reset)


def format_match_line(
    match: MatchRecord,
    pattern: str,
    focused: bool,
    width: int,
    theme: UITheme | None = None,
) -> str:
    """Render one match with the matched span highlighted."""
    active = theme or DEFAULT_THEME
    reset = active.reset
    text = sanitize_terminal_text(match.text)
    end = match.index + len(pattern)
    before = text[: match.index].lstrip().replace("\t", "    ")
    hit = text[match.index : end].replace("\t", "    ")
    after = text[end:].replace("\t", "    ")
    marker = FOCUS_MARKER if focused else " "
    prefix = f"{active.focus_marker}{marker}{reset}{MATCH_INDENT}{active.line_number}{match.line}:{reset} "
    body = f"{active.match_text}{before}{reset}{active.match_hit}{hit}{reset}{active.match_text}{after}{reset}"
    if not focused:
        return fit_ansi_line(prefix + body, width, reset)
    line = fit_ansi_line(prefix + body, max(1, width - 2), reset)
    return f"{line} {active.close_marker}{CLOSE_MARKER}{reset}"


def build_result_rows(
    files: Sequence[FileResult],
    focus: Focus | None,
    pattern: str,
    width: int,
    theme: UITheme | None = None,
) -> list[ResultRow]:
    """Render every heading and shown match as fixed-width rows."""
    width = max(8, width)
    rows: list[ResultRow] = []
    for row, slot in enumerate(result_slots(files)):
        focused = _is_focused(slot, focus)
        if slot.match is None:
            text = format_heading(slot.file, focused, width, theme)
        else:
            text = format_match_line(slot.match, pattern, focused, width, theme)
        rows.append(ResultRow(slot=slot, row=row, text=text))
    return rows


def status_text(pattern: str, searching: bool, visible_count: int, error: str | None = None) -> str | None:
    """Return status message replacing the result list, or ``None`` to show rows."""
    if visible_count > 0 and pattern.strip():
        return None
    if searching:
        return STATUS_SEARCHING
    if error and pattern.strip():
        return f"Search failed: {error}"
    return STATUS_NO_RESULTS


def summary_text(files: Sequence[FileResult]) -> str:
    matches = sum(shown_match_count(file) for file in files)
    file_word = "file" if len(files) == 1 else "files"
    match_word = "match" if matches == 1 else "matches"
    return f"{matches} {match_word} in {len(files)} {file_word}"
