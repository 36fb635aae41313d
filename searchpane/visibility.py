"""File- and line-level disclosure changes for a result snapshot.

Every change produces a new snapshot mapping (the previous one is never
patched) plus the focus that remains valid afterwards, and is written through
to the shared document store.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import replace

from .results import (
    VISIBILITY_CLOSED,
    VISIBILITY_FLATTENED,
    VISIBILITY_OPEN,
    VISIBILITY_STATES,
    FileResult,
    Focus,
    shown_matches,
    visible_files,
)

logger = logging.getLogger(__name__)


def _visible_index(results: Mapping[str, FileResult], file_id: str) -> int | None:
    for idx, file in enumerate(visible_files(results)):
        if file.file_id == file_id:
            return idx
    return None


def focus_after_file_removed(focus: Focus | None, removed_index: int) -> Focus | None:
    """Reassign focus once the visible file at ``removed_index`` disappears.

    Focus on the removed file moves to the previous heading, or clears when it
    was the first file. Focus on later files shifts up to keep its target.
    """
    if focus is None:
        return None
    if focus.file_index == removed_index:
        if removed_index == 0:
            return None
        return Focus(removed_index - 1)
    if focus.file_index > removed_index:
        return Focus(focus.file_index - 1, focus.match_index)
    return focus


class VisibilityController:
    """Apply disclosure changes and persist them through the document store."""

    def __init__(
        self,
        *,
        write_file_visibility: Callable[[str, str, str | None], None],
        write_line_visibility: Callable[[str, int], None],
    ) -> None:
        self.write_file_visibility = write_file_visibility
        self.write_line_visibility = write_line_visibility

    def set_file_visibility(
        self,
        results: Mapping[str, FileResult],
        focus: Focus | None,
        file_id: str,
        visibility: str,
    ) -> tuple[dict[str, FileResult], Focus | None]:
        """Return ``(results, focus)`` after setting one file's visibility."""
        if visibility not in VISIBILITY_STATES:
            raise ValueError(f"unknown visibility state: {visibility!r}")
        file = results.get(file_id)
        if file is None:
            raise KeyError(file_id)

        visible_idx = _visible_index(results, file_id)
        updated = {**results, file_id: replace(file, visibility=visibility)}
        display_name = None if visibility == VISIBILITY_CLOSED else file.name
        self.write_file_visibility(file_id, visibility, display_name)

        if visible_idx is None or focus is None:
            return updated, focus
        if visibility == VISIBILITY_CLOSED:
            return updated, focus_after_file_removed(focus, visible_idx)
        if visibility != VISIBILITY_OPEN and focus.file_index == visible_idx:
            # Flattened files show no matches; keep focus on the heading.
            return updated, Focus(visible_idx)
        return updated, focus

    def toggle_file_open(
        self,
        results: Mapping[str, FileResult],
        focus: Focus | None,
        file_id: str,
    ) -> tuple[dict[str, FileResult], Focus | None]:
        """Flip a file between ``open`` and ``flattened``."""
        file = results[file_id]
        target = VISIBILITY_FLATTENED if file.visibility == VISIBILITY_OPEN else VISIBILITY_OPEN
        return self.set_file_visibility(results, focus, file_id, target)

    def set_line_visibility(
        self,
        results: Mapping[str, FileResult],
        focus: Focus | None,
        file_id: str,
        line: int,
    ) -> tuple[dict[str, FileResult], Focus | None]:
        """Hide every match on ``line`` of ``file_id`` for this result set.

        Raises ``ValueError`` when the file has no match on ``line``. A focused
        match that survives keeps focus; a focused match that was hidden hands
        focus to the first match after the hidden line, else the last remaining
        match, else the file heading.
        """
        file = results.get(file_id)
        if file is None or not any(match.line == line for match in file.matches):
            raise ValueError(f"no search match on line {line} of {file_id!r}")

        shown_before = shown_matches(file)
        hidden = tuple(replace(match, hidden=True) if match.line == line else match for match in file.matches)
        new_file = replace(file, matches=hidden)
        updated = {**results, file_id: new_file}
        self.write_line_visibility(file_id, line)

        visible_idx = _visible_index(results, file_id)
        if (
            focus is None
            or focus.match_index is None
            or visible_idx is None
            or focus.file_index != visible_idx
            or focus.match_index >= len(shown_before)
        ):
            return updated, focus

        target = shown_before[focus.match_index]
        shown_after = shown_matches(new_file)
        if not shown_after:
            return updated, Focus(visible_idx)
        if target.line != line:
            for idx, match in enumerate(shown_after):
                if match.line == target.line and match.index == target.index:
                    return updated, Focus(visible_idx, idx)
        logger.debug("focused search line %s of %s hidden; moving to nearest match", line, file_id)
        following = sum(1 for match in shown_after if match.line < line)
        return updated, Focus(visible_idx, min(following, len(shown_after) - 1))
