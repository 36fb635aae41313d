"""Derived views over a result snapshot.

Views are recomputed on every call; nothing here caches, so a replaced or
mutated snapshot can never leave a stale ordering behind.
"""

from __future__ import annotations

from collections.abc import Mapping

from .types import VISIBILITY_CLOSED, VISIBILITY_OPEN, FileResult, MatchRecord


def visible_files(results: Mapping[str, FileResult]) -> list[FileResult]:
    """Return navigable files (everything not closed) in snapshot order."""
    return [file for file in results.values() if file.visibility != VISIBILITY_CLOSED]


def shown_matches(file: FileResult) -> list[MatchRecord]:
    """Return matches currently rendered under ``file``'s heading."""
    if file.visibility != VISIBILITY_OPEN:
        return []
    return [match for match in file.matches if not match.hidden]


def match_count(file: FileResult) -> int:
    """Count matches whose line is not hidden, whatever the file's disclosure."""
    return sum(1 for match in file.matches if not match.hidden)


def shown_match_count(file: FileResult) -> int:
    if file.visibility != VISIBILITY_OPEN:
        return 0
    return match_count(file)


def heading_element_id(file: FileResult) -> str:
    return file.file_id


def match_element_id(file: FileResult, match: MatchRecord) -> str:
    return f"{file.file_id}-{match.line}"
