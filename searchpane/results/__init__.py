"""Result snapshot model: match records, file results, and focus."""

from __future__ import annotations

from .model import (
    heading_element_id,
    match_count,
    match_element_id,
    shown_match_count,
    shown_matches,
    visible_files,
)
from .types import (
    VISIBILITY_CLOSED,
    VISIBILITY_FLATTENED,
    VISIBILITY_OPEN,
    VISIBILITY_STATES,
    FileResult,
    Focus,
    MatchRecord,
)

__all__ = [
    "FileResult",
    "Focus",
    "MatchRecord",
    "VISIBILITY_CLOSED",
    "VISIBILITY_FLATTENED",
    "VISIBILITY_OPEN",
    "VISIBILITY_STATES",
    "heading_element_id",
    "match_count",
    "match_element_id",
    "shown_match_count",
    "shown_matches",
    "visible_files",
]
