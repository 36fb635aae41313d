"""Search package exports.

Content search is the only match producer; it runs in-process over a
workspace corpus rather than shelling out.
"""

from __future__ import annotations

from .content import line_matches, load_directory_corpus, read_text, search_workspace_content

__all__ = [
    "line_matches",
    "load_directory_corpus",
    "read_text",
    "search_workspace_content",
]
