"""Search-result datatypes shared by the navigator, renderer, and session."""

from __future__ import annotations

from dataclasses import dataclass

VISIBILITY_OPEN = "open"
VISIBILITY_FLATTENED = "flattened"
VISIBILITY_CLOSED = "closed"
VISIBILITY_STATES = frozenset({VISIBILITY_OPEN, VISIBILITY_FLATTENED, VISIBILITY_CLOSED})


@dataclass(frozen=True)
class MatchRecord:
    """One literal occurrence of the pattern on one source line."""

    line: int  # 1-based
    index: int  # 0-based column of match start
    text: str
    hidden: bool = False


@dataclass(frozen=True)
class FileResult:
    """All matches found in one workspace file plus its disclosure state."""

    file_id: str
    name: str
    matches: tuple[MatchRecord, ...] = ()
    visibility: str = VISIBILITY_OPEN


@dataclass(frozen=True)
class Focus:
    """Keyboard focus inside the visible result tree.

    ``match_index`` is ``None`` while the file heading itself is focused.
    A session with nothing focused stores ``None`` instead of a ``Focus``.
    """

    file_index: int
    match_index: int | None = None

    @property
    def on_heading(self) -> bool:
        return self.match_index is None
