"""In-process collaborative document store.

Holds workspace file contents and the shared search disclosure records that
other participants would observe. The search core only writes here; it never
reads visibility back into its own snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class WorkspaceFile:
    """One open text file in the shared workspace document."""

    name: str
    text: str


@dataclass
class DocumentStore:
    """Mutable workspace document with write-through search visibility state."""

    files: dict[str, WorkspaceFile] = field(default_factory=dict)
    file_visibility: dict[str, tuple[str, str | None]] = field(default_factory=dict)
    hidden_lines: dict[str, set[int]] = field(default_factory=dict)
    revision: int = 0

    def corpus(self) -> dict[str, WorkspaceFile]:
        """Return a shallow copy of current files for one search execution."""
        return dict(self.files)

    def file_text(self, file_id: str) -> str | None:
        file = self.files.get(file_id)
        return None if file is None else file.text

    def put_file(self, file_id: str, name: str, text: str) -> None:
        self.files[file_id] = WorkspaceFile(name=name, text=text)
        self.revision += 1

    def set_file_visibility(self, file_id: str, visibility: str, display_name: str | None) -> None:
        """Record a file's search disclosure state for all participants."""
        self.file_visibility[file_id] = (visibility, display_name)
        self.revision += 1

    def set_line_visibility(self, file_id: str, line: int) -> None:
        """Record one dismissed search line for ``file_id``."""
        self.hidden_lines.setdefault(file_id, set()).add(line)
        self.revision += 1

    def clear_search_state(self) -> None:
        """Drop disclosure records; a fresh search starts every file open."""
        if not self.file_visibility and not self.hidden_lines:
            return
        self.file_visibility = {}
        self.hidden_lines = {}
        self.revision += 1
