"""Literal content search over workspace files.

``search_workspace_content`` is the match producer used by search sessions.
``load_directory_corpus`` builds a workspace corpus from files on disk.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from ..results import FileResult, MatchRecord
from ..workspace.editor import source_lines
from ..workspace.store import WorkspaceFile

logger = logging.getLogger(__name__)

CORPUS_FILE_LIMIT = 2_000
CORPUS_MAX_FILE_BYTES = 1_000_000
_BINARY_SNIFF_BYTES = 8_192


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order.

    Attempts UTF-8, UTF-8 with BOM, then latin-1; as a final fallback decodes
    raw bytes with UTF-8 replacement semantics.
    """
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def line_matches(line_text: str, pattern: str, line_number: int) -> list[MatchRecord]:
    """Return every non-overlapping occurrence of ``pattern`` in one line."""
    out: list[MatchRecord] = []
    start = line_text.find(pattern)
    while start >= 0:
        out.append(MatchRecord(line=line_number, index=start, text=line_text))
        start = line_text.find(pattern, start + len(pattern))
    return out


def search_workspace_content(pattern: str, corpus: Mapping[str, WorkspaceFile]) -> dict[str, FileResult]:
    """Search ``corpus`` for literal, case-sensitive ``pattern`` occurrences.

    Only files with at least one match appear in the result. Files are ordered
    by display name, then id; matches by line, then column. Every file starts
    ``open``.
    """
    if not pattern:
        return {}

    results: dict[str, FileResult] = {}
    ordered = sorted(corpus.items(), key=lambda item: (item[1].name.casefold(), item[1].name, item[0]))
    for file_id, file in ordered:
        if pattern not in file.text:
            continue
        matches: list[MatchRecord] = []
        for line_number, line_text in enumerate(source_lines(file.text), start=1):
            matches.extend(line_matches(line_text, pattern, line_number))
        if matches:
            results[file_id] = FileResult(file_id=file_id, name=file.name, matches=tuple(matches))
    return results


def _looks_binary(path: Path) -> bool:
    try:
        with path.open("rb") as handle:
            head = handle.read(_BINARY_SNIFF_BYTES)
    except OSError:
        return True
    return b"\x00" in head


def load_directory_corpus(
    root: Path,
    show_hidden: bool = False,
    max_files: int = CORPUS_FILE_LIMIT,
    max_bytes: int = CORPUS_MAX_FILE_BYTES,
) -> tuple[dict[str, WorkspaceFile], bool]:
    """Read text files under ``root`` into a corpus keyed by relative POSIX path.

    Returns ``(corpus, truncated)``; ``truncated`` is true when ``max_files``
    stopped the walk early. Binary, oversized, and unreadable files are
    skipped. Hidden entries are skipped unless ``show_hidden`` is set.
    """
    root = root.resolve()
    if root.is_file():
        return {root.name: WorkspaceFile(name=root.name, text=read_text(root))}, False

    corpus: dict[str, WorkspaceFile] = {}
    for dirpath, dirnames, filenames in os.walk(root):
        if not show_hidden:
            dirnames[:] = [name for name in dirnames if not name.startswith(".")]
        dirnames.sort()
        for filename in sorted(filenames):
            if not show_hidden and filename.startswith("."):
                continue
            path = Path(dirpath) / filename
            try:
                if not path.is_file() or path.stat().st_size > max_bytes:
                    continue
            except OSError:
                continue
            if _looks_binary(path):
                continue
            if len(corpus) >= max_files:
                return corpus, True
            try:
                text = read_text(path)
            except OSError as exc:
                logger.debug("skipping unreadable file %s: %s", path, exc)
                continue
            file_id = path.relative_to(root).as_posix()
            corpus[file_id] = WorkspaceFile(name=file_id, text=text)
    return corpus, False
