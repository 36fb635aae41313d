"""Editor-pane syntax highlighting and terminal-safe text.

Pygments renders the editor surface; control bytes are neutralized first so
file contents can never move the cursor or ring the bell.
"""

from __future__ import annotations

import re
from functools import lru_cache

from pygments import highlight as pygments_highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .workspace.editor import source_lines

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
DEFAULT_STYLE = "monokai"


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


@lru_cache(maxsize=16)
def normalize_style(style: str) -> str:
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


@lru_cache(maxsize=16)
def _formatter_for_style(style: str) -> TerminalFormatter:
    return TerminalFormatter(style=style)


def display_lines(source: str) -> list[str]:
    """Return terminal-safe editor lines, split the way editor surfaces count lines."""
    return [line.replace("\r", "\\x0d") for line in source_lines(sanitize_terminal_text(source))]


def colorize_lines(source: str, name: str, style: str = DEFAULT_STYLE) -> list[str]:
    """Return ANSI-highlighted lines for ``source``; one entry per editor line.

    Falls back to the plain display lines if highlighting yields fewer lines,
    so line numbers always address the same text.
    """
    plain = display_lines(source)
    text = "\n".join(plain) + "\n"
    try:
        lexer = get_lexer_for_filename(name, text, stripnl=False)
    except ClassNotFound:
        lexer = TextLexer(stripnl=False)
    rendered = pygments_highlight(text, lexer, _formatter_for_style(normalize_style(style)))
    lines = rendered.split("\n")
    if len(lines) < len(plain):
        return plain
    return lines[: len(plain)]
