"""Screen composition for the search pane.

Left pane: pattern prompt, result rows (or status text), status line.
Right pane: the active file's editor surface with the jump selection.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..ansi import fit_ansi_line
from ..highlight import colorize_lines, display_lines, sanitize_terminal_text
from ..rendering import summary_text
from ..ui_theme import UITheme
from ..workspace.editor import TextEditorSurface
from .app import SearchApp

PROMPT_PREFIX = "/> "
PROMPT_PLACEHOLDER = "type to search"
PROMPT_CURSOR = "▏"
RESULTS_TOP_ROW = 1
MIN_LEFT_WIDTH = 24
EDITOR_PANE_MIN_COLUMNS = 60


@dataclass(frozen=True)
class ScreenLayout:
    """Pane geometry in 0-based screen cells."""

    width: int
    height: int
    left_width: int
    right_width: int

    @property
    def results_rows(self) -> int:
        return max(1, self.height - 2)

    @property
    def status_row(self) -> int:
        return self.height - 1


def compute_layout(columns: int, lines: int) -> ScreenLayout:
    """Split the terminal into results and editor panes."""
    width = max(MIN_LEFT_WIDTH, columns)
    height = max(3, lines)
    if width < EDITOR_PANE_MIN_COLUMNS:
        return ScreenLayout(width=width, height=height, left_width=width, right_width=0)
    left = max(MIN_LEFT_WIDTH, (width * 2) // 5)
    return ScreenLayout(width=width, height=height, left_width=left, right_width=max(1, width - left - 1))


def build_status_line(left_text: str, width: int, right_text: str) -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def render_prompt(pattern: str, input_focused: bool, width: int, theme: UITheme) -> str:
    reset = theme.reset
    cursor = PROMPT_CURSOR if input_focused else ""
    if pattern:
        body = f"{theme.prompt}{sanitize_terminal_text(pattern)}{reset}{cursor}"
    else:
        body = f"{cursor}{theme.prompt_placeholder}{PROMPT_PLACEHOLDER}{reset}"
    return fit_ansi_line(f"{theme.prompt}{PROMPT_PREFIX}{reset}{body}", width, reset)


def results_pane_lines(app: SearchApp, width: int, rows: int) -> list[str]:
    """Return ``rows`` result lines honoring the scroll container offset."""
    session = app.session
    theme = app.theme
    status = session.status_text()
    if status is not None:
        lines = [fit_ansi_line(f" {theme.status}{status}{theme.reset}", width, theme.reset)]
    else:
        rendered = session.result_rows(width, theme)
        start = app.container.scroll_top
        lines = [row.text for row in rendered[start : start + rows]]
    lines.extend(" " * width for _ in range(rows - len(lines)))
    return lines


def editor_pane_lines(
    surface: TextEditorSurface | None,
    name: str,
    width: int,
    rows: int,
    theme: UITheme,
    style: str | None,
) -> list[str]:
    """Render the visible slice of ``surface`` with its selection in reverse video."""
    if surface is None or width <= 0:
        return [" " * max(0, width) for _ in range(rows)]

    plain = display_lines(surface.text)
    colored = colorize_lines(surface.text, name, style) if style else plain
    gutter_width = len(str(max(1, len(plain))))
    selected_line = None
    sel_start = sel_end = 0
    if surface.selection is not None:
        selected_line, sel_start = surface.position_of(surface.selection.start)
        end_line, end_col = surface.position_of(surface.selection.end)
        if end_line == selected_line:
            sel_end = end_col
        elif selected_line <= len(plain):
            sel_end = len(plain[selected_line - 1])

    out: list[str] = []
    for row in range(rows):
        idx = surface.scroll_top + row
        if idx >= len(plain):
            out.append(" " * width)
            continue
        gutter = f"{theme.editor_gutter}{idx + 1:>{gutter_width}}{theme.reset} "
        if selected_line == idx + 1:
            text = plain[idx]
            body = (
                text[:sel_start]
                + theme.reverse
                + text[sel_start:sel_end]
                + theme.reset
                + text[sel_end:]
            )
        else:
            body = colored[idx] if idx < len(colored) else plain[idx]
        out.append(fit_ansi_line(gutter + body, width, theme.reset))
    return out


def status_line_text(app: SearchApp, width: int) -> str:
    session = app.session
    left = "Searching..." if session.searching else summary_text(session.visible_files())
    right = ""
    active = app.tabs.active_file_id
    if active is not None:
        right = active
        surface = app.editors.get(active)
        if surface is not None and surface.selection is not None:
            line, column = surface.position_of(surface.selection.start)
            right = f"{active}:{line}:{column + 1}"
    return build_status_line(left, width, right)


def compose_screen(app: SearchApp, layout: ScreenLayout) -> list[str]:
    """Return ``layout.height`` fully padded screen rows."""
    theme = app.theme
    left_rows = [render_prompt(app.session.pattern, app.session.input_focused, layout.left_width, theme)]
    left_rows.extend(results_pane_lines(app, layout.left_width, layout.results_rows))
    status = fit_ansi_line(f"{theme.status}{status_line_text(app, layout.width)}{theme.reset}", layout.width, theme.reset)

    if layout.right_width <= 0:
        return left_rows + [status]

    active = app.tabs.active_file_id
    surface = app.editors.get(active) if active is not None else None
    name = app.store.files[active].name if active in app.store.files else ""
    right_rows = editor_pane_lines(surface, name, layout.right_width, layout.height - 1, theme, app.style)
    divider = f"{theme.divider}│{theme.reset}"
    rows = [f"{left}{divider}{right}" for left, right in zip(left_rows, right_rows)]
    rows.append(status)
    return rows


def render_results_text(app: SearchApp, width: int) -> str:
    """Render the results pane for non-interactive output."""
    theme = app.theme
    session = app.session
    out = [render_prompt(session.pattern, False, width, theme).rstrip()]
    status = session.status_text()
    if status is not None:
        out.append(f" {theme.status}{status}{theme.reset}")
    else:
        out.extend(row.text.rstrip() for row in session.result_rows(width, theme))
    out.append(status_line_text(app, width).rstrip())
    return "\n".join(out) + "\n"
