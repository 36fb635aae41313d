"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes (results pane, prompt, status chrome).
Syntax highlighting style for the editor pane remains a separate setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    divider: str
    reverse: str
    reset: str
    focus_marker: str
    heading_arrow: str
    heading_name: str
    heading_count: str
    close_marker: str
    line_number: str
    match_text: str
    match_hit: str
    prompt: str
    prompt_placeholder: str
    status: str
    editor_gutter: str


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reverse="\033[7m",
    reset="\033[0m",
    focus_marker="\033[38;5;81m",
    heading_arrow="\033[38;5;44m",
    heading_name="\033[1;34m",
    heading_count="\033[38;5;109m",
    close_marker="\033[38;5;203m",
    line_number="\033[2;38;5;250m",
    match_text="\033[38;5;250m",
    match_hit="\033[7;1m",
    prompt="\033[1;38;5;81m",
    prompt_placeholder="\033[2;38;5;250m",
    status="\033[2;38;5;250m",
    editor_gutter="\033[2;38;5;244m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    divider="\033[2;38;5;31m",
    reverse="\033[7m",
    reset="\033[0m",
    focus_marker="\033[38;5;45m",
    heading_arrow="\033[38;5;39m",
    heading_name="\033[1;38;5;45m",
    heading_count="\033[38;5;73m",
    close_marker="\033[38;5;215m",
    line_number="\033[2;38;5;110m",
    match_text="\033[38;5;153m",
    match_hit="\033[7;1m",
    prompt="\033[1;38;5;45m",
    prompt_placeholder="\033[2;38;5;110m",
    status="\033[2;38;5;110m",
    editor_gutter="\033[2;38;5;24m",
)

PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reverse="",
    reset="",
    focus_marker="",
    heading_arrow="",
    heading_name="",
    heading_count="",
    close_marker="",
    line_number="",
    match_text="",
    match_hit="",
    prompt="",
    prompt_placeholder="",
    status="",
    editor_gutter="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES.get(normalize_theme_name(name), DEFAULT_THEME)


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
