"""Persistent JSON config loading.

Reads the search delay, UI theme, editor syntax style, and hidden-file
preference. All access is defensive: malformed or missing config falls back
safely, key by key.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .highlight import DEFAULT_STYLE
from .trigger import DEFAULT_SEARCH_DELAY_SECONDS
from .ui_theme import DEFAULT_THEME, normalize_theme_name

logger = logging.getLogger(__name__)

APP_NAME = "searchpane"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
MAX_SEARCH_DELAY_SECONDS = 60.0


@dataclass(frozen=True)
class SearchPaneConfig:
    """Resolved settings with every value validated."""

    search_delay_seconds: float = DEFAULT_SEARCH_DELAY_SECONDS
    theme: str = DEFAULT_THEME.name
    style: str = DEFAULT_STYLE
    show_hidden: bool = False


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _coerce_delay(value: object) -> float:
    """Accept positive numbers up to a minute; booleans and others fall back."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_SEARCH_DELAY_SECONDS
    if value <= 0 or value > MAX_SEARCH_DELAY_SECONDS:
        return DEFAULT_SEARCH_DELAY_SECONDS
    return float(value)


def _coerce_style(value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        return DEFAULT_STYLE
    return value.strip()


def load_settings() -> SearchPaneConfig:
    """Return validated settings from the config file."""
    data = load_config()
    show_hidden = data.get("show_hidden")
    theme = data.get("theme")
    return SearchPaneConfig(
        search_delay_seconds=_coerce_delay(data.get("search_delay_seconds")),
        theme=normalize_theme_name(theme if isinstance(theme, str) else None),
        style=_coerce_style(data.get("style")),
        show_hidden=show_hidden if isinstance(show_hidden, bool) else False,
    )
