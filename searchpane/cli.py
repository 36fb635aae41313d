"""Command-line front door for searchpane.

Parses CLI options, loads a workspace corpus from a file or directory, and
either prints the results pane once or opens the interactive search pane.
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path

from .config import load_settings
from .runtime import build_search_app, replay_keys, run_search_pane
from .runtime.screen import render_results_text
from .search import load_directory_corpus
from .ui_theme import available_theme_names, resolve_theme

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _non_negative_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _key_list(value: str) -> list[str]:
    """Split ``--keys`` into tokens; ``SPACE`` and ``COMMA`` name literal keys."""
    keys = [part.strip() for part in value.split(",") if part.strip()]
    literal = {"COMMA": ",", "SPACE": " "}
    return [literal.get(key, key) for key in keys]


def _default_render_width() -> int:
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.columns)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Search text files and navigate matches by file and line."
    )
    parser.add_argument("path", nargs="?", default=None, help="File or directory to search. Defaults to current directory.")
    parser.add_argument("--pattern", "-p", default="", help="Initial search pattern (literal, case-sensitive).")
    parser.add_argument("--delay", type=_non_negative_float, default=None, help="Seconds to wait after typing before searching.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--style", default=None, help="Pygments style name for the editor pane.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--hidden", action="store_true", help="Include hidden files and directories.")
    parser.add_argument("--keys", type=_key_list, default=[], help="Comma-separated keys to replay, e.g. TAB,DOWN,ENTER.")
    parser.add_argument("--print", dest="print_only", action="store_true", help="Print the results pane and exit.")
    parser.add_argument(
        "--max-cols",
        type=_positive_int,
        default=None,
        help="Column width for --print output (default: terminal width).",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug details to stderr.")
    return parser


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and run searchpane on a file or directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    settings = load_settings()
    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path) if args.path is not None else default_path
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")

    corpus, truncated = load_directory_corpus(path, show_hidden=args.hidden or settings.show_hidden)
    if truncated:
        logger.warning("file limit reached; searching the first %d files under %s", len(corpus), path)

    app = build_search_app(
        corpus,
        delay_seconds=settings.search_delay_seconds if args.delay is None else args.delay,
        theme=resolve_theme(args.theme or settings.theme, no_color=args.no_color),
        style=args.style or settings.style,
    )
    session = app.session
    if args.pattern:
        session.on_pattern_change(args.pattern)
        session.run_pending_search()

    print_only = args.print_only or not sys.stdout.isatty()
    if print_only:
        replay_keys(app, args.keys)
        session.run_pending_search()
        width = args.max_cols if args.max_cols is not None else _default_render_width()
        sys.stdout.write(render_results_text(app, width))
        session.dispose()
        return

    replay_keys(app, args.keys)
    run_search_pane(app)
