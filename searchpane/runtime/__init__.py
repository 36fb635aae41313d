"""Interactive runtime: terminal control, key decoding, screen, and loop."""

from __future__ import annotations

import sys

from .app import SearchApp, build_search_app, replay_keys

__all__ = ["SearchApp", "build_search_app", "replay_keys", "run_search_pane"]


def run_search_pane(app: SearchApp) -> None:
    """Run the interactive loop on the process's controlling terminal.

    Terminal modules are imported here so non-interactive callers never need
    a tty-capable platform.
    """
    from .loop import run_main_loop
    from .terminal import TerminalController

    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    run_main_loop(app, terminal, stdin_fd)
