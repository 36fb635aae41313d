"""Debounced search scheduling.

``SearchTrigger`` turns pattern edits into at most one search execution per
quiet period. It owns a single deadline instead of a timer thread; the event
loop calls :meth:`SearchTrigger.poll`, which keeps every state change on the
loop's thread.
"""

from __future__ import annotations

import time
from collections.abc import Callable

DEFAULT_SEARCH_DELAY_SECONDS = 2.0


class SearchTrigger:
    """Restartable single-deadline debounce for search execution."""

    def __init__(
        self,
        execute_search: Callable[[str], None],
        *,
        delay_seconds: float = DEFAULT_SEARCH_DELAY_SECONDS,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self.execute_search = execute_search
        self.delay_seconds = max(0.0, delay_seconds)
        self.monotonic = monotonic
        self.pattern = ""
        self.searching = False
        self._due_at: float | None = None
        self._disposed = False

    @property
    def pending(self) -> bool:
        return self._due_at is not None

    @property
    def disposed(self) -> bool:
        return self._disposed

    def on_pattern_change(self, pattern: str) -> None:
        """Record ``pattern`` and restart the quiet-period deadline.

        Blank patterns cancel any pending search and never execute one.
        """
        if self._disposed:
            return
        self.pattern = pattern
        if not pattern.strip():
            self._due_at = None
            self.searching = False
            return
        self.searching = True
        self._due_at = self.monotonic() + self.delay_seconds

    def seconds_until_due(self) -> float | None:
        """Return remaining delay for the pending search, if any."""
        if self._due_at is None:
            return None
        return max(0.0, self._due_at - self.monotonic())

    def poll(self) -> bool:
        """Execute the pending search when its deadline has passed."""
        if self._due_at is None or self.monotonic() < self._due_at:
            return False
        self._fire()
        return True

    def flush(self) -> bool:
        """Execute the pending search immediately, ignoring the deadline."""
        if self._due_at is None:
            return False
        self._fire()
        return True

    def cancel(self) -> None:
        self._due_at = None
        self.searching = False

    def dispose(self) -> None:
        """Cancel pending work; later edits and polls become no-ops."""
        self.cancel()
        self._disposed = True

    def _fire(self) -> None:
        self._due_at = None
        try:
            self.execute_search(self.pattern)
        finally:
            self.searching = False
