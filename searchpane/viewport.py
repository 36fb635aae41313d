"""Keep the focused result row inside the scrolled results list."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .results import Focus


@dataclass(frozen=True)
class RowBounds:
    """Vertical extent of one rendered element, in rows from the list top."""

    top: int
    height: int = 1

    @property
    def bottom(self) -> int:
        return self.top + self.height


@dataclass
class ScrollContainer:
    """Scrollable list viewport: first visible row and visible row count."""

    scroll_top: int = 0
    height: int = 1
    content_height: int = 0

    def max_scroll_top(self) -> int:
        return max(0, self.content_height - self.height)


def is_within_view(container: ScrollContainer, element: RowBounds) -> bool:
    """Return whether ``element`` lies entirely inside the visible rows."""
    view_top = container.scroll_top
    view_bottom = view_top + container.height
    return element.top >= view_top and element.bottom <= view_bottom


def centered_scroll_top(container: ScrollContainer, element: RowBounds) -> int:
    """Return the scroll offset that centres ``element`` in ``container``."""
    desired = element.top - max(0, (container.height - element.height) // 2)
    return max(0, min(desired, container.max_scroll_top()))


class ViewportSync:
    """Scroll the results list so the focused element is visible."""

    def __init__(
        self,
        locate: Callable[[Focus], RowBounds | None],
        container: ScrollContainer | None = None,
    ) -> None:
        self.locate = locate
        self.container = container

    def sync(self, focus: Focus | None) -> bool:
        """Centre the row of ``focus`` when it is not fully visible; return whether it scrolled."""
        container = self.container
        if container is None or focus is None:
            return False
        element = self.locate(focus)
        if element is None or is_within_view(container, element):
            return False
        target = centered_scroll_top(container, element)
        if target == container.scroll_top:
            return False
        container.scroll_top = target
        return True
