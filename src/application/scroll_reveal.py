"""Reveal-on-scroll marker for tagged page elements."""
import logging
from typing import Iterable
from src.domain.page_interface import IntersectionEntry, IPortfolioPage, IVisibilityWatcher


logger = logging.getLogger(__name__)

VISIBLE_CLASS = "is-visible"
REVEAL_THRESHOLD = 0.1


class ScrollReveal:
    """Adds the visible marker once an element enters the viewport.

    The marker is never removed, and elements stay registered with the
    watcher for the lifetime of the page.
    """

    def __init__(self, page: IPortfolioPage, watcher: IVisibilityWatcher, threshold: float = REVEAL_THRESHOLD):
        self._page = page
        self._watcher = watcher
        self._threshold = threshold

    def setup(self) -> int:
        """Register every reveal target. Returns how many were registered."""
        targets = self._page.find_reveal_targets()
        for element in targets:
            self._watcher.observe(element, self.handle_entries, self._threshold)
        logger.debug(f"Registered {len(targets)} reveal targets")
        return len(targets)

    def handle_entries(self, entries: Iterable[IntersectionEntry]) -> None:
        for entry in entries:
            if entry.is_intersecting:
                self._page.add_class(entry.target, VISIBLE_CLASS)
