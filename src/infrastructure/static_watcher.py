"""Visibility watcher for pages rendered ahead of time."""
from typing import Any, Callable, Iterable, List, Tuple
from src.domain.page_interface import IntersectionEntry, IVisibilityWatcher

Callback = Callable[[Iterable[IntersectionEntry]], None]


class StaticVisibilityWatcher(IVisibilityWatcher):
    """Collects observed elements and reports them all as fully visible.

    A pre-rendered page has no viewport, so flush() stands in for the first
    scroll: every observed element crosses its threshold at once.
    """

    def __init__(self):
        self._observed: List[Tuple[Any, Callback, float]] = []

    @property
    def observed_count(self) -> int:
        return len(self._observed)

    def observe(self, element: Any, callback: Callback, threshold: float) -> None:
        self._observed.append((element, callback, threshold))

    def flush(self, ratio: float = 1.0) -> None:
        for element, callback, threshold in self._observed:
            callback([IntersectionEntry(element, ratio >= threshold, ratio)])
