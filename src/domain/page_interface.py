"""Rendering target interfaces (ports) for the portfolio page.

The application layer only talks to the page through these methods, so the
caching, sorting, filtering and status logic can run against any document
implementation. Every method silently does nothing when its target element
is missing from the page.
"""
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, List, NamedTuple, Optional
from src.domain.models import ActivityItem, Repository


class IPortfolioPage(ABC):
    """Abstract interface for the portfolio document."""

    # Theme

    @abstractmethod
    def has_body_class(self, name: str) -> bool:
        pass

    @abstractmethod
    def set_body_class(self, name: str, enabled: bool) -> None:
        pass

    @abstractmethod
    def get_css_variable(self, name: str) -> str:
        """Return the effective value of a custom property, '' if undeclared."""
        pass

    @abstractmethod
    def set_css_variable(self, name: str, value: str) -> None:
        """Set a custom property on the root element."""
        pass

    # Scroll reveal

    @abstractmethod
    def find_reveal_targets(self) -> List[Any]:
        """Return handles for every element tagged for reveal."""
        pass

    @abstractmethod
    def add_class(self, element: Any, name: str) -> None:
        pass

    # Stats and profile

    @abstractmethod
    def get_stat(self, key: str) -> Optional[str]:
        """Return the text of the stat counter for key, None if absent."""
        pass

    @abstractmethod
    def set_stat(self, key: str, text: str) -> None:
        pass

    @abstractmethod
    def set_bio(self, text: str) -> None:
        pass

    @abstractmethod
    def set_connect_summary(self, public_repos: int) -> None:
        pass

    # Featured projects

    @abstractmethod
    def project_slot_count(self) -> Optional[int]:
        """Number of project placeholders, None if the container is missing."""
        pass

    @abstractmethod
    def fill_project_slot(self, index: int, repo: Repository) -> None:
        pass

    @abstractmethod
    def hide_project_slot(self, index: int) -> None:
        pass

    @abstractmethod
    def show_no_projects_message(self, text: str) -> None:
        pass

    # Activity feed

    @abstractmethod
    def has_activity_anchor(self) -> bool:
        """True when the element the feed is inserted after exists."""
        pass

    @abstractmethod
    def remove_activity_feed(self) -> None:
        """Remove a previously rendered feed and its heading."""
        pass

    @abstractmethod
    def insert_activity_feed(self, heading: str, items: List[ActivityItem]) -> None:
        pass

    # Indicators

    @abstractmethod
    def set_indicator(self, section: str, stale: bool, tooltip: str) -> None:
        """Update the stale marker and tooltip of a section indicator."""
        pass


class IntersectionEntry(NamedTuple):
    """One visibility change reported by a watcher."""
    target: Any
    is_intersecting: bool
    ratio: float


class IVisibilityWatcher(ABC):
    """Abstract interface for a viewport intersection watcher."""

    @abstractmethod
    def observe(
        self,
        element: Any,
        callback: Callable[[Iterable[IntersectionEntry]], None],
        threshold: float
    ) -> None:
        """Report visibility changes of element to callback."""
        pass
