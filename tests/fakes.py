"""Test doubles implementing the domain ports."""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from src.domain.github_interface import IGitHubClient
from src.domain.models import ActivityEvent, ActivityItem, Profile, Repository
from src.domain.page_interface import IPortfolioPage
from src.domain.storage_interface import IKeyValueStorage, StorageError


class ManualClock:
    """Clock returning a settable time in milliseconds."""

    def __init__(self, now_ms: float = 1_700_000_000_000):
        self.now_ms = now_ms

    def __call__(self) -> float:
        return self.now_ms

    def advance(self, ms: float) -> None:
        self.now_ms += ms


class InMemoryStorage(IKeyValueStorage):
    """Process-local storage, optionally bounded by total characters stored."""

    def __init__(self, quota: Optional[int] = None):
        self._items: Dict[str, str] = {}
        self._quota = quota

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self._quota is not None:
            used = sum(len(v) for k, v in self._items.items() if k != key)
            if used + len(value) > self._quota:
                raise StorageError(f"Quota of {self._quota} characters exceeded")
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FakeGitHubClient(IGitHubClient):
    """Serves canned data; an Exception instance in place of data is raised."""

    def __init__(self, profile=None, repo_pages=None, events=None):
        self.profile = profile if profile is not None else Profile(public_repos=3, followers=10, following=2, bio="Builder")
        self.repo_pages = repo_pages if repo_pages is not None else []
        self.events = events if events is not None else []
        self.requested_pages: List[int] = []
        self.closed = False

    async def fetch_profile(self) -> Profile:
        if isinstance(self.profile, Exception):
            raise self.profile
        return self.profile

    async def fetch_repositories_page(self, page: int, per_page: int = 100) -> List[Repository]:
        self.requested_pages.append(page)
        if isinstance(self.repo_pages, Exception):
            raise self.repo_pages
        if page <= len(self.repo_pages):
            return self.repo_pages[page - 1]
        return []

    async def fetch_public_events(self, per_page: int = 15) -> List[ActivityEvent]:
        if isinstance(self.events, Exception):
            raise self.events
        return self.events[:per_page]

    async def close(self) -> None:
        self.closed = True


class RecordingPage(IPortfolioPage):
    """In-memory page keeping just enough state to assert on."""

    def __init__(self, stats=None, slots=2, has_anchor=True, css=None):
        self.body_classes = set()
        self.css = dict(css or {})
        self.root_vars: Dict[str, str] = {}
        self.reveal_targets = ["hero", "about", "projects"]
        self.element_classes: Dict[Any, set] = {}
        self.stats: Dict[str, str] = dict(stats or {})
        self.bio: Optional[str] = None
        self.connect_summary: Optional[int] = None
        self.slots = slots
        self.filled: Dict[int, Repository] = {}
        self.hidden: List[int] = []
        self.messages: List[str] = []
        self.has_anchor = has_anchor
        self.feed: Optional[List[ActivityItem]] = None
        self.heading: Optional[str] = None
        self.feed_removals = 0
        self.indicators: Dict[str, tuple] = {}

    def has_body_class(self, name: str) -> bool:
        return name in self.body_classes

    def set_body_class(self, name: str, enabled: bool) -> None:
        if enabled:
            self.body_classes.add(name)
        else:
            self.body_classes.discard(name)

    def get_css_variable(self, name: str) -> str:
        if "dark-theme" in self.body_classes:
            return self.css.get(f"dark:{name}", self.css.get(name, ""))
        return self.css.get(name, "")

    def set_css_variable(self, name: str, value: str) -> None:
        self.root_vars[name] = value

    def find_reveal_targets(self) -> List[Any]:
        return list(self.reveal_targets)

    def add_class(self, element: Any, name: str) -> None:
        self.element_classes.setdefault(element, set()).add(name)

    def get_stat(self, key: str) -> Optional[str]:
        return self.stats.get(key)

    def set_stat(self, key: str, text: str) -> None:
        if key in self.stats:
            self.stats[key] = text

    def set_bio(self, text: str) -> None:
        self.bio = text

    def set_connect_summary(self, public_repos: int) -> None:
        self.connect_summary = public_repos

    def project_slot_count(self) -> Optional[int]:
        return self.slots

    def fill_project_slot(self, index: int, repo: Repository) -> None:
        self.filled[index] = repo

    def hide_project_slot(self, index: int) -> None:
        self.hidden.append(index)

    def show_no_projects_message(self, text: str) -> None:
        self.messages.append(text)

    def has_activity_anchor(self) -> bool:
        return self.has_anchor

    def remove_activity_feed(self) -> None:
        self.feed_removals += 1
        self.feed = None
        self.heading = None

    def insert_activity_feed(self, heading: str, items: List[ActivityItem]) -> None:
        self.heading = heading
        self.feed = list(items)

    def set_indicator(self, section: str, stale: bool, tooltip: str) -> None:
        self.indicators[section] = (stale, tooltip)


def make_repo(name, stars=0, fork=False, updated="2024-01-01T00:00:00Z", language="Python", forks=0, description="A repo"):
    """Build a Repository the way the GitHub API would describe it."""
    return Repository.from_api({
        "name": name,
        "html_url": f"https://github.com/octo/{name}",
        "description": description,
        "language": language,
        "stargazers_count": stars,
        "forks_count": forks,
        "fork": fork,
        "updated_at": updated,
    })


def make_event(event_type, payload=None, repo="octo/site", created_at="2024-01-05T10:00:00Z"):
    return ActivityEvent.from_api({
        "type": event_type,
        "created_at": created_at,
        "repo": {"name": repo},
        "payload": payload or {},
    })


def utc(year, month, day):
    return datetime(year, month, day, tzinfo=timezone.utc)
