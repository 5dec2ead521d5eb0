"""Domain models representing the data shown on the portfolio page."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


def parse_github_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp as returned by the GitHub API."""
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def format_github_timestamp(value: Optional[datetime]) -> Optional[str]:
    """Inverse of parse_github_timestamp."""
    if value is None:
        return None
    return value.isoformat().replace("+00:00", "Z")


class FetchStatus(str, Enum):
    """Where the data for a page section came from."""
    LIVE = "live"
    CACHED = "cached"
    FAILED = "failed"


@dataclass(frozen=True)
class Profile:
    """Public profile counters of the page owner."""
    public_repos: Optional[int] = None
    followers: Optional[int] = None
    following: Optional[int] = None
    bio: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'Profile':
        return cls(
            public_repos=data.get("public_repos"),
            followers=data.get("followers"),
            following=data.get("following"),
            bio=data.get("bio")
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "public_repos": self.public_repos,
            "followers": self.followers,
            "following": self.following,
            "bio": self.bio,
        }

    from_dict = from_api


@dataclass(frozen=True)
class Repository:
    """Immutable summary of one public repository.

    Field names follow the GitHub REST payload so cached entries and API
    responses share one shape.
    """
    name: str
    html_url: str
    description: Optional[str] = None
    language: Optional[str] = None
    stargazers_count: int = 0
    forks_count: int = 0
    fork: bool = False
    updated_at: Optional[datetime] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'Repository':
        return cls(
            name=data["name"],
            html_url=data["html_url"],
            description=data.get("description"),
            language=data.get("language"),
            stargazers_count=data.get("stargazers_count") or 0,
            forks_count=data.get("forks_count") or 0,
            fork=bool(data.get("fork", False)),
            updated_at=parse_github_timestamp(data.get("updated_at"))
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "html_url": self.html_url,
            "description": self.description,
            "language": self.language,
            "stargazers_count": self.stargazers_count,
            "forks_count": self.forks_count,
            "fork": self.fork,
            "updated_at": format_github_timestamp(self.updated_at),
        }

    from_dict = from_api


@dataclass(frozen=True)
class ActivityEvent:
    """A public GitHub event.

    The payload is kept as the raw JSON object because its shape depends
    on the event type.
    """
    type: str
    created_at: datetime
    repo_name: str
    payload: Dict[str, Any] = field(default_factory=dict)

    @property
    def repo_url(self) -> str:
        return f"https://github.com/{self.repo_name}"

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'ActivityEvent':
        return cls(
            type=data["type"],
            created_at=parse_github_timestamp(data["created_at"]),
            repo_name=data.get("repo", {}).get("name", ""),
            payload=data.get("payload") or {}
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "created_at": format_github_timestamp(self.created_at),
            "repo": {"name": self.repo_name},
            "payload": self.payload,
        }

    from_dict = from_api


@dataclass(frozen=True)
class RepositorySnapshot:
    """All repositories of the owner plus their summed star count."""
    repos: List[Repository]
    total_stars: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "repos": [repo.to_dict() for repo in self.repos],
            "totalStars": self.total_stars,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RepositorySnapshot':
        return cls(
            repos=[Repository.from_dict(item) for item in data.get("repos", [])],
            total_stars=data.get("totalStars", 0)
        )


@dataclass(frozen=True)
class CacheEntry:
    """A cached value with its absolute expiry in milliseconds since epoch."""
    value: Any
    expiry: float

    def is_valid(self, now_ms: float) -> bool:
        return now_ms < self.expiry


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one fetcher run."""
    status: FetchStatus
    data: Any = None
    expiry: Optional[float] = None

    @classmethod
    def failed(cls) -> 'FetchResult':
        return cls(status=FetchStatus.FAILED)


@dataclass(frozen=True)
class CompositeStatus:
    """Aggregated status shown by one page indicator."""
    status: FetchStatus
    expiry: Optional[float] = None


@dataclass(frozen=True)
class ActivityItem:
    """Render-ready description of one activity event."""
    icon: str
    action_html: str
    date_text: str
    target_url: str


@dataclass(frozen=True)
class StaticFallbacks:
    """Values captured from the static page before any fetch begins."""
    stars: Optional[str] = None
