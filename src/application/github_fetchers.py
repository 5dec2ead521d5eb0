"""Cache-then-network fetchers for the GitHub-backed page sections."""
import logging
from typing import Any, Callable, List, Optional, Tuple
from src.application.expiring_cache import ExpiringCache
from src.domain.activity import describe_event, filter_meaningful_events
from src.domain.featured import select_featured_repositories, total_stars
from src.domain.github_interface import IGitHubClient
from src.domain.models import (
    ActivityEvent,
    FetchResult,
    FetchStatus,
    Profile,
    Repository,
    RepositorySnapshot,
    StaticFallbacks,
)
from src.domain.page_interface import IPortfolioPage


logger = logging.getLogger(__name__)

PROFILE_CACHE_KEY = "githubProfileData"
REPOS_CACHE_KEY = "githubReposData"
ACTIVITY_CACHE_KEY = "githubActivityData"

REPOS_PER_PAGE = 100
EVENTS_PER_REQUEST = 15
MISSING_VALUE = "..."
NO_PROJECTS_MESSAGE = "Featured projects from GitHub will appear here."
ACTIVITY_HEADING = "Recent GitHub Activity"


def _decode_events(value: Any) -> List[ActivityEvent]:
    return [ActivityEvent.from_dict(item) for item in value]


def capture_initial_values(page: IPortfolioPage) -> StaticFallbacks:
    """Snapshot static page values used when the repository fetch fails."""
    return StaticFallbacks(stars=page.get_stat("stars"))


class GitHubDataFetcher:
    """Fetches profile, repositories and activity, updating the page.

    Every fetch checks the cache first, then the network. Failures never
    propagate: they are logged and reported as a failed FetchResult.
    """

    def __init__(
        self,
        github_client: IGitHubClient,
        cache: ExpiringCache,
        page: IPortfolioPage,
        fallbacks: StaticFallbacks
    ):
        """Initialize the fetcher.

        Args:
            github_client: GitHub API client implementation
            cache: Expiring cache shared by the three sections
            page: Rendering target
            fallbacks: Values captured from the page before any fetch
        """
        self._github_client = github_client
        self._cache = cache
        self._page = page
        self._fallbacks = fallbacks

    def _read_cache(self, key: str, decode: Callable[[Any], Any]) -> Optional[Tuple[Any, float]]:
        """Return the decoded cached value and its expiry, or None on a miss.

        A value that no longer decodes into the expected model is removed
        and treated as a miss, so the caller falls through to the network.
        """
        entry = self._cache.get(key)
        if entry is None:
            return None
        try:
            return decode(entry.value), entry.expiry
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error(f"Discarding malformed cache entry {key!r}: {e!r}")
            self._cache.remove(key)
            return None

    # Profile

    async def fetch_profile(self) -> FetchResult:
        cached = self._read_cache(PROFILE_CACHE_KEY, Profile.from_dict)
        if cached:
            logger.info("Using cached GitHub profile data")
            profile, expiry = cached
            self.update_profile(profile)
            return FetchResult(FetchStatus.CACHED, profile, expiry)

        logger.info("Fetching fresh GitHub profile data")
        try:
            profile = await self._github_client.fetch_profile()
            self.update_profile(profile)
            self._cache.set(PROFILE_CACHE_KEY, profile.to_dict())
            return FetchResult(FetchStatus.LIVE, profile)
        except Exception as e:
            logger.error(f"Error fetching GitHub profile: {e}")
            return FetchResult.failed()

    def update_profile(self, profile: Profile) -> None:
        counters = {
            "repos": profile.public_repos,
            "followers": profile.followers,
            "following": profile.following,
        }
        for key, value in counters.items():
            self._page.set_stat(key, MISSING_VALUE if value is None else str(value))

        if profile.bio:
            self._page.set_bio(profile.bio)
        if profile.public_repos is not None:
            self._page.set_connect_summary(profile.public_repos)

    # Repositories

    async def fetch_repositories(self) -> FetchResult:
        cached = self._read_cache(REPOS_CACHE_KEY, RepositorySnapshot.from_dict)
        if cached:
            logger.info("Using cached GitHub repository data")
            snapshot, expiry = cached
            self.update_featured_projects(snapshot.repos)
            self.update_stars(snapshot.total_stars)
            return FetchResult(FetchStatus.CACHED, snapshot, expiry)

        logger.info("Fetching fresh GitHub repository data")
        try:
            repos = await self._fetch_all_repositories()
            snapshot = RepositorySnapshot(repos=repos, total_stars=total_stars(repos))
            self.update_stars(snapshot.total_stars)
            self.update_featured_projects(repos)
            self._cache.set(REPOS_CACHE_KEY, snapshot.to_dict())
            return FetchResult(FetchStatus.LIVE, snapshot)
        except Exception as e:
            logger.error(f"Error fetching GitHub repositories: {e}")
            self.update_stars(self._fallbacks.stars)
            return FetchResult.failed()

    async def _fetch_all_repositories(self) -> List[Repository]:
        """Walk the paginated listing until GitHub returns an empty page."""
        repos: List[Repository] = []
        page = 1
        while True:
            batch = await self._github_client.fetch_repositories_page(page, REPOS_PER_PAGE)
            if not batch:
                break
            repos.extend(batch)
            page += 1
        logger.info(f"Fetched {len(repos)} repositories across {page - 1} pages")
        return repos

    def update_stars(self, stars) -> None:
        self._page.set_stat("stars", MISSING_VALUE if stars is None else str(stars))

    def update_featured_projects(self, repos: List[Repository]) -> None:
        """Fill the project placeholders with the featured repositories."""
        if not repos:
            return

        featured = select_featured_repositories(repos)
        slot_count = self._page.project_slot_count()
        if slot_count is None:
            return

        if featured:
            for index, repo in enumerate(featured[:slot_count]):
                self._page.fill_project_slot(index, repo)
            for index in range(len(featured), slot_count):
                self._page.hide_project_slot(index)
        elif slot_count > 0:
            for index in range(slot_count):
                self._page.hide_project_slot(index)
            self._page.show_no_projects_message(NO_PROJECTS_MESSAGE)

    # Activity

    async def fetch_activity(self) -> FetchResult:
        cached = self._read_cache(ACTIVITY_CACHE_KEY, _decode_events)
        if cached:
            logger.info("Using cached GitHub activity data")
            events, expiry = cached
            self.update_activity_feed(events)
            return FetchResult(FetchStatus.CACHED, events, expiry)

        logger.info("Fetching fresh GitHub activity data")
        try:
            events = await self._github_client.fetch_public_events(EVENTS_PER_REQUEST)
            self.update_activity_feed(events)
            self._cache.set(ACTIVITY_CACHE_KEY, [event.to_dict() for event in events])
            return FetchResult(FetchStatus.LIVE, events)
        except Exception as e:
            logger.error(f"Error fetching GitHub activity: {e}")
            self.update_activity_feed([])
            return FetchResult.failed()

    def update_activity_feed(self, events: Optional[List[ActivityEvent]]) -> None:
        """Replace the rendered feed with the latest meaningful events."""
        if not events:
            return
        if not self._page.has_activity_anchor():
            return

        self._page.remove_activity_feed()

        meaningful = filter_meaningful_events(events)
        if not meaningful:
            logger.debug("No recent meaningful GitHub activity to display")
            return

        items = [describe_event(event) for event in meaningful]
        self._page.insert_activity_feed(ACTIVITY_HEADING, items)
