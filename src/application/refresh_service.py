"""Refresh service orchestrating the concurrent GitHub fetches."""
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional
from src.application.expiring_cache import ExpiringCache
from src.application.github_fetchers import GitHubDataFetcher, capture_initial_values
from src.domain.github_interface import IGitHubClient
from src.domain.models import CompositeStatus, FetchResult
from src.domain.page_interface import IPortfolioPage
from src.domain.status import (
    aggregate_activity_status,
    aggregate_stats_status,
    indicator_tooltip,
    is_stale,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RefreshReport:
    """Outcome of one refresh cycle."""
    profile: Optional[FetchResult]
    repositories: Optional[FetchResult]
    activity: Optional[FetchResult]
    stats_status: CompositeStatus
    activity_status: CompositeStatus


class PortfolioRefreshService:
    """Application service refreshing the GitHub sections of the page.

    Captures the static fallbacks, runs the three fetchers concurrently,
    and updates the stats and activity indicators once all have settled.
    """

    def __init__(
        self,
        github_client: IGitHubClient,
        cache: ExpiringCache,
        page: IPortfolioPage
    ):
        """Initialize refresh service.

        Args:
            github_client: GitHub API client implementation
            cache: Expiring cache for the fetched sections
            page: Rendering target
        """
        self._github_client = github_client
        self._cache = cache
        self._page = page

    async def refresh(self) -> RefreshReport:
        """Fetch every section and update the indicators.

        Returns:
            RefreshReport with the per-fetcher and aggregated statuses
        """
        logger.info("Initiating GitHub data fetches")

        # Must run before any fetch touches the page
        fallbacks = capture_initial_values(self._page)
        fetcher = GitHubDataFetcher(self._github_client, self._cache, self._page, fallbacks)

        outcomes = await asyncio.gather(
            fetcher.fetch_profile(),
            fetcher.fetch_repositories(),
            fetcher.fetch_activity(),
            return_exceptions=True
        )
        profile, repositories, activity = (self._settled(outcome) for outcome in outcomes)

        stats_status = aggregate_stats_status(profile, repositories)
        activity_status = aggregate_activity_status(activity)
        logger.info(
            f"Final status - Stats: {stats_status.status.value}, "
            f"Activity: {activity_status.status.value}"
        )

        self.update_indicator("stats", stats_status)
        self.update_indicator("activity", activity_status)

        return RefreshReport(
            profile=profile,
            repositories=repositories,
            activity=activity,
            stats_status=stats_status,
            activity_status=activity_status
        )

    @staticmethod
    def _settled(outcome) -> Optional[FetchResult]:
        if isinstance(outcome, BaseException):
            logger.error(f"GitHub fetcher raised: {outcome!r}")
            return None
        return outcome

    def update_indicator(self, section: str, status: CompositeStatus) -> None:
        tooltip = indicator_tooltip(section, status, self._cache.now())
        self._page.set_indicator(section, is_stale(status), tooltip)

    async def close(self) -> None:
        """Close connections."""
        await self._github_client.close()
