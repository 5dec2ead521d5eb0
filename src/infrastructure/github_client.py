"""GitHub REST API client implementation."""
import logging
from typing import Any, Dict, List, Optional
import aiohttp
from src.domain.github_interface import IGitHubClient
from src.domain.models import ActivityEvent, Profile, Repository


logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """Exception raised when GitHub answers with a non-2xx status."""

    def __init__(self, status: int, reason: Optional[str], url: str):
        super().__init__(f"GitHub API error: {status} {reason} ({url})")
        self.status = status
        self.reason = reason
        self.url = url


class GitHubRestClient(IGitHubClient):
    """Unauthenticated GitHub REST client for a single user.

    Implements the IGitHubClient port, providing an anti-corruption layer
    between the domain and GitHub's API. Requests are made once; there is
    no retry.
    """

    DEFAULT_API_URL = "https://api.github.com"

    def __init__(
        self,
        username: str,
        api_url: str = DEFAULT_API_URL,
        timeout_seconds: float = 30
    ):
        """Initialize GitHub client.

        Args:
            username: GitHub login whose public data is fetched
            api_url: Base URL of the REST API
            timeout_seconds: Total timeout for each request
        """
        self._username = username
        self._api_url = api_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session: Optional[aiohttp.ClientSession] = None

    async def _init_session(self) -> aiohttp.ClientSession:
        """Initialize the HTTP session (lazy initialization)."""
        if self._session is None:
            self._session = aiohttp.ClientSession(
                timeout=self._timeout,
                headers={
                    "Accept": "application/vnd.github+json",
                    "User-Agent": f"portfolio-enhancer ({self._username})",
                }
            )
        return self._session

    async def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Execute a GET request and decode the JSON body.

        Raises:
            GitHubAPIError: When the response status is not 2xx
            aiohttp.ClientError: On connection failures
        """
        session = await self._init_session()
        url = f"{self._api_url}{path}"
        async with session.get(url, params=params) as response:
            remaining = response.headers.get("X-RateLimit-Remaining")
            if remaining is not None:
                logger.debug(f"Rate limit remaining: {remaining}")
            if response.status < 200 or response.status >= 300:
                raise GitHubAPIError(response.status, response.reason, url)
            return await response.json()

    async def fetch_profile(self) -> Profile:
        data = await self._get_json(f"/users/{self._username}")
        return Profile.from_api(data)

    async def fetch_repositories_page(self, page: int, per_page: int = 100) -> List[Repository]:
        data = await self._get_json(
            f"/users/{self._username}/repos",
            params={"per_page": min(per_page, 100), "page": page}
        )
        return [Repository.from_api(item) for item in data]

    async def fetch_public_events(self, per_page: int = 15) -> List[ActivityEvent]:
        data = await self._get_json(
            f"/users/{self._username}/events/public",
            params={"per_page": per_page}
        )
        return [ActivityEvent.from_api(item) for item in data]

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None
