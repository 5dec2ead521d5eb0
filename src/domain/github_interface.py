"""GitHub API interface (port) for fetching the page owner's public data.

This is the anti-corruption layer that shields the domain from GitHub API specifics.
"""
from abc import ABC, abstractmethod
from typing import List
from src.domain.models import ActivityEvent, Profile, Repository


class IGitHubClient(ABC):
    """Abstract interface for GitHub API operations."""
    
    @abstractmethod
    async def fetch_profile(self) -> Profile:
        """Fetch the user's public profile."""
        pass
    
    @abstractmethod
    async def fetch_repositories_page(self, page: int, per_page: int = 100) -> List[Repository]:
        """Fetch one page of the user's public repositories.
        
        Args:
            page: 1-based page number
            per_page: Page size (GitHub max is 100)
            
        Returns:
            Repositories on that page; an empty list past the last page
        """
        pass
    
    @abstractmethod
    async def fetch_public_events(self, per_page: int = 15) -> List[ActivityEvent]:
        """Fetch the user's most recent public events, newest first."""
        pass
    
    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
        pass
