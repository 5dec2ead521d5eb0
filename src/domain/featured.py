"""Featured repository selection for the projects section."""
from typing import List
from src.domain.models import Repository

MAX_FEATURED = 2
# Forks are only featured when they have more stars than this
FORK_STAR_THRESHOLD = 10


def total_stars(repos: List[Repository]) -> int:
    """Sum of stargazers across all repositories."""
    return sum(repo.stargazers_count for repo in repos)


def _recency(repo: Repository) -> float:
    return repo.updated_at.timestamp() if repo.updated_at else 0.0


def rank_repositories(repos: List[Repository]) -> List[Repository]:
    """Order by star count, most recently updated first on ties."""
    return sorted(repos, key=lambda repo: (-repo.stargazers_count, -_recency(repo)))


def select_featured_repositories(
    repos: List[Repository],
    limit: int = MAX_FEATURED
) -> List[Repository]:
    """Pick the repositories to show in the featured slots.
    
    Args:
        repos: All public repositories of the owner
        limit: Maximum number of repositories to return
        
    Returns:
        Up to ``limit`` ranked repositories, skipping forks that do not
        exceed FORK_STAR_THRESHOLD stars
    """
    ranked = rank_repositories(repos)
    eligible = [
        repo for repo in ranked
        if not repo.fork or repo.stargazers_count > FORK_STAR_THRESHOLD
    ]
    return eligible[:limit]
