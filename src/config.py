"""Runtime settings loaded from the environment."""
import os
from dataclasses import dataclass
from dotenv import load_dotenv


DEFAULT_USERNAME = "ipv1337"


@dataclass(frozen=True)
class Settings:
    """Configuration for one enhancer run."""
    github_username: str = DEFAULT_USERNAME
    github_api_url: str = "https://api.github.com"
    github_timeout_seconds: float = 30
    cache_file: str = ".portfolio_cache.json"
    cache_ttl_minutes: int = 60
    prefers_dark: bool = False
    log_level: str = "INFO"

    @property
    def cache_ttl_ms(self) -> int:
        return self.cache_ttl_minutes * 60_000


def load_settings() -> Settings:
    """Build Settings from environment variables.

    Variables are read after loading ``.env`` (or ``env``) from the working
    directory; values already in the environment take precedence.
    """
    load_dotenv('.env') or load_dotenv('env')

    return Settings(
        github_username=os.getenv("GITHUB_USERNAME", DEFAULT_USERNAME),
        github_api_url=os.getenv("GITHUB_API_URL", "https://api.github.com"),
        github_timeout_seconds=float(os.getenv("GITHUB_TIMEOUT_SECONDS", "30")),
        cache_file=os.getenv("PORTFOLIO_CACHE_FILE", ".portfolio_cache.json"),
        cache_ttl_minutes=int(os.getenv("CACHE_TTL_MINUTES", "60")),
        prefers_dark=os.getenv("PREFERS_COLOR_SCHEME", "light").lower() == "dark",
        log_level=os.getenv("LOG_LEVEL", "INFO").upper()
    )
