"""Main entry point for the portfolio page enhancer.

Applies the theme and reveal markers to a static portfolio page, refreshes
its GitHub sections, and writes the result.
"""
import argparse
import asyncio
import logging
import sys
from src.application.expiring_cache import ExpiringCache
from src.application.refresh_service import PortfolioRefreshService
from src.application.scroll_reveal import ScrollReveal
from src.application.theme_controller import ThemeController
from src.config import Settings, load_settings
from src.infrastructure.file_storage import JsonFileStorage
from src.infrastructure.github_client import GitHubRestClient
from src.infrastructure.lxml_page import LxmlPortfolioPage
from src.infrastructure.static_watcher import StaticVisibilityWatcher


logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Refresh the GitHub sections of a portfolio page.")
    parser.add_argument("input", help="Path to the portfolio HTML page")
    parser.add_argument("-o", "--output", help="Where to write the page (default: overwrite input)")
    parser.add_argument("--toggle-theme", action="store_true",
                        help="Flip and persist the theme preference before rendering")
    parser.add_argument("--reveal-all", action="store_true",
                        help="Mark every reveal element as visible")
    return parser.parse_args(argv)


async def enhance(page: LxmlPortfolioPage, settings: Settings, args: argparse.Namespace) -> None:
    """Run the page-load sequence against page."""
    storage = JsonFileStorage(settings.cache_file)

    theme = ThemeController(page, storage, prefers_dark=settings.prefers_dark)
    current = theme.load()
    if args.toggle_theme:
        current = theme.toggle()
    logger.info(f"Theme: {current}")

    watcher = StaticVisibilityWatcher()
    ScrollReveal(page, watcher).setup()
    if args.reveal_all:
        watcher.flush()

    cache = ExpiringCache(storage, default_ttl_ms=settings.cache_ttl_ms)
    github_client = GitHubRestClient(
        settings.github_username,
        api_url=settings.github_api_url,
        timeout_seconds=settings.github_timeout_seconds
    )
    service = PortfolioRefreshService(github_client=github_client, cache=cache, page=page)

    try:
        report = await service.refresh()
    finally:
        await service.close()

    logger.info("=" * 50)
    logger.info("Refresh Summary:")
    logger.info(f"  Stats: {report.stats_status.status.value}")
    logger.info(f"  Activity: {report.activity_status.status.value}")
    logger.info("=" * 50)


def main(argv=None) -> None:
    """Execute the enhancement."""
    args = parse_args(argv)
    settings = load_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    logger.info(f"Enhancing {args.input} for GitHub user {settings.github_username}")

    try:
        page = LxmlPortfolioPage.from_file(args.input)
    except OSError as e:
        logger.error(f"Cannot read page: {e}")
        sys.exit(1)

    asyncio.run(enhance(page, settings, args))

    output = args.output or args.input
    try:
        page.write(output)
    except OSError as e:
        logger.error(f"Cannot write page: {e}")
        sys.exit(1)
    logger.info(f"Wrote {output}")


if __name__ == "__main__":
    main()
