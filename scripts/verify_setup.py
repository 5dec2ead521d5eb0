"""Verify that the setup is correct before running the enhancer."""
import asyncio
import sys
from src.application.expiring_cache import ExpiringCache
from src.config import load_settings
from src.infrastructure.file_storage import JsonFileStorage
from src.infrastructure.github_client import GitHubRestClient
from src.infrastructure.lxml_page import LxmlPortfolioPage


settings = load_settings()


def check_settings():
    """Show the effective settings."""
    print("Checking settings...")
    print(f"   GITHUB_USERNAME: {settings.github_username}")
    print(f"   GITHUB_API_URL: {settings.github_api_url}")
    print(f"   PORTFOLIO_CACHE_FILE: {settings.cache_file}")
    print(f"   CACHE_TTL_MINUTES: {settings.cache_ttl_minutes}")
    if settings.cache_ttl_minutes != 60:
        print("⚠️  Cache age in tooltips assumes a 60 minute TTL")
    print("✅ Settings loaded")
    return True


def check_cache_file():
    """Check that the cache file can be written."""
    print("\nChecking cache file...")
    storage = JsonFileStorage(settings.cache_file)
    cache = ExpiringCache(storage)
    probe_key = "verifySetupProbe"
    cache.set(probe_key, True, ttl_ms=60_000)
    entry = cache.get(probe_key)
    storage.remove_item(probe_key)
    if entry is None:
        print(f"❌ Cannot write {storage.path}")
        return False
    print(f"✅ Cache file {storage.path} is writable")
    return True


async def _fetch_profile():
    client = GitHubRestClient(
        settings.github_username,
        api_url=settings.github_api_url,
        timeout_seconds=settings.github_timeout_seconds
    )
    try:
        return await client.fetch_profile()
    finally:
        await client.close()


def check_github_api():
    """Check that the GitHub profile endpoint answers."""
    print("\nChecking GitHub API...")
    try:
        profile = asyncio.run(_fetch_profile())
    except Exception as e:
        print(f"❌ Failed to reach GitHub: {e}")
        return False
    print(f"✅ Fetched profile of {settings.github_username}")
    print(f"   Public repositories: {profile.public_repos}")
    return True


def check_page(path):
    """Check that the page carries the elements the enhancer updates."""
    print(f"\nChecking page {path}...")
    try:
        page = LxmlPortfolioPage.from_file(path)
    except OSError as e:
        print(f"❌ Cannot read page: {e}")
        return False

    missing = []
    for key in ("repos", "followers", "following", "stars"):
        if page.get_stat(key) is None:
            missing.append(f'.stat-number[data-stat="{key}"]')
    if not page.project_slot_count():
        missing.append("#projects .container .item")
    if not page.has_activity_anchor():
        missing.append("#connect .container .achievements")

    if missing:
        print("⚠️  Missing elements will be skipped:")
        for selector in missing:
            print(f"   {selector}")
    else:
        print("✅ All page targets present")
    print(f"   Reveal elements: {len(page.find_reveal_targets())}")
    return True


def main():
    """Run all verification checks."""
    print("=" * 60)
    print("Portfolio Enhancer - Setup Verification")
    print("=" * 60)
    
    checks = [
        ("Settings", check_settings),
        ("Cache File", check_cache_file),
        ("GitHub API", check_github_api),
    ]
    if len(sys.argv) > 1:
        checks.append(("Page", lambda: check_page(sys.argv[1])))
    
    results = {}
    for name, check_func in checks:
        try:
            results[name] = check_func()
        except Exception as e:
            print(f"❌ {name} check failed with exception: {e}")
            results[name] = False
    
    print("\n" + "=" * 60)
    print("Verification Summary")
    print("=" * 60)
    
    for name, passed in results.items():
        status = "✅ PASS" if passed else "❌ FAIL"
        print(f"{status}: {name}")
    
    if all(results.values()):
        print("\n✅ All checks passed! Ready to run the enhancer.")
        print("\nNext steps:")
        print("  python enhance_portfolio.py index.html")
        sys.exit(0)
    else:
        print("\n❌ Some checks failed. Please fix the issues above.")
        print("\nCommon solutions:")
        print("  - Check network access to api.github.com")
        print("  - Set PORTFOLIO_CACHE_FILE to a writable location")
        sys.exit(1)


if __name__ == "__main__":
    main()
