"""End-to-end test of the entry point with a fake GitHub client."""
import json
import enhance_portfolio
from tests.fakes import FakeGitHubClient, make_event, make_repo
from tests.test_lxml_page import PAGE


def run_main(monkeypatch, tmp_path, client, *extra):
    page_path = tmp_path / "index.html"
    page_path.write_text(PAGE, encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PORTFOLIO_CACHE_FILE", str(tmp_path / "cache.json"))
    monkeypatch.setenv("PREFERS_COLOR_SCHEME", "light")
    monkeypatch.setattr(enhance_portfolio, "GitHubRestClient", lambda *args, **kwargs: client)

    enhance_portfolio.main([str(page_path), *extra])
    return page_path.read_text(encoding="utf-8")


def test_main_renders_live_data(monkeypatch, tmp_path):
    """Test the whole page-load sequence writes the page and the cache."""
    client = FakeGitHubClient(
        repo_pages=[[make_repo("site", stars=9), make_repo("tool", stars=4)]],
        events=[make_event("WatchEvent")]
    )

    html = run_main(monkeypatch, tmp_path, client, "--toggle-theme", "--reveal-all")

    assert 'class="dark-theme"' in html
    assert "--bg-color-rgb: 17, 17, 17" in html
    assert html.count("is-visible") == 2
    assert ">site</a>" in html
    assert ">13</span>" in html
    assert "Recent GitHub Activity" in html
    assert 'title="GitHub Stats: Live data."' in html
    assert client.closed

    stored = json.loads((tmp_path / "cache.json").read_text(encoding="utf-8"))
    assert stored["theme"] == "dark"
    assert set(stored) == {"theme", "githubProfileData", "githubReposData", "githubActivityData"}


def test_second_run_uses_cache(monkeypatch, tmp_path):
    run_main(monkeypatch, tmp_path, FakeGitHubClient(repo_pages=[[make_repo("site", stars=9)]]))
    client = FakeGitHubClient(repo_pages=[[make_repo("other", stars=1)]])

    html = run_main(monkeypatch, tmp_path, client)

    assert client.requested_pages == []
    assert ">site</a>" in html
    assert "GitHub Stats: Cached data (approx. 0 min ago)." in html
