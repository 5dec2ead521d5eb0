"""Tests for indicator status aggregation."""
from src.domain.models import CompositeStatus, FetchResult, FetchStatus
from src.domain.status import (
    aggregate_activity_status,
    aggregate_stats_status,
    cached_age_minutes,
    indicator_tooltip,
    is_stale,
)

LIVE = FetchResult(FetchStatus.LIVE)
FAILED = FetchResult.failed()


def test_both_live():
    assert aggregate_stats_status(LIVE, LIVE) == CompositeStatus(FetchStatus.LIVE)


def test_live_profile_cached_repos_uses_repo_expiry():
    """Test that the cached side's expiry is reported."""
    repos = FetchResult(FetchStatus.CACHED, expiry=5000)
    
    assert aggregate_stats_status(LIVE, repos) == CompositeStatus(FetchStatus.CACHED, 5000)


def test_both_cached_uses_earliest_expiry():
    profile = FetchResult(FetchStatus.CACHED, expiry=9000)
    repos = FetchResult(FetchStatus.CACHED, expiry=4000)
    
    assert aggregate_stats_status(profile, repos).expiry == 4000


def test_cached_with_failed_is_cached():
    repos = FetchResult(FetchStatus.CACHED, expiry=4000)
    
    assert aggregate_stats_status(FAILED, repos).status == FetchStatus.CACHED


def test_failed_and_live_is_failed():
    assert aggregate_stats_status(LIVE, FAILED).status == FetchStatus.FAILED


def test_missing_result_is_failed():
    assert aggregate_stats_status(None, LIVE).status == FetchStatus.FAILED
    assert aggregate_activity_status(None).status == FetchStatus.FAILED


def test_activity_mirrors_result():
    result = FetchResult(FetchStatus.CACHED, expiry=42)
    
    assert aggregate_activity_status(result) == CompositeStatus(FetchStatus.CACHED, 42)


def test_cached_age_assumes_one_hour_ttl():
    """Test that age is measured from expiry minus one hour."""
    now = 10_000_000
    expiry = now + 45 * 60_000
    
    assert cached_age_minutes(expiry, now) == 15


def test_tooltips():
    now = 10_000_000
    cached = CompositeStatus(FetchStatus.CACHED, now + 50 * 60_000)
    
    assert indicator_tooltip("stats", CompositeStatus(FetchStatus.LIVE), now) == "GitHub Stats: Live data."
    assert indicator_tooltip("activity", cached, now) == "GitHub Activity: Cached data (approx. 10 min ago)."
    assert indicator_tooltip("stats", CompositeStatus(FetchStatus.CACHED), now) == "GitHub Stats: Cached data."
    assert indicator_tooltip("stats", CompositeStatus(FetchStatus.FAILED), now) == (
        "GitHub Stats: Update failed; showing defaults or cached data."
    )


def test_only_live_is_fresh():
    assert not is_stale(CompositeStatus(FetchStatus.LIVE))
    assert is_stale(CompositeStatus(FetchStatus.CACHED))
    assert is_stale(CompositeStatus(FetchStatus.FAILED))
