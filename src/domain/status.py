"""Aggregation of fetch outcomes into the two page indicators."""
import math
from typing import Optional
from src.domain.models import CompositeStatus, FetchResult, FetchStatus

# The tooltip age assumes every entry was written with the default one-hour
# TTL, whatever TTL the entry actually had.
ASSUMED_TTL_MS = 3_600_000

SECTION_TITLES = {
    "stats": "Stats",
    "activity": "Activity",
}


def aggregate_stats_status(
    profile: Optional[FetchResult],
    repos: Optional[FetchResult]
) -> CompositeStatus:
    """Combine the profile and repository outcomes.

    Live only when both are live. Cached when either is cached, using the
    earliest known expiry. Failed otherwise, including when either fetcher
    did not produce a result at all.
    """
    if profile is None or repos is None:
        return CompositeStatus(FetchStatus.FAILED)

    if profile.status == FetchStatus.LIVE and repos.status == FetchStatus.LIVE:
        return CompositeStatus(FetchStatus.LIVE)

    if FetchStatus.CACHED in (profile.status, repos.status):
        expiries = [e for e in (profile.expiry, repos.expiry) if e is not None]
        return CompositeStatus(FetchStatus.CACHED, min(expiries) if expiries else None)

    return CompositeStatus(FetchStatus.FAILED)


def aggregate_activity_status(activity: Optional[FetchResult]) -> CompositeStatus:
    if activity is None:
        return CompositeStatus(FetchStatus.FAILED)
    return CompositeStatus(activity.status, activity.expiry)


def cached_age_minutes(expiry: float, now_ms: float) -> int:
    """Approximate minutes since the entry was written, rounded half up."""
    written_at = expiry - ASSUMED_TTL_MS
    return math.floor((now_ms - written_at) / 60_000 + 0.5)


def indicator_tooltip(section: str, status: CompositeStatus, now_ms: float) -> str:
    """Tooltip text describing where a section's data came from."""
    text = f"GitHub {SECTION_TITLES.get(section, section.title())}: "
    if status.status == FetchStatus.LIVE:
        return text + "Live data."
    if status.status == FetchStatus.CACHED:
        text += "Cached data"
        if status.expiry:
            return text + f" (approx. {cached_age_minutes(status.expiry, now_ms)} min ago)."
        return text + "."
    return text + "Update failed; showing defaults or cached data."


def is_stale(status: CompositeStatus) -> bool:
    return status.status != FetchStatus.LIVE
