"""Activity feed filtering and per-event descriptions."""
from datetime import datetime
from html import escape
from typing import Any, Dict, List
from src.domain.models import ActivityEvent, ActivityItem

MEANINGFUL_EVENT_TYPES = (
    "PushEvent",
    "PullRequestEvent",
    "IssuesEvent",
    "CreateEvent",
    "ReleaseEvent",
    "ForkEvent",
    "WatchEvent",
)
MAX_FEED_ITEMS = 5
DEFAULT_ICON = "fas fa-question-circle"


def filter_meaningful_events(
    events: List[ActivityEvent],
    limit: int = MAX_FEED_ITEMS
) -> List[ActivityEvent]:
    """Keep recognized event types in their original order, capped at limit."""
    return [event for event in events if event.type in MEANINGFUL_EVENT_TYPES][:limit]


def format_event_date(value: datetime) -> str:
    """Format like ``Jan 5, 2024``."""
    return f"{value:%b} {value.day}, {value.year}"


def _link(url: str, text: str) -> str:
    return f'<a href="{escape(url)}" target="_blank">{escape(text)}</a>'


def _capitalize(action: str) -> str:
    return action[:1].upper() + action[1:]


def _describe_push(event: ActivityEvent, payload: Dict[str, Any]):
    branch = (payload.get("ref") or "").split("/")[-1]
    commit_count = len(payload.get("commits") or [])
    plural = "" if commit_count == 1 else "s"
    repo_link = _link(f"{event.repo_url}/tree/{branch}", event.repo_name)
    return "fas fa-arrow-up", f"Pushed {commit_count} commit{plural} to {repo_link}", event.repo_url


def _describe_numbered(event: ActivityEvent, payload: Dict[str, Any], key: str, label: str, icon: str):
    target = payload.get(key) or {}
    url = target.get("html_url") or event.repo_url
    action = _capitalize(payload.get("action") or "")
    text = (
        f"{escape(action)} {label} {_link(url, '#' + str(target.get('number', '')))} "
        f"in {_link(event.repo_url, event.repo_name)}"
    )
    return icon, text, url


def _describe_create(event: ActivityEvent, payload: Dict[str, Any]):
    ref_type = payload.get("ref_type")
    repo_link = _link(event.repo_url, event.repo_name)
    if ref_type == "repository":
        text = f"Created repository {repo_link}"
    elif ref_type in ("branch", "tag"):
        ref = escape(payload.get("ref") or "")
        text = f"Created {ref_type} <strong>{ref}</strong> in {repo_link}"
    else:
        text = f"Created something in {repo_link}"
    return "fas fa-plus", text, event.repo_url


def _describe_release(event: ActivityEvent, payload: Dict[str, Any]):
    release = payload.get("release") or {}
    url = release.get("html_url") or event.repo_url
    text = (
        f"Published release {_link(url, release.get('tag_name') or '')} "
        f"for {_link(event.repo_url, event.repo_name)}"
    )
    return "fas fa-tag", text, url


def _describe_fork(event: ActivityEvent, payload: Dict[str, Any]):
    forkee = payload.get("forkee") or {}
    url = forkee.get("html_url") or event.repo_url
    text = (
        f"Forked {_link(event.repo_url, event.repo_name)} "
        f"to {_link(url, forkee.get('full_name') or '')}"
    )
    return "fas fa-code-branch", text, url


def _describe_watch(event: ActivityEvent, payload: Dict[str, Any]):
    return "fas fa-star", f"Starred repository {_link(event.repo_url, event.repo_name)}", event.repo_url


def describe_event(event: ActivityEvent) -> ActivityItem:
    """Build the icon, action text and click target for one event.

    Args:
        event: A public GitHub event

    Returns:
        ActivityItem whose action_html is safe to insert as markup
    """
    payload = event.payload
    if event.type == "PushEvent":
        icon, text, url = _describe_push(event, payload)
    elif event.type == "PullRequestEvent":
        icon, text, url = _describe_numbered(
            event, payload, "pull_request", "pull request", "fas fa-code-pull-request"
        )
    elif event.type == "IssuesEvent":
        icon, text, url = _describe_numbered(
            event, payload, "issue", "issue", "fas fa-circle-exclamation"
        )
    elif event.type == "CreateEvent":
        icon, text, url = _describe_create(event, payload)
    elif event.type == "ReleaseEvent":
        icon, text, url = _describe_release(event, payload)
    elif event.type == "ForkEvent":
        icon, text, url = _describe_fork(event, payload)
    elif event.type == "WatchEvent":
        icon, text, url = _describe_watch(event, payload)
    else:
        icon, text, url = DEFAULT_ICON, "", event.repo_url

    return ActivityItem(
        icon=icon,
        action_html=text,
        date_text=format_event_date(event.created_at),
        target_url=url
    )
