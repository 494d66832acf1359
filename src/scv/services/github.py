"""Commit activity client for students' GitHub Pages repositories."""

from __future__ import annotations

import logging
from datetime import UTC, date, datetime, timedelta
from typing import Any

import httpx

from scv.models import WeekActivity, Weekday

logger = logging.getLogger(__name__)

API_URL = "https://api.github.com"
WEEKDAY_WINDOW = 5


class GitHubError(RuntimeError):
    """Raised when the GitHub API returns an unexpected response."""


def past_weekdays(count: int = WEEKDAY_WINDOW, today: date | None = None) -> list[Weekday]:
    """The last *count* Monday-Friday weekdays up to *today*, oldest first."""
    current = today or datetime.now(tz=UTC).date()
    days: list[Weekday] = []
    while len(days) < count:
        day = Weekday(current.weekday())
        if not day.is_weekend:
            days.append(day)
        current -= timedelta(days=1)
    days.reverse()
    return days


def format_time_ago(moment: datetime, now: datetime | None = None) -> str:
    """Render the distance between *moment* and *now* as "N units ago"."""
    now = now or datetime.now(tz=UTC)
    seconds = int((now - moment).total_seconds())
    if seconds < 60:
        return "just now" if seconds <= 1 else f"{seconds} seconds ago"

    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24
    for amount, unit, limit in (
        (minutes, "minute", hours < 1),
        (hours, "hour", days < 1),
        (days, "day", days < 7),
        (days // 7, "week", days < 30),
        (days // 30, "month", days < 365),
    ):
        if limit:
            return f"1 {unit} ago" if amount == 1 else f"{amount} {unit}s ago"
    years = days // 365
    return "1 year ago" if years == 1 else f"{years} years ago"


def _commit_date(commit: dict[str, Any]) -> datetime | None:
    raw = commit.get("commit", {}).get("author", {}).get("date")
    if not raw:
        return None
    return datetime.fromisoformat(raw.replace("Z", "+00:00"))


class GitHubClient:
    """Reads commits of ``<handle>/<handle>.github.io`` through the REST API.

    A missing repository is reported as no activity rather than an error:
    not every student has published their site yet.
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        base_url: str = API_URL,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ) -> None:
        headers = {"Accept": "application/vnd.github+json"}
        if token:
            headers["Authorization"] = f"token {token}"
        self._client = httpx.AsyncClient(
            base_url=base_url, headers=headers, timeout=timeout, transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    @staticmethod
    def _commits_path(handle: str) -> str:
        return f"/repos/{handle}/{handle}.github.io/commits"

    async def _get_commits(self, handle: str, params: dict[str, str]) -> list[dict[str, Any]]:
        try:
            resp = await self._client.get(self._commits_path(handle), params=params)
        except httpx.HTTPError as exc:
            msg = f"Failed to fetch commits for {handle}: {exc}"
            raise GitHubError(msg) from exc

        if resp.status_code == 404:
            logger.debug("No pages repository for %s", handle)
            return []
        if resp.is_error:
            msg = f"GitHub API error {resp.status_code}: {resp.text}"
            raise GitHubError(msg)
        try:
            data = resp.json()
        except ValueError as exc:
            msg = "Failed to parse GitHub API response"
            raise GitHubError(msg) from exc
        if not isinstance(data, list):
            msg = "Unexpected GitHub API response shape"
            raise GitHubError(msg)
        return data

    async def latest_commit_time(self, handle: str) -> datetime | None:
        """Author date of the newest commit, or None if there is none."""
        commits = await self._get_commits(handle, {"per_page": "1"})
        if not commits:
            return None
        return _commit_date(commits[0])

    async def week_activity(self, handle: str, now: datetime | None = None) -> WeekActivity:
        """Commit flags for the trailing five weekdays; failures go in ``error``."""
        now = now or datetime.now(tz=UTC)
        weekdays = past_weekdays(today=now.date())
        activity = WeekActivity(handle=handle, days=dict.fromkeys(weekdays, False))

        params = {
            "since": (now - timedelta(days=7)).isoformat(),
            "until": now.isoformat(),
            "per_page": "100",
        }
        try:
            commits = await self._get_commits(handle, params)
        except GitHubError as exc:
            logger.warning("Week activity for %s failed: %s", handle, exc)
            activity.error = str(exc)
            return activity

        for commit in commits:
            when = _commit_date(commit)
            if when is None:
                continue
            day = Weekday(when.weekday())
            if day not in activity.days:
                continue
            activity.days[day] = True
            activity.total_commits += 1
            if activity.latest_commit is None or when > activity.latest_commit:
                activity.latest_commit = when
        return activity
