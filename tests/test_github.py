"""Tests for the GitHub activity client."""

from datetime import UTC, date, datetime, timedelta

import httpx
import pytest

from scv.models import Weekday
from scv.services.github import GitHubClient, GitHubError, format_time_ago, past_weekdays

# Friday 2024-05-10, noon UTC
NOW = datetime(2024, 5, 10, 12, tzinfo=UTC)


def _commit(when: str) -> dict:
    return {"sha": "abc", "commit": {"author": {"date": when}}}


def _client(handler) -> GitHubClient:
    return GitHubClient("secret", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_missing_repository_is_empty_activity() -> None:
    client = _client(lambda request: httpx.Response(404, json={"message": "Not Found"}))
    activity = await client.week_activity("ghost-user", now=NOW)
    assert activity.error is None
    assert activity.total_commits == 0
    assert not any(activity.days.values())
    assert len(activity.days) == 5
    assert await client.latest_commit_time("ghost-user") is None
    await client.aclose()


@pytest.mark.asyncio
async def test_week_activity_counts_weekday_commits() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[
            _commit("2024-05-10T08:00:00Z"),  # Fri
            _commit("2024-05-10T07:00:00Z"),  # Fri
            _commit("2024-05-07T10:00:00Z"),  # Tue
            _commit("2024-05-05T10:00:00Z"),  # Sun
        ])

    client = _client(handler)
    activity = await client.week_activity("alice", now=NOW)
    await client.aclose()

    assert activity.days[Weekday.FRI]
    assert activity.days[Weekday.TUE]
    assert not activity.days[Weekday.MON]
    assert activity.total_commits == 3
    assert activity.latest_commit == datetime(2024, 5, 10, 8, tzinfo=UTC)

    request = seen[0]
    assert request.url.path == "/repos/alice/alice.github.io/commits"
    assert request.url.params["per_page"] == "100"
    assert request.headers["Authorization"] == "token secret"


@pytest.mark.asyncio
async def test_week_activity_captures_server_errors() -> None:
    client = _client(lambda request: httpx.Response(500, text="boom"))
    activity = await client.week_activity("alice", now=NOW)
    await client.aclose()
    assert activity.error == "GitHub API error 500: boom"
    assert activity.total_commits == 0


@pytest.mark.asyncio
async def test_latest_commit_time_raises_on_error() -> None:
    client = _client(lambda request: httpx.Response(403, text="rate limited"))
    with pytest.raises(GitHubError, match="403"):
        await client.latest_commit_time("alice")
    await client.aclose()


@pytest.mark.asyncio
async def test_latest_commit_time_transport_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    client = _client(handler)
    with pytest.raises(GitHubError, match="Failed to fetch commits for alice"):
        await client.latest_commit_time("alice")
    await client.aclose()


@pytest.mark.asyncio
async def test_latest_commit_time_reads_newest() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["per_page"] == "1"
        return httpx.Response(200, json=[_commit("2024-05-09T21:30:00Z")])

    client = _client(handler)
    assert await client.latest_commit_time("alice") == datetime(2024, 5, 9, 21, 30, tzinfo=UTC)
    await client.aclose()


def test_past_weekdays_skips_weekend() -> None:
    # Monday 2024-05-13
    assert past_weekdays(today=date(2024, 5, 13)) == [
        Weekday.TUE, Weekday.WED, Weekday.THU, Weekday.FRI, Weekday.MON,
    ]
    # Sunday 2024-05-12
    assert past_weekdays(today=date(2024, 5, 12)) == [
        Weekday.MON, Weekday.TUE, Weekday.WED, Weekday.THU, Weekday.FRI,
    ]


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [
        (0, "just now"),
        (30, "30 seconds ago"),
        (60, "1 minute ago"),
        (3 * 3600, "3 hours ago"),
        (86400, "1 day ago"),
        (14 * 86400, "2 weeks ago"),
        (60 * 86400, "2 months ago"),
        (400 * 86400, "1 year ago"),
    ],
)
def test_format_time_ago(seconds: int, expected: str) -> None:
    assert format_time_ago(NOW - timedelta(seconds=seconds), NOW) == expected
