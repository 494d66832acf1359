"""Tests for individual screens outside the controller."""

from datetime import UTC, datetime

import pytest

from scv.core.events import FetchWeekActivity, GoBack, NavigateTo, SaveSettings
from scv.core.keys import KeyPress
from scv.core.navigation import ScreenKind
from scv.models import Classroom, LatestCommit, Student, WeekActivity, Weekday
from scv.screens.add_students import parse_usernames
from scv.screens.class_management import ClassManagementScreen
from scv.screens.latest_activity import LatestActivityScreen
from scv.screens.repo_management import RepoManagementScreen, RepoMode
from scv.screens.settings import SettingsScreen
from scv.screens.week_view import WeekViewScreen
from scv.ui.frame import Frame
from scv.ui.themes import get_theme

CLASSROOM = Classroom(id=1, name="Web 101")
STUDENTS = [
    Student(id=1, class_id=1, username="alice", github_username="alice"),
    Student(id=2, class_id=1, username="bob", github_username="bob"),
]


def _render(table) -> str:
    frame = Frame(100, 20)
    frame.render(table, frame.region)
    return frame.plain()


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("alice, bob", ["alice", "bob"]),
        ("alice bob\ncarol", ["alice", "bob", "carol"]),
        ("@alice,,alice , ", ["alice"]),
        ("   ", []),
    ],
)
def test_parse_usernames(raw: str, expected: list[str]) -> None:
    assert parse_usernames(raw) == expected


@pytest.mark.asyncio
async def test_class_management_targets_carry_context(state) -> None:
    screen = ClassManagementScreen(CLASSROOM, STUDENTS)
    event = await screen.handle_input(KeyPress.char("r"), state)
    assert isinstance(event, NavigateTo)
    assert event.kind is ScreenKind.REPOSITORY_MANAGEMENT
    assert event.identity.classroom == CLASSROOM
    assert isinstance(await screen.handle_input(KeyPress.char("b"), state), GoBack)


def test_week_view_requests_data_on_entry() -> None:
    screen = WeekViewScreen(CLASSROOM, STUDENTS)
    event = screen.entry_event()
    assert isinstance(event, FetchWeekActivity)
    assert event.students == tuple(STUDENTS)
    assert WeekViewScreen(CLASSROOM, []).entry_event() is None


def test_week_view_table_shows_errors_per_row() -> None:
    screen = WeekViewScreen(CLASSROOM, STUDENTS)
    days = dict.fromkeys([Weekday.MON, Weekday.TUE, Weekday.WED, Weekday.THU, Weekday.FRI], False)
    screen.receive([
        WeekActivity(handle="alice", days={**days, Weekday.TUE: True}, total_commits=4),
        WeekActivity(handle="bob", days=days, error="GitHub API error 403: rate limited"),
    ])
    text = _render(screen.table(get_theme("neon_night")))
    assert "Mon" in text
    assert "Fri" in text
    assert "GitHub" in text
    assert "?" in text
    assert "■" in text


def test_latest_activity_formats_times() -> None:
    now = datetime(2024, 5, 10, 12, tzinfo=UTC)
    screen = LatestActivityScreen(CLASSROOM, STUDENTS)
    screen.receive([
        LatestCommit(username="bob", handle="bob"),
        LatestCommit(username="alice", handle="alice", latest_commit=datetime(2024, 5, 10, 9, tzinfo=UTC)),
    ])
    assert [c.handle for c in screen.commits] == ["alice", "bob"]
    text = _render(screen.table(get_theme("neon_night"), now=now))
    assert "3 hours ago" in text
    assert "No commits" in text


@pytest.mark.asyncio
async def test_repo_screen_modes(state) -> None:
    screen = RepoManagementScreen(CLASSROOM, STUDENTS)
    await screen.handle_input(KeyPress.char("i"), state)
    assert screen.mode is RepoMode.STUDENTS
    await screen.handle_input(KeyPress("down"), state)
    await screen.handle_input(KeyPress("enter"), state)
    assert screen.mode is RepoMode.ACTIONS
    event = await screen.handle_input(KeyPress.char("x"), state)
    assert event.handle == "bob"
    await screen.handle_input(KeyPress.char("b"), state)
    assert screen.mode is RepoMode.STUDENTS
    await screen.handle_input(KeyPress.char("b"), state)
    assert screen.mode is RepoMode.MAIN


@pytest.mark.asyncio
async def test_settings_edits_a_draft(state) -> None:
    screen = SettingsScreen(state.config)
    await screen.handle_input(KeyPress("down"), state)
    for _ in range(30):
        await screen.handle_input(KeyPress("right"), state)
    assert screen.draft.animation_speed == 5.0
    assert state.config.animation_speed == 1.0

    await screen.handle_input(KeyPress("down"), state)
    await screen.handle_input(KeyPress("enter"), state)
    assert screen.draft.enable_particle_effects is False

    await screen.handle_input(KeyPress("down"), state)
    await screen.handle_input(KeyPress("left"), state)
    assert screen.draft.frame_rate == 30

    event = await screen.handle_input(KeyPress.char("s"), state)
    assert isinstance(event, SaveSettings)
    assert event.config.frame_rate == 30
