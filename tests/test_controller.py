"""Tests for the application controller: navigation, banners and dispatch."""

import asyncio
from datetime import UTC, datetime

import pytest

from scv.core.controller import AppController
from scv.core.events import (
    CloneAllRepos,
    CloneRepo,
    DataLoaded,
    NavigateTo,
    PullRepo,
    RefreshClasses,
    SelectClass,
    ShowError,
    ShowLoading,
)
from scv.core.keys import KeyPress
from scv.core.navigation import ScreenKind
from scv.core.state import Banner, BannerKind
from scv.models import BatchStatus, Classroom, WeekActivity, Weekday
from scv.screens.factory import SCREEN_BUILDERS
from scv.services import GitHubError, GitManager
from tests.fixtures.fakes import press, type_text


async def _class_with_students(store, name="Web 101", *usernames):
    classroom = await store.create_class(name)
    for username in usernames:
        await store.add_student(classroom.id, username)
    return classroom


# ── Startup and quitting ─────────────────────────────────────
@pytest.mark.asyncio
async def test_start_installs_main_menu(controller):
    await controller.start()
    assert controller.screen.kind is ScreenKind.MAIN_MENU
    assert len(controller.state.navigation) == 0


@pytest.mark.asyncio
async def test_escape_on_main_menu_quits(controller):
    await controller.start()
    await press(controller, "escape")
    assert not controller.running


@pytest.mark.asyncio
async def test_ctrl_c_quits_from_any_screen(controller):
    await controller.start()
    await press(controller, "m")
    assert controller.screen.kind is ScreenKind.CLASS_SELECTION
    await press(controller, "ctrl+c")
    assert not controller.running


@pytest.mark.asyncio
async def test_main_menu_quit_item(controller):
    await controller.start()
    await press(controller, "q")
    assert not controller.running


@pytest.mark.asyncio
async def test_run_loop_paints_and_stops(state):
    frames = []
    queue: asyncio.Queue[KeyPress] = asyncio.Queue()
    controller = AppController(state, keys=queue, present=frames.append, size=lambda: (80, 24))
    asyncio.get_running_loop().call_later(0.1, queue.put_nowait, KeyPress("ctrl+c"))
    await asyncio.wait_for(controller.run(), timeout=5)
    assert not controller.running
    assert frames
    assert frames[-1].width == 80
    assert frames[-1].height == 24


@pytest.mark.asyncio
async def test_poll_input_drains_queued_keys(controller):
    await controller.start()
    for key in (KeyPress.char("m"), KeyPress.char("c")):
        controller.keys.put_nowait(key)
    await controller.poll_input(0.01)
    assert controller.screen.kind is ScreenKind.CREATE_CLASS
    assert controller.keys.empty()


@pytest.mark.asyncio
async def test_menu_highlight_follows_selection(controller):
    await controller.start()
    assert controller.clock.menu_highlight.value == float(controller.screen.menu.selected)
    await press(controller, "down")
    selected = controller.screen.menu.selected
    assert controller.clock.menu_highlight.target == float(selected)
    assert controller.clock.menu_highlight.is_animating
    controller.advance(0.5)
    assert controller.clock.menu_highlight.value == float(selected)

    await press(controller, "m")
    assert controller.clock.menu_highlight.value == float(controller.screen.menu.selected)
    assert not controller.clock.menu_highlight.is_animating


# ── Banners ──────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_banner_swallows_dismissing_key(controller):
    await controller.start()
    controller.state.banner = Banner.error("boom")
    event = await controller.handle_key(KeyPress.char("m"))
    assert event is None
    assert controller.state.banner is None
    assert controller.screen.kind is ScreenKind.MAIN_MENU


@pytest.mark.asyncio
async def test_banner_swallows_escape(controller):
    await controller.start()
    controller.state.banner = Banner.success("ok")
    await press(controller, "escape")
    assert controller.running


@pytest.mark.asyncio
async def test_error_replaces_loading(controller):
    await controller.start()
    await controller.dispatch(ShowLoading("Working..."))
    assert controller.state.is_loading
    await controller.dispatch(ShowError("failed"))
    assert controller.state.loading is None
    assert controller.state.banner == Banner(BannerKind.ERROR, "failed")


@pytest.mark.asyncio
async def test_overlay_painted_over_screen(controller):
    await controller.start()
    controller.state.banner = Banner.error("Something broke")
    frame = controller.paint()
    assert "Something broke" in frame.plain()


# ── Navigation ───────────────────────────────────────────────
@pytest.mark.asyncio
async def test_empty_class_list_offers_create(controller):
    await controller.start()
    await press(controller, "m")
    titles = [item.title for item in controller.screen.menu.items]
    assert "No classes found" in titles
    assert "Create your first class" in titles
    await press(controller, "c")
    assert controller.screen.kind is ScreenKind.CREATE_CLASS
    assert len(controller.state.navigation) == 2
    assert controller.state.navigation.peek().kind is ScreenKind.CLASS_SELECTION


@pytest.mark.asyncio
async def test_create_class_then_back_refreshes_list(controller):
    await controller.start()
    await press(controller, "m", "n")
    await type_text(controller, "Math 101")
    await press(controller, "enter")

    assert controller.screen.kind is ScreenKind.CLASS_SELECTION
    assert [c.name for c in controller.screen.classes] == ["Math 101"]
    assert controller.state.banner == Banner.success("Created class 'Math 101'")
    assert controller.state.celebration is not None


@pytest.mark.asyncio
async def test_create_class_rejects_duplicates_inline(controller, store):
    await store.create_class("Math 101")
    await controller.start()
    await press(controller, "c")
    await type_text(controller, "Math 101")
    await press(controller, "enter")
    assert controller.screen.kind is ScreenKind.CREATE_CLASS
    assert "already exists" in controller.screen.error
    assert controller.state.banner is None


@pytest.mark.asyncio
async def test_celebration_skipped_when_particles_disabled(controller):
    controller.state.config.enable_particle_effects = False
    await controller.start()
    await press(controller, "c")
    await type_text(controller, "Art")
    await press(controller, "enter")
    assert controller.state.celebration is None


@pytest.mark.asyncio
async def test_back_rebuilds_previous_screen_and_clears_class(controller, store):
    classroom = await _class_with_students(store)
    await controller.start()
    await press(controller, "m")
    await controller.dispatch(SelectClass(classroom))
    assert controller.screen.kind is ScreenKind.CLASS_MANAGEMENT
    assert controller.state.current_class == classroom

    await press(controller, "escape")
    assert controller.screen.kind is ScreenKind.CLASS_SELECTION
    assert controller.state.current_class is None
    assert len(controller.state.navigation) == 1


@pytest.mark.asyncio
async def test_navigate_to_current_kind_does_not_push(controller):
    await controller.start()
    await press(controller, "m")
    await controller.dispatch(NavigateTo(ScreenKind.CLASS_SELECTION))
    assert len(controller.state.navigation) == 1


@pytest.mark.asyncio
async def test_missing_class_context_shows_error(controller):
    await controller.start()
    await controller.dispatch(NavigateTo(ScreenKind.CLASS_MANAGEMENT))
    assert controller.screen.kind is ScreenKind.MAIN_MENU
    assert len(controller.state.navigation) == 0
    assert controller.state.banner == Banner.error("Class Management screen requires class context")


@pytest.mark.asyncio
async def test_unimplemented_screen_shows_error(state):
    builders = {k: v for k, v in SCREEN_BUILDERS.items() if k is not ScreenKind.SETTINGS}
    controller = AppController(state, builders=builders)
    await controller.start()
    await press(controller, "s")
    assert controller.screen.kind is ScreenKind.MAIN_MENU
    assert controller.state.banner.kind is BannerKind.ERROR
    assert controller.state.banner.message == "Screen type not implemented: Settings"


@pytest.mark.asyncio
async def test_store_failure_during_build_shows_error(controller, store, monkeypatch):
    from scv.services import StoreError

    async def broken():
        raise StoreError("database is locked")

    await controller.start()
    monkeypatch.setattr(store, "list_classes", broken)
    await press(controller, "m")
    assert controller.screen.kind is ScreenKind.MAIN_MENU
    assert controller.state.banner == Banner.error("database is locked")


@pytest.mark.asyncio
async def test_delete_class_returns_to_class_list(controller, store):
    classroom = await _class_with_students(store, "Doomed", "alice")
    await controller.start()
    await press(controller, "m")
    await controller.dispatch(SelectClass(classroom))
    await press(controller, "d")
    assert controller.screen.kind is ScreenKind.CONFIRM_DELETE_CLASS
    assert controller.screen.student_count == 1

    await press(controller, "y")
    assert controller.screen.kind is ScreenKind.CLASS_SELECTION
    assert controller.screen.classes == []
    assert controller.state.current_class is None
    assert controller.state.banner == Banner.success("Deleted class 'Doomed'")
    assert len(controller.state.navigation) == 1
    assert await store.list_students(classroom.id) == []


@pytest.mark.asyncio
async def test_confirm_delete_cancel(controller, store):
    classroom = await _class_with_students(store)
    await controller.start()
    await controller.dispatch(SelectClass(classroom))
    await press(controller, "d", "n")
    assert controller.screen.kind is ScreenKind.CLASS_MANAGEMENT
    assert await store.get_class(classroom.id) is not None


# ── Students ─────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_add_students_reports_failures(controller, store):
    classroom = await _class_with_students(store, "Web 101", "alice")
    await controller.start()
    await controller.dispatch(SelectClass(classroom))
    await press(controller, "s", "a")
    assert controller.screen.kind is ScreenKind.ADD_STUDENTS

    await type_text(controller, "alice, bob")
    await press(controller, "enter")

    assert controller.screen.kind is ScreenKind.STUDENT_MANAGEMENT
    assert [s.username for s in controller.screen.students] == ["alice", "bob"]
    banner = controller.state.banner
    assert banner.kind is BannerKind.ERROR
    assert "bob" in banner.message
    assert "alice" in banner.message


@pytest.mark.asyncio
async def test_delete_student(controller, store):
    classroom = await _class_with_students(store, "Web 101", "alice", "bob")
    await controller.start()
    await controller.dispatch(SelectClass(classroom))
    await press(controller, "s", "d", "down", "enter")
    assert controller.screen.kind is ScreenKind.STUDENT_MANAGEMENT
    assert [s.username for s in controller.screen.students] == ["alice"]
    assert controller.state.banner == Banner.success("Removed student 'bob'")


@pytest.mark.asyncio
async def test_delete_student_already_removed(controller, store):
    classroom = await _class_with_students(store, "Web 101", "alice")
    await controller.start()
    await controller.dispatch(SelectClass(classroom))
    await press(controller, "s", "d")
    assert controller.screen.kind is ScreenKind.DELETE_STUDENT
    student = controller.screen.students[0]
    await store.delete_student(student.id)

    await press(controller, "enter")
    assert controller.screen.kind is ScreenKind.DELETE_STUDENT
    assert controller.state.banner == Banner.error("Student 'alice' no longer exists")


# ── Repositories ─────────────────────────────────────────────
@pytest.mark.asyncio
async def test_clone_all_partial_failure(controller, store, repos):
    classroom = await _class_with_students(store, "Web 101", "alice", "bob")
    repos.fail["bob"] = "Git clone failed: repository not found"
    await controller.start()
    await controller.dispatch(SelectClass(classroom))
    await press(controller, "r")
    assert controller.screen.kind is ScreenKind.REPOSITORY_MANAGEMENT

    await press(controller, "c")
    report = controller.state.last_batch
    assert report.status is BatchStatus.PARTIAL
    assert report.succeeded == ["alice"]
    assert [o.handle for o in report.failed] == ["bob"]
    assert controller.state.banner.kind is BannerKind.ERROR
    assert "bob" in controller.state.banner.message
    assert controller.state.loading is None


@pytest.mark.asyncio
async def test_clone_all_success_celebrates(controller, store):
    classroom = await _class_with_students(store, "Web 101", "alice")
    await controller.start()
    await controller.dispatch(SelectClass(classroom))
    await controller.dispatch(CloneAllRepos())
    assert controller.state.last_batch.status is BatchStatus.SUCCESS
    assert controller.state.banner.kind is BannerKind.SUCCESS
    assert controller.state.celebration is not None


@pytest.mark.asyncio
async def test_clone_all_without_class(controller):
    await controller.start()
    await controller.dispatch(CloneAllRepos())
    assert controller.state.banner == Banner.error("No class selected")


@pytest.mark.asyncio
async def test_single_student_pull_failure(controller, store, repos):
    classroom = await _class_with_students(store, "Web 101", "alice")
    repos.fail["alice"] = "Repository not found at /tmp/x"
    await controller.start()
    await controller.dispatch(SelectClass(classroom))
    await press(controller, "r", "i", "enter", "p")
    assert repos.calls == [("pull", "alice")]
    assert controller.state.banner == Banner.error("Repository not found at /tmp/x")


@pytest.mark.asyncio
async def test_single_student_clone_success(controller, store, repos):
    classroom = await _class_with_students(store, "Web 101", "alice")
    await controller.start()
    await controller.dispatch(SelectClass(classroom))
    await press(controller, "r", "i", "enter", "c")
    assert ("Web 101", "alice") in repos.cloned
    assert controller.state.banner == Banner.success("Cloned alice")


@pytest.mark.asyncio
async def test_clone_into_unusable_repos_dir_shows_error(controller, store, tmp_path):
    classroom = await _class_with_students(store, "Web 101", "alice")
    repos_dir = tmp_path / "repos-file"
    repos_dir.write_text("not a directory")
    controller.state.repos = GitManager(repos_dir)
    await controller.start()
    await controller.dispatch(SelectClass(classroom))

    await controller.dispatch(CloneRepo("alice"))
    assert controller.running
    assert controller.state.banner.kind is BannerKind.ERROR
    assert "Cannot create" in controller.state.banner.message
    assert controller.state.loading is None


@pytest.mark.asyncio
async def test_os_error_from_repository_helper_shows_error(controller, store, repos, monkeypatch):
    classroom = await _class_with_students(store, "Web 101", "alice")

    async def denied(handle, class_name):
        raise PermissionError("permission denied")

    monkeypatch.setattr(repos, "pull", denied)
    await controller.start()
    await controller.dispatch(SelectClass(classroom))
    await controller.dispatch(PullRepo("alice"))
    assert controller.running
    assert controller.state.banner == Banner.error("permission denied")


# ── Remote activity ──────────────────────────────────────────
@pytest.mark.asyncio
async def test_week_view_fetches_on_entry(controller, store, activity):
    classroom = await _class_with_students(store, "Web 101", "alice", "bob")
    activity.week["alice"] = WeekActivity(handle="alice", days={Weekday.MON: True}, total_commits=3)
    await controller.start()
    await controller.dispatch(SelectClass(classroom))
    await press(controller, "a", "w")

    screen = controller.screen
    assert screen.kind is ScreenKind.WEEK_VIEW
    assert [a.handle for a in screen.activity] == ["alice", "bob"]
    assert screen.activity[0].total_commits == 3
    assert controller.state.loading is None

    await press(controller, "r")
    assert activity.calls.count(("week", "alice")) == 2


@pytest.mark.asyncio
async def test_latest_activity_keeps_per_student_errors(controller, store, activity):
    classroom = await _class_with_students(store, "Web 101", "alice", "bob", "carol")
    activity.latest["alice"] = datetime(2024, 1, 1, tzinfo=UTC)
    activity.latest["bob"] = GitHubError("GitHub API error 500: oops")
    activity.latest["carol"] = datetime(2024, 3, 1, tzinfo=UTC)
    await controller.start()
    await controller.dispatch(SelectClass(classroom))
    await press(controller, "a", "l")

    commits = controller.screen.commits
    assert [c.handle for c in commits] == ["carol", "alice", "bob"]
    assert commits[2].error == "GitHub API error 500: oops"
    assert controller.state.banner is None


@pytest.mark.asyncio
async def test_data_loaded_ignored_by_other_screens(controller, store):
    await controller.start()
    await press(controller, "m")
    await controller.dispatch(DataLoaded(ScreenKind.WEEK_VIEW, [Classroom(id=9, name="X")]))
    assert controller.screen.classes == []


@pytest.mark.asyncio
async def test_refresh_classes_updates_list(controller, store):
    await controller.start()
    await press(controller, "m")
    await store.create_class("Late Arrival")
    await controller.dispatch(RefreshClasses())
    assert [c.name for c in controller.screen.classes] == ["Late Arrival"]


# ── Settings ─────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_save_settings_persists_and_applies(controller, scv_home):
    await controller.start()
    await press(controller, "s")
    assert controller.screen.kind is ScreenKind.SETTINGS
    await press(controller, "right", "down", "right", "s")

    config = controller.state.config
    assert config.theme != "neon_night"
    assert config.animation_speed == 1.25
    assert controller.clock.speed == 1.25
    assert (scv_home / "config.json").exists()
    assert controller.state.banner == Banner.success("Settings saved")
