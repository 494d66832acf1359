"""Application controller: polls keys, dispatches events, advances time, paints."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from enum import StrEnum
from typing import TYPE_CHECKING

from scv.config import save_config
from scv.core.events import (
    ClassCreated,
    ClassDeleted,
    CleanRepo,
    ClearBanner,
    CloneAllRepos,
    CloneRepo,
    DataLoaded,
    FetchLatestActivity,
    FetchWeekActivity,
    GoBack,
    HideLoading,
    NavigateTo,
    OpenInTerminal,
    PullRepo,
    Quit,
    RefreshClasses,
    SaveSettings,
    SelectClass,
    ShowError,
    ShowLoading,
    ShowSuccess,
    StudentDeleted,
    StudentsAdded,
)
from scv.core.keys import BACK_KEYS, QUIT_KEYS
from scv.core.navigation import ScreenContext, ScreenIdentity, ScreenKind
from scv.core.ticker import FrameTicker
from scv.models import BatchCloneReport, BatchStatus, CloneOutcome, LatestCommit
from scv.screens.base import MenuScreen
from scv.screens.factory import SCREEN_BUILDERS, ScreenConstructionError, create_screen
from scv.services.git import GitError
from scv.services.github import GitHubError
from scv.services.store import StoreError
from scv.ui.animations import AnimationClock, CelebrationAnimation
from scv.ui.frame import Frame, make_console
from scv.widgets.banner import draw_overlays
from scv.widgets.particles import draw_celebration

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable, Mapping, Sequence

    from rich.console import Console

    from scv.config import AppConfig
    from scv.core.events import AppEvent
    from scv.core.keys import KeyPress
    from scv.core.state import AppState
    from scv.models import Classroom, Student
    from scv.screens.base import Screen
    from scv.screens.factory import Builder

logger = logging.getLogger(__name__)

RECOVERABLE_ERRORS = (StoreError, GitHubError, GitError, ScreenConstructionError, OSError)

# Installing one of these leaves class scope.
_UNSCOPED_HUBS = frozenset({ScreenKind.MAIN_MENU, ScreenKind.CLASS_SELECTION})


class RunState(StrEnum):
    RUNNING = "running"
    QUITTING = "quitting"


class AppController:
    """Owns the active screen and drives the session loop.

    Each iteration polls for a key for a quarter of the frame period,
    handles it (including any awaited I/O it triggers), advances the
    animation clock and the active screen, repaints, and then sleeps until
    the next frame boundary.
    """

    def __init__(
        self,
        state: AppState,
        *,
        keys: asyncio.Queue[KeyPress] | None = None,
        present: Callable[[Frame], None] | None = None,
        size: Callable[[], tuple[int, int]] = lambda: (80, 24),
        builders: Mapping[ScreenKind, Builder] = SCREEN_BUILDERS,
        ticker: FrameTicker | None = None,
    ) -> None:
        self.state = state
        self.keys: asyncio.Queue[KeyPress] = keys if keys is not None else asyncio.Queue()
        self._present = present
        self._size = size
        self._builders = builders
        self.clock = AnimationClock(speed=state.config.animation_speed)
        self.ticker = ticker or FrameTicker(state.config.frame_period)
        self.run_state = RunState.RUNNING
        self.screen: Screen | None = None
        self.last_frame: Frame | None = None
        self._console: Console | None = None

    @property
    def running(self) -> bool:
        return self.run_state is RunState.RUNNING

    # ── Loop ─────────────────────────────────────────────────
    async def start(self) -> None:
        """Install the main menu."""
        await self._install(await self._build(ScreenIdentity(ScreenKind.MAIN_MENU)))

    async def run(self) -> None:
        logger.info("Controller starting at %d fps", self.state.config.frame_rate)
        if self.screen is None:
            await self.start()
        self.ticker.delta()
        while self.running:
            await self.poll_input(self.ticker.period / 4)
            if not self.running:
                break
            self.advance(self.ticker.delta())
            self.paint()
            await self.ticker.tick()
        logger.info("Controller stopped")

    async def poll_input(self, timeout: float) -> None:
        """Wait up to *timeout* for a key, then handle everything queued."""
        try:
            key = await asyncio.wait_for(self.keys.get(), timeout)
        except TimeoutError:
            return
        await self.handle_key(key)
        while self.running and not self.keys.empty():
            await self.handle_key(self.keys.get_nowait())

    async def handle_key(self, key: KeyPress) -> AppEvent | None:
        """Route one key press; returns the event it produced, if any.

        A displayed banner swallows the key that dismisses it. Global
        bindings are checked before the active screen sees the key.
        """
        if self.state.banner is not None:
            logger.debug("Banner dismissed by %s", key.key)
            self.state.banner = None
            return None

        event: AppEvent | None
        if key.key in QUIT_KEYS:
            event = Quit()
        elif key.key in BACK_KEYS:
            event = GoBack()
        elif self.screen is None:
            return None
        else:
            try:
                event = await self.screen.handle_input(key, self.state)
            except RECOVERABLE_ERRORS as exc:
                self._fail(exc)
                return None
            if isinstance(self.screen, MenuScreen):
                self.clock.animate_menu_highlight(self.screen.menu.selected)

        if event is not None:
            await self.dispatch(event)
        return event

    def advance(self, dt: float) -> None:
        scaled = self.clock.update(dt)
        if self.screen is not None:
            self.screen.update(scaled, self.state)
        celebration = self.state.celebration
        if celebration is not None:
            celebration.update(scaled)
            if celebration.finished:
                self.state.celebration = None

    def paint(self) -> Frame:
        """Render the active screen, then overlays, into a fresh frame."""
        width, height = self._size()
        if self._console is None or (self._console.width, self._console.height) != (width, height):
            self._console = make_console(width, height)
        theme = self.state.theme
        frame = Frame(width, height, style=theme.base, console=self._console)
        if self.screen is not None:
            self.screen.render(frame, frame.region, self.state, self.clock, theme)
        draw_overlays(frame, self.state, self.clock, theme)
        if self.state.celebration is not None:
            draw_celebration(frame, self.state.celebration)
        self.last_frame = frame
        if self._present is not None:
            self._present(frame)
        return frame

    def quit(self) -> None:
        logger.info("Quit requested")
        self.run_state = RunState.QUITTING

    # ── Dispatch ─────────────────────────────────────────────
    async def dispatch(self, event: AppEvent) -> None:
        logger.debug("Dispatching %s", type(event).__name__)
        try:
            await self._handle(event)
        except RECOVERABLE_ERRORS as exc:
            self._fail(exc)

    async def _handle(self, event: AppEvent) -> None:  # noqa: C901
        repos = self.state.repos
        match event:
            case NavigateTo():
                await self.navigate(event.identity)
            case GoBack():
                await self.go_back()
            case Quit():
                self.quit()
            case ShowLoading(message=message):
                self._set_loading(message)
            case HideLoading():
                self.state.loading = None
            case ShowError(message=message):
                self.state.show_error(message)
            case ShowSuccess(message=message):
                self._succeed(message)
            case ClearBanner():
                self.state.banner = None
            case SelectClass(classroom=classroom):
                self.state.current_class = classroom
                await self.navigate(
                    ScreenIdentity(ScreenKind.CLASS_MANAGEMENT, ScreenContext(classroom=classroom)),
                )
            case ClassCreated(classroom=classroom):
                self._succeed(f"Created class '{classroom.name}'")
                self.celebrate()
                await self.go_back()
            case ClassDeleted(class_id=class_id, name=name):
                if self.state.current_class is not None and self.state.current_class.id == class_id:
                    self.state.current_class = None
                self._succeed(f"Deleted class '{name}'")
                await self.return_to(ScreenKind.CLASS_SELECTION)
            case StudentsAdded(students=added, failures=failures):
                self._report_students(added, failures)
                await self.go_back()
            case StudentDeleted(username=username):
                self._succeed(f"Removed student '{username}'")
                await self.go_back()
            case CloneRepo(handle=handle):
                await self._repo_action("Cloning", "Cloned", repos.clone, handle)
            case PullRepo(handle=handle):
                await self._repo_action("Pulling", "Pulled", repos.pull, handle)
            case CleanRepo(handle=handle):
                await self._repo_action("Cleaning", "Cleaned", repos.clean, handle)
            case OpenInTerminal(handle=handle):
                await self._repo_action(
                    "Opening terminal for", "Opened terminal for", repos.open_in_terminal, handle,
                )
            case CloneAllRepos():
                await self.clone_all()
            case RefreshClasses():
                await self.refresh_classes()
            case FetchWeekActivity(students=students):
                await self.fetch_week_activity(students)
            case FetchLatestActivity(students=students):
                await self.fetch_latest_activity(students)
            case DataLoaded():
                self.deliver(event)
            case SaveSettings(config=config):
                self.apply_settings(config)
            case _:
                logger.warning("Unhandled event %r", event)

    def _fail(self, exc: Exception) -> None:
        logger.warning("%s: %s", type(exc).__name__, exc)
        self.state.show_error(str(exc))

    def _succeed(self, message: str) -> None:
        self.state.show_success(message)
        self.clock.pulse_background()

    def _set_loading(self, message: str) -> None:
        self.state.loading = message
        # The loop is about to await I/O; show the banner now.
        self.paint()

    @asynccontextmanager
    async def loading(self, message: str) -> AsyncIterator[None]:
        self._set_loading(message)
        try:
            yield
        finally:
            self.state.loading = None

    def celebrate(self) -> None:
        if not self.state.config.enable_particle_effects:
            return
        width, _ = self._size()
        self.state.celebration = CelebrationAnimation(float(width))

    # ── Navigation ───────────────────────────────────────────
    def _attach_class(self, identity: ScreenIdentity) -> ScreenIdentity:
        current = self.state.current_class
        if identity.kind.needs_class and identity.classroom is None and current is not None:
            return identity.with_context(ScreenContext(classroom=current))
        return identity

    async def _build(self, identity: ScreenIdentity) -> Screen:
        return await create_screen(identity, self.state, builders=self._builders)

    async def _install(self, screen: Screen) -> None:
        self.screen = screen
        if screen.kind in _UNSCOPED_HUBS:
            self.state.current_class = None
        elif screen.context is not None and screen.context.classroom is not None:
            self.state.current_class = screen.context.classroom
        self.clock.trigger_transition()
        screen.on_enter()
        if isinstance(screen, MenuScreen):
            self.clock.snap_menu_highlight(screen.menu.selected)
        entry = screen.entry_event()
        if entry is not None:
            await self.dispatch(entry)

    async def navigate(self, identity: ScreenIdentity) -> None:
        """Build the target first; only a successful build touches the stack."""
        identity = self._attach_class(identity)
        screen = await self._build(identity)
        if self.screen is not None and self.screen.identity() != identity:
            self.state.navigation.push(self.screen.identity())
        logger.info(
            "Navigate %s -> %s",
            self.screen.kind if self.screen is not None else None,
            identity.kind,
        )
        await self._install(screen)

    async def go_back(self) -> None:
        """Return to the previous screen; an empty stack ends the session."""
        previous = self.state.navigation.peek()
        if previous is None:
            logger.info("Back with an empty navigation stack")
            self.quit()
            return
        screen = await self._build(previous)
        self.state.navigation.pop()
        logger.info("Back to %s", previous.kind)
        await self._install(screen)

    async def return_to(self, kind: ScreenKind) -> None:
        """Unwind the stack to the latest *kind* entry, or rebuild it under the main menu."""
        navigation = self.state.navigation
        target = navigation.unwind_to(kind)
        if target is None:
            navigation.clear()
            navigation.push(ScreenIdentity(ScreenKind.MAIN_MENU))
            target = ScreenIdentity(kind)
        await self._install(await self._build(target))

    def deliver(self, event: DataLoaded) -> None:
        if self.screen is not None and self.screen.kind is event.target:
            self.screen.receive(event.payload)
        else:
            logger.debug("Dropped data for %s; %s is active", event.target, self.screen and self.screen.kind)

    # ── Collaborator calls ───────────────────────────────────
    def _selected_class(self) -> Classroom | None:
        if self.state.current_class is None:
            self.state.show_error("No class selected")
        return self.state.current_class

    async def _repo_action(
        self,
        doing: str,
        done: str,
        action: Callable[[str, str], Awaitable[None]],
        handle: str,
    ) -> None:
        classroom = self._selected_class()
        if classroom is None:
            return
        async with self.loading(f"{doing} {handle}..."):
            await action(handle, classroom.name)
        self._succeed(f"{done} {handle}")

    async def clone_all(self) -> None:
        """Clone every student's repository; one failure never stops the rest."""
        classroom = self._selected_class()
        if classroom is None:
            return
        students = await self.state.store.list_students(classroom.id)
        async with self.loading(f"Cloning {len(students)} repositories for {classroom.name}..."):
            results = await self.state.repos.clone_all(students, classroom.name)
        report = BatchCloneReport(
            outcomes=[CloneOutcome(handle=handle, error=error) for handle, error in results],
        )
        self.state.last_batch = report
        logger.info("Clone all for %s: %s", classroom.name, report.status)
        if report.status is BatchStatus.SUCCESS:
            self._succeed(report.summary())
            self.celebrate()
        else:
            self.state.show_error(report.summary())

    async def refresh_classes(self) -> None:
        async with self.loading("Loading classes..."):
            classes = await self.state.store.list_classes()
        self.deliver(DataLoaded(ScreenKind.CLASS_SELECTION, classes))

    async def fetch_week_activity(self, students: Sequence[Student]) -> None:
        activity = self.state.activity
        async with self.loading(f"Fetching GitHub activity for {len(students)} students..."):
            results = await asyncio.gather(*(activity.week_activity(s.handle) for s in students))
        self.deliver(DataLoaded(ScreenKind.WEEK_VIEW, list(results)))

    async def _latest_commit(self, student: Student) -> LatestCommit:
        try:
            when = await self.state.activity.latest_commit_time(student.handle)
        except GitHubError as exc:
            logger.warning("Latest commit for %s failed: %s", student.handle, exc)
            return LatestCommit(username=student.username, handle=student.handle, error=str(exc))
        return LatestCommit(username=student.username, handle=student.handle, latest_commit=when)

    async def fetch_latest_activity(self, students: Sequence[Student]) -> None:
        async with self.loading(f"Checking latest activity for {len(students)} students..."):
            results = await asyncio.gather(*(self._latest_commit(s) for s in students))
        self.deliver(DataLoaded(ScreenKind.LATEST_ACTIVITY, list(results)))

    def _report_students(
        self, added: Sequence[Student], failures: Sequence[tuple[str, str]],
    ) -> None:
        names = ", ".join(s.username for s in added)
        if not failures:
            self._succeed(f"Added {len(added)} student(s): {names}")
            self.celebrate()
            return
        failed = "; ".join(f"{name}: {error}" for name, error in failures)
        if added:
            self.state.show_error(f"Added {len(added)} student(s) ({names}). Failed: {failed}")
        else:
            self.state.show_error(f"No students added. Failed: {failed}")

    def apply_settings(self, config: AppConfig) -> None:
        try:
            path = save_config(config)
        except OSError as exc:
            logger.warning("Could not save settings: %s", exc)
            self.state.show_error(f"Could not save settings: {exc}")
            return
        self.state.config = config
        self.clock.speed = config.animation_speed
        self.ticker.set_period(config.frame_period)
        logger.info("Settings saved to %s", path)
        self._succeed("Settings saved")
