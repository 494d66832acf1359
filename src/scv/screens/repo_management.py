"""Repository actions for a class: clone all, or act on one student's copy."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from rich.text import Text
from textual.geometry import Region

from scv.core.events import CleanRepo, CloneAllRepos, CloneRepo, GoBack, OpenInTerminal, PullRepo
from scv.core.navigation import ScreenContext, ScreenKind
from scv.screens.base import MenuScreen
from scv.widgets.menu import AnimatedMenu, MenuItem

if TYPE_CHECKING:
    from scv.core.events import AppEvent
    from scv.core.keys import KeyPress
    from scv.core.state import AppState
    from scv.models import Classroom, Student
    from scv.ui.animations import AnimationClock
    from scv.ui.frame import Frame
    from scv.ui.themes import Theme

STATUS_REFRESH = 1.0

_ACTIONS = {
    "c": CloneRepo,
    "p": PullRepo,
    "x": CleanRepo,
    "o": OpenInTerminal,
}


class RepoMode(StrEnum):
    MAIN = "main"
    STUDENTS = "students"
    ACTIONS = "actions"


class RepoManagementScreen(MenuScreen):
    kind = ScreenKind.REPOSITORY_MANAGEMENT
    hint = "Enter select  •  b up one level  •  Esc leave"

    def __init__(self, classroom: Classroom, students: list[Student]) -> None:
        super().__init__(ScreenContext(classroom=classroom))
        self.students = students
        self.cloned: dict[str, bool] = {}
        self._since_refresh = STATUS_REFRESH
        self.student_index = 0
        self.mode = RepoMode.MAIN
        self.menu = self._main_menu()

    # ── Menus ────────────────────────────────────────────────
    def _main_menu(self) -> AnimatedMenu:
        return AnimatedMenu(
            [
                MenuItem("Clone All Repositories", "Clone every student's repository", "📥", "c"),
                MenuItem("Individual Student Actions", "Pick a student for repository actions", "👤", "i"),
                MenuItem.separator(),
                MenuItem("Back", "Return to class management", "↩", "b"),
            ],
            title=f"📁 Repositories: {self.classroom.name}",
        )

    def _student_menu(self) -> AnimatedMenu:
        items = [
            MenuItem(
                s.username,
                "cloned" if self.cloned.get(s.handle) else "not cloned",
                "✔" if self.cloned.get(s.handle) else "○",
            )
            for s in self.students
        ]
        if not items:
            items = [MenuItem("No students in this class", enabled=False)]
        menu = AnimatedMenu(items, title="👤 Select a student")
        menu.select(self.student_index)
        return menu

    def _actions_menu(self, student: Student) -> AnimatedMenu:
        return AnimatedMenu(
            [
                MenuItem("Clone Repo", "Clone the GitHub Pages repository", "📥", "c"),
                MenuItem("Pull Repo", "Pull latest changes from remote", "🔄", "p"),
                MenuItem("Clean Repo", "Reset local changes to match remote", "🧹", "x"),
                MenuItem("Open in Terminal", "Open a terminal at the repository", "🖥", "o"),
                MenuItem.separator(),
                MenuItem("Back", "Return to student selection", "↩", "b"),
            ],
            title=f"Repository actions for {student.handle}",
        )

    def _switch(self, mode: RepoMode) -> None:
        self.mode = mode
        match mode:
            case RepoMode.MAIN:
                self.menu = self._main_menu()
            case RepoMode.STUDENTS:
                self.menu = self._student_menu()
            case RepoMode.ACTIONS:
                self.menu = self._actions_menu(self.students[self.student_index])
        self.menu.trigger_entrance()

    # ── Input ────────────────────────────────────────────────
    async def handle_input(self, key: KeyPress, state: AppState) -> AppEvent | None:
        if self.mode is RepoMode.STUDENTS:
            if key.character == "b":
                self._switch(RepoMode.MAIN)
                return None
            if key.key == "enter" and self.students:
                self.student_index = self.menu.selected
                self._switch(RepoMode.ACTIONS)
                return None
            self.menu.navigate(key)
            return None
        return await super().handle_input(key, state)

    async def activate(self, index: int, state: AppState) -> AppEvent | None:
        hotkey = self.menu.items[index].hotkey
        if self.mode is RepoMode.MAIN:
            match hotkey:
                case "c":
                    return CloneAllRepos()
                case "i":
                    self._switch(RepoMode.STUDENTS)
                case "b":
                    return GoBack()
            return None

        if hotkey == "b":
            self._switch(RepoMode.STUDENTS)
            return None
        action = _ACTIONS.get(hotkey or "")
        if action is None:
            return None
        # Status may change once the action completes.
        self._since_refresh = STATUS_REFRESH
        return action(self.students[self.student_index].handle)

    # ── Frame ────────────────────────────────────────────────
    def refresh_status(self, state: AppState) -> None:
        self.cloned = {
            s.handle: state.repos.repo_exists(s.handle, self.classroom.name) for s in self.students
        }

    def update(self, dt: float, state: AppState) -> None:
        self._since_refresh += dt
        if self._since_refresh >= STATUS_REFRESH:
            self._since_refresh = 0.0
            previous = self.cloned
            self.refresh_status(state)
            if self.mode is RepoMode.STUDENTS and previous != self.cloned:
                self.student_index = self.menu.selected
                entrance = self.menu.entrance
                self.menu = self._student_menu()
                self.menu.entrance = entrance
        super().update(dt, state)

    def render(
        self,
        frame: Frame,
        area: Region,
        state: AppState,
        clock: AnimationClock,
        theme: Theme,
    ) -> None:
        body = self.draw_chrome(frame, area, clock, theme)
        cloned = sum(self.cloned.values())
        summary = Text()
        summary.append(f"{cloned}/{len(self.students)}", style=theme.style(theme.accent, bold=True))
        summary.append(" repositories cloned", style=theme.secondary_text)
        if state.last_batch is not None and self.mode is RepoMode.MAIN:
            summary.append(f"  ·  last run: {state.last_batch.status}", style=theme.secondary_text)
        frame.render(summary, Region(body.x + 1, body.y, max(body.width - 1, 0), 1))
        frame.render(self.menu.renderable(theme, clock.menu_highlight.value), Region(body.x, body.y + 2, body.width, max(body.height - 2, 0)))
