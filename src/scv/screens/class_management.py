"""Per-class hub: students, repositories, activity and deletion."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from textual.geometry import Region

from scv.core.events import GoBack, NavigateTo
from scv.core.navigation import ScreenContext, ScreenKind
from scv.screens.base import MenuScreen
from scv.widgets.menu import class_management_menu

if TYPE_CHECKING:
    from scv.core.events import AppEvent
    from scv.core.state import AppState
    from scv.models import Classroom, Student
    from scv.ui.animations import AnimationClock
    from scv.ui.frame import Frame
    from scv.ui.themes import Theme

_TARGETS = {
    "s": ScreenKind.STUDENT_MANAGEMENT,
    "r": ScreenKind.REPOSITORY_MANAGEMENT,
    "a": ScreenKind.GITHUB_ACTIVITY,
    "d": ScreenKind.CONFIRM_DELETE_CLASS,
}


class ClassManagementScreen(MenuScreen):
    kind = ScreenKind.CLASS_MANAGEMENT

    def __init__(self, classroom: Classroom, students: list[Student]) -> None:
        super().__init__(ScreenContext(classroom=classroom))
        self.students = students
        self.menu = class_management_menu(classroom.name)

    async def activate(self, index: int, state: AppState) -> AppEvent | None:
        hotkey = self.menu.items[index].hotkey
        if hotkey == "b":
            return GoBack()
        if hotkey in _TARGETS:
            return NavigateTo(_TARGETS[hotkey], self.context)
        return None

    def render(
        self,
        frame: Frame,
        area: Region,
        state: AppState,
        clock: AnimationClock,
        theme: Theme,
    ) -> None:
        body = self.draw_chrome(frame, area, clock, theme)
        summary = Text()
        summary.append(f"{len(self.students)}", style=theme.style(theme.accent, bold=True))
        summary.append(" student(s)  ·  created ", style=theme.secondary_text)
        summary.append(self.classroom.created_at.strftime("%Y-%m-%d"), style=theme.secondary_text)
        frame.render(summary, Region(body.x + 1, body.y, body.width - 1, 1))
        frame.render(self.menu.renderable(theme, clock.menu_highlight.value), Region(body.x, body.y + 2, body.width, max(body.height - 2, 0)))
