"""Pick a student to remove from the class."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from textual.geometry import Region

from scv.core.events import GoBack, ShowError, StudentDeleted
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

EMPTY_HINT = "No students in this class. Press b to go back."


class DeleteStudentScreen(MenuScreen):
    kind = ScreenKind.DELETE_STUDENT
    hint = "Enter delete  •  b back"

    def __init__(self, classroom: Classroom, students: list[Student]) -> None:
        super().__init__(ScreenContext(classroom=classroom))
        self.students = students
        self.menu = AnimatedMenu(
            [MenuItem(s.username, f"github.com/{s.handle}", "👤") for s in students],
            title=f"➖ Delete a student from {classroom.name}",
        )

    async def handle_input(self, key: KeyPress, state: AppState) -> AppEvent | None:
        if key.character in ("b", "q"):
            return GoBack()
        return await super().handle_input(key, state)

    async def activate(self, index: int, state: AppState) -> AppEvent | None:
        student = self.students[index]
        if not await state.store.delete_student(student.id):
            return ShowError(f"Student '{student.username}' no longer exists")
        return StudentDeleted(student.id, student.username)

    def render(
        self,
        frame: Frame,
        area: Region,
        state: AppState,
        clock: AnimationClock,
        theme: Theme,
    ) -> None:
        if self.students:
            super().render(frame, area, state, clock, theme)
            return
        body = self.draw_chrome(frame, area, clock, theme)
        frame.render(Text(EMPTY_HINT, style=theme.secondary_text, justify="center"), Region(body.x, body.y + body.height // 2, body.width, 1))
