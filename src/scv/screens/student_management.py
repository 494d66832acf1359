"""Student roster with add/delete actions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from textual.geometry import Region

from scv.core.events import GoBack, NavigateTo
from scv.core.navigation import ScreenContext, ScreenKind
from scv.screens.base import MenuScreen
from scv.widgets.menu import student_management_menu

if TYPE_CHECKING:
    from rich.console import RenderableType

    from scv.core.events import AppEvent
    from scv.core.state import AppState
    from scv.models import Classroom, Student
    from scv.ui.animations import AnimationClock
    from scv.ui.frame import Frame
    from scv.ui.themes import Theme

MENU_WIDTH = 52


def roster(students: list[Student], theme: Theme) -> RenderableType:
    if not students:
        body: RenderableType = Text("No students yet. Press a to add some.", style=theme.secondary_text)
    else:
        table = Table(box=None, expand=True, header_style=theme.primary_text)
        table.add_column("#", justify="right", style=theme.secondary_text, width=3)
        table.add_column("Username", style=theme.style(theme.text))
        table.add_column("Added", style=theme.secondary_text)
        for number, student in enumerate(students, start=1):
            table.add_row(str(number), student.username, student.created_at.strftime("%Y-%m-%d"))
        body = table
    return Panel(body, title=f"Roster ({len(students)})", title_align="left", border_style=theme.border_style)


class StudentManagementScreen(MenuScreen):
    kind = ScreenKind.STUDENT_MANAGEMENT

    def __init__(self, classroom: Classroom, students: list[Student]) -> None:
        super().__init__(ScreenContext(classroom=classroom))
        self.students = students
        self.menu = student_management_menu(classroom.name)

    async def activate(self, index: int, state: AppState) -> AppEvent | None:
        match self.menu.items[index].hotkey:
            case "a":
                return NavigateTo(ScreenKind.ADD_STUDENTS, self.context)
            case "d":
                return NavigateTo(ScreenKind.DELETE_STUDENT, self.context)
            case "b":
                return GoBack()
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
        menu_width = min(MENU_WIDTH, body.width)
        frame.render(self.menu.renderable(theme, clock.menu_highlight.value), Region(body.x, body.y, menu_width, body.height))
        if body.width - menu_width > 10:
            frame.render(
                roster(self.students, theme),
                Region(body.x + menu_width + 1, body.y, body.width - menu_width - 1, body.height),
            )
