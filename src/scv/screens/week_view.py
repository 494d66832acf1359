"""Commit activity per student over the trailing five weekdays."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from scv.core.events import FetchWeekActivity, GoBack
from scv.core.navigation import ScreenContext, ScreenKind
from scv.screens.base import Screen
from scv.services.github import past_weekdays
from scv.ui.themes import ActivityLevel

if TYPE_CHECKING:
    from textual.geometry import Region

    from scv.core.events import AppEvent
    from scv.core.keys import KeyPress
    from scv.core.state import AppState
    from scv.models import Classroom, Student, WeekActivity, Weekday
    from scv.ui.animations import AnimationClock
    from scv.ui.frame import Frame
    from scv.ui.themes import Theme


class WeekViewScreen(Screen):
    kind = ScreenKind.WEEK_VIEW
    hint = "r refresh  •  b back"

    def __init__(self, classroom: Classroom, students: list[Student]) -> None:
        super().__init__(ScreenContext(classroom=classroom))
        self.students = students
        self.activity: list[WeekActivity] | None = None

    def _fetch(self) -> AppEvent:
        return FetchWeekActivity(tuple(self.students))

    def entry_event(self) -> AppEvent | None:
        return self._fetch() if self.students else None

    def receive(self, payload: Any) -> None:
        self.activity = list(payload)

    async def handle_input(self, key: KeyPress, state: AppState) -> AppEvent | None:
        match key.character:
            case "r":
                return self._fetch() if self.students else None
            case "b" | "q":
                return GoBack()
        return None

    def columns(self) -> list[Weekday]:
        if self.activity:
            return list(self.activity[0].days)
        return past_weekdays()

    def table(self, theme: Theme) -> Table:
        days = self.columns()
        table = Table(expand=True, border_style=theme.border_style, header_style=theme.primary_text)
        table.add_column("Student", style=theme.style(theme.text), ratio=2)
        for day in days:
            table.add_column(day.label, justify="center", ratio=1)
        table.add_column("Total", justify="right", ratio=1)

        by_handle = {a.handle: a for a in self.activity or []}
        for student in self.students:
            record = by_handle.get(student.handle)
            if record is None:
                table.add_row(student.username, *["…"] * len(days), "")
                continue
            if record.error:
                table.add_row(
                    student.username,
                    *["?"] * len(days),
                    Text(record.error[:40], style=theme.error_text),
                )
                continue
            level = ActivityLevel.from_commit_count(record.total_commits)
            cells = [
                Text("■", style=theme.style(theme.activity_color(level)))
                if record.committed_on(day)
                else Text("·", style=theme.style(theme.activity_none))
                for day in days
            ]
            table.add_row(student.username, *cells, str(record.total_commits))
        return table

    def render(
        self,
        frame: Frame,
        area: Region,
        state: AppState,
        clock: AnimationClock,
        theme: Theme,
    ) -> None:
        body = self.draw_chrome(frame, area, clock, theme)
        if not self.students:
            content: Text | Table = Text("No students in this class.", style=theme.secondary_text)
        else:
            content = self.table(theme)
        frame.render(Panel(content, title="📅 Week View", title_align="left", border_style=theme.border_focused_style), body)
