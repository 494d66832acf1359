"""Latest commit time per student."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from scv.core.events import FetchLatestActivity, GoBack
from scv.core.navigation import ScreenContext, ScreenKind
from scv.screens.base import Screen
from scv.services.github import format_time_ago

if TYPE_CHECKING:
    from datetime import datetime

    from textual.geometry import Region

    from scv.core.events import AppEvent
    from scv.core.keys import KeyPress
    from scv.core.state import AppState
    from scv.models import Classroom, LatestCommit, Student
    from scv.ui.animations import AnimationClock
    from scv.ui.frame import Frame
    from scv.ui.themes import Theme


class LatestActivityScreen(Screen):
    kind = ScreenKind.LATEST_ACTIVITY
    hint = "r refresh  •  b back"

    def __init__(self, classroom: Classroom, students: list[Student]) -> None:
        super().__init__(ScreenContext(classroom=classroom))
        self.students = students
        self.commits: list[LatestCommit] | None = None

    def _fetch(self) -> AppEvent | None:
        return FetchLatestActivity(tuple(self.students)) if self.students else None

    def entry_event(self) -> AppEvent | None:
        return self._fetch()

    def receive(self, payload: Any) -> None:
        # Most recently active first, never-committed last.
        self.commits = sorted(
            payload,
            key=lambda c: (c.latest_commit is None, -(c.latest_commit.timestamp() if c.latest_commit else 0)),
        )

    async def handle_input(self, key: KeyPress, state: AppState) -> AppEvent | None:
        match key.character:
            case "r":
                return self._fetch()
            case "b" | "q":
                return GoBack()
        return None

    def table(self, theme: Theme, now: datetime | None = None) -> Table:
        table = Table(expand=True, border_style=theme.border_style, header_style=theme.primary_text)
        table.add_column("Student", style=theme.style(theme.text))
        table.add_column("Handle", style=theme.secondary_text)
        table.add_column("Last Commit", justify="right")
        if self.commits is None:
            for student in self.students:
                table.add_row(student.username, student.handle, "…")
            return table
        for commit in self.commits:
            if commit.error:
                when = Text(commit.error[:40], style=theme.error_text)
            elif commit.latest_commit is None:
                when = Text("No commits", style=theme.secondary_text)
            else:
                when = Text(format_time_ago(commit.latest_commit, now), style=theme.success_text)
            table.add_row(commit.username, commit.handle, when)
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
        frame.render(Panel(content, title="🕒 Latest Activity", title_align="left", border_style=theme.border_focused_style), body)
