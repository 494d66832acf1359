"""Bulk add students by GitHub username."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from rich.text import Text
from textual.geometry import Region

from scv.core.events import StudentsAdded
from scv.core.navigation import ScreenContext, ScreenKind
from scv.screens.base import Screen
from scv.services.store import StoreError
from scv.ui.frame import center_box
from scv.widgets.text_input import TextInput

if TYPE_CHECKING:
    from scv.core.events import AppEvent
    from scv.core.keys import KeyPress
    from scv.core.state import AppState
    from scv.models import Classroom, Student
    from scv.ui.animations import AnimationClock
    from scv.ui.frame import Frame
    from scv.ui.themes import Theme

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[,\s]+")


def parse_usernames(raw: str) -> list[str]:
    """Split a comma/whitespace separated list, dropping blanks and repeats."""
    seen: dict[str, None] = {}
    for name in _SEPARATORS.split(raw):
        name = name.strip().lstrip("@")
        if name:
            seen.setdefault(name, None)
    return list(seen)


class AddStudentsScreen(Screen):
    kind = ScreenKind.ADD_STUDENTS
    hint = "Enter add  •  Esc cancel"

    def __init__(self, classroom: Classroom) -> None:
        super().__init__(ScreenContext(classroom=classroom))
        self.input = TextInput("GitHub usernames", placeholder="alice, bob, carol")
        self.error: str | None = None

    async def handle_input(self, key: KeyPress, state: AppState) -> AppEvent | None:
        if key.key != "enter":
            if self.input.handle_key(key):
                self.error = None
            return None

        names = parse_usernames(self.input.value)
        if not names:
            self.error = "Enter at least one username"
            return None

        added: list[Student] = []
        failures: list[tuple[str, str]] = []
        for name in names:
            try:
                added.append(await state.store.add_student(self.classroom.id, name))
            except StoreError as exc:
                logger.warning("Could not add %s: %s", name, exc)
                failures.append((name, str(exc)))
        return StudentsAdded(tuple(added), tuple(failures))

    def render(
        self,
        frame: Frame,
        area: Region,
        state: AppState,
        clock: AnimationClock,
        theme: Theme,
    ) -> None:
        body = self.draw_chrome(frame, area, clock, theme)
        box = center_box(64, 10, body)
        prompt = Text(f"Add students to {self.classroom.name}", style=theme.primary_text)
        prompt.append("\nSeparate usernames with commas or spaces.", style=theme.secondary_text)
        frame.render(prompt, Region(box.x, box.y, box.width, 2))
        frame.render(self.input.renderable(theme, clock.elapsed), Region(box.x, box.y + 3, box.width, 3))
        if self.error:
            frame.render(Text(f"✖ {self.error}", style=theme.error_text), Region(box.x, box.y + 7, box.width, 1))
