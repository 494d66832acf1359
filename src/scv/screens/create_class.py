"""Create-class form."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from textual.geometry import Region

from scv.core.events import ClassCreated
from scv.core.navigation import ScreenKind
from scv.screens.base import Screen
from scv.services.store import DuplicateClassError
from scv.ui.frame import center_box
from scv.widgets.text_input import TextInput

if TYPE_CHECKING:
    from scv.core.events import AppEvent
    from scv.core.keys import KeyPress
    from scv.core.state import AppState
    from scv.ui.animations import AnimationClock
    from scv.ui.frame import Frame
    from scv.ui.themes import Theme


class CreateClassScreen(Screen):
    kind = ScreenKind.CREATE_CLASS
    hint = "Enter create  •  Esc cancel"

    def __init__(self) -> None:
        super().__init__()
        self.input = TextInput("Class Name", placeholder="e.g. Web Design 101")
        self.error: str | None = None

    async def handle_input(self, key: KeyPress, state: AppState) -> AppEvent | None:
        if key.key != "enter":
            if self.input.handle_key(key):
                self.error = None
            return None

        name = self.input.value.strip()
        if not name:
            self.error = "Class name cannot be empty"
            return None
        try:
            classroom = await state.store.create_class(name)
        except DuplicateClassError as exc:
            self.error = str(exc)
            return None
        return ClassCreated(classroom)

    def render(
        self,
        frame: Frame,
        area: Region,
        state: AppState,
        clock: AnimationClock,
        theme: Theme,
    ) -> None:
        body = self.draw_chrome(frame, area, clock, theme)
        box = center_box(60, 9, body)
        frame.render(Text("Enter a name for the new class:", style=theme.primary_text), Region(box.x, box.y, box.width, 1))
        frame.render(self.input.renderable(theme, clock.elapsed), Region(box.x, box.y + 2, box.width, 3))
        if self.error:
            message = Text(f"✖ {self.error}", style=theme.error_text)
            frame.render(message, Region(box.x, box.y + 6, box.width, 2))
