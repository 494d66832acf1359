"""Confirmation dialog before deleting a class."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.align import Align
from rich.panel import Panel
from rich.text import Text

from scv.core.events import ClassDeleted, GoBack
from scv.core.navigation import ScreenContext, ScreenKind
from scv.screens.base import Screen
from scv.ui.frame import center_box

if TYPE_CHECKING:
    from textual.geometry import Region

    from scv.core.events import AppEvent
    from scv.core.keys import KeyPress
    from scv.core.state import AppState
    from scv.models import Classroom
    from scv.ui.animations import AnimationClock
    from scv.ui.frame import Frame
    from scv.ui.themes import Theme


class ConfirmDeleteClassScreen(Screen):
    kind = ScreenKind.CONFIRM_DELETE_CLASS
    hint = "y delete  •  n cancel  •  ←/→ choose"

    def __init__(self, classroom: Classroom, student_count: int = 0) -> None:
        super().__init__(ScreenContext(classroom=classroom))
        self.student_count = student_count
        self.confirm_selected = False

    async def _delete(self, state: AppState) -> AppEvent:
        await state.store.delete_class(self.classroom.id)
        return ClassDeleted(self.classroom.id, self.classroom.name)

    async def handle_input(self, key: KeyPress, state: AppState) -> AppEvent | None:
        match key.key:
            case "y" | "Y":
                return await self._delete(state)
            case "n" | "N":
                return GoBack()
            case "left" | "right" | "tab" | "h" | "l":
                self.confirm_selected = not self.confirm_selected
            case "enter":
                return await self._delete(state) if self.confirm_selected else GoBack()
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
        message = Text(justify="center")
        message.append("Delete class ", style=theme.style(theme.text))
        message.append(self.classroom.name, style=theme.style(theme.warning, bold=True))
        message.append("?\n", style=theme.style(theme.text))
        message.append(
            f"This removes {self.student_count} student record(s). Cloned repositories stay on disk.\n\n",
            style=theme.secondary_text,
        )
        yes_style = theme.highlight_style if self.confirm_selected else theme.style(theme.error)
        no_style = theme.style(theme.text_secondary) if self.confirm_selected else theme.highlight_style
        message.append(" [y] Yes, delete ", style=yes_style)
        message.append("   ")
        message.append(" [n] No, keep it ", style=no_style)
        dialog = Panel(
            Align.center(message, vertical="middle"),
            title="⚠ Confirm",
            border_style=theme.style(theme.warning, bold=True),
            style=theme.style(theme.text, theme.surface),
        )
        frame.render(dialog, center_box(64, 9, body))
