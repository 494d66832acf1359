"""Single-line text entry."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.panel import Panel
from rich.style import Style
from rich.text import Text

if TYPE_CHECKING:
    from rich.console import RenderableType

    from scv.core.keys import KeyPress
    from scv.ui.themes import Theme

BLINK_PERIOD = 1.0


class TextInput:
    """Editable line with a cursor, fed one key press at a time."""

    def __init__(self, title: str, placeholder: str = "", max_length: int = 200) -> None:
        self.title = title
        self.placeholder = placeholder
        self.max_length = max_length
        self.value = ""
        self.cursor = 0
        self.focused = True

    def set_value(self, value: str) -> None:
        self.value = value[: self.max_length]
        self.cursor = len(self.value)

    def clear(self) -> None:
        self.set_value("")

    def handle_key(self, key: KeyPress) -> bool:
        """Apply an editing key; returns True if the key changed or moved the text."""
        match key.key:
            case "backspace":
                if self.cursor > 0:
                    self.value = self.value[: self.cursor - 1] + self.value[self.cursor :]
                    self.cursor -= 1
            case "delete":
                self.value = self.value[: self.cursor] + self.value[self.cursor + 1 :]
            case "left":
                self.cursor = max(self.cursor - 1, 0)
            case "right":
                self.cursor = min(self.cursor + 1, len(self.value))
            case "home" | "ctrl+a":
                self.cursor = 0
            case "end" | "ctrl+e":
                self.cursor = len(self.value)
            case "ctrl+u":
                self.clear()
            case _:
                if not key.printable or len(self.value) >= self.max_length:
                    return False
                assert key.character is not None
                self.value = self.value[: self.cursor] + key.character + self.value[self.cursor :]
                self.cursor += 1
        return True

    def renderable(self, theme: Theme, elapsed: float = 0.0) -> RenderableType:
        cursor_on = self.focused and (elapsed % BLINK_PERIOD) < BLINK_PERIOD / 2
        if not self.value and self.placeholder:
            text = Text(self.placeholder, style=theme.secondary_text + Style(italic=True))
            if cursor_on:
                text = Text("▏", style=theme.primary_text) + text
        else:
            text = Text(self.value, style=theme.style(theme.text))
            if cursor_on:
                if self.cursor < len(self.value):
                    text.stylize(Style(reverse=True), self.cursor, self.cursor + 1)
                else:
                    text.append("▏", style=theme.primary_text)
        border = theme.border_focused_style if self.focused else theme.border_style
        return Panel(text, title=self.title, title_align="left", border_style=border)
