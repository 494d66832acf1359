"""Settings editor: theme, animation speed, particles and frame rate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from scv.core.events import SaveSettings
from scv.core.navigation import ScreenKind
from scv.screens.base import Screen
from scv.ui.frame import center_box
from scv.ui.themes import get_theme, theme_names

if TYPE_CHECKING:
    from textual.geometry import Region

    from scv.config import AppConfig
    from scv.core.events import AppEvent
    from scv.core.keys import KeyPress
    from scv.core.state import AppState
    from scv.ui.animations import AnimationClock
    from scv.ui.frame import Frame
    from scv.ui.themes import Theme

FIELDS = ("theme", "animation_speed", "enable_particle_effects", "frame_rate")
LABELS = {
    "theme": "Theme",
    "animation_speed": "Animation speed",
    "enable_particle_effects": "Particle effects",
    "frame_rate": "Frame rate",
}
SPEED_STEP = 0.25
SPEED_RANGE = (0.25, 5.0)
FRAME_RATES = (15, 30, 60, 120, 240)


def _cycle(options: list, current: object, step: int) -> object:
    index = options.index(current) if current in options else 0
    return options[(index + step) % len(options)]


class SettingsScreen(Screen):
    kind = ScreenKind.SETTINGS
    hint = "↑/↓ field  •  ←/→ change  •  s save  •  Esc back"

    def __init__(self, config: AppConfig) -> None:
        super().__init__()
        self.draft = config.model_copy()
        self.field = 0
        self.dirty = False

    def adjust(self, step: int) -> None:
        name = FIELDS[self.field]
        match name:
            case "theme":
                value: object = _cycle(theme_names(), self.draft.theme, step)
            case "animation_speed":
                low, high = SPEED_RANGE
                value = min(max(self.draft.animation_speed + step * SPEED_STEP, low), high)
            case "enable_particle_effects":
                value = not self.draft.enable_particle_effects
            case "frame_rate":
                value = _cycle(list(FRAME_RATES), self.draft.frame_rate, step)
        self.draft = self.draft.model_copy(update={name: value})
        self.dirty = True

    async def handle_input(self, key: KeyPress, state: AppState) -> AppEvent | None:
        match key.key:
            case "up" | "k":
                self.field = (self.field - 1) % len(FIELDS)
            case "down" | "j" | "tab":
                self.field = (self.field + 1) % len(FIELDS)
            case "left" | "h" | "minus":
                self.adjust(-1)
            case "right" | "l" | "plus" | "enter" | "space":
                self.adjust(1)
            case "s":
                self.dirty = False
                return SaveSettings(self.draft)
        return None

    def _value(self, name: str) -> str:
        match name:
            case "theme":
                return get_theme(self.draft.theme).name
            case "animation_speed":
                return f"{self.draft.animation_speed:.2f}x"
            case "enable_particle_effects":
                return "on" if self.draft.enable_particle_effects else "off"
        return f"{self.draft.frame_rate} fps"

    def render(
        self,
        frame: Frame,
        area: Region,
        state: AppState,
        clock: AnimationClock,
        theme: Theme,
    ) -> None:
        body = self.draw_chrome(frame, area, clock, theme)
        table = Table.grid(padding=(0, 2))
        table.add_column(justify="right")
        table.add_column()
        for index, name in enumerate(FIELDS):
            selected = index == self.field
            label_style = theme.highlight_style if selected else theme.style(theme.text)
            marker = "◀ " if selected else "  "
            table.add_row(Text(LABELS[name], style=label_style), Text(f"{marker}{self._value(name)}", style=theme.style(theme.accent)))

        preview = get_theme(self.draft.theme)
        swatch = Text("\n")
        for color in (preview.primary, preview.secondary, preview.accent, preview.success, preview.error):
            swatch.append("  ██", style=preview.style(color))
        if self.dirty:
            swatch.append("\n\nUnsaved changes. Press s to save.", style=theme.style(theme.warning))

        panel = Panel(
            Group(table, swatch),
            title="⚙ Settings",
            title_align="left",
            border_style=theme.border_focused_style,
            padding=(1, 2),
        )
        frame.render(panel, center_box(60, 14, body))
