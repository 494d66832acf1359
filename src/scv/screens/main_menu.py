"""Main menu screen with the logo and a starfield backdrop."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from textual.geometry import Region

from scv.core.events import NavigateTo, Quit
from scv.core.navigation import ScreenKind
from scv.screens.base import MenuScreen
from scv.ui.frame import center_box
from scv.ui.themes import gradient
from scv.widgets.menu import AnimatedMenu, MenuItem
from scv.widgets.particles import draw_starfield

if TYPE_CHECKING:
    from scv.core.events import AppEvent
    from scv.core.state import AppState
    from scv.ui.animations import AnimationClock
    from scv.ui.frame import Frame
    from scv.ui.themes import Theme

LOGO = (
    "███████╗ ██████╗██╗   ██╗",
    "██╔════╝██╔════╝██║   ██║",
    "███████╗██║     ██║   ██║",
    "╚════██║██║     ╚██╗ ██╔╝",
    "███████║╚██████╗ ╚████╔╝ ",
    "╚══════╝ ╚═════╝  ╚═══╝  ",
)
TAGLINE = "Student Code Viewer"


class MainMenuScreen(MenuScreen):
    kind = ScreenKind.MAIN_MENU

    def __init__(self) -> None:
        super().__init__()
        self.menu = AnimatedMenu(
            [
                MenuItem("Manage Classes", "Select and manage an existing class", "📚", "m"),
                MenuItem("Create Class", "Create a new class", "➕", "c"),
                MenuItem.separator(),
                MenuItem("Settings", "Configure application settings", "⚙", "s"),
                MenuItem("Quit", "Exit the application", "🚪", "q"),
            ],
            title="🎓 Student Code Viewer",
        )

    async def activate(self, index: int, state: AppState) -> AppEvent | None:
        match self.menu.items[index].hotkey:
            case "m":
                return NavigateTo(ScreenKind.CLASS_SELECTION)
            case "c":
                return NavigateTo(ScreenKind.CREATE_CLASS)
            case "s":
                return NavigateTo(ScreenKind.SETTINGS)
            case "q":
                return Quit()
        return None

    def _logo(self, clock: AnimationClock, theme: Theme) -> Text:
        colors = gradient(theme.primary, theme.secondary, len(LOGO))
        logo = Text(justify="center")
        for row, line in enumerate(LOGO):
            logo.append(line + "\n", style=theme.style(colors[row], bold=True))
        logo.append(TAGLINE, style=theme.pulse(theme.text_secondary, theme.accent, clock.background_pulse.value))
        return logo

    def render(
        self,
        frame: Frame,
        area: Region,
        state: AppState,
        clock: AnimationClock,
        theme: Theme,
    ) -> None:
        body = self.draw_chrome(frame, area, clock, theme)
        if state.config.enable_particle_effects:
            draw_starfield(frame, body, clock.particle_time, theme)

        logo_height = len(LOGO) + 1
        menu_height = len(self.menu.items) + 6
        if body.height >= logo_height + menu_height + 1:
            logo_region = Region(body.x, body.y + 1, body.width, logo_height)
            frame.render(self._logo(clock, theme), logo_region)
            below = Region(body.x, logo_region.bottom, body.width, body.bottom - logo_region.bottom)
        else:
            below = body
        frame.render(self.menu.renderable(theme, clock.menu_highlight.value), center_box(60, menu_height, below))
