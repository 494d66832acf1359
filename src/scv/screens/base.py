"""Screen interface shared by every view of the application."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

from rich.text import Text
from textual.geometry import Region

from scv.core.navigation import ScreenContext, ScreenIdentity, ScreenKind

if TYPE_CHECKING:
    from scv.core.events import AppEvent
    from scv.core.keys import KeyPress
    from scv.core.state import AppState
    from scv.models import Classroom
    from scv.ui.animations import AnimationClock
    from scv.ui.frame import Frame
    from scv.ui.themes import Theme
    from scv.widgets.menu import AnimatedMenu

logger = logging.getLogger(__name__)

SLIDE_ROWS = 3


class Screen(ABC):
    """One full-viewport view.

    A screen turns key presses into at most one :class:`AppEvent`, animates
    itself in :meth:`update` and paints into the region it is given in
    :meth:`render`. It never changes navigation or banners itself.
    """

    kind: ClassVar[ScreenKind]
    hint: ClassVar[str] = "Esc back  •  Ctrl+C quit"

    def __init__(self, context: ScreenContext | None = None) -> None:
        self.context = context

    def identity(self) -> ScreenIdentity:
        return ScreenIdentity(self.kind, self.context)

    @property
    def classroom(self) -> Classroom:
        """The class this screen is scoped to."""
        if self.context is None or self.context.classroom is None:
            msg = f"{self.kind.label} has no class context"
            raise RuntimeError(msg)
        return self.context.classroom

    # ── Lifecycle hooks ──────────────────────────────────────
    def entry_event(self) -> AppEvent | None:
        """Event to dispatch whenever this screen becomes active."""
        return None

    def on_enter(self) -> None:
        """Restart entrance animations."""

    def receive(self, payload: Any) -> None:
        """Accept data loaded after construction."""
        logger.debug("%s ignored payload of type %s", self.kind, type(payload).__name__)

    # ── Per-frame contract ───────────────────────────────────
    @abstractmethod
    async def handle_input(self, key: KeyPress, state: AppState) -> AppEvent | None: ...

    def update(self, dt: float, state: AppState) -> None:  # noqa: B027
        pass

    @abstractmethod
    def render(
        self,
        frame: Frame,
        area: Region,
        state: AppState,
        clock: AnimationClock,
        theme: Theme,
    ) -> None: ...

    # ── Layout helpers ───────────────────────────────────────
    def title(self) -> str:
        if self.context is not None and self.context.classroom is not None:
            return f"{self.kind.label}  ·  {self.context.classroom.name}"
        return self.kind.label

    def draw_chrome(self, frame: Frame, area: Region, clock: AnimationClock, theme: Theme) -> Region:
        """Paint the title bar and the hint line; returns the body region.

        The body slides up into place while the screen transition runs.
        """
        if area.height < 3:
            return area
        header = Text(f" {self.title()} ", style=theme.primary_text, justify="center")
        frame.render(header, Region(area.x, area.y, area.width, 1), style=theme.style(theme.text, theme.surface))
        footer = Text(f" {self.hint}", style=theme.secondary_text)
        frame.render(footer, Region(area.x, area.bottom - 1, area.width, 1), style=theme.style(theme.text, theme.surface))

        offset = int((1.0 - clock.transition.value) * SLIDE_ROWS) if clock.transition.is_animating else 0
        body_height = max(area.height - 2 - offset, 0)
        return Region(area.x + 1, area.y + 1 + offset, max(area.width - 2, 0), body_height)


class MenuScreen(Screen):
    """A screen driven by an :class:`AnimatedMenu`."""

    menu: AnimatedMenu
    hint = "↑/↓ move  •  Enter select  •  hotkeys  •  Esc back"

    def on_enter(self) -> None:
        self.menu.trigger_entrance()

    @abstractmethod
    async def activate(self, index: int, state: AppState) -> AppEvent | None:
        """Act on the item at *index*, chosen with Enter or its hotkey."""

    async def handle_input(self, key: KeyPress, state: AppState) -> AppEvent | None:
        if self.menu.navigate(key):
            return None
        if key.key == "enter":
            if self.menu.selected_item is None:
                return None
            return await self.activate(self.menu.selected, state)
        index = self.menu.index_for_hotkey(key.character)
        if index is not None:
            self.menu.select(index)
            return await self.activate(index, state)
        return None

    def update(self, dt: float, state: AppState) -> None:
        self.menu.update(dt)

    def render(
        self,
        frame: Frame,
        area: Region,
        state: AppState,
        clock: AnimationClock,
        theme: Theme,
    ) -> None:
        body = self.draw_chrome(frame, area, clock, theme)
        frame.render(self.menu.renderable(theme, clock.menu_highlight.value), body)
