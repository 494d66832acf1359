"""Textual host: presents controller frames and forwards keys."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, ClassVar

from textual.app import App, ComposeResult
from textual.screen import Screen
from textual.widget import Widget

from scv.core.controller import AppController
from scv.core.keys import KeyPress

if TYPE_CHECKING:
    from rich.console import RenderableType
    from textual import events
    from textual.binding import BindingType

    from scv.core.state import AppState
    from scv.ui.frame import Frame

logger = logging.getLogger(__name__)


class FrameView(Widget, inherit_bindings=False):
    """Shows the most recent frame and captures every key press."""

    can_focus = True

    DEFAULT_CSS = """
    FrameView {
        width: 1fr;
        height: 1fr;
    }
    """

    def __init__(self, keys: asyncio.Queue[KeyPress]) -> None:
        super().__init__()
        self._keys = keys
        self._frame: Frame | None = None

    def show(self, frame: Frame) -> None:
        self._frame = frame
        self.refresh()

    def render(self) -> RenderableType:
        return self._frame if self._frame is not None else ""

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        self._keys.put_nowait(KeyPress(event.key, event.character))


class HostScreen(Screen[None], inherit_bindings=False):
    """Single full-window screen; navigation happens inside the controller."""

    def __init__(self, keys: asyncio.Queue[KeyPress]) -> None:
        super().__init__(id="_default")
        self._keys = keys

    def compose(self) -> ComposeResult:
        yield FrameView(self._keys)

    def on_mount(self) -> None:
        self.query_one(FrameView).focus()


class ScvApp(App[None], inherit_bindings=False):
    """Main SCV TUI application."""

    TITLE = "SCV"
    SUB_TITLE = "Student Code Viewer"
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        background: black;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = []

    def __init__(self, state: AppState) -> None:
        super().__init__()
        self.state = state
        self.keys: asyncio.Queue[KeyPress] = asyncio.Queue()
        self.controller = AppController(
            state,
            keys=self.keys,
            present=self._present,
            size=self._viewport,
        )

    def get_default_screen(self) -> Screen[None]:
        return HostScreen(self.keys)

    # ── Lifecycle ────────────────────────────────────────────
    def on_mount(self) -> None:
        """Start the controller loop."""
        self.run_worker(self._run_controller(), name="controller", exclusive=True)

    async def _run_controller(self) -> None:
        try:
            await self.controller.run()
        finally:
            self.exit()

    async def on_unmount(self) -> None:
        await self.state.close()

    # ── Controller callbacks ─────────────────────────────────
    def _viewport(self) -> tuple[int, int]:
        return self.size.width, self.size.height

    def _present(self, frame: Frame) -> None:
        self.screen.query_one(FrameView).show(frame)
