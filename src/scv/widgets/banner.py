"""Loading, error and success overlays composited over the active screen."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.align import Align
from rich.panel import Panel
from rich.text import Text

from scv.core.state import BannerKind
from scv.ui.animations import Spinner
from scv.ui.frame import center_box

if TYPE_CHECKING:
    from rich.console import RenderableType

    from scv.core.state import AppState, Banner
    from scv.ui.animations import AnimationClock
    from scv.ui.frame import Frame
    from scv.ui.themes import Theme

SPINNER = Spinner.dots()
TITLE_SPINNER = Spinner.pulsing()
MIN_WIDTH = 30
MAX_WIDTH = 72
DISMISS_HINT = "press any key to dismiss"


def _box_width(message: str, frame: Frame) -> int:
    return min(max(len(message) + 8, MIN_WIDTH), MAX_WIDTH, frame.width)


def _box_height(message: str, width: int) -> int:
    inner = max(width - 4, 1)
    return 4 + max(1, -(-len(message) // inner))


def loading_panel(message: str, clock: AnimationClock, theme: Theme) -> RenderableType:
    pulse = (clock.loading_rotation % 360.0) / 360.0
    text = Text()
    text.append(SPINNER.frame_at(clock.elapsed) + " ", style=theme.pulse(theme.primary, theme.accent, pulse))
    text.append(message, style=theme.style(theme.text, bold=True))
    return Panel(
        Align.center(text, vertical="middle"),
        title=f"{TITLE_SPINNER.frame_at(clock.elapsed)} Working",
        border_style=theme.style(theme.info),
        style=theme.style(theme.text, theme.surface),
    )


def message_panel(banner: Banner, theme: Theme) -> RenderableType:
    if banner.kind is BannerKind.ERROR:
        title, color, glyph = "Error", theme.error, "✖"
    else:
        title, color, glyph = "Success", theme.success, "✔"
    text = Text(justify="center")
    text.append(f"{glyph} ", style=theme.style(color, bold=True))
    text.append(banner.message, style=theme.style(theme.text))
    return Panel(
        Align.center(text, vertical="middle"),
        title=title,
        subtitle=DISMISS_HINT,
        border_style=theme.style(color, bold=True),
        style=theme.style(theme.text, theme.surface),
    )


def draw_overlays(frame: Frame, state: AppState, clock: AnimationClock, theme: Theme) -> None:
    """Paint the loading banner, then the message banner, centered on *frame*."""
    if state.loading is not None:
        width = _box_width(state.loading, frame)
        region = center_box(width, 5, frame.region)
        frame.clear(region)
        frame.render(loading_panel(state.loading, clock, theme), region)
    if state.banner is not None:
        width = _box_width(state.banner.message, frame)
        region = center_box(width, _box_height(state.banner.message, width), frame.region)
        frame.clear(region)
        frame.render(message_panel(state.banner, theme), region)
