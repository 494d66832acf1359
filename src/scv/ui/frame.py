"""An off-screen cell grid that screens and overlays paint into."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

from rich.console import Console
from rich.measure import Measurement
from rich.segment import Segment
from rich.style import Style
from textual.geometry import Region

if TYPE_CHECKING:
    from rich.console import ConsoleOptions, RenderableType, RenderResult


def center_box(width: int, height: int, area: Region) -> Region:
    """A fixed-size rectangle centered in *area*, shrunk to fit if needed."""
    width = min(width, area.width)
    height = min(height, area.height)
    return Region(
        area.x + (area.width - width) // 2,
        area.y + (area.height - height) // 2,
        width,
        height,
    )


def make_console(width: int, height: int) -> Console:
    return Console(
        width=width,
        height=height,
        file=io.StringIO(),
        color_system="truecolor",
        force_terminal=True,
        legacy_windows=False,
    )


class Frame:
    """A ``width`` x ``height`` grid of Rich segment lines.

    Painting a renderable replaces exactly the cells of its region, which
    is how overlays are composited on top of the active screen. A Frame is
    a Rich renderable itself.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        style: Style | None = None,
        console: Console | None = None,
    ) -> None:
        self.width = max(width, 0)
        self.height = max(height, 0)
        self.style = style or Style()
        self._console = console or make_console(self.width, self.height)
        self._lines: list[list[Segment]] = [self._blank(self.width) for _ in range(self.height)]

    @property
    def region(self) -> Region:
        return Region(0, 0, self.width, self.height)

    def _blank(self, width: int) -> list[Segment]:
        return [Segment(" " * width, self.style)] if width else []

    def _splice(self, y: int, x: int, width: int, segments: list[Segment]) -> None:
        parts = list(Segment.divide(self._lines[y], [x, x + width, self.width]))
        left = parts[0] if parts else []
        right = parts[2] if len(parts) > 2 else []
        middle = Segment.adjust_line_length(segments, width, style=self.style)
        self._lines[y] = [*left, *middle, *right]

    # ── Painting ─────────────────────────────────────────────
    def clear(self, region: Region | None = None) -> None:
        """Blank *region* (the whole frame by default)."""
        region = self.region if region is None else region.intersection(self.region)
        for y in range(region.y, region.bottom):
            self._splice(y, region.x, region.width, self._blank(region.width))

    def render(
        self,
        renderable: RenderableType,
        region: Region,
        *,
        style: Style | None = None,
    ) -> None:
        """Render *renderable* into *region*, touching no cell outside it."""
        region = region.intersection(self.region)
        if not region.area:
            return
        options = self._console.options.update(width=region.width, height=region.height)
        lines = self._console.render_lines(renderable, options, style=style or self.style)
        for offset, segments in enumerate(lines[: region.height]):
            self._splice(region.y + offset, region.x, region.width, segments)

    def put(self, x: int, y: int, text: str, style: Style | None = None) -> None:
        """Write a short run of cells at ``(x, y)``, clipped to the frame."""
        if not (0 <= y < self.height) or x >= self.width or not text:
            return
        if x < 0:
            text = text[-x:]
            x = 0
        width = min(Segment(text).cell_length, self.width - x)
        if width <= 0:
            return
        self._splice(y, x, width, [Segment(text, style or self.style)])

    # ── Inspection ───────────────────────────────────────────
    def lines(self) -> list[list[Segment]]:
        return [list(line) for line in self._lines]

    def text_at(self, y: int) -> str:
        """Plain text of row *y*."""
        return "".join(segment.text for segment in self._lines[y])

    def plain(self) -> str:
        return "\n".join(self.text_at(y) for y in range(self.height))

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        new_line = Segment.line()
        for line in self._lines:
            yield from line
            yield new_line

    def __rich_measure__(self, console: Console, options: ConsoleOptions) -> Measurement:
        return Measurement(self.width, self.width)
