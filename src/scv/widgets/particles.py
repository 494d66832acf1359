"""Particle effects painted straight into the frame."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from rich.style import Style

if TYPE_CHECKING:
    from textual.geometry import Region

    from scv.ui.animations import CelebrationAnimation
    from scv.ui.frame import Frame
    from scv.ui.themes import Theme

STAR_GLYPHS = ("·", "✦", "✧", "⋆")


def draw_celebration(frame: Frame, celebration: CelebrationAnimation) -> None:
    """Confetti on top of everything else; fading particles are dimmed."""
    for particle in celebration.visible():
        style = Style(color=particle.color, bold=particle.alpha > 0.5, dim=particle.alpha < 0.25)
        frame.put(int(particle.x), int(particle.y), particle.char, style)


def draw_starfield(frame: Frame, region: Region, t: float, theme: Theme, count: int = 24) -> None:
    """Slowly drifting background stars; positions derive from *t* only."""
    if not region.area:
        return
    for index in range(count):
        seed = (index * 7919) % 1009
        speed = 0.5 + (seed % 7) / 7.0
        x = region.x + int(seed * 13 + t * speed * 2.0) % region.width
        y = region.y + (seed * 31 + index) % region.height
        twinkle = (math.sin(t * 2.0 + index) + 1.0) / 2.0
        color = theme.accent if index % 3 == 0 else theme.text_secondary
        frame.put(x, y, STAR_GLYPHS[index % len(STAR_GLYPHS)], theme.pulse(theme.border, color, twinkle))
