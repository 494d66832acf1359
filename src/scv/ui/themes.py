"""Color palettes keyed by name."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType

from rich.color import Color
from rich.style import Style

from scv.ui.animations import RGB, interpolate

DEFAULT_THEME = "neon_night"


class ActivityLevel(IntEnum):
    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    MAX = 4

    @classmethod
    def from_commit_count(cls, count: int) -> ActivityLevel:
        if count <= 0:
            return cls.NONE
        if count <= 2:
            return cls.LOW
        if count <= 5:
            return cls.MEDIUM
        if count <= 10:
            return cls.HIGH
        return cls.MAX


@dataclass(frozen=True)
class Theme:
    name: str

    primary: RGB
    secondary: RGB
    accent: RGB

    success: RGB
    warning: RGB
    error: RGB
    info: RGB

    background: RGB
    surface: RGB
    text: RGB
    text_secondary: RGB
    border: RGB
    highlight: RGB
    selection: RGB

    activity_none: RGB
    activity_low: RGB
    activity_medium: RGB
    activity_high: RGB
    activity_max: RGB

    # ── Styles ───────────────────────────────────────────────
    def color(self, rgb: RGB) -> Color:
        return Color.from_rgb(*rgb)

    def style(self, fg: RGB, bg: RGB | None = None, *, bold: bool = False) -> Style:
        return Style(
            color=self.color(fg),
            bgcolor=self.color(bg) if bg is not None else None,
            bold=bold,
        )

    @property
    def base(self) -> Style:
        return self.style(self.text, self.background)

    @property
    def primary_text(self) -> Style:
        return self.style(self.primary, bold=True)

    @property
    def secondary_text(self) -> Style:
        return self.style(self.text_secondary)

    @property
    def success_text(self) -> Style:
        return self.style(self.success, bold=True)

    @property
    def error_text(self) -> Style:
        return self.style(self.error, bold=True)

    @property
    def highlight_style(self) -> Style:
        return self.style(self.text, self.highlight, bold=True)

    @property
    def border_style(self) -> Style:
        return self.style(self.border)

    @property
    def border_focused_style(self) -> Style:
        return self.style(self.primary)

    def activity_color(self, level: ActivityLevel) -> RGB:
        return (
            self.activity_none,
            self.activity_low,
            self.activity_medium,
            self.activity_high,
            self.activity_max,
        )[level]

    def pulse(self, start: RGB, end: RGB, t: float) -> Style:
        """Style whose foreground sits *t* of the way from *start* to *end*."""
        return self.style(interpolate(start, end, min(max(t, 0.0), 1.0)))


def gradient(start: RGB, end: RGB, steps: int) -> list[RGB]:
    """*steps* evenly spaced colors from *start* to *end* inclusive."""
    if steps <= 1:
        return [end] * max(steps, 0)
    return [interpolate(start, end, i / (steps - 1)) for i in range(steps)]


_THEMES: dict[str, Theme] = {
    "neon_night": Theme(
        name="Neon Night",
        primary=(0, 212, 255),
        secondary=(255, 27, 141),
        accent=(0, 255, 148),
        success=(0, 255, 148),
        warning=(255, 184, 0),
        error=(255, 107, 107),
        info=(0, 212, 255),
        background=(10, 10, 10),
        surface=(26, 26, 26),
        text=(255, 255, 255),
        text_secondary=(170, 170, 170),
        border=(68, 68, 68),
        highlight=(255, 27, 141),
        selection=(0, 212, 255),
        activity_none=(40, 40, 40),
        activity_low=(0, 100, 255),
        activity_medium=(0, 180, 255),
        activity_high=(0, 255, 180),
        activity_max=(0, 255, 80),
    ),
    "cyberpunk": Theme(
        name="Cyberpunk",
        primary=(255, 0, 255),
        secondary=(0, 255, 255),
        accent=(255, 255, 0),
        success=(0, 255, 0),
        warning=(255, 165, 0),
        error=(255, 0, 0),
        info=(0, 255, 255),
        background=(0, 0, 0),
        surface=(20, 0, 20),
        text=(0, 255, 0),
        text_secondary=(128, 255, 128),
        border=(255, 0, 255),
        highlight=(255, 255, 0),
        selection=(255, 0, 255),
        activity_none=(50, 0, 50),
        activity_low=(255, 0, 100),
        activity_medium=(255, 0, 200),
        activity_high=(255, 100, 255),
        activity_max=(255, 200, 255),
    ),
    "ocean_breeze": Theme(
        name="Ocean Breeze",
        primary=(52, 152, 219),
        secondary=(26, 188, 156),
        accent=(46, 204, 113),
        success=(46, 204, 113),
        warning=(241, 196, 15),
        error=(231, 76, 60),
        info=(52, 152, 219),
        background=(12, 20, 31),
        surface=(23, 32, 42),
        text=(236, 240, 241),
        text_secondary=(149, 165, 166),
        border=(52, 73, 94),
        highlight=(26, 188, 156),
        selection=(52, 152, 219),
        activity_none=(30, 40, 50),
        activity_low=(52, 152, 219),
        activity_medium=(26, 188, 156),
        activity_high=(46, 204, 113),
        activity_max=(155, 227, 152),
    ),
    "forest_dark": Theme(
        name="Forest Dark",
        primary=(76, 175, 80),
        secondary=(139, 195, 74),
        accent=(255, 235, 59),
        success=(76, 175, 80),
        warning=(255, 193, 7),
        error=(244, 67, 54),
        info=(33, 150, 243),
        background=(18, 32, 18),
        surface=(28, 42, 28),
        text=(232, 245, 233),
        text_secondary=(165, 214, 167),
        border=(56, 87, 35),
        highlight=(139, 195, 74),
        selection=(76, 175, 80),
        activity_none=(40, 50, 40),
        activity_low=(76, 175, 80),
        activity_medium=(139, 195, 74),
        activity_high=(174, 213, 129),
        activity_max=(220, 237, 200),
    ),
    "sunset_glow": Theme(
        name="Sunset Glow",
        primary=(255, 87, 34),
        secondary=(255, 152, 0),
        accent=(255, 193, 7),
        success=(139, 195, 74),
        warning=(255, 193, 7),
        error=(244, 67, 54),
        info=(103, 58, 183),
        background=(33, 17, 8),
        surface=(51, 25, 12),
        text=(255, 245, 238),
        text_secondary=(188, 170, 164),
        border=(121, 85, 72),
        highlight=(255, 152, 0),
        selection=(255, 87, 34),
        activity_none=(60, 40, 30),
        activity_low=(255, 87, 34),
        activity_medium=(255, 152, 0),
        activity_high=(255, 193, 7),
        activity_max=(255, 235, 59),
    ),
}

THEMES = MappingProxyType(_THEMES)


def theme_names() -> list[str]:
    return list(THEMES)


def get_theme(name: str) -> Theme:
    """Look up a palette; unknown names fall back to the default theme."""
    return THEMES.get(name, THEMES[DEFAULT_THEME])
