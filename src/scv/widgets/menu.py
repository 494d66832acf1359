"""Animated selection menu drawn with Rich."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.console import Group
from rich.panel import Panel
from rich.style import Style
from rich.text import Text

from scv.ui.animations import interpolate

if TYPE_CHECKING:
    from rich.console import RenderableType

    from scv.core.keys import KeyPress
    from scv.ui.themes import Theme

ENTRANCE_SPEED = 3.0
ENTRANCE_STAGGER = 0.1
SLIDE_DISTANCE = 10
HELP_TEXT = "↑/↓ navigate  •  Enter select  •  Esc back"


@dataclass(frozen=True)
class MenuItem:
    title: str
    description: str | None = None
    icon: str | None = None
    hotkey: str | None = None
    enabled: bool = True
    is_separator: bool = False

    @classmethod
    def separator(cls) -> MenuItem:
        return cls("", enabled=False, is_separator=True)

    @property
    def selectable(self) -> bool:
        return self.enabled and not self.is_separator


class AnimatedMenu:
    """A vertical list of items with a sliding entrance and a pulsing highlight.

    The highlight band is drawn at a fractional row position so it can glide
    between items; when no position is given it sits on the selection.
    """

    def __init__(self, items: list[MenuItem], *, title: str | None = None) -> None:
        self.items = items
        self.title = title
        self.selected = self._first_selectable()
        self.entrance = 0.0
        self.highlight_phase = 0.0

    def _first_selectable(self) -> int:
        for index, item in enumerate(self.items):
            if item.selectable:
                return index
        return 0

    # ── Selection ────────────────────────────────────────────
    @property
    def selected_item(self) -> MenuItem | None:
        if 0 <= self.selected < len(self.items) and self.items[self.selected].selectable:
            return self.items[self.selected]
        return None

    def _step(self, direction: int) -> None:
        count = len(self.items)
        if not any(item.selectable for item in self.items):
            return
        index = self.selected
        for _ in range(count):
            index = (index + direction) % count
            if self.items[index].selectable:
                break
        self.select(index)

    def select_next(self) -> None:
        self._step(1)

    def select_previous(self) -> None:
        self._step(-1)

    def select(self, index: int) -> None:
        if 0 <= index < len(self.items) and self.items[index].selectable:
            self.selected = index
            self.highlight_phase = 0.0

    def index_for_hotkey(self, char: str | None) -> int | None:
        if not char:
            return None
        for index, item in enumerate(self.items):
            if item.selectable and item.hotkey == char.lower():
                return index
        return None

    def navigate(self, key: KeyPress) -> bool:
        """Move the selection for arrow/vi keys; returns True if consumed."""
        match key.key:
            case "up" | "k":
                self.select_previous()
            case "down" | "j" | "tab":
                self.select_next()
            case "home":
                self.select(self._first_selectable())
            case "end":
                for index in range(len(self.items) - 1, -1, -1):
                    if self.items[index].selectable:
                        self.select(index)
                        break
            case _:
                return False
        return True

    # ── Animation ────────────────────────────────────────────
    def update(self, dt: float) -> None:
        self.entrance = min(self.entrance + dt * ENTRANCE_SPEED, 1.0)
        self.highlight_phase += dt * 2.0

    def trigger_entrance(self) -> None:
        self.entrance = 0.0

    # ── Rendering ────────────────────────────────────────────
    def band(self, index: int, position: float | None = None) -> float:
        """Coverage of row *index* by a highlight centered at *position*, 0 to 1."""
        if position is None:
            position = float(self.selected)
        return max(0.0, 1.0 - abs(index - position))

    def _item_line(self, index: int, item: MenuItem, theme: Theme, position: float | None) -> Text:
        progress = 1.0 - (1.0 - self.entrance) ** 3
        item_progress = min(max((progress - index * ENTRANCE_STAGGER) * 2.0, 0.0), 1.0)
        line = Text(" " * int((1.0 - item_progress) * SLIDE_DISTANCE))
        if item.is_separator:
            line.append("─" * 24, style=theme.border_style)
            return line

        selected = index == self.selected
        band = self.band(index, position)
        label = f"{item.icon} {item.title}" if item.icon else item.title
        marker = "▶" if selected else " "
        if band > 0.0:
            pulse = (math.sin(self.highlight_phase * math.pi) + 1.0) / 2.0
            lit = interpolate(theme.highlight, theme.selection, pulse * 0.35)
            bg = interpolate(theme.background, lit, band)
            line.append(f"{marker} {label} ", style=theme.style(theme.text, bg, bold=selected))
        elif selected:
            line.append(f"{marker} {label} ", style=theme.style(theme.text, bold=True))
        elif item.enabled:
            line.append(f"  {label} ", style=theme.style(theme.text))
        else:
            line.append(f"  {label} ", style=theme.secondary_text + Style(dim=True))
        if item.hotkey:
            line.append(f"[{item.hotkey}]", style=theme.style(theme.accent))
        if item.description and selected:
            line.append(f"  {item.description}", style=theme.secondary_text)
        return line

    def renderable(self, theme: Theme, highlight: float | None = None) -> RenderableType:
        """Menu panel; *highlight* is the row the highlight band is centered on."""
        rows: list[RenderableType] = [
            self._item_line(index, item, theme, highlight) for index, item in enumerate(self.items)
        ]
        rows.extend([Text(""), Text(HELP_TEXT, style=theme.secondary_text)])
        return Panel(
            Group(*rows),
            title=self.title,
            title_align="left",
            border_style=theme.border_focused_style,
            style=theme.base,
            padding=(1, 2),
        )


def class_management_menu(class_name: str) -> AnimatedMenu:
    return AnimatedMenu(
        [
            MenuItem("Manage Students", "Add or remove students", "👥", "s"),
            MenuItem("Manage Repositories", "Clone, pull, or clean repositories", "📁", "r"),
            MenuItem("View GitHub Activity", "Check student GitHub activity", "📊", "a"),
            MenuItem.separator(),
            MenuItem("Delete Class", "Delete this class and its data", "🗑", "d"),
            MenuItem("Back", "Return to the class list", "↩", "b"),
        ],
        title=f"📚 Managing: {class_name}",
    )


def student_management_menu(class_name: str) -> AnimatedMenu:
    return AnimatedMenu(
        [
            MenuItem("Add Students", "Add new students to this class", "➕", "a"),
            MenuItem("Delete Student", "Remove a student from this class", "➖", "d"),
            MenuItem.separator(),
            MenuItem("Back", "Return to class management", "↩", "b"),
        ],
        title=f"👥 Students: {class_name}",
    )


def github_activity_menu(class_name: str) -> AnimatedMenu:
    return AnimatedMenu(
        [
            MenuItem("Week View", "Commit activity for the past week", "📅", "w"),
            MenuItem("Check Latest Activity", "Latest commit time per student", "🕒", "l"),
            MenuItem.separator(),
            MenuItem("Back", "Return to class management", "↩", "b"),
        ],
        title=f"📊 GitHub Activity: {class_name}",
    )
